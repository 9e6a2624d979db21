"""Serialize content blocks back into WordPress block markup.

The output is what the WordPress exporter embeds in each item's
``content:encoded`` body: one comment-marker pair per block, separated by a
blank line, with every piece of user text HTML-escaped.

Example
-------
>>> from wpblocks.models import BlockType, make_block
>>> from wpblocks.serializer import serialize_blocks
>>> print(serialize_blocks([make_block("b", BlockType.PARAGRAPH, "Fish & chips")]))
<!-- wp:paragraph -->
<p>Fish &amp; chips</p>
<!-- /wp:paragraph -->
"""

from __future__ import annotations

import collections.abc as cabc

from .markup import pattern_for
from .models import BlockType, ContentBlock
from .parser import BLOCK_PATTERN, parse_blocks

BLOCK_SEPARATOR = "\n\n"


def serialize_block(block: ContentBlock) -> str:
    """Return the block markup for a single block.

    Section blocks have no markup of their own and are written as their
    children. Types without a dedicated pattern are written as paragraphs.
    """
    if block.type is BlockType.SECTION:
        return serialize_blocks(block.children)
    return pattern_for(block.type).serialize(block)


def serialize_blocks(blocks: cabc.Iterable[ContentBlock]) -> str:
    """Join the markup of ``blocks`` with blank lines between blocks.

    Parameters
    ----------
    blocks : Iterable[ContentBlock]
        Flat or grouped blocks in document order.

    Returns
    -------
    str
        Block-annotated markup; an empty string for an empty list.
    """
    rendered = (serialize_block(block) for block in blocks)
    return BLOCK_SEPARATOR.join(chunk for chunk in rendered if chunk)


def normalize_markup(content: str) -> str:
    """Return block markup for stored page content.

    Content that already carries block markers is returned unchanged. Plain
    HTML or text is parsed and re-serialized so it gains block markers.
    """
    if not content.strip() or BLOCK_PATTERN.search(content):
        return content
    return serialize_blocks(parse_blocks(content))


__all__ = [
    "BLOCK_SEPARATOR",
    "normalize_markup",
    "serialize_block",
    "serialize_blocks",
]
