r"""Parse block-annotated HTML into ordered content blocks.

WordPress stores page bodies as HTML interleaved with comment markers such as
``<!-- wp:paragraph --><p>Hi</p><!-- /wp:paragraph -->``. This module scans
those marker pairs with a flat, leftmost-first regular expression (nested
markers inside a matched region are not parsed separately) and turns each
recognised region into a :class:`~wpblocks.models.ContentBlock`.

Content without markers falls back to a plain-HTML pass over ``<hN>`` and
``<p>`` elements, and anything else becomes a single paragraph. The parser
never raises: malformed regions simply produce no block.

Example
-------
>>> from wpblocks.parser import parse_blocks
>>> blocks = parse_blocks(
...     '<!-- wp:heading {"level":2} --><h2>About Us</h2><!-- /wp:heading -->'
... )
>>> blocks[0].content, blocks[0].heading_level
('About Us', 2)
"""

from __future__ import annotations

import logging
import re

from .html_text import strip_html
from .models import BlockType, ContentBlock, make_block

log = logging.getLogger(__name__)

BLOCK_PATTERN = re.compile(
    r"<!-- wp:(?P<name>\w+)(?:\s+(?P<attrs>\{[^\n]*?\}))? -->"
    r"(?P<body>.*?)"
    r"<!-- /wp:(?P=name) -->",
    re.DOTALL,
)
HEADING_PATTERN = re.compile(r"<h([1-6])(?:\s[^>]*)?>(.*?)</h\1>", re.DOTALL)
PARAGRAPH_TAG_PATTERN = re.compile(r"</?p(?:\s[^>]*)?>")
LIST_ITEM_PATTERN = re.compile(r"<li(?:\s[^>]*)?>(.*?)</li>", re.DOTALL)
QUOTE_TAG_PATTERN = re.compile(r"</?(?:blockquote|p)(?:\s[^>]*)?>")
CITE_PATTERN = re.compile(r"<cite(?:\s[^>]*)?>(.*?)</cite>", re.DOTALL)
ANCHOR_PATTERN = re.compile(r"<a(?P<attrs>[^>]*)>(?P<text>.*?)</a>", re.DOTALL)
HREF_PATTERN = re.compile(r"""href=["']([^"']*)["']""")
PLAIN_HTML_PATTERN = re.compile(
    r"<h(?P<level>[1-6])(?:\s[^>]*)?>(?P<heading>.*?)</h(?P=level)>"
    r"|<p(?:\s[^>]*)?>(?P<paragraph>.*?)</p>",
    re.DOTALL,
)


class _BlockSequence:
    """Hand out dense ids and order values in emission order."""

    def __init__(self) -> None:
        self.blocks: list[ContentBlock] = []

    def add(
        self,
        block_type: BlockType,
        content: str,
        *,
        level: int | None = None,
        items: list[str] | None = None,
        citation: str | None = None,
        url: str | None = None,
    ) -> None:
        index = len(self.blocks)
        block = make_block(
            f"block-{index}",
            block_type,
            content,
            order=index,
            level=level,
            items=items,
            citation=citation,
            url=url,
        )
        self.blocks.append(block)


def parse_blocks(content: str) -> list[ContentBlock]:
    """Convert block-annotated (or plain) HTML into ordered content blocks.

    Parameters
    ----------
    content : str
        Page body using WordPress block comments, plain HTML, or plain text.

    Returns
    -------
    list[ContentBlock]
        Blocks in document order with ids ``block-0``, ``block-1``, ... and
        dense ``order`` values. Empty or whitespace-only input returns an
        empty list.
    """
    if not content:
        return []

    sequence = _BlockSequence()
    for match in BLOCK_PATTERN.finditer(content):
        _parse_region(sequence, match.group("name"), match.group("body"))

    if sequence.blocks:
        _warn_about_stray_text(content)
        return sequence.blocks

    _parse_plain_html(sequence, content)
    if not sequence.blocks and content.strip():
        sequence.add(BlockType.PARAGRAPH, strip_html(content))
    return sequence.blocks


def parse_region(name: str, body: str) -> ContentBlock | None:
    """Return the block one marker region yields, or ``None`` when it yields none.

    ``name`` is the marker name (``heading`` for ``<!-- wp:heading -->``) and
    ``body`` the markup between the opening and closing markers.
    """
    sequence = _BlockSequence()
    _parse_region(sequence, name, body)
    return sequence.blocks[0] if sequence.blocks else None


def _parse_region(sequence: _BlockSequence, name: str, body: str) -> None:
    """Append the block described by one marker region, if it yields one."""
    match name:
        case "heading":
            heading = HEADING_PATTERN.search(body)
            if heading:
                sequence.add(
                    BlockType.HEADING,
                    strip_html(heading.group(2)),
                    level=int(heading.group(1)),
                )
        case "paragraph":
            text = strip_html(PARAGRAPH_TAG_PATTERN.sub("", body))
            if text:
                sequence.add(BlockType.PARAGRAPH, text)
        case "list":
            items = [strip_html(item) for item in LIST_ITEM_PATTERN.findall(body)]
            if items:
                sequence.add(BlockType.LIST, "\n".join(items), items=items)
        case "quote":
            cite = CITE_PATTERN.search(body)
            citation = strip_html(cite.group(1)) if cite else None
            without_cite = CITE_PATTERN.sub("", body)
            text = strip_html(QUOTE_TAG_PATTERN.sub("", without_cite))
            sequence.add(BlockType.QUOTE, text, citation=citation or None)
        case "button" | "buttons":
            anchor = ANCHOR_PATTERN.search(body)
            if anchor:
                href = HREF_PATTERN.search(anchor.group("attrs"))
                sequence.add(
                    BlockType.BUTTON,
                    strip_html(anchor.group("text")),
                    url=href.group(1) if href else None,
                )
        case "separator":
            sequence.add(BlockType.SEPARATOR, "")
        case _:
            log.debug("Ignoring unsupported block type %r", name)


def _parse_plain_html(sequence: _BlockSequence, content: str) -> None:
    """Collect ``<hN>`` headings and non-empty ``<p>`` paragraphs in order."""
    for match in PLAIN_HTML_PATTERN.finditer(content):
        if match.group("level"):
            sequence.add(
                BlockType.HEADING,
                strip_html(match.group("heading")),
                level=int(match.group("level")),
            )
            continue
        text = strip_html(match.group("paragraph"))
        if text:
            sequence.add(BlockType.PARAGRAPH, text)


def find_stray_text(content: str) -> list[str]:
    """Return non-blank text fragments lying outside every marker region.

    The flat scan drops such fragments; callers can use this to flag content
    that would be lost when the page is re-serialized.
    """
    fragments: list[str] = []
    cursor = 0
    for match in BLOCK_PATTERN.finditer(content):
        fragments.append(content[cursor : match.start()])
        cursor = match.end()
    fragments.append(content[cursor:])
    return [text for text in (strip_html(chunk) for chunk in fragments) if text]


def _warn_about_stray_text(content: str) -> None:
    stray = find_stray_text(content)
    if stray:
        log.warning(
            "Dropped %d text fragment(s) outside block markers: %s",
            len(stray),
            "; ".join(fragment[:40] for fragment in stray),
        )


__all__ = ["BLOCK_PATTERN", "find_stray_text", "parse_blocks", "parse_region"]
