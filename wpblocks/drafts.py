r"""Turn markdown page drafts into WordPress block markup.

Generated drafts arrive as loose markdown: ``##``/``###``
headings, ``-`` bullets, ``>`` quotes with an optional attribution line, and
plain paragraphs. :func:`draft_to_blocks` reads them line by line into
content blocks, promoting short call-to-action lines to buttons and adding a
separator ahead of a closing call-to-action section; :func:`format_draft`
serializes the result.

Example
-------
>>> from wpblocks.drafts import draft_to_blocks
>>> [block.type.value for block in draft_to_blocks("## Hi\n- one\n- two\nBook now")]
['heading', 'list', 'button']
"""

from __future__ import annotations

import dataclasses as dc
import re

from .models import BlockType, ContentBlock, make_block
from .serializer import serialize_blocks

CODE_FENCE_PATTERN = re.compile(r"^```[^\n]*\n?", re.MULTILINE)
QUOTE_WRAPPER_PATTERN = re.compile(r'^"|"$')
ATTRIBUTION_PATTERN = re.compile(r"^[-—]\s*")
LIST_MARKERS = ("- ", "* ", "• ")
ATTRIBUTION_MARKERS = ("-", "—")
CTA_PHRASES = (
    "contact us",
    "get started",
    "learn more",
    "call us",
    "schedule",
    "book now",
)
CLOSING_PHRASES = ("contact", "get started", "ready to")
MAX_BUTTON_LENGTH = 50


class _DraftBuilder:
    """Accumulate blocks and the list items currently being collected."""

    def __init__(self) -> None:
        self.blocks: list[ContentBlock] = []
        self.pending_items: list[str] = []

    def add(
        self,
        block_type: BlockType,
        content: str = "",
        *,
        level: int | None = None,
        citation: str | None = None,
    ) -> None:
        self.flush_list()
        self.blocks.append(
            make_block("", block_type, content, level=level, citation=citation)
        )

    def add_item(self, item: str) -> None:
        self.pending_items.append(item)

    def flush_list(self) -> None:
        if self.pending_items:
            items, self.pending_items = self.pending_items, []
            self.blocks.append(make_block("", BlockType.LIST, items=items))


def _is_call_to_action(line: str) -> bool:
    lowered = line.lower()
    if not any(phrase in lowered for phrase in CTA_PHRASES):
        return False
    return len(line) < MAX_BUTTON_LENGTH and "." not in line


def _is_quote(line: str) -> bool:
    return line.startswith(">") or (
        len(line) > 1 and line.startswith('"') and line.endswith('"')
    )


def _heading(line: str) -> tuple[int, str] | None:
    if line.startswith("## "):
        return 2, line[3:].strip()
    if line.startswith("### "):
        return 3, line[4:].strip()
    return None


def draft_to_blocks(markdown: str) -> list[ContentBlock]:
    """Read a markdown draft into content blocks.

    Parameters
    ----------
    markdown : str
        Draft text. Code fences are removed before parsing.

    Returns
    -------
    list[ContentBlock]
        Blocks in draft order with ids ``block-0``, ``block-1``, ... and
        dense ``order`` values.
    """
    lines = CODE_FENCE_PATTERN.sub("", markdown).split("\n")
    builder = _DraftBuilder()
    index = 0
    while index < len(lines):
        line = lines[index].strip()
        index += 1
        if not line:
            continue
        heading = _heading(line)
        if heading:
            level, title = heading
            builder.add(BlockType.HEADING, title, level=level)
        elif line.startswith(LIST_MARKERS):
            builder.add_item(line[2:].strip())
        elif _is_quote(line):
            quote = line.removeprefix(">").strip()
            quote = QUOTE_WRAPPER_PATTERN.sub("", quote).strip()
            citation = None
            following = lines[index].strip() if index < len(lines) else ""
            if following.startswith(ATTRIBUTION_MARKERS):
                citation = ATTRIBUTION_PATTERN.sub("", following).strip()
                index += 1
            builder.add(BlockType.QUOTE, quote, citation=citation)
        elif _is_call_to_action(line):
            builder.add(BlockType.BUTTON, line)
        else:
            builder.add(BlockType.PARAGRAPH, line)
    builder.flush_list()
    blocks = _insert_closing_separator(builder.blocks)
    return [
        dc.replace(block, id=f"block-{position}", order=position)
        for position, block in enumerate(blocks)
    ]


def _insert_closing_separator(blocks: list[ContentBlock]) -> list[ContentBlock]:
    """Add a divider ahead of a closing call-to-action section."""
    if len(blocks) <= 3:  # noqa: PLR2004
        return blocks
    tail = serialize_blocks(blocks[-3:]).lower()
    if not any(phrase in tail for phrase in CLOSING_PHRASES):
        return blocks

    position = len(blocks) - 3
    for candidate in range(len(blocks) - 1, max(0, len(blocks) - 5) - 1, -1):
        if blocks[candidate].type is BlockType.HEADING:
            position = candidate
            break
    separator = make_block("", BlockType.SEPARATOR)
    return [*blocks[:position], separator, *blocks[position:]]


def format_draft(markdown: str) -> str:
    """Return block markup for a markdown draft, blocks separated by blank lines."""
    return serialize_blocks(draft_to_blocks(markdown))


__all__ = ["draft_to_blocks", "format_draft"]
