"""Group flat block lists into heading-delimited sections.

An H1 or H2 heading opens a synthetic ``section`` block that owns every block
up to the next H1/H2. Blocks that appear before the first such heading stay at
the top level. :func:`block_title` supplies the short display labels used for
section titles and block cards.

Example
-------
>>> from wpblocks.parser import parse_blocks
>>> from wpblocks.sections import group_into_sections
>>> grouped = group_into_sections(parse_blocks("<h2>Contact</h2><p>Call us.</p>"))
>>> grouped[0].attributes.title, len(grouped[0].children)
('Contact', 2)
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc

from ._constants import SECTION_HEADING_MAX_LEVEL
from .models import BlockType, ContentBlock, SectionAttrs

# Checked in order; the first keyword found wins.
SECTION_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("about",), "About Us"),
    (("service",), "Our Services"),
    (("contact",), "Contact"),
    (("testimonial",), "What Our Clients Say"),
    (("client",), "What Our Clients Say"),
    (("welcome",), "Welcome Section"),
    (("hero",), "Hero Section"),
)
# Every keyword of an entry must be present.
PARAGRAPH_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("header", "section"), "Header"),
    (("hero", "section"), "Hero Section"),
    (("testimonial",), "Testimonial"),
    (("impact", "dashboard"), "Impact Dashboard Preview"),
)
FIXED_TITLES: dict[BlockType, str] = {
    BlockType.LIST: "List",
    BlockType.QUOTE: "Quote",
    BlockType.BUTTON: "Call to Action",
    BlockType.SEPARATOR: "Divider",
}


def _match_keywords(
    text: str, rules: tuple[tuple[tuple[str, ...], str], ...]
) -> str | None:
    lowered = text.lower()
    for keywords, label in rules:
        if all(keyword in lowered for keyword in keywords):
            return label
    return None


def block_title(block: ContentBlock) -> str:
    """Return a short semantic label for ``block``.

    Major headings (H1/H2) map to section labels such as ``"About Us"`` by
    case-insensitive keyword match and otherwise keep their own text; smaller
    headings read ``"Heading N"``. Paragraphs use a separate keyword set and
    default to ``"Text Block"``. The labels are a display aid only.
    """
    match block.type:
        case BlockType.HEADING:
            level = block.heading_level
            if level <= SECTION_HEADING_MAX_LEVEL:
                label = _match_keywords(block.content, SECTION_KEYWORDS)
                return label or block.content
            return f"Heading {level}"
        case BlockType.PARAGRAPH:
            return _match_keywords(block.content, PARAGRAPH_KEYWORDS) or "Text Block"
        case BlockType.SECTION if isinstance(block.attributes, SectionAttrs):
            return block.attributes.title
        case _:
            return FIXED_TITLES.get(block.type, "Content Block")


def _unique_section_id(index: int, used: set[str]) -> str:
    """Return ``section-N`` for the first free N at or after ``index``."""
    candidate = f"section-{index}"
    while candidate in used:
        index += 1
        candidate = f"section-{index}"
    used.add(candidate)
    return candidate


def _opens_section(block: ContentBlock) -> bool:
    return (
        block.type is BlockType.HEADING
        and block.heading_level <= SECTION_HEADING_MAX_LEVEL
    )


def group_into_sections(blocks: cabc.Iterable[ContentBlock]) -> list[ContentBlock]:
    """Wrap runs of blocks that follow an H1/H2 heading in section blocks.

    Parameters
    ----------
    blocks : Iterable[ContentBlock]
        Flat, order-sorted blocks, typically :func:`~wpblocks.parser.parse_blocks`
        output. The input blocks are not modified.

    Returns
    -------
    list[ContentBlock]
        Top-level blocks with dense ``order`` values. Each section's
        ``attributes.blocks`` starts with its heading and keeps the children's
        original ``order``. Existing section blocks pass through unchanged, so
        grouping an already grouped list returns an equivalent list.
    """
    source = list(blocks)
    used_ids = {block.id for block in source if block.type is BlockType.SECTION}
    grouped: list[ContentBlock] = []
    current: ContentBlock | None = None

    for block in source:
        if _opens_section(block):
            if current is not None:
                grouped.append(current)
            current = ContentBlock(
                id=_unique_section_id(len(grouped), used_ids),
                type=BlockType.SECTION,
                content=block.content,
                attributes=SectionAttrs(title=block_title(block), blocks=[block]),
            )
        elif block.type is BlockType.SECTION:
            if current is not None:
                grouped.append(current)
                current = None
            grouped.append(block)
        elif current is not None:
            current.children.append(block)
        else:
            grouped.append(block)

    if current is not None:
        grouped.append(current)

    return [dc.replace(block, order=index) for index, block in enumerate(grouped)]


def flatten_sections(blocks: cabc.Iterable[ContentBlock]) -> list[ContentBlock]:
    """Return the flat block list a grouped list was built from.

    Section wrappers are replaced by their children; the result is
    re-sequenced so ``order`` is dense again.
    """
    flat: list[ContentBlock] = []
    for block in blocks:
        if block.type is BlockType.SECTION:
            flat.extend(flatten_sections(block.children))
        else:
            flat.append(block)
    return [dc.replace(block, order=index) for index, block in enumerate(flat)]


__all__ = [
    "block_title",
    "flatten_sections",
    "group_into_sections",
]
