"""Per-type markup patterns shared by the serializer and the preview renderer.

Each :class:`MarkupPattern` knows how a block type is written as WordPress
block markup and how it looks in the styled on-screen preview, so the two
outputs cannot drift apart. Types without an entry are written as
paragraphs.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import json

from .html_text import escape_html
from .models import BlockType, ContentBlock, QuoteAttrs

HEADING_PREVIEW_CLASSES: dict[int, str] = {
    1: "text-3xl font-bold text-gray-900 mb-6",
    2: "text-2xl font-bold text-gray-900 mb-4 mt-8 first:mt-0",
    3: "text-xl font-semibold text-gray-800 mb-3 mt-6",
}
HEADING_PREVIEW_FALLBACK = "text-lg font-semibold text-gray-800 mb-2 mt-4"
PARAGRAPH_PREVIEW_CLASS = "text-gray-700 leading-relaxed mb-4"
LIST_PREVIEW_CLASS = "list-disc list-inside space-y-2 mb-4 ml-4"
LIST_ITEM_PREVIEW_CLASS = "text-gray-700 leading-relaxed"
QUOTE_PREVIEW_CLASS = "border-l-4 border-primary pl-4 my-6 italic text-gray-700"
BUTTON_PREVIEW_CLASS = (
    "inline-flex items-center px-6 py-3 bg-primary text-white font-medium "
    "rounded-lg hover:bg-primary/90 transition-colors"
)
SEPARATOR_PREVIEW_CLASS = "border-t border-gray-200 my-8"


@dc.dataclass(frozen=True, slots=True)
class MarkupPattern:
    """Markup writers for one block type.

    Attributes
    ----------
    marker : str
        Block comment name (``wp:<marker>``).
    attrs : Callable
        Returns the JSON attributes written into the opening marker, if any.
    body : Callable
        Returns the HTML placed between the markers.
    preview : Callable
        Returns presentation-styled HTML for the preview renderer.
    """

    marker: str
    attrs: cabc.Callable[[ContentBlock], dict[str, object] | None]
    body: cabc.Callable[[ContentBlock], str]
    preview: cabc.Callable[[ContentBlock], str]

    def serialize(self, block: ContentBlock) -> str:
        """Return ``block`` wrapped in its opening and closing markers."""
        attrs = self.attrs(block)
        opening = f"<!-- wp:{self.marker}"
        if attrs:
            opening += " " + json.dumps(attrs, separators=(",", ":"))
        return f"{opening} -->\n{self.body(block)}\n<!-- /wp:{self.marker} -->"


def _no_attrs(_block: ContentBlock) -> dict[str, object] | None:
    return None


def _level(block: ContentBlock) -> int:
    return min(max(block.heading_level, 1), 6)


def _citation(block: ContentBlock) -> str | None:
    if isinstance(block.attributes, QuoteAttrs):
        return block.attributes.citation
    return None


def _button_url(block: ContentBlock) -> str:
    url = getattr(block.attributes, "url", None)
    return url or "#"


def _heading_body(block: ContentBlock) -> str:
    level = _level(block)
    text = escape_html(block.content)
    return f'<h{level} class="wp-block-heading">{text}</h{level}>'


def _heading_preview(block: ContentBlock) -> str:
    level = _level(block)
    css = HEADING_PREVIEW_CLASSES.get(level, HEADING_PREVIEW_FALLBACK)
    return f'<h{level} class="{css}">{escape_html(block.content)}</h{level}>'


def _paragraph_body(block: ContentBlock) -> str:
    return f"<p>{escape_html(block.content)}</p>"


def _paragraph_preview(block: ContentBlock) -> str:
    return f'<p class="{PARAGRAPH_PREVIEW_CLASS}">{escape_html(block.content)}</p>'


def _list_body(block: ContentBlock) -> str:
    items = "".join(f"<li>{escape_html(item)}</li>" for item in block.items)
    return f'<ul class="wp-block-list">{items}</ul>'


def _list_preview(block: ContentBlock) -> str:
    items = "".join(
        f'<li class="{LIST_ITEM_PREVIEW_CLASS}">'
        f'<span class="ml-2">{escape_html(item)}</span></li>'
        for item in block.items
    )
    return f'<ul class="{LIST_PREVIEW_CLASS}">{items}</ul>'


def _quote_body(block: ContentBlock) -> str:
    citation = _citation(block)
    cite = f"<cite>{escape_html(citation)}</cite>" if citation else ""
    return (
        f'<blockquote class="wp-block-quote"><p>{escape_html(block.content)}</p>'
        f"{cite}</blockquote>"
    )


def _quote_preview(block: ContentBlock) -> str:
    citation = _citation(block)
    cite = f"<cite>{escape_html(citation)}</cite>" if citation else ""
    return (
        f'<blockquote class="{QUOTE_PREVIEW_CLASS}">'
        f"<p>{escape_html(block.content)}</p>{cite}</blockquote>"
    )


def _button_body(block: ContentBlock) -> str:
    href = escape_html(_button_url(block))
    return (
        '<div class="wp-block-buttons"><!-- wp:button -->\n'
        '<div class="wp-block-button">'
        f'<a class="wp-block-button__link wp-element-button" href="{href}">'
        f"{escape_html(block.content)}</a></div>\n"
        "<!-- /wp:button --></div>"
    )


def _button_preview(block: ContentBlock) -> str:
    href = escape_html(_button_url(block))
    return (
        '<div class="flex justify-center my-8">'
        f'<a href="{href}" class="{BUTTON_PREVIEW_CLASS}">'
        f"{escape_html(block.content)}</a></div>"
    )


def _separator_body(_block: ContentBlock) -> str:
    return '<hr class="wp-block-separator has-alpha-channel-opacity"/>'


def _separator_preview(_block: ContentBlock) -> str:
    return f'<hr class="{SEPARATOR_PREVIEW_CLASS}" />'


PARAGRAPH_PATTERN = MarkupPattern(
    marker="paragraph",
    attrs=_no_attrs,
    body=_paragraph_body,
    preview=_paragraph_preview,
)

MARKUP_PATTERNS: dict[BlockType, MarkupPattern] = {
    BlockType.HEADING: MarkupPattern(
        marker="heading",
        attrs=lambda block: {"level": _level(block)},
        body=_heading_body,
        preview=_heading_preview,
    ),
    BlockType.PARAGRAPH: PARAGRAPH_PATTERN,
    BlockType.LIST: MarkupPattern(
        marker="list", attrs=_no_attrs, body=_list_body, preview=_list_preview
    ),
    BlockType.QUOTE: MarkupPattern(
        marker="quote", attrs=_no_attrs, body=_quote_body, preview=_quote_preview
    ),
    BlockType.BUTTON: MarkupPattern(
        marker="buttons", attrs=_no_attrs, body=_button_body, preview=_button_preview
    ),
    BlockType.SEPARATOR: MarkupPattern(
        marker="separator",
        attrs=_no_attrs,
        body=_separator_body,
        preview=_separator_preview,
    ),
}


def pattern_for(block_type: BlockType) -> MarkupPattern:
    """Return the markup pattern for ``block_type`` (paragraph when unknown)."""
    return MARKUP_PATTERNS.get(block_type, PARAGRAPH_PATTERN)


__all__ = ["MARKUP_PATTERNS", "PARAGRAPH_PATTERN", "MarkupPattern", "pattern_for"]
