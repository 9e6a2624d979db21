"""Typed content blocks and their JSON interchange shape.

A page is an ordered list of :class:`ContentBlock` values. Each block carries
a :class:`BlockType` discriminant and an ``attributes`` variant holding only
the fields that type needs (a heading level, list items, a quote citation, a
button URL, or the children of a synthetic section).

The editor and storage layers exchange blocks as JSON objects shaped like
``{"id", "type", "content", "attributes", "order"}``; :func:`block_to_payload`
and :func:`block_from_payload` translate between that shape and the typed
dataclasses, and :func:`encode_blocks` / :func:`decode_blocks` wrap both with
``msgspec.json``.

Example
-------
>>> from wpblocks.models import BlockType, block_to_payload, make_block
>>> block = make_block("block-0", BlockType.HEADING, "About Us", level=2)
>>> block.heading_level
2
>>> block_to_payload(block)["attributes"]
{'level': 2}
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import typing as typ

import msgspec
import msgspec.json

from ._constants import DEFAULT_HEADING_LEVEL


class BlockPayloadError(ValueError):
    """Raised when a JSON block payload cannot be mapped onto a ContentBlock."""


class BlockType(enum.StrEnum):
    """Closed set of block kinds understood by the content model."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"
    QUOTE = "quote"
    BUTTON = "button"
    SEPARATOR = "separator"
    COLUMNS = "columns"
    SECTION = "section"
    IMAGE = "image"
    GALLERY = "gallery"
    FORM = "form"
    CUSTOM = "custom"


@dc.dataclass(slots=True)
class HeadingAttrs:
    """Heading level (1-6)."""

    level: int = DEFAULT_HEADING_LEVEL


@dc.dataclass(slots=True)
class ListAttrs:
    """Ordered list items; mirrors the block's newline-joined content."""

    items: list[str] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class QuoteAttrs:
    """Optional attribution rendered as ``<cite>``."""

    citation: str | None = None


@dc.dataclass(slots=True)
class ButtonAttrs:
    """Optional link target for a call-to-action button."""

    url: str | None = None


@dc.dataclass(slots=True)
class SectionAttrs:
    """Display title and exclusively owned child blocks of a section."""

    title: str
    blocks: list[ContentBlock] = dc.field(default_factory=list)


BlockAttrs: typ.TypeAlias = (
    HeadingAttrs | ListAttrs | QuoteAttrs | ButtonAttrs | SectionAttrs | None
)


@dc.dataclass(slots=True)
class ContentBlock:
    """Atomic, ordered unit of page content.

    Attributes
    ----------
    id : str
        Identifier unique within the page's block list.
    type : BlockType
        Discriminant selecting how ``content`` and ``attributes`` are read.
    content : str
        Plain text payload; newline-joined items for lists, empty for
        separators, the heading text for sections.
    attributes : BlockAttrs
        Type-specific metadata, or ``None`` for types that need none.
    order : int
        Zero-based position among siblings.
    """

    id: str
    type: BlockType
    content: str = ""
    attributes: BlockAttrs = None
    order: int = 0

    @property
    def heading_level(self) -> int:
        """Return the heading level, defaulting to 2 when unset."""
        if isinstance(self.attributes, HeadingAttrs):
            return self.attributes.level
        return DEFAULT_HEADING_LEVEL

    @property
    def items(self) -> list[str]:
        """Return list items, falling back to the content's lines."""
        if isinstance(self.attributes, ListAttrs) and self.attributes.items:
            return list(self.attributes.items)
        return self.content.split("\n") if self.content else []

    @property
    def children(self) -> list[ContentBlock]:
        """Return the blocks owned by a section (empty for other types)."""
        if isinstance(self.attributes, SectionAttrs):
            return self.attributes.blocks
        return []


def make_block(  # noqa: PLR0913
    block_id: str,
    block_type: BlockType | str,
    content: str = "",
    *,
    order: int = 0,
    level: int | None = None,
    items: cabc.Sequence[str] | None = None,
    citation: str | None = None,
    url: str | None = None,
) -> ContentBlock:
    """Build a block carrying the attribute variant that matches its type.

    List blocks built from ``items`` get their ``content`` from the joined
    items; list blocks built from ``content`` get their items from its lines.
    """
    kind = BlockType(block_type)
    attributes: BlockAttrs = None
    match kind:
        case BlockType.HEADING:
            attributes = HeadingAttrs(level or DEFAULT_HEADING_LEVEL)
        case BlockType.LIST:
            values = list(items) if items is not None else _split_lines(content)
            attributes = ListAttrs(values)
            content = "\n".join(values)
        case BlockType.QUOTE:
            attributes = QuoteAttrs(citation)
        case BlockType.BUTTON:
            attributes = ButtonAttrs(url)
        case BlockType.SECTION:
            msg = "Section blocks are built by the section grouper."
            raise ValueError(msg)
        case _:
            pass
    return ContentBlock(
        id=block_id, type=kind, content=content, attributes=attributes, order=order
    )


def _split_lines(content: str) -> list[str]:
    return content.split("\n") if content else []


def resequence(blocks: cabc.Iterable[ContentBlock]) -> list[ContentBlock]:
    """Return copies of ``blocks`` with dense zero-based ``order`` values."""
    return [dc.replace(block, order=index) for index, block in enumerate(blocks)]


def block_to_payload(block: ContentBlock) -> dict[str, typ.Any]:
    """Return the JSON-ready mapping for ``block`` (recursing into sections)."""
    payload: dict[str, typ.Any] = {
        "id": block.id,
        "type": block.type.value,
        "content": block.content,
        "order": block.order,
    }
    attributes: dict[str, typ.Any] = {}
    match block.attributes:
        case HeadingAttrs(level=level):
            attributes["level"] = level
        case ListAttrs(items=items):
            attributes["items"] = list(items)
        case QuoteAttrs(citation=citation) if citation:
            attributes["citation"] = citation
        case ButtonAttrs(url=url) if url:
            attributes["url"] = url
        case SectionAttrs(title=title, blocks=children):
            attributes["title"] = title
            attributes["blocks"] = [block_to_payload(child) for child in children]
        case _:
            pass
    if attributes:
        payload["attributes"] = attributes
    return payload


def _payload_int(block_id: str, field: str, value: typ.Any, default: int) -> int:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        msg = f"Block {block_id!r} has a non-integer {field} {value!r}."
        raise BlockPayloadError(msg)
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        msg = f"Block {block_id!r} has a non-integer {field} {value!r}."
        raise BlockPayloadError(msg) from exc


def block_from_payload(payload: cabc.Mapping[str, typ.Any]) -> ContentBlock:
    """Build a ContentBlock from its JSON mapping.

    Raises
    ------
    BlockPayloadError
        If the payload is not a mapping, the type is not a known block type,
        the id is missing, or the order, heading level, list items or section
        children are invalid.
    """
    if not isinstance(payload, cabc.Mapping):
        msg = f"Block payload must be an object, not {type(payload).__name__}."
        raise BlockPayloadError(msg)
    raw_type = payload.get("type")
    try:
        kind = BlockType(raw_type)
    except ValueError as exc:
        msg = f"Unknown block type {raw_type!r}."
        raise BlockPayloadError(msg) from exc
    block_id = payload.get("id")
    if not isinstance(block_id, str) or not block_id:
        msg = "Block payload is missing a string 'id'."
        raise BlockPayloadError(msg)
    content = str(payload.get("content") or "")
    order = _payload_int(block_id, "order", payload.get("order"), 0)
    raw_attrs = payload.get("attributes") or {}
    if not isinstance(raw_attrs, cabc.Mapping):
        msg = f"Block {block_id!r} has non-mapping attributes."
        raise BlockPayloadError(msg)

    match kind:
        case BlockType.SECTION:
            raw_children = raw_attrs.get("blocks") or []
            if not isinstance(raw_children, list):
                msg = f"Section {block_id!r} has non-list child blocks."
                raise BlockPayloadError(msg)
            children = [block_from_payload(child) for child in raw_children]
            if not children:
                msg = f"Section {block_id!r} has no child blocks."
                raise BlockPayloadError(msg)
            title = str(raw_attrs.get("title") or content)
            return ContentBlock(
                id=block_id,
                type=kind,
                content=content,
                attributes=SectionAttrs(title, children),
                order=order,
            )
        case BlockType.HEADING:
            level = _payload_int(
                block_id, "level", raw_attrs.get("level"), DEFAULT_HEADING_LEVEL
            )
            if not 1 <= level <= 6:  # noqa: PLR2004
                msg = f"Heading {block_id!r} has invalid level {level}."
                raise BlockPayloadError(msg)
            return make_block(block_id, kind, content, order=order, level=level)
        case BlockType.LIST:
            items = raw_attrs.get("items")
            if items is not None and not isinstance(items, list):
                msg = f"List {block_id!r} has non-list items."
                raise BlockPayloadError(msg)
            return make_block(
                block_id,
                kind,
                content,
                order=order,
                items=[str(item) for item in items] if items else None,
            )
        case _:
            return make_block(
                block_id,
                kind,
                content,
                order=order,
                citation=raw_attrs.get("citation"),
                url=raw_attrs.get("url"),
            )


def encode_blocks(blocks: cabc.Iterable[ContentBlock]) -> bytes:
    """Encode blocks as a JSON array using msgspec."""
    return msgspec.json.encode([block_to_payload(block) for block in blocks])


def decode_blocks(data: bytes | str) -> list[ContentBlock]:
    """Decode a JSON array of block payloads.

    Raises
    ------
    BlockPayloadError
        If the document is not valid JSON, is not an array, or contains an
        invalid block payload.
    """
    try:
        loaded = msgspec.json.decode(data)
    except msgspec.DecodeError as exc:
        msg = f"Invalid block JSON: {exc}"
        raise BlockPayloadError(msg) from exc
    if not isinstance(loaded, list):
        msg = "Block JSON must be an array of block objects."
        raise BlockPayloadError(msg)
    blocks: list[ContentBlock] = []
    for entry in loaded:
        if not isinstance(entry, dict):
            msg = "Block JSON entries must be objects."
            raise BlockPayloadError(msg)
        blocks.append(block_from_payload(entry))
    return blocks


__all__ = [
    "BlockAttrs",
    "BlockPayloadError",
    "BlockType",
    "ButtonAttrs",
    "ContentBlock",
    "HeadingAttrs",
    "ListAttrs",
    "QuoteAttrs",
    "SectionAttrs",
    "block_from_payload",
    "block_to_payload",
    "decode_blocks",
    "encode_blocks",
    "make_block",
    "resequence",
]
