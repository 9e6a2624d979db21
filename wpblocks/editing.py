"""Edit-session state layered over persisted content blocks.

The editor needs to know which block is open, whether it changed, and what to
restore on cancel. That state lives in :class:`EditableBlock`, a wrapper
around a :class:`~wpblocks.models.ContentBlock`, and never reaches storage:
:meth:`EditSession.blocks` returns plain blocks with the session fields
stripped.

Example
-------
>>> from wpblocks.editing import EditSession
>>> session = EditSession.from_markup("<p>Hello</p>")
>>> session.begin_edit("block-0")
>>> session.update("block-0", "Hello there")
>>> session.finish("block-0")
>>> session.blocks()[0].content
'Hello there'
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import dataclasses as dc
import re

from .models import BlockType, ContentBlock, HeadingAttrs, ListAttrs, make_block
from .parser import parse_blocks
from .serializer import serialize_blocks

_BLOCK_ID_PATTERN = re.compile(r"^block-(\d+)$")


class UnknownBlockError(KeyError):
    """Raised when an edit targets a block id that is not in the session."""


@dc.dataclass(slots=True)
class EditableBlock:
    """A block plus the transient state of an inline edit.

    Attributes
    ----------
    block : ContentBlock
        The block being edited; its fields hold the working values.
    is_editing : bool
        ``True`` while the block is open for inline editing.
    is_dirty : bool
        ``True`` once the content differs from the last saved value.
    original_content : str or None
        Content captured when editing began, restored by cancel.
    original_level : int or None
        Heading level captured when editing began; ``None`` for other types.
    """

    block: ContentBlock
    is_editing: bool = False
    is_dirty: bool = False
    original_content: str | None = None
    original_level: int | None = None


class EditSession:
    """Ordered, editable view of a page's blocks."""

    def __init__(self, blocks: cabc.Iterable[ContentBlock]) -> None:
        self._entries = [
            EditableBlock(copy.deepcopy(block)) for block in sorted(blocks, key=_order)
        ]
        self._saved = {
            entry.block.id: _snapshot(entry.block) for entry in self._entries
        }
        self._next_id = 1 + max(
            (_numeric_id(entry.block.id) for entry in self._entries), default=-1
        )
        self._resequence()

    @classmethod
    def from_markup(cls, markup: str) -> EditSession:
        """Start a session from stored block markup."""
        return cls(parse_blocks(markup))

    @property
    def entries(self) -> list[EditableBlock]:
        """Return the session entries in document order."""
        return list(self._entries)

    @property
    def is_dirty(self) -> bool:
        """Return ``True`` when any block has unsaved changes."""
        return any(entry.is_dirty for entry in self._entries)

    def get(self, block_id: str) -> EditableBlock:
        """Return the entry for ``block_id``.

        Raises
        ------
        UnknownBlockError
            If no block in the session has that id.
        """
        for entry in self._entries:
            if entry.block.id == block_id:
                return entry
        msg = f"No block with id {block_id!r} in this session."
        raise UnknownBlockError(msg)

    def begin_edit(self, block_id: str) -> None:
        """Open a block for editing and snapshot its content and level."""
        entry = self.get(block_id)
        if not entry.is_editing:
            entry.is_editing = True
            entry.original_content, entry.original_level = _snapshot(entry.block)

    def update(self, block_id: str, content: str, *, level: int | None = None) -> None:
        """Replace a block's content (and heading level, for headings).

        List blocks keep ``attributes.items`` in step with the new lines.
        """
        entry = self.get(block_id)
        block = entry.block
        block.content = content
        if isinstance(block.attributes, ListAttrs):
            block.attributes.items = content.split("\n") if content else []
        if level is not None and isinstance(block.attributes, HeadingAttrs):
            block.attributes.level = level
        self._refresh_dirty(entry)

    def cancel(self, block_id: str) -> None:
        """Close a block and restore what ``begin_edit`` captured."""
        entry = self.get(block_id)
        if entry.is_editing and entry.original_content is not None:
            self.update(block_id, entry.original_content, level=entry.original_level)
        _close(entry)

    def finish(self, block_id: str) -> None:
        """Close a block, keeping its edited content."""
        _close(self.get(block_id))

    def insert(
        self, index: int | None = None, block_type: BlockType = BlockType.PARAGRAPH
    ) -> EditableBlock:
        """Insert an empty block at ``index`` (appended when ``None``).

        The new block gets an id never used in this session and starts
        dirty.
        """
        block = make_block(f"block-{self._next_id}", block_type)
        self._next_id += 1
        entry = EditableBlock(block, is_dirty=True)
        position = len(self._entries) if index is None else index
        self._entries.insert(max(0, min(position, len(self._entries))), entry)
        self._resequence()
        return entry

    def delete(self, block_id: str) -> ContentBlock:
        """Remove a block and compact the remaining order values."""
        entry = self.get(block_id)
        self._entries.remove(entry)
        self._resequence()
        return entry.block

    def move(self, block_id: str, index: int) -> None:
        """Move a block to ``index`` and re-sequence the list."""
        entry = self.get(block_id)
        self._entries.remove(entry)
        self._entries.insert(max(0, min(index, len(self._entries))), entry)
        self._resequence()

    def blocks(self) -> list[ContentBlock]:
        """Return the persisted view of the blocks, without session state."""
        return [copy.deepcopy(entry.block) for entry in self._entries]

    def serialize(self) -> str:
        """Return block markup for saving and mark every block clean."""
        markup = serialize_blocks(self.blocks())
        for entry in self._entries:
            self._saved[entry.block.id] = _snapshot(entry.block)
            entry.is_dirty = False
        return markup

    def _refresh_dirty(self, entry: EditableBlock) -> None:
        entry.is_dirty = self._saved.get(entry.block.id) != _snapshot(entry.block)

    def _resequence(self) -> None:
        for index, entry in enumerate(self._entries):
            entry.block.order = index


def _close(entry: EditableBlock) -> None:
    entry.is_editing = False
    entry.original_content = None
    entry.original_level = None


def _snapshot(block: ContentBlock) -> tuple[str, int | None]:
    level = block.heading_level if block.type is BlockType.HEADING else None
    return block.content, level


def _order(block: ContentBlock) -> int:
    return block.order


def _numeric_id(block_id: str) -> int:
    match = _BLOCK_ID_PATTERN.match(block_id)
    return int(match.group(1)) if match else -1


__all__ = ["EditSession", "EditableBlock", "UnknownBlockError"]
