"""Tests for the edit session wrapper around persisted blocks."""

from __future__ import annotations

import dataclasses as dc

import pytest

from wpblocks.editing import EditSession, UnknownBlockError
from wpblocks.models import BlockType
from wpblocks.parser import parse_blocks

MARKUP = (
    '<!-- wp:heading {"level":2} --><h2>About</h2><!-- /wp:heading -->'
    "<!-- wp:paragraph --><p>We build websites.</p><!-- /wp:paragraph -->"
    "<!-- wp:list --><ul><li>Design</li></ul><!-- /wp:list -->"
)


@pytest.fixture
def session() -> EditSession:
    """Return a session over a heading, a paragraph and a list."""
    return EditSession.from_markup(MARKUP)


def test_persisted_blocks_carry_no_session_state(session: EditSession) -> None:
    session.begin_edit("block-1")
    session.update("block-1", "Changed")

    (field_names,) = {
        tuple(field.name for field in dc.fields(block)) for block in session.blocks()
    }
    assert field_names == ("id", "type", "content", "attributes", "order")


def test_update_marks_dirty_and_reverting_clears_it(session: EditSession) -> None:
    session.begin_edit("block-1")
    session.update("block-1", "We build apps.")
    assert session.get("block-1").is_dirty
    assert session.is_dirty

    session.update("block-1", "We build websites.")
    assert not session.get("block-1").is_dirty


def test_cancel_restores_original_content(session: EditSession) -> None:
    session.begin_edit("block-1")
    session.update("block-1", "Scratch that")

    session.cancel("block-1")

    entry = session.get("block-1")
    assert entry.block.content == "We build websites."
    assert not entry.is_editing
    assert not entry.is_dirty
    assert entry.original_content is None


def test_finish_keeps_the_edit(session: EditSession) -> None:
    session.begin_edit("block-0")
    session.update("block-0", "About Acme", level=1)
    session.finish("block-0")

    heading = session.blocks()[0]
    assert heading.content == "About Acme"
    assert heading.heading_level == 1
    assert session.get("block-0").is_dirty


def test_list_items_follow_content_edits(session: EditSession) -> None:
    session.update("block-2", "Design\nBuild")

    assert session.blocks()[2].items == ["Design", "Build"]


def test_serialize_saves_and_clears_dirty(session: EditSession) -> None:
    session.update("block-1", "We build & ship.")

    markup = session.serialize()

    assert "<p>We build &amp; ship.</p>" in markup
    assert not session.is_dirty
    assert [block.content for block in parse_blocks(markup)][1] == "We build & ship."


def test_insert_uses_fresh_ids_and_resequences(session: EditSession) -> None:
    session.delete("block-2")

    entry = session.insert(1, BlockType.QUOTE)

    assert entry.block.id == "block-3"
    assert entry.is_dirty
    assert [block.id for block in session.blocks()] == ["block-0", "block-3", "block-1"]
    assert [block.order for block in session.blocks()] == [0, 1, 2]


def test_insert_appends_by_default(session: EditSession) -> None:
    entry = session.insert()

    assert entry.block.type is BlockType.PARAGRAPH
    assert session.blocks()[-1].id == entry.block.id


def test_move_reorders_blocks(session: EditSession) -> None:
    session.move("block-2", 0)

    assert [(block.id, block.order) for block in session.blocks()] == [
        ("block-2", 0),
        ("block-0", 1),
        ("block-1", 2),
    ]


def test_unknown_ids_raise(session: EditSession) -> None:
    with pytest.raises(UnknownBlockError):
        session.begin_edit("block-99")


def test_session_does_not_modify_source_blocks() -> None:
    blocks = parse_blocks(MARKUP)
    session = EditSession(blocks)

    session.update("block-1", "Different")

    assert blocks[1].content == "We build websites."


def test_cancel_restores_the_heading_level(session: EditSession) -> None:
    session.begin_edit("block-0")
    session.update("block-0", "About", level=1)

    session.cancel("block-0")

    entry = session.get("block-0")
    assert entry.block.heading_level == 2
    assert not entry.is_dirty
    assert entry.original_level is None


def test_multi_line_heading_survives_save_and_reparse(session: EditSession) -> None:
    session.begin_edit("block-0")
    session.update("block-0", "About\nAcme")
    session.finish("block-0")

    reparsed = parse_blocks(session.serialize())

    assert [block.type for block in reparsed] == [
        BlockType.HEADING,
        BlockType.PARAGRAPH,
        BlockType.LIST,
    ]
    assert reparsed[0].content == "About\nAcme"


def test_multi_line_button_survives_save_and_reparse() -> None:
    session = EditSession.from_markup(
        '<!-- wp:buttons --><div class="wp-block-buttons"><!-- wp:button -->'
        '<div class="wp-block-button"><a class="wp-block-button__link" '
        'href="/book">Book now</a></div><!-- /wp:button --></div>'
        "<!-- /wp:buttons -->"
    )
    session.update("block-0", "Book\nnow")

    (button,) = parse_blocks(session.serialize())

    assert button.type is BlockType.BUTTON
    assert button.content == "Book\nnow"
    assert button.attributes.url == "/book"
