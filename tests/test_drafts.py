"""Tests for formatting markdown drafts into block markup."""

from __future__ import annotations

import pytest

from wpblocks.drafts import draft_to_blocks, format_draft
from wpblocks.models import BlockType, QuoteAttrs
from wpblocks.parser import parse_blocks

DRAFT = """```markdown
## Our Services
We design and build fast websites.
- Design
- Build
> "Fantastic team to work with"
- Jane Doe, Acme
### Ready to start?
Contact us today
```"""


def test_draft_lines_become_typed_blocks() -> None:
    blocks = draft_to_blocks(DRAFT)

    assert [block.type for block in blocks] == [
        BlockType.HEADING,
        BlockType.PARAGRAPH,
        BlockType.LIST,
        BlockType.QUOTE,
        BlockType.SEPARATOR,
        BlockType.HEADING,
        BlockType.BUTTON,
    ]
    assert blocks[2].items == ["Design", "Build"]
    assert blocks[3].content == "Fantastic team to work with"
    assert blocks[3].attributes == QuoteAttrs(citation="Jane Doe, Acme")
    assert blocks[5].heading_level == 3


def test_ids_and_order_are_dense() -> None:
    blocks = draft_to_blocks(DRAFT)

    assert [block.id for block in blocks] == [f"block-{n}" for n in range(7)]
    assert [block.order for block in blocks] == list(range(7))


def test_no_separator_without_a_closing_call_to_action() -> None:
    blocks = draft_to_blocks("## Intro\nOne.\nTwo.\n## More\nThree.")

    assert BlockType.SEPARATOR not in [block.type for block in blocks]


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("Book now", BlockType.BUTTON),
        ("Learn more about our process", BlockType.BUTTON),
        ("Learn more. It is easy", BlockType.PARAGRAPH),
        ("Schedule a call with our team to talk through your project goals", BlockType.PARAGRAPH),
        ("Plain sentence", BlockType.PARAGRAPH),
    ],
)
def test_call_to_action_lines(line: str, expected: BlockType) -> None:
    (block,) = draft_to_blocks(line)

    assert block.type is expected


def test_formatted_draft_parses_back() -> None:
    markup = format_draft(DRAFT)

    parsed = parse_blocks(markup)

    assert [block.type for block in parsed] == [
        block.type for block in draft_to_blocks(DRAFT)
    ]
    assert "\n\n<!-- wp:separator -->" in markup


def test_empty_draft_formats_to_nothing() -> None:
    assert format_draft("") == ""


def test_code_fence_lines_are_dropped_whole() -> None:
    blocks = draft_to_blocks("```markdown\n## Hello\nWe build.\n```\n")

    assert [(block.type, block.content) for block in blocks] == [
        (BlockType.HEADING, "Hello"),
        (BlockType.PARAGRAPH, "We build."),
    ]
