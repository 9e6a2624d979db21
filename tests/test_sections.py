"""Tests for section grouping and block title classification."""

from __future__ import annotations

import pytest

from wpblocks.models import BlockType, SectionAttrs, make_block
from wpblocks.parser import parse_blocks
from wpblocks.sections import block_title, flatten_sections, group_into_sections

PAGE = (
    "<p>Lead-in</p>"
    "<h1>Welcome to Acme</h1><p>We build websites.</p>"
    "<h2>Our services</h2><h3>Design</h3><p>Pixel perfect.</p>"
    "<h2>Contact</h2><p>Call us.</p>"
)


def _top_level(blocks: list) -> list[tuple[BlockType, str]]:
    return [(block.type, block.content) for block in blocks]


def test_about_us_scenario_groups_both_blocks() -> None:
    blocks = parse_blocks(
        '<!-- wp:heading {"level":2} --><h2>About Us</h2><!-- /wp:heading -->'
        "<!-- wp:paragraph --><p>We build things.</p><!-- /wp:paragraph -->"
    )

    grouped = group_into_sections(blocks)

    assert len(grouped) == 1
    section = grouped[0]
    assert section.type is BlockType.SECTION
    assert isinstance(section.attributes, SectionAttrs)
    assert section.attributes.title == "About Us"
    assert section.children == blocks


def test_h1_and_h2_open_sections_and_h3_does_not() -> None:
    grouped = group_into_sections(parse_blocks(PAGE))

    assert _top_level(grouped) == [
        (BlockType.PARAGRAPH, "Lead-in"),
        (BlockType.SECTION, "Welcome to Acme"),
        (BlockType.SECTION, "Our services"),
        (BlockType.SECTION, "Contact"),
    ]
    services = grouped[2]
    assert [child.content for child in services.children] == [
        "Our services",
        "Design",
        "Pixel perfect.",
    ]
    assert [block_title(block) for block in grouped[1:]] == [
        "Welcome Section",
        "Our Services",
        "Contact",
    ]


def test_top_level_order_is_dense_and_children_keep_their_order() -> None:
    grouped = group_into_sections(parse_blocks(PAGE))

    assert [block.order for block in grouped] == [0, 1, 2, 3]
    assert [child.order for child in grouped[3].children] == [6, 7]


def test_section_ids_are_unique() -> None:
    grouped = group_into_sections(parse_blocks(PAGE))

    section_ids = [block.id for block in grouped if block.type is BlockType.SECTION]
    assert len(set(section_ids)) == len(section_ids)
    assert all(section_id.startswith("section-") for section_id in section_ids)


def test_grouping_is_idempotent() -> None:
    once = group_into_sections(parse_blocks(PAGE))
    twice = group_into_sections(once)

    assert twice == once


def test_grouping_does_not_modify_input() -> None:
    blocks = parse_blocks(PAGE)
    snapshot = [(block.id, block.order) for block in blocks]

    group_into_sections(blocks)

    assert [(block.id, block.order) for block in blocks] == snapshot


def test_empty_list_groups_to_empty_list() -> None:
    assert group_into_sections([]) == []


def test_flatten_restores_the_flat_sequence() -> None:
    blocks = parse_blocks(PAGE)

    flat = flatten_sections(group_into_sections(blocks))

    assert _top_level(flat) == _top_level(blocks)
    assert [block.order for block in flat] == list(range(len(blocks)))


@pytest.mark.parametrize(
    ("text", "level", "expected"),
    [
        ("About the team", 2, "About Us"),
        ("Client testimonials", 2, "What Our Clients Say"),
        ("Our happy clients", 1, "What Our Clients Say"),
        ("Hero banner", 2, "Hero Section"),
        ("Contact our service desk", 2, "Our Services"),
        ("Pricing", 2, "Pricing"),
        ("About the team", 3, "Heading 3"),
    ],
)
def test_heading_titles(text: str, level: int, expected: str) -> None:
    block = make_block("h", BlockType.HEADING, text, level=level)

    assert block_title(block) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Header section copy", "Header"),
        ("The hero section intro", "Hero Section"),
        ("A testimonial from a client", "Testimonial"),
        ("Impact dashboard preview", "Impact Dashboard Preview"),
        ("Hero copy without the other keyword", "Text Block"),
    ],
)
def test_paragraph_titles(text: str, expected: str) -> None:
    assert block_title(make_block("p", BlockType.PARAGRAPH, text)) == expected


@pytest.mark.parametrize(
    ("block_type", "expected"),
    [
        (BlockType.LIST, "List"),
        (BlockType.QUOTE, "Quote"),
        (BlockType.BUTTON, "Call to Action"),
        (BlockType.SEPARATOR, "Divider"),
        (BlockType.IMAGE, "Content Block"),
    ],
)
def test_fixed_titles(block_type: BlockType, expected: str) -> None:
    assert block_title(make_block("b", block_type)) == expected
