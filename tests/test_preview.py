"""Tests for the styled preview renderer and preview page builder."""

from __future__ import annotations

from pathlib import Path

from bs4 import BeautifulSoup

from wpblocks.config import PageConfig, ProjectConfig
from wpblocks.models import BlockType, make_block
from wpblocks.preview import PreviewPageBuilder, render_preview
from wpblocks.serializer import serialize_blocks


def test_preview_replaces_markers_with_styled_html() -> None:
    markup = serialize_blocks(
        [
            make_block("a", BlockType.HEADING, "Hello & welcome", level=1),
            make_block("b", BlockType.LIST, items=["One", "Two"]),
            make_block("c", BlockType.BUTTON, "Book now", url="/book"),
        ]
    )

    html = render_preview(markup)

    assert "<!--" not in html
    soup = BeautifulSoup(html, "html.parser")
    heading = soup.select_one("h1")
    assert heading.get_text() == "Hello & welcome"
    assert "text-3xl" in heading["class"]
    assert [li.get_text() for li in soup.select("ul li")] == ["One", "Two"]
    assert soup.select_one("a")["href"] == "/book"


def test_unknown_regions_render_their_inner_blocks() -> None:
    markup = (
        "<!-- wp:group --><div>"
        "<!-- wp:paragraph --><p>Inside</p><!-- /wp:paragraph -->"
        "</div><!-- /wp:group -->"
    )

    html = render_preview(markup)

    assert "wp:group" not in html
    assert '<p class="text-gray-700 leading-relaxed mb-4">Inside</p>' in html


def test_plain_html_passes_through() -> None:
    assert render_preview("<p>Loose</p>") == "<p>Loose</p>"


def test_builder_writes_one_article_per_page(tmp_path: Path) -> None:
    project = ProjectConfig(
        name="Acme",
        preview_output=tmp_path / "public" / "preview.html",
        pages={
            "home": PageConfig(
                key="home",
                title="Home",
                slug="home",
                content="<h2>About our team</h2><p>Hi <there></p>",
            ),
            "blog": PageConfig(key="blog", title="Blog", slug="blog"),
        },
    )

    written = PreviewPageBuilder(project).run()

    assert written == project.preview_output
    soup = BeautifulSoup(written.read_text(encoding="utf-8"), "html.parser")
    articles = soup.select("article")
    assert [article["id"] for article in articles] == ["home", "blog"]
    assert [li.get_text() for li in articles[0].select("ol li")] == ["About Us"]
    assert articles[0].select_one("h2").get_text() == "About our team"
    assert soup.title.get_text() == "Acme preview"
