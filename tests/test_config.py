"""Tests for loading project configuration files."""

from __future__ import annotations

from pathlib import Path

import pytest

from wpblocks.config import ProjectConfigError, load_project_config
from wpblocks.sitemap import Page

PROJECT_YAML = """
project:
  name: Acme Studio
  site_url: https://acme.example/
  description: Websites for small teams
defaults:
  author: editor
  status: draft
  output_dir: dist
pages:
  home:
    title: Home
    menu: Main
    content: "<h2>Welcome</h2><p>Hello</p>"
  about:
    menu: Main
    parent: home
    content_file: content/about.html
  services:
    title: Home
    draft_file: drafts/services.md
    content_type: product
    status: publish
"""


@pytest.fixture
def project_file(tmp_path: Path) -> Path:
    """Write a project file with inline, stored and draft page content."""
    (tmp_path / "content").mkdir()
    (tmp_path / "content" / "about.html").write_text(
        "<!-- wp:paragraph --><p>About Acme</p><!-- /wp:paragraph -->",
        encoding="utf-8",
    )
    (tmp_path / "drafts").mkdir()
    (tmp_path / "drafts" / "services.md").write_text(
        "## Services\n- Design\n- Build\n", encoding="utf-8"
    )
    path = tmp_path / "project.yaml"
    path.write_text(PROJECT_YAML, encoding="utf-8")
    return path


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "project.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_loads_project_metadata(project_file: Path) -> None:
    project = load_project_config(project_file)

    assert project.name == "Acme Studio"
    assert project.site_url == "https://acme.example"
    assert project.author == "editor"
    assert project.export_output == project_file.parent / "dist" / "acme-studio-wordpress.xml"
    assert project.preview_output == project_file.parent / "dist" / "preview.html"


def test_pages_merge_defaults_and_overrides(project_file: Path) -> None:
    project = load_project_config(project_file)

    home = project.get_page("home")
    about = project.get_page("about")
    services = project.get_page("services")
    assert list(project.pages) == ["home", "about", "services"]
    assert home.status == "draft"
    assert services.status == "publish"
    assert about.title == "About"
    assert about.parent == "home"
    assert services.content_type == "product"


def test_slugs_are_unique(project_file: Path) -> None:
    project = load_project_config(project_file)

    assert project.get_page("home").slug == "home"
    assert project.get_page("services").slug == "home-2"


def test_page_content_sources(project_file: Path) -> None:
    project = load_project_config(project_file)

    assert project.get_page("home").content == "<h2>Welcome</h2><p>Hello</p>"
    assert "About Acme" in project.get_page("about").content
    services = project.get_page("services").content
    assert services.startswith('<!-- wp:heading {"level":2} -->')
    assert "<li>Design</li><li>Build</li>" in services


def test_to_pages_returns_sitemap_pages(project_file: Path) -> None:
    pages = load_project_config(project_file).to_pages()

    assert all(isinstance(page, Page) for page in pages)
    assert pages[1].parent_id == "home"
    assert pages[0].menu == "Main"


def test_unknown_page_lists_known_keys(project_file: Path) -> None:
    project = load_project_config(project_file)

    with pytest.raises(KeyError, match="Known pages: about, home, services"):
        project.get_page("blog")


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_project_config(tmp_path / "absent.yaml")


def test_missing_content_file_raises(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "project: {name: X}\npages:\n  home: {content_file: nope.html}\n",
    )

    with pytest.raises(FileNotFoundError, match="nope.html"):
        load_project_config(path)


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("pages:\n  home: {title: Home}\n", "project.name"),
        ("project: {name: X}\n", "No pages"),
        (
            "project: {name: X}\npages:\n  home: {parent: blog}\n",
            "unknown parent 'blog'",
        ),
        (
            "project: {name: X}\npages:\n  home: {content_type: event}\n",
            "content_type 'event'",
        ),
        (
            "project: {name: X}\npages:\n  home: {content: hi, draft_file: a.md}\n",
            "more than one",
        ),
    ],
)
def test_invalid_configs_raise(tmp_path: Path, text: str, message: str) -> None:
    with pytest.raises(ProjectConfigError, match=message):
        load_project_config(_write(tmp_path, text))


def test_top_level_must_be_a_mapping(tmp_path: Path) -> None:
    with pytest.raises(TypeError, match="mapping"):
        load_project_config(_write(tmp_path, "- one\n- two\n"))
