"""Typed dataclasses describing a wpblocks project file."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from wpblocks.sitemap import Page


class ProjectConfigError(ValueError):
    """Raised when the project configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class PageConfig:
    """A fully resolved page definition sourced from YAML config."""

    key: str
    title: str
    slug: str
    content: str = ""
    menu: str | None = None
    submenu: str | None = None
    content_type: str = "page"
    priority: str = "medium"
    parent: str | None = None
    status: str = "publish"
    meta_description: str | None = None
    keywords: str | None = None

    def to_page(self) -> Page:
        """Return the sitemap view of this page."""
        return Page(
            id=self.key,
            title=self.title,
            slug=self.slug,
            content_type=self.content_type,
            priority=self.priority,
            menu=self.menu,
            submenu=self.submenu,
            parent_id=self.parent,
            meta_description=self.meta_description,
            keywords=self.keywords,
            content=self.content,
        )


@dc.dataclass(slots=True)
class ProjectConfig:
    """Project metadata, export defaults, and page definitions."""

    name: str
    pages: dict[str, PageConfig]
    site_url: str = "https://example.com"
    description: str = ""
    language: str = "en-US"
    author: str = "admin"
    export_output: Path | None = None
    preview_output: Path = Path("public/preview.html")

    def get_page(self, key: str) -> PageConfig:
        """Return the page registered under ``key``."""
        try:
            return self.pages[key]
        except KeyError as exc:
            available = ", ".join(sorted(self.pages))
            msg = f"Unknown page '{key}'. Known pages: {available}"
            raise KeyError(msg) from exc

    def to_pages(self) -> list[Page]:
        """Return every page as a sitemap :class:`~wpblocks.sitemap.Page`."""
        return [page.to_page() for page in self.pages.values()]


__all__ = ["PageConfig", "ProjectConfig", "ProjectConfigError"]
