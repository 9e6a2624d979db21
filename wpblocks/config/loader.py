"""Load project configuration YAML into typed dataclasses."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from wpblocks._constants import EXPORT_FILENAME_TEMPLATE
from wpblocks.sitemap import CONTENT_TYPES

from .helpers import (
    _optional_str,
    _read_page_content,
    _resolve_path,
    _slugify,
    _unique_slug,
)
from .models import PageConfig, ProjectConfig, ProjectConfigError


def load_project_config(path: Path) -> ProjectConfig:
    """Load the YAML file describing a site's pages and export settings.

    Parameters
    ----------
    path : Path
        Filesystem path to the project file (for example ``project.yaml``).

    Returns
    -------
    ProjectConfig
        Parsed project with every page's content resolved to block markup.

    Raises
    ------
    FileNotFoundError
        If the configuration file, or a page's ``content_file`` or
        ``draft_file``, does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    ProjectConfigError
        If required fields are missing or invalid (for example, no pages are
        defined or a page names an unknown parent).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from wpblocks.config import load_project_config
    >>> project = load_project_config(Path("project.yaml"))  # doctest: +SKIP
    >>> sorted(project.pages)[:1]  # doctest: +SKIP
    ['about']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base_dir = path.parent

    project_raw = raw.get("project") or {}
    name = _optional_str(project_raw.get("name"))
    if not name:
        msg = "Project configuration is missing 'project.name'."
        raise ProjectConfigError(msg)

    defaults = raw.get("defaults", {}) or {}
    page_defaults = _PageDefaults(
        status=str(defaults.get("status", "publish")),
        content_type=str(defaults.get("content_type", "page")),
        priority=str(defaults.get("priority", "medium")),
    )

    pages_raw = raw.get("pages") or {}
    if not pages_raw:
        msg = "No pages defined in project configuration."
        raise ProjectConfigError(msg)

    pages: dict[str, PageConfig] = {}
    used_slugs: set[str] = set()
    for key, payload in pages_raw.items():
        match payload:
            case dict():
                pages[key] = _build_page_config(
                    key=str(key),
                    payload=payload,
                    defaults=page_defaults,
                    base_dir=base_dir,
                    used_slugs=used_slugs,
                )
            case _:
                continue
    _check_parents(pages)

    output_dir = _resolve_path(base_dir, defaults.get("output_dir", "public"))
    export_name = defaults.get("export_file") or EXPORT_FILENAME_TEMPLATE.format(
        slug=_slugify(name)
    )
    return ProjectConfig(
        name=name,
        pages=pages,
        site_url=str(project_raw.get("site_url", "https://example.com")).rstrip("/"),
        description=str(project_raw.get("description", "")),
        language=str(project_raw.get("language", "en-US")),
        author=str(defaults.get("author", "admin")),
        export_output=output_dir / export_name,
        preview_output=output_dir / defaults.get("preview_file", "preview.html"),
    )


@dc.dataclass(slots=True)
class _PageDefaults:
    """Internal container for page default configuration values."""

    status: str
    content_type: str
    priority: str


def _build_page_config(
    *,
    key: str,
    payload: typ.Mapping[str, typ.Any],
    defaults: _PageDefaults,
    base_dir: Path,
    used_slugs: set[str],
) -> PageConfig:
    """Build a PageConfig for a single page entry using defaults and overrides."""
    title = _optional_str(payload.get("title")) or key.replace("-", " ").title()
    slug = _unique_slug(
        _slugify(_optional_str(payload.get("slug")) or title), used_slugs
    )
    content_type = str(payload.get("content_type", defaults.content_type))
    if content_type not in CONTENT_TYPES:
        allowed = ", ".join(sorted(CONTENT_TYPES))
        msg = f"Page '{key}' has content_type '{content_type}'; expected {allowed}."
        raise ProjectConfigError(msg)

    return PageConfig(
        key=key,
        title=title,
        slug=slug,
        content=_read_page_content(key, payload, base_dir),
        menu=_optional_str(payload.get("menu")),
        submenu=_optional_str(payload.get("submenu")),
        content_type=content_type,
        priority=str(payload.get("priority", defaults.priority)),
        parent=_optional_str(payload.get("parent")),
        status=str(payload.get("status", defaults.status)),
        meta_description=_optional_str(payload.get("meta_description")),
        keywords=_optional_str(payload.get("keywords")),
    )


def _check_parents(pages: typ.Mapping[str, PageConfig]) -> None:
    """Ensure every ``parent`` names another configured page."""
    for key, page in pages.items():
        if page.parent is None:
            continue
        if page.parent == key or page.parent not in pages:
            msg = f"Page '{key}' has unknown parent '{page.parent}'."
            raise ProjectConfigError(msg)


__all__ = ["load_project_config"]
