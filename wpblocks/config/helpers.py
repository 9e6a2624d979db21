"""Utility helpers shared by the wpblocks configuration loader."""

from __future__ import annotations

import re
import typing as typ
from pathlib import Path

from wpblocks.drafts import format_draft

from .models import ProjectConfigError


def _slugify(title: str) -> str:
    """Return a lowercase, hyphen-separated slug for ``title``."""
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return slug or "page"


def _unique_slug(base: str, used: set[str]) -> str:
    """Generate a unique slug, appending numeric suffixes when needed."""
    candidate = base
    suffix = 2
    while candidate in used:
        candidate = f"{base}-{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _resolve_path(base_dir: Path, value: str | Path) -> Path:
    """Resolve ``value`` relative to the directory holding the config file."""
    path = Path(value)
    return path if path.is_absolute() else base_dir / path


def _read_page_content(
    key: str, payload: typ.Mapping[str, typ.Any], base_dir: Path
) -> str:
    """Return block markup for a page from inline text, a file, or a draft.

    ``content`` holds inline markup, ``content_file`` points at stored markup,
    and ``draft_file`` points at a markdown draft that is formatted into
    block markup. At most one of them may be set.
    """
    sources = [
        name
        for name in ("content", "content_file", "draft_file")
        if payload.get(name)
    ]
    if len(sources) > 1:
        msg = f"Page '{key}' sets more than one of {', '.join(sources)}."
        raise ProjectConfigError(msg)
    if not sources:
        return ""

    source = sources[0]
    if source == "content":
        return str(payload["content"])

    path = _resolve_path(base_dir, payload[source])
    if not path.exists():
        msg = f"Page '{key}' {source} '{path}' not found."
        raise FileNotFoundError(msg)
    text = path.read_text(encoding="utf-8")
    return format_draft(text) if source == "draft_file" else text


__all__ = [
    "_optional_str",
    "_read_page_content",
    "_resolve_path",
    "_slugify",
    "_unique_slug",
]
