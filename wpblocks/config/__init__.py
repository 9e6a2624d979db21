"""Load and validate project configuration YAML for wpblocks exports.

This subpackage parses a project's ``project.yaml`` file, merges defaults
with per-page overrides, resolves page content (inline markup, stored markup
files, or markdown drafts), and produces typed dataclasses
(:class:`ProjectConfig`, :class:`PageConfig`) that the exporter, preview
builder, and sitemap consume. The primary entry point is
:func:`load_project_config`.

Examples
--------
>>> from pathlib import Path
>>> from wpblocks.config import load_project_config
>>> project = load_project_config(Path("project.yaml"))  # doctest: +SKIP
>>> project.get_page("about").slug  # doctest: +SKIP
'about-us'
"""

from .loader import load_project_config
from .models import PageConfig, ProjectConfig, ProjectConfigError

__all__ = [
    "PageConfig",
    "ProjectConfig",
    "ProjectConfigError",
    "load_project_config",
]
