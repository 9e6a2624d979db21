"""Export a project's pages as a WordPress eXtended RSS (WXR) file.

:class:`WordPressExporter` renders ``templates/wxr.xml`` with one ``<item>``
per configured page. Each item's ``content:encoded`` CDATA section carries the
page's block markup verbatim, so the WordPress importer recreates the same
blocks. Pages whose stored content is plain HTML or text are normalised
through the block parser and serializer first.

Typical usage pairs the exporter with a project file:

>>> from pathlib import Path
>>> from wpblocks.config import load_project_config
>>> from wpblocks.export import WordPressExporter
>>> project = load_project_config(Path("project.yaml"))  # doctest: +SKIP
>>> WordPressExporter(project).run()  # doctest: +SKIP
PosixPath('public/acme-wordpress.xml')
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import logging
import typing as typ
from email.utils import format_datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from ._constants import EXPORT_FILENAME_TEMPLATE, WXR_VERSION
from .config.helpers import _slugify
from .serializer import normalize_markup

if typ.TYPE_CHECKING:
    from .config import PageConfig, ProjectConfig

log = logging.getLogger(__name__)

CDATA_END = "]]>"


def cdata(value: object) -> Markup:
    """Return ``value`` made safe for a CDATA section.

    A literal ``]]>`` would close the section early, so it is split across
    two adjacent sections.
    """
    text = "" if value is None else str(value)
    return Markup(text.replace(CDATA_END, "]]]]><![CDATA[>"))  # noqa: S704


def export_filename(name: str) -> str:
    """Return the download filename for a project called ``name``."""
    return EXPORT_FILENAME_TEMPLATE.format(slug=_slugify(name))


@dc.dataclass(slots=True)
class ExportItem:
    """Template context for one WXR ``<item>``."""

    post_id: int
    title: str
    slug: str
    link: str
    content: str
    excerpt: str
    status: str
    post_type: str
    parent_id: int
    menu_order: int


class WordPressExporter:
    """Render a project into a WordPress-importable WXR document."""

    def __init__(
        self, project: ProjectConfig, *, templates_dir: Path | None = None
    ) -> None:
        """Initialize the exporter and its Jinja environment.

        Parameters
        ----------
        project : ProjectConfig
            Parsed project configuration (see
            :func:`wpblocks.config.load_project_config`).
        templates_dir : Path, optional
            Directory containing ``wxr.xml``. Defaults to the package's
            ``templates`` directory.
        """
        self.project = project
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["cdata"] = cdata
        self.template = self.env.get_template("wxr.xml")

    def render(self, *, generated_at: dt.datetime | None = None) -> str:
        """Return the WXR document as a string.

        Parameters
        ----------
        generated_at : datetime, optional
            Timestamp written as the channel and item dates; defaults to the
            current UTC time.
        """
        timestamp = generated_at or dt.datetime.now(dt.UTC)
        context = {
            "project": self.project,
            "items": self._build_items(),
            "wxr_version": WXR_VERSION,
            "pub_date": format_datetime(timestamp),
            "post_date": timestamp.strftime("%Y-%m-%d %H:%M:%S"),
        }
        xml = self.template.render(**context)
        if not xml.endswith("\n"):
            xml += "\n"
        return xml

    def run(self, output_path: Path | None = None) -> Path:
        """Render and write the WXR file, returning its path.

        The target is ``output_path`` when given, else the project's
        configured export path, else ``<project-slug>-wordpress.xml`` in the
        working directory. Parent directories are created as needed.
        """
        target = (
            output_path
            or self.project.export_output
            or Path(export_filename(self.project.name))
        )
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.render(), encoding="utf-8")
        return target

    def _build_items(self) -> list[ExportItem]:
        post_ids = {key: index for index, key in enumerate(self.project.pages, 1)}
        items: list[ExportItem] = []
        for menu_order, (key, page) in enumerate(self.project.pages.items()):
            log.debug("Exporting page %s as post %d", key, post_ids[key])
            items.append(
                ExportItem(
                    post_id=post_ids[key],
                    title=page.title,
                    slug=page.slug,
                    link=self._page_link(page),
                    content=normalize_markup(page.content),
                    excerpt=page.meta_description or "",
                    status=page.status,
                    post_type=page.content_type,
                    parent_id=post_ids.get(page.parent, 0) if page.parent else 0,
                    menu_order=menu_order,
                )
            )
        return items

    def _page_link(self, page: PageConfig) -> str:
        return f"{self.project.site_url}/{page.slug}/"


__all__ = [
    "ExportItem",
    "WordPressExporter",
    "cdata",
    "export_filename",
]
