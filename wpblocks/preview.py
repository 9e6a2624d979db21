"""Styled HTML previews of block markup.

:func:`render_preview` rewrites block-annotated markup into Tailwind-classed
HTML for on-screen review. It is cosmetic and lossy: marker comments and
block attributes are gone from its output, so it is never fed back into the
parser or the exporter. Each region is rendered by the same
:data:`~wpblocks.markup.MARKUP_PATTERNS` entry the serializer uses.

:class:`PreviewPageBuilder` renders every page of a project into one
standalone HTML document through ``templates/preview_page.html``:

>>> from wpblocks.config import load_project_config
>>> from pathlib import Path
>>> project = load_project_config(Path("project.yaml"))  # doctest: +SKIP
>>> builder = PreviewPageBuilder(project)  # doctest: +SKIP
>>> builder.run()  # doctest: +SKIP
PosixPath('public/preview.html')
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import logging
import re
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from .markup import pattern_for
from .models import BlockType
from .parser import BLOCK_PATTERN, parse_blocks, parse_region
from .sections import block_title, group_into_sections
from .serializer import normalize_markup

if typ.TYPE_CHECKING:
    from .config import PageConfig, ProjectConfig

log = logging.getLogger(__name__)


def render_preview(markup: str) -> str:
    """Return presentation HTML for block-annotated ``markup``.

    Recognised regions are replaced by their styled preview. Regions that
    yield no block (unknown names such as ``group`` or ``columns``) lose
    their markers and have their inner markup rendered in place.

    Examples
    --------
    >>> render_preview('<!-- wp:paragraph --><p>Hi</p><!-- /wp:paragraph -->')
    '<p class="text-gray-700 leading-relaxed mb-4">Hi</p>'
    """

    def _replace(match: re.Match[str]) -> str:
        block = parse_region(match.group("name"), match.group("body"))
        if block is None:
            return render_preview(match.group("body"))
        return pattern_for(block.type).preview(block)

    return BLOCK_PATTERN.sub(_replace, markup)


@dc.dataclass(slots=True)
class PreviewArticle:
    """Template context for one page of the preview document."""

    key: str
    title: str
    slug: str
    menu: str | None
    sections: list[str]
    html: Markup


def build_article(page: PageConfig) -> PreviewArticle:
    """Return the preview context for ``page``."""
    markup = normalize_markup(page.content)
    grouped = group_into_sections(parse_blocks(markup))
    sections = [
        block_title(block) for block in grouped if block.type is BlockType.SECTION
    ]
    return PreviewArticle(
        key=page.key,
        title=page.title,
        slug=page.slug,
        menu=page.menu,
        sections=sections,
        html=Markup(render_preview(markup)),  # noqa: S704
    )


class PreviewPageBuilder:
    """Render a whole project into one preview HTML page."""

    def __init__(
        self, project: ProjectConfig, *, templates_dir: Path | None = None
    ) -> None:
        """Initialize the builder and Jinja environment.

        Parameters
        ----------
        project : ProjectConfig
            Parsed project whose pages are rendered, one article each.
        templates_dir : Path, optional
            Directory containing ``preview_page.html``. Defaults to the
            package's ``templates`` directory.
        """
        self.project = project
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("preview_page.html")

    def render(self) -> str:
        """Return the preview document as a string."""
        articles = []
        for page in self.project.pages.values():
            log.debug("Rendering preview for page %s", page.key)
            articles.append(build_article(page))
        context = {
            "project": self.project,
            "articles": articles,
            "generated_at": dt.datetime.now(dt.UTC),
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        return html

    def run(self, output: Path | None = None) -> Path:
        """Render and write the preview HTML, returning the output path.

        ``output`` overrides the project's configured preview path. Parent
        directories are created as needed.
        """
        output_path = output or self.project.preview_output
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(), encoding="utf-8")
        return output_path


__all__ = [
    "PreviewArticle",
    "PreviewPageBuilder",
    "build_article",
    "render_preview",
]
