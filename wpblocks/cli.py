"""Cyclopts CLI entrypoint for working with WordPress block content.

The ``wpblocks`` console script parses block markup into JSON blocks, renders
JSON blocks back into markup, formats markdown drafts, and turns a project
file into a WordPress import (WXR) file, a preview page, or a laid-out
sitemap graph. Every option can also be supplied through a ``WPBLOCKS_``
environment variable.

Examples
--------
Export every page of the default project file:

>>> from wpblocks.cli import main
>>> main()  # doctest: +SKIP

Parse a page and print its grouped blocks:

>>> from wpblocks.cli import app
>>> app.meta(["parse", "about.html", "--grouped"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json
from cyclopts import App, Parameter

from .config import load_project_config
from .drafts import format_draft
from .export import WordPressExporter
from .models import decode_blocks, encode_blocks
from .parser import parse_blocks
from .preview import PreviewPageBuilder
from .sections import group_into_sections
from .serializer import serialize_blocks
from .sitemap import calculate_tree_layout, pages_to_sitemap, sitemap_to_payload

DEFAULT_CONFIG = Path("project.yaml")
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

app = App(name="wpblocks", config=cyclopts.config.Env("WPBLOCKS_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _read_source(path: Path) -> str:
    """Return the text of ``path``, or stdin when ``path`` is ``-``."""
    if str(path) == "-":
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def configure_logging(*, verbose: bool = False) -> None:
    """Send library log records to stderr at INFO, or DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


@app.meta.default
def launcher(
    *tokens: typ.Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    verbose: typ.Annotated[
        bool, Parameter(help="Log debug detail to stderr", env_var="WPBLOCKS_VERBOSE")
    ] = False,
) -> None:
    """Configure logging, then dispatch to the requested subcommand."""
    configure_logging(verbose=verbose)
    app(tokens)


@app.command(help="Parse block markup (or plain HTML) into JSON blocks.")
def parse(
    source: typ.Annotated[Path, Parameter(help="Markup file, or - for stdin")],
    *,
    grouped: typ.Annotated[
        bool, Parameter(help="Wrap H1/H2 runs in section blocks")
    ] = False,
) -> None:
    """Print the blocks parsed from ``source`` as a JSON array.

    Parameters
    ----------
    source : Path
        File holding block-annotated markup, plain HTML, or text.
    grouped : bool, optional
        When ``True`` the flat blocks are grouped into heading-delimited
        sections before printing.
    """
    blocks = parse_blocks(_read_source(source))
    if grouped:
        blocks = group_into_sections(blocks)
    print(encode_blocks(blocks).decode("utf-8"))


@app.command(help="Render a JSON block list back into block markup.")
def render(
    source: typ.Annotated[Path, Parameter(help="JSON blocks file, or - for stdin")],
) -> None:
    """Print the block markup for the JSON blocks in ``source``.

    Raises
    ------
    BlockPayloadError
        If ``source`` is not a JSON array of valid block objects.
    """
    print(serialize_blocks(decode_blocks(_read_source(source))))


@app.command(help="Format a markdown draft as block markup.")
def draft(
    source: typ.Annotated[Path, Parameter(help="Markdown file, or - for stdin")],
) -> None:
    """Print the block markup for the markdown draft in ``source``."""
    print(format_draft(_read_source(source)))


@app.command(help="Write a WordPress import (WXR) file for every page.")
def export(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to project config", env_var="WPBLOCKS_CONFIG")
    ] = DEFAULT_CONFIG,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Override the export file path", env_var="WPBLOCKS_OUTPUT"),
    ] = None,
) -> None:
    """Export the project's pages as a WXR file.

    Parameters
    ----------
    config : Path, optional
        Path to the ``project.yaml`` file (overridable via
        ``WPBLOCKS_CONFIG``).
    output : Path or None, optional
        Destination file; defaults to the configured ``output_dir`` and
        ``export_file``.
    """
    project = load_project_config(config)
    written = WordPressExporter(project).run(output)
    print(f"wrote {_format_path(written)}")


@app.command(help="Write a styled HTML preview of every page.")
def preview(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to project config", env_var="WPBLOCKS_CONFIG")
    ] = DEFAULT_CONFIG,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Override the preview file path", env_var="WPBLOCKS_OUTPUT"),
    ] = None,
) -> None:
    """Render the project's preview page."""
    project = load_project_config(config)
    written = PreviewPageBuilder(project).run(output)
    print(f"wrote {_format_path(written)}")


@app.command(help="Print the laid-out sitemap graph as JSON.")
def sitemap(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to project config", env_var="WPBLOCKS_CONFIG")
    ] = DEFAULT_CONFIG,
    tree: typ.Annotated[
        bool, Parameter(help="Apply the tree layout instead of menu columns")
    ] = True,
) -> None:
    """Print sitemap nodes and edges for the project's pages.

    Parameters
    ----------
    config : Path, optional
        Path to the ``project.yaml`` file.
    tree : bool, optional
        When ``True`` (default) node positions come from the tree layout;
        otherwise the menu-column positions are kept.
    """
    project = load_project_config(config)
    nodes, edges = pages_to_sitemap(project.to_pages())
    if tree:
        nodes = calculate_tree_layout(nodes, edges)
    print(msgspec.json.encode(sitemap_to_payload(nodes, edges)).decode("utf-8"))


def main() -> None:
    """Invoke the Cyclopts application that powers the `wpblocks` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app.meta()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
