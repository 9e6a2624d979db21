"""Build and lay out the visual sitemap graph for a project's pages.

:func:`pages_to_sitemap` turns pages into a three-tier graph (a virtual
``root`` node, one node per navigation menu, and one node per page carrying its
grouped content blocks). :func:`calculate_tree_layout` then positions the
nodes as a tree: leaves are placed left to right at a fixed width, parents are
centred over their children, and each level sits a fixed height below its
parent.

Example
-------
>>> from wpblocks.sitemap import Page, calculate_tree_layout, pages_to_sitemap
>>> nodes, edges = pages_to_sitemap([Page(id="home", title="Home", slug="/")])
>>> laid_out = calculate_tree_layout(nodes, edges)
>>> [(node.id, node.position.x, node.position.y) for node in laid_out]
[('root', 0.0, 0.0), ('menu-Other', 0.0, 120.0), ('home', 0.0, 240.0)]
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import re
import typing as typ

from ._constants import (
    DEFAULT_MENU,
    LEVEL_HEIGHT,
    MENU_NODE_PREFIX,
    MENU_SPACING,
    NODE_WIDTH,
    PAGE_SPACING_X,
    PAGE_SPACING_Y,
    ROOT_NODE_ID,
)
from .models import ContentBlock, block_to_payload
from .parser import parse_blocks
from .sections import group_into_sections

CONTENT_TYPES = frozenset({"page", "post", "product", "portfolio"})


@dc.dataclass(slots=True)
class Position:
    """Canvas coordinates of a node's top-left corner."""

    x: float = 0.0
    y: float = 0.0


@dc.dataclass(slots=True)
class Page:
    """A planned website page.

    Attributes
    ----------
    id : str
        Identifier unique within the project.
    title : str
        Page title shown in navigation and on the node.
    slug : str
        URL path segment.
    content_type : str
        One of ``page``, ``post``, ``product`` or ``portfolio``.
    priority : str
        Planning priority label (``high``, ``medium``, ``low``).
    menu : str or None
        Navigation menu the page belongs to; ``None`` groups it under
        ``"Other"``.
    submenu : str or None
        Optional submenu label.
    parent_id : str or None
        Id of the parent page in the WordPress hierarchy.
    content : str
        Block markup for the page body; empty when not generated yet.
    """

    id: str
    title: str
    slug: str
    content_type: str = "page"
    priority: str = "medium"
    menu: str | None = None
    submenu: str | None = None
    parent_id: str | None = None
    meta_description: str | None = None
    keywords: str | None = None
    content: str = ""


@dc.dataclass(slots=True)
class SitemapNode:
    """A node on the sitemap canvas."""

    id: str
    kind: str
    position: Position
    page: Page
    has_content: bool = False
    child_count: int = 0
    content_blocks: list[ContentBlock] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class SitemapEdge:
    """A directed parent-to-child connection between two nodes."""

    id: str
    source: str
    target: str
    animated: bool = False
    type: str = "smoothstep"


def _menu_slug(name: str) -> str:
    return re.sub(r"\s+", "-", name.lower())


def pages_to_sitemap(
    pages: cabc.Iterable[Page], *, editable: bool = False
) -> tuple[list[SitemapNode], list[SitemapEdge]]:
    """Convert pages into sitemap nodes and edges grouped by menu.

    Parameters
    ----------
    pages : Iterable[Page]
        Pages in display order.
    editable : bool, optional
        Mark page nodes as ``editable`` instead of using their content type
        to pick the node kind.

    Returns
    -------
    tuple[list[SitemapNode], list[SitemapEdge]]
        Nodes (root first, then each menu followed by its pages) and the
        root-to-menu and menu-to-page edges. Page nodes carry their content
        parsed and grouped into sections.
    """
    menu_groups: dict[str, list[Page]] = {}
    for page in pages:
        menu_groups.setdefault(page.menu or DEFAULT_MENU, []).append(page)

    root = SitemapNode(
        id=ROOT_NODE_ID,
        kind="input",
        position=Position(400, 0),
        page=Page(id=ROOT_NODE_ID, title="Website", slug="/", priority="high"),
        child_count=len(menu_groups),
    )
    nodes: list[SitemapNode] = [root]
    edges: list[SitemapEdge] = []

    for menu_index, (menu_name, menu_pages) in enumerate(menu_groups.items()):
        menu_id = f"{MENU_NODE_PREFIX}{menu_name}"
        menu_x = 200 + menu_index * MENU_SPACING
        menu_y = 150
        nodes.append(
            SitemapNode(
                id=menu_id,
                kind="default",
                position=Position(menu_x, menu_y),
                page=Page(id=menu_id, title=menu_name, slug=_menu_slug(menu_name)),
                child_count=len(menu_pages),
            )
        )
        edges.append(
            SitemapEdge(id=f"root-{menu_id}", source=ROOT_NODE_ID, target=menu_id)
        )
        for page_index, page in enumerate(menu_pages):
            has_content = bool(page.content.strip())
            kind = "editable" if editable else _page_kind(page)
            nodes.append(
                SitemapNode(
                    id=page.id,
                    kind=kind,
                    position=Position(
                        menu_x - 100 + page_index * PAGE_SPACING_X,
                        menu_y + PAGE_SPACING_Y + (0 if page.submenu else 50),
                    ),
                    page=page,
                    has_content=has_content,
                    content_blocks=(
                        group_into_sections(parse_blocks(page.content))
                        if has_content
                        else []
                    ),
                )
            )
            edges.append(
                SitemapEdge(
                    id=f"{menu_id}-{page.id}",
                    source=menu_id,
                    target=page.id,
                    animated=has_content,
                )
            )
    return nodes, edges


def _page_kind(page: Page) -> str:
    return "default" if page.content_type == "page" else "output"


def calculate_tree_layout(
    nodes: cabc.Sequence[SitemapNode],
    edges: cabc.Iterable[SitemapEdge],
    *,
    root_id: str = ROOT_NODE_ID,
) -> list[SitemapNode]:
    """Return copies of ``nodes`` positioned as a tree under ``root_id``.

    Leaves are placed at a running horizontal cursor that advances by the
    node width; a parent is centred over the span its children occupy and
    each level is placed one level height below its parent. Nodes that are
    not reachable from the root keep their positions. Edges pointing at
    unknown node ids are ignored, and a node reached a second time (the
    input is not a tree) keeps its first position.
    """
    known = {node.id for node in nodes}
    children: dict[str, list[str]] = {}
    for edge in edges:
        if edge.target in known:
            children.setdefault(edge.source, []).append(edge.target)

    positions: dict[str, Position] = {}

    def _place(node_id: str, x: float, y: float) -> float:
        if node_id in positions:
            return x
        child_ids = [
            child for child in children.get(node_id, []) if child not in positions
        ]
        if not child_ids:
            positions[node_id] = Position(x, y)
            return x + NODE_WIDTH
        positions[node_id] = Position(x, y)
        cursor = x
        for child_id in child_ids:
            cursor = _place(child_id, cursor, y + LEVEL_HEIGHT)
        span = cursor - x - NODE_WIDTH
        positions[node_id] = Position(x + span / 2, y)
        return cursor

    if root_id in known:
        _place(root_id, 0.0, 0.0)

    return [
        dc.replace(node, position=positions[node.id]) if node.id in positions else node
        for node in nodes
    ]


def sitemap_to_payload(
    nodes: cabc.Iterable[SitemapNode], edges: cabc.Iterable[SitemapEdge]
) -> dict[str, list[dict[str, typ.Any]]]:
    """Return a JSON-ready mapping of nodes and edges."""
    return {
        "nodes": [
            {
                "id": node.id,
                "type": node.kind,
                "position": {"x": node.position.x, "y": node.position.y},
                "data": {
                    "title": node.page.title,
                    "slug": node.page.slug,
                    "content_type": node.page.content_type,
                    "has_content": node.has_content,
                    "child_count": node.child_count,
                    "content_blocks": [
                        block_to_payload(block) for block in node.content_blocks
                    ],
                },
            }
            for node in nodes
        ],
        "edges": [
            {
                "id": edge.id,
                "source": edge.source,
                "target": edge.target,
                "type": edge.type,
                "animated": edge.animated,
            }
            for edge in edges
        ],
    }


__all__ = [
    "CONTENT_TYPES",
    "Page",
    "Position",
    "SitemapEdge",
    "SitemapNode",
    "calculate_tree_layout",
    "pages_to_sitemap",
    "sitemap_to_payload",
]
