"""Escape and strip helpers shared by the parser and serializer.

``strip_html`` is the inverse of ``escape_html`` for text without entity
sequences: every entity written by the serializer is one the parser decodes,
but text that already reads like an entity (``&lt;``) decodes on the way back.

Example
-------
>>> from wpblocks.html_text import escape_html, strip_html
>>> escape_html("Tom & Jerry's <show>")
'Tom &amp; Jerry&#39;s &lt;show&gt;'
>>> strip_html("<p>Tom &amp; Jerry&#39;s</p>")
"Tom & Jerry's"
"""

from __future__ import annotations

import re

TAG_PATTERN = re.compile(r"<[^>]*>")

# Decoding order matters: ``&amp;`` is decoded before the other entities.
_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)

_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#39;",
    }
)


def strip_html(text: str) -> str:
    """Remove tags, decode the standard named entities, and trim whitespace."""
    stripped = TAG_PATTERN.sub("", text)
    for entity, char in _ENTITIES:
        stripped = stripped.replace(entity, char)
    return stripped.strip()


def escape_html(text: str) -> str:
    """Escape ``&``, ``<``, ``>``, ``"`` and ``'`` for embedding in markup."""
    return text.translate(_ESCAPES)


__all__ = ["TAG_PATTERN", "escape_html", "strip_html"]
