"""Parse, group, edit, serialize and export WordPress block content.

This package models a page body as an ordered list of typed content blocks.
It reads WordPress block markup (or plain HTML), groups blocks into
heading-delimited sections, writes the blocks back as markup, and packages
whole projects as WordPress import files.

Exports
-------
- ``app``: Cyclopts application behind the ``wpblocks`` command.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``parse_blocks`` / ``serialize_blocks``: markup to blocks and back.
- ``group_into_sections``: wrap H1/H2 runs in section blocks.

Examples
--------
>>> from wpblocks import parse_blocks, serialize_blocks
>>> blocks = parse_blocks("<h2>About</h2><p>We build sites.</p>")
>>> [block.type.value for block in blocks]
['heading', 'paragraph']
>>> serialize_blocks(blocks).count("<!-- wp:")
2
"""

from __future__ import annotations

from .cli import app, main
from .models import BlockType, ContentBlock
from .parser import parse_blocks
from .sections import group_into_sections
from .serializer import serialize_blocks

__all__ = [
    "BlockType",
    "ContentBlock",
    "app",
    "group_into_sections",
    "main",
    "parse_blocks",
    "serialize_blocks",
]
