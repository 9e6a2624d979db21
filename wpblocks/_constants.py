"""Common literal values used across wpblocks.

These constants keep block names, layout spacing, and export filenames
centralized so the parser, serializer, sitemap layout, and tests import the
same values without drifting. Intended for internal use within the wpblocks
package.

Examples
--------
>>> from wpblocks import _constants
>>> _constants.EXPORT_FILENAME_TEMPLATE.format(slug="acme")
'acme-wordpress.xml'
>>> _constants.DEFAULT_HEADING_LEVEL
2
"""

DEFAULT_HEADING_LEVEL = 2
SECTION_HEADING_MAX_LEVEL = 2

EXPORT_FILENAME_TEMPLATE = "{slug}-wordpress.xml"
WXR_VERSION = "1.2"

ROOT_NODE_ID = "root"
MENU_NODE_PREFIX = "menu-"
DEFAULT_MENU = "Other"

LEVEL_HEIGHT = 120
NODE_WIDTH = 200
MENU_SPACING = 300
PAGE_SPACING_X = 150
PAGE_SPACING_Y = 100
