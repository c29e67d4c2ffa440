"""Common literal values used across confluence_md.

These constants keep file names, extensions, and panel markers centralized so
the normalizer, post-processor, and tests import the same values without
drifting.

Examples
--------
>>> from confluence_md import _constants
>>> _constants.PANEL_MARKER_TEMPLATE.format(kind="note")
'==!note=='
>>> _constants.PANEL_TAG_TEMPLATE.format(kind="info")
'[!info]'
"""

SOURCE_EXTENSION = ".html"
TARGET_EXTENSION = ".md"
INDEX_FILENAME = "index.html"
INDEX_STEM = "index"

PANEL_KINDS = ("note", "warning", "info")
PANEL_MARKER_TEMPLATE = "==!{kind}=="
PANEL_TAG_TEMPLATE = "[!{kind}]"

TABLE_BLOCK_CLASS = "table"
DEFAULT_ASSET_DIRS = ("images", "attachments")
