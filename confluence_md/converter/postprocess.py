r"""Text-level fix-ups applied to the Markdown pandoc produced.

The normalizer leaves render-safe markers in the HTML (panel markers and
``<pre class="table">`` blocks). Once pandoc has written Markdown, these
helpers turn the markers into the target wiki's syntax.

Example
-------
>>> post_process("> ==!info==\n> notice text\nAfter\n")
'> [!info]\n> notice text\n\nAfter\n'
"""

from __future__ import annotations

import re

from confluence_md._constants import (
    PANEL_KINDS,
    PANEL_MARKER_TEMPLATE,
    PANEL_TAG_TEMPLATE,
    TABLE_BLOCK_CLASS,
)

BLANK_LINES_PATTERN = re.compile(r"(?:^[ \t]*(?:\r\n?|\n)){2,}", re.MULTILINE)
QUOTE_END_PATTERN = re.compile(r"(^>.*$)(?:\r\n?|\n)([^>\r\n])", re.MULTILINE)
TABLE_BLOCK_PATTERN = re.compile(
    r"^(`{3,}|~{3,})[ \t]*\{?\.?"
    + TABLE_BLOCK_CLASS
    + r"\}?[ \t]*\r?\n(.*?)^\1[ \t]*(?:\r?\n|\Z)",
    re.MULTILINE | re.DOTALL,
)


def replace_panel_markers(text: str) -> str:
    """Replace ``==!note==``-style markers with ``[!note]``-style tags."""
    for kind in PANEL_KINDS:
        text = text.replace(
            PANEL_MARKER_TEMPLATE.format(kind=kind),
            PANEL_TAG_TEMPLATE.format(kind=kind),
        )
    return text


def collapse_empty_lines(text: str) -> str:
    """Collapse runs of blank lines into a single blank line."""
    return BLANK_LINES_PATTERN.sub("\n", text)


def add_eol_after_quote_blocks(text: str) -> str:
    """Insert an empty line between a block quote and the text following it."""
    return QUOTE_END_PATTERN.sub(r"\1\n\n\2", text)


def unwrap_table_blocks(text: str) -> str:
    """Turn fenced ``table`` code blocks back into literal pipe tables."""
    return TABLE_BLOCK_PATTERN.sub(lambda match: match.group(2), text)


def post_process(text: str) -> str:
    """Apply every text-level fix-up in order."""
    text = replace_panel_markers(text)
    text = collapse_empty_lines(text)
    text = add_eol_after_quote_blocks(text)
    return unwrap_table_blocks(text)


__all__ = [
    "add_eol_after_quote_blocks",
    "collapse_empty_lines",
    "post_process",
    "replace_panel_markers",
    "unwrap_table_blocks",
]
