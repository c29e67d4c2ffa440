"""Rebuild exported grids as literal pipe tables.

pandoc re-interprets HTML tables and often falls back to grid or HTML output
for the cell markup Confluence produces. Each grid is therefore flattened into
the pipe-table text up front and wrapped in ``<pre class="table">`` so pandoc
passes it through as a fenced block, which the post-processor unwraps again.
"""

from __future__ import annotations

import logging
import re
import typing as typ

from bs4 import NavigableString

from confluence_md._constants import TABLE_BLOCK_CLASS

from .tree import ContentRegion, inner_html, parse_markup

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from bs4 import Tag

logger = logging.getLogger(__name__)

SEPARATOR_CELL = "----"
SKIPPED_GRID_CLASS = "attachments"
_CELL_NOISE_PATTERN = re.compile(r"&nbsp;|&#xA0;|&#160;|\xa0|<br\s*/?>", re.IGNORECASE)
_CELL_WHITESPACE_PATTERN = re.compile(r"\s*\n\s*")
_UNESCAPED_PIPE_PATTERN = re.compile(r"(?<!\\)\|")

CellFix = typ.Callable[[ContentRegion], ContentRegion]


def _cell_content(cell: Tag) -> str:
    """Return the cleaned inner HTML of a table cell on a single line.

    Literal pipes are escaped so they do not open an extra column.
    """
    content = _CELL_NOISE_PATTERN.sub("", inner_html(cell).strip())
    content = _CELL_WHITESPACE_PATTERN.sub(" ", content).strip()
    return _UNESCAPED_PIPE_PATTERN.sub(r"\\|", content)


def _own_rows(table: Tag) -> list[Tag]:
    """Return the rows of ``table`` that do not belong to a nested grid."""
    return [row for row in table.find_all("tr") if row.find_parent("table") is table]


def _format_row(cells: list[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def _grid_cells(table: Tag) -> list[list[Tag]] | None:
    """Return the cells of every non-empty row, or ``None`` on a shape mismatch."""
    rows: list[list[Tag]] = []
    for row in _own_rows(table):
        cells = row.find_all(["th", "td"], recursive=False)
        if not cells:
            continue
        if rows and len(cells) != len(rows[0]):
            logger.debug(
                "Leaving grid unconverted: row has %d cells, expected %d",
                len(cells),
                len(rows[0]),
            )
            return None
        rows.append(cells)
    return rows or None


def build_pipe_table(
    table: Tag, cell_fixes: cabc.Sequence[CellFix] = ()
) -> str | None:
    """Return pipe-table text for ``table`` or ``None`` when it cannot be rebuilt.

    Parameters
    ----------
    table : Tag
        ``<table>`` element to flatten.
    cell_fixes : Sequence[CellFix], optional
        Passes run over each cell's content before it is serialized. They
        only run once the grid's shape has been accepted.

    Returns
    -------
    str | None
        Header line, separator line, and one line per data row, terminated by
        a newline. ``None`` when the grid has no rows or when a row's cell
        count disagrees with the established column count.

    Notes
    -----
    A row made only of ``<th>`` cells is a header row. The first header row
    provides the header line; later header rows must agree on the column
    count but add no output. Rows containing ``<td>`` cells are data rows and
    keep every cell (``<th>`` included) in document order.
    """
    grid = _grid_cells(table)
    if grid is None:
        return None

    for cells in grid:
        for cell in cells:
            region = ContentRegion([cell])
            for fix in cell_fixes:
                region = fix(region)

    headers: list[str] = []
    rows: list[list[str]] = []
    for cells in grid:
        content = [_cell_content(cell) for cell in cells]
        if all(cell.name == "th" for cell in cells):
            if not headers:
                headers = content
            continue
        rows.append(content)

    column_count = len(grid[0])
    lines = [
        _format_row(headers or [""] * column_count),
        _format_row([SEPARATOR_CELL] * column_count),
    ]
    lines.extend(_format_row(cells) for cells in rows)
    return "\n".join(lines) + "\n"


def reconstruct_tables(
    region: ContentRegion, cell_fixes: cabc.Sequence[CellFix] = ()
) -> tuple[ContentRegion, bool]:
    """Replace every convertible grid in ``region`` with a pipe-table block.

    Returns the region and whether at least one grid was replaced. Grids that
    cannot be rebuilt stay in place untouched. ``cell_fixes`` are the passes
    that would otherwise reach cell content after it has become text.
    """
    fixed = False
    for table in region.select("table"):
        if SKIPPED_GRID_CLASS in table.get("class", []) or table.find("table"):
            continue
        text = build_pipe_table(table, cell_fixes)
        if text is None:
            continue
        block = parse_markup("").new_tag("pre", attrs={"class": TABLE_BLOCK_CLASS})
        block.append(NavigableString(text))
        table.replace_with(block)
        fixed = True
    return region, fixed


__all__ = ["SEPARATOR_CELL", "CellFix", "build_pipe_table", "reconstruct_tables"]
