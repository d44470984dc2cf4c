"""Pipe-table alignment.

Every column is padded to the display width of its widest cell (at least three
columns, so the delimiter row always holds ``---``), rows with missing cells
are padded with empty ones, and the delimiter row is rebuilt from each
column's alignment.  A table without a delimiter row is not a table: its rows
become ordinary paragraph text.
"""

import logging

from md_reformat.config import FormatterConfig
from md_reformat.engine.schema import Alignment, Block, FormattedTable, Paragraph, Row, Table
from md_reformat.engine.spacing import space_text
from md_reformat.engine.width import display_width

logger = logging.getLogger(__name__)

MIN_COLUMN_WIDTH = 3


# ── Cell helpers ─────────────────────────────────────────────────────────────


def pad_cell(text: str, width: int, alignment: Alignment) -> str:
    """Pad *text* with spaces to *width* display columns according to *alignment*.

    Centered text puts the odd extra space on the right.
    """
    fill = max(width - display_width(text), 0)
    if alignment == Alignment.RIGHT:
        return " " * fill + text
    if alignment == Alignment.CENTER:
        left = fill // 2
        return " " * left + text + " " * (fill - left)
    return text + " " * fill


def delimiter_cell(width: int, alignment: Alignment) -> str:
    """Build the delimiter row cell for a column, e.g. ':---', '---:', ':---:'."""
    if alignment == Alignment.LEFT:
        return ":" + "-" * (width - 1)
    if alignment == Alignment.RIGHT:
        return "-" * (width - 1) + ":"
    if alignment == Alignment.CENTER:
        return ":" + "-" * (width - 2) + ":"
    return "-" * width


def column_widths(rows: list[Row], n_cols: int) -> list[int]:
    """Return the display width of each column over its non-delimiter cells."""
    widths = [MIN_COLUMN_WIDTH] * n_cols
    for row in rows:
        if row.is_delimiter_row:
            continue
        for col, cell in enumerate(row.cells):
            widths[col] = max(widths[col], display_width(cell))
    return widths


# ── Table formatting ─────────────────────────────────────────────────────────


def format_table(table: Table, config: FormatterConfig) -> FormattedTable:
    """Align one table that has a delimiter row.

    Rows shorter than the widest row get trailing empty cells; rows are never
    truncated.
    """
    n_cols = table.column_count
    delimiter = table.delimiter_row
    alignments = list(delimiter.alignments) if delimiter else []
    alignments += [Alignment.NONE] * (n_cols - len(alignments))

    # Normalize cell text first: padding depends on the final content
    rows: list[Row] = []
    for row in table.rows:
        if row.is_delimiter_row:
            cells = list(row.cells)
        else:
            cells = [space_text(cell.strip(), config.space_code_spans) for cell in row.cells]
        cells += [""] * (n_cols - len(cells))
        rows.append(Row(cells=cells, is_delimiter_row=row.is_delimiter_row, alignments=row.alignments))

    widths = column_widths(rows, n_cols)

    padded: list[Row] = []
    for row in rows:
        if row.is_delimiter_row:
            cells = [delimiter_cell(widths[col], alignments[col]) for col in range(n_cols)]
            padded.append(Row(cells=cells, is_delimiter_row=True, alignments=alignments))
        else:
            cells = [pad_cell(row.cells[col], widths[col], alignments[col]) for col in range(n_cols)]
            padded.append(Row(cells=cells))

    return FormattedTable(rows=padded, lines=table.lines, column_widths=widths)


def format_tables(blocks: list[Block], config: FormatterConfig) -> list[Block]:
    """Align every table in *blocks*; tables without a delimiter row become paragraph text.

    A degraded table merges with any paragraph it touches, so the result reads
    as one run of text.
    """
    output: list[Block] = []
    for block in blocks:
        if isinstance(block, Table):
            if block.delimiter_row is None:
                logger.warning("Pipe rows without a delimiter row kept as text: %r", block.lines[0])
                block = Paragraph(lines=list(block.lines))
            else:
                block = format_table(block, config)
                logger.debug("Aligned table: %d rows x %d columns", len(block.rows), len(block.column_widths))

        if isinstance(block, Paragraph) and output and isinstance(output[-1], Paragraph):
            output[-1] = Paragraph(lines=output[-1].lines + block.lines)
        else:
            output.append(block)
    return output
