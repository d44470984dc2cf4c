"""Pydantic models for classified lines and document blocks.

A document is an ordered list of ``Block`` values.  Each block kind is its own
model carrying a ``kind`` literal, so every stage can dispatch on the concrete
type and pass through the kinds it does not transform.
"""

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, Field, model_validator


class LineKind(str, Enum):
    """Semantic kind of one physical input line."""

    HEADER = "header"
    FENCE = "fence"
    CODE = "code"
    TABLE_ROW = "table_row"
    LIST_MARKER = "list_marker"
    QUOTE = "quote"
    RULE = "rule"
    FRONT_MATTER = "front_matter"
    BLANK = "blank"
    TEXT = "text"


class Alignment(str, Enum):
    """Column alignment declared by a table delimiter row."""

    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"
    NONE = "none"


class ClassifiedLine(BaseModel):  # pylint: disable=too-many-instance-attributes
    """One input line tagged with its kind and the fields that kind needs."""

    kind: LineKind
    text: str
    line_number: int = 0
    indent: int = 0

    # HEADER
    level: int = 0
    header_text: str = ""

    # FENCE
    fence_char: str = ""
    fence_len: int = 0
    info_string: str = ""
    closes_fence: bool = False

    # LIST_MARKER
    ordered: bool = False
    bullet: str = ""
    marker_number: str | None = None
    delimiter: str = ""
    content: str = ""
    content_column: int = 0

    # TABLE_ROW
    is_delimiter_row: bool = False


# ─── Blocks ───────────────────────────────────────────────────────────────────


class Header(BaseModel):
    """ATX header; ``text`` excludes the leading hashes."""

    kind: Literal["header"] = "header"
    level: int = Field(ge=1, le=6)
    text: str = ""


class Paragraph(BaseModel):
    """Consecutive plain-text lines."""

    kind: Literal["paragraph"] = "paragraph"
    lines: list[str]


class CodeBlock(BaseModel):
    """Fenced code.  ``lines`` hold the content between the fences, byte for byte."""

    kind: Literal["code"] = "code"
    fence_char: str
    fence_len: int = Field(ge=3)
    info_string: str = ""
    indent: str = ""
    lines: list[str] = Field(default_factory=list)
    closing_line: str | None = None


class Row(BaseModel):
    """One table row as stripped cells; alignments are set on the delimiter row only."""

    cells: list[str]
    is_delimiter_row: bool = False
    alignments: list[Alignment] = Field(default_factory=list)


class Table(BaseModel):
    """A run of pipe-table rows.  ``lines`` keeps the source for degradation."""

    kind: Literal["table"] = "table"
    rows: list[Row]
    lines: list[str]

    @property
    def delimiter_row(self) -> Row | None:
        return next((row for row in self.rows if row.is_delimiter_row), None)

    @property
    def column_count(self) -> int:
        return max((len(row.cells) for row in self.rows), default=0)


class FormattedTable(Table):
    """A table whose rows have been padded to a common shape.

    The model_validator guarantees every row carries exactly one cell per
    column, matching the delimiter row.
    """

    column_widths: list[int]

    @model_validator(mode="after")
    def validate_row_widths(self) -> "FormattedTable":
        """Ensure every row has exactly len(column_widths) cells."""
        n_cols = len(self.column_widths)
        for i, row in enumerate(self.rows):
            if len(row.cells) != n_cols:
                raise ValueError(f"Row {i} has {len(row.cells)} cells, expected {n_cols} (matching column_widths)")
        return self


class ListItem(BaseModel):
    """One list entry.

    ``marker_text`` is the item number as written (ordered items only);
    ``content_lines[0]`` is the text after the marker and later entries are
    continuation lines, with ``""`` standing for a blank separator line.
    """

    marker_text: str | None = None
    ordered: bool = False
    bullet: str = "-"
    delimiter: str = "."
    content_lines: list[str] = Field(default_factory=lambda: [""])
    nesting_level: int = Field(default=0, ge=0)
    indent: int = 0
    content_indent: int = 0
    blank_before: bool = False

    @property
    def marker(self) -> str:
        if self.ordered:
            return f"{self.marker_text}{self.delimiter}"
        return self.bullet


class ListBlock(BaseModel):
    """A run of list items, nested items included, in document order."""

    kind: Literal["list"] = "list"
    ordered: bool
    items: list[ListItem]


class BlockQuote(BaseModel):
    """Consecutive ">" lines, kept with their markers."""

    kind: Literal["quote"] = "quote"
    lines: list[str]


class ThematicBreak(BaseModel):
    """A "***", "---" or "___" rule line."""

    kind: Literal["rule"] = "rule"
    line: str


class FrontMatter(BaseModel):
    """Leading YAML block between "---" delimiters, kept verbatim."""

    kind: Literal["front_matter"] = "front_matter"
    lines: list[str]


class BlankRun(BaseModel):
    """Consecutive blank lines."""

    kind: Literal["blank"] = "blank"
    count: int = Field(default=1, ge=1)


Block = Union[Header, Paragraph, CodeBlock, Table, ListBlock, BlockQuote, ThematicBreak, FrontMatter, BlankRun]
