"""Line classification helpers for the Markdown reformatter.

Each physical line is tagged with a LineKind.  Code fences need memory of
earlier lines, so the caller threads one explicit FenceState through every
classify() call: while a fence is open, every line is verbatim code no matter
what it looks like.
"""

import logging

from md_reformat.engine.patterns import (
    DELIMITER_CELL_RE,
    DELIMITER_ROW_CHARS,
    FENCE_RE,
    FRONT_MATTER_CLOSE,
    FRONT_MATTER_OPEN,
    HEADER_RE,
    LIST_MARKER_RE,
    QUOTE_RE,
    RULE_RE,
)
from md_reformat.engine.schema import Alignment, ClassifiedLine, LineKind

logger = logging.getLogger(__name__)


class FenceState:
    """Whether the scanner is inside a fenced code block, and what closes it."""

    def __init__(self):
        self.char: str | None = None
        self.length = 0
        self.opened_at = 0

    @property
    def is_open(self) -> bool:
        return self.char is not None

    def open(self, char: str, length: int, line_number: int = 0):
        self.char = char
        self.length = length
        self.opened_at = line_number

    def close(self):
        self.char = None
        self.length = 0


# ── Indentation ──────────────────────────────────────────────────────────────


def expand_indent(text: str, tab_width: int = 4, start_column: int = 0) -> int:
    """Return the column reached after the leading whitespace of *text*.

    Tabs advance to the next multiple of *tab_width*; counting starts at
    *start_column* so the gap after a list marker can be measured in place.
    """
    column = start_column
    for char in text:
        if char == " ":
            column += 1
        elif char == "\t":
            column += tab_width - (column % tab_width)
        else:
            break
    return column - start_column


# ── Table row helpers ────────────────────────────────────────────────────────


def split_row(line: str) -> list[str]:
    """Split a pipe-table row into stripped cell strings (without outer pipes).

    Pipes inside inline code spans and escaped pipes (\\|) are cell content,
    not column separators, and are kept as written.
    """
    text = line.strip()
    if text.startswith("|"):
        text = text[1:]
    if text.endswith("|") and not text.endswith("\\|"):
        text = text[:-1]

    cells: list[str] = []
    buf: list[str] = []
    code_ticks = 0
    i = 0
    while i < len(text):
        char = text[i]
        if char == "\\" and i + 1 < len(text) and text[i + 1] == "|":
            buf.append("\\|")
            i += 2
            continue
        if char == "`":
            j = i
            while j < len(text) and text[j] == "`":
                j += 1
            run = j - i
            if code_ticks == 0:
                code_ticks = run
            elif code_ticks == run:
                code_ticks = 0
            buf.append(text[i:j])
            i = j
            continue
        if char == "|" and code_ticks == 0:
            cells.append("".join(buf).strip())
            buf = []
        else:
            buf.append(char)
        i += 1

    cells.append("".join(buf).strip())
    return cells


def has_unescaped_pipe(line: str) -> bool:
    """Return True if *line* contains a '|' outside escapes and inline code spans."""
    code_ticks = 0
    i = 0
    while i < len(line):
        char = line[i]
        if char == "\\":
            i += 2
            continue
        if char == "`":
            j = i
            while j < len(line) and line[j] == "`":
                j += 1
            run = j - i
            if code_ticks == 0:
                code_ticks = run
            elif code_ticks == run:
                code_ticks = 0
            i = j
            continue
        if char == "|" and code_ticks == 0:
            return True
        i += 1
    return False


def is_delimiter_row(line: str) -> bool:
    """Return True for a row like '| :--- | ---: |' that fixes column alignment."""
    if "|" not in line or not set(line) <= DELIMITER_ROW_CHARS:
        return False
    cells = split_row(line)
    return bool(cells) and all(DELIMITER_CELL_RE.match(cell) for cell in cells)


def parse_alignment(cell: str) -> Alignment:
    """Map a delimiter cell (':---', '---:', ':---:', '---') to its alignment."""
    cell = cell.strip()
    left, right = cell.startswith(":"), cell.endswith(":") and len(cell) > 1
    if left and right:
        return Alignment.CENTER
    if right:
        return Alignment.RIGHT
    if left:
        return Alignment.LEFT
    return Alignment.NONE


# ── Line classifier ──────────────────────────────────────────────────────────


def _classify_fence_candidate(line: str, fence_state: FenceState, line_number: int) -> ClassifiedLine | None:
    """Return a FENCE line if *line* opens a code block, else None."""
    match = FENCE_RE.match(line)
    if not match:
        return None
    fence, info = match.group("fence"), match.group("info")
    # A backtick fence's info string may not itself contain backticks
    if fence[0] == "`" and "`" in info:
        return None
    fence_state.open(fence[0], len(fence), line_number)
    return ClassifiedLine(
        kind=LineKind.FENCE,
        text=line,
        line_number=line_number,
        indent=len(match.group("indent")),
        fence_char=fence[0],
        fence_len=len(fence),
        info_string=info,
    )


def _classify_list_marker(line: str, tab_width: int, line_number: int) -> ClassifiedLine | None:
    """Return a LIST_MARKER line for '- x', '* x', '+ x', '1. x' or '1) x', else None."""
    match = LIST_MARKER_RE.match(line)
    if not match:
        return None

    indent = expand_indent(match.group("indent"), tab_width)
    if match.group("bullet"):
        marker_width = 1
    else:
        marker_width = len(match.group("number")) + 1

    content = match.group("content") or ""
    gap = expand_indent(match.group("gap") or "", tab_width, indent + marker_width)
    # An empty item or a gap wider than four columns puts content one column after the marker
    if not content.strip() or gap > 4:
        gap = 1

    return ClassifiedLine(
        kind=LineKind.LIST_MARKER,
        text=line,
        line_number=line_number,
        indent=indent,
        ordered=match.group("number") is not None,
        bullet=match.group("bullet") or "",
        marker_number=match.group("number"),
        delimiter=match.group("delim") or "",
        content=content,
        content_column=indent + marker_width + gap,
    )


def classify(line: str, fence_state: FenceState, tab_width: int = 4, line_number: int = 0) -> ClassifiedLine:
    """Classify one physical line, updating *fence_state* when a fence opens or closes.

    Precedence outside a fence: blank, fence, header, thematic break,
    delimiter row, list marker, block quote, table row, plain text.
    """
    if fence_state.is_open:
        match = FENCE_RE.match(line)
        if match and _closes(match, fence_state):
            fence_state.close()
            return ClassifiedLine(
                kind=LineKind.FENCE,
                text=line,
                line_number=line_number,
                indent=len(match.group("indent")),
                fence_char=match.group("fence")[0],
                fence_len=len(match.group("fence")),
                closes_fence=True,
            )
        return ClassifiedLine(kind=LineKind.CODE, text=line, line_number=line_number)

    if not line.strip():
        return ClassifiedLine(kind=LineKind.BLANK, text=line, line_number=line_number)

    fence_line = _classify_fence_candidate(line, fence_state, line_number)
    if fence_line is not None:
        return fence_line

    header = HEADER_RE.match(line)
    if header:
        return ClassifiedLine(
            kind=LineKind.HEADER,
            text=line,
            line_number=line_number,
            level=len(header.group(1)),
            header_text=header.group(2) or "",
        )

    indent = expand_indent(line, tab_width)
    if RULE_RE.match(line):
        return ClassifiedLine(kind=LineKind.RULE, text=line, line_number=line_number, indent=indent)

    if is_delimiter_row(line):
        return ClassifiedLine(kind=LineKind.TABLE_ROW, text=line, line_number=line_number, indent=indent, is_delimiter_row=True)

    list_line = _classify_list_marker(line, tab_width, line_number)
    if list_line is not None:
        return list_line

    if QUOTE_RE.match(line):
        return ClassifiedLine(kind=LineKind.QUOTE, text=line, line_number=line_number, indent=indent)

    if has_unescaped_pipe(line):
        return ClassifiedLine(kind=LineKind.TABLE_ROW, text=line, line_number=line_number, indent=indent)

    return ClassifiedLine(kind=LineKind.TEXT, text=line, line_number=line_number, indent=indent)


def _closes(match, fence_state: FenceState) -> bool:
    """Return True if a fence-shaped line closes the currently open fence."""
    fence = match.group("fence")
    return fence[0] == fence_state.char and len(fence) >= fence_state.length and not match.group("info").strip()


def _front_matter_end(lines: list[str]) -> int | None:
    """Return the index of the closing front matter delimiter, if the document opens with one."""
    if not lines or lines[0].rstrip() != FRONT_MATTER_OPEN:
        return None
    for idx in range(1, len(lines)):
        if lines[idx].rstrip() in FRONT_MATTER_CLOSE:
            return idx
    return None


def classify_lines(lines: list[str], tab_width: int = 4) -> list[ClassifiedLine]:
    """Classify every line of a document in order, threading one FenceState through."""
    classified: list[ClassifiedLine] = []

    start = 0
    front_matter_end = _front_matter_end(lines)
    if front_matter_end is not None:
        classified.extend(ClassifiedLine(kind=LineKind.FRONT_MATTER, text=lines[i], line_number=i + 1) for i in range(front_matter_end + 1))
        start = front_matter_end + 1
        logger.debug("Front matter spans lines 1-%d", front_matter_end + 1)

    fence_state = FenceState()
    for idx in range(start, len(lines)):
        line = classify(lines[idx], fence_state, tab_width, line_number=idx + 1)
        logger.debug("%4d %-12s %s", line.line_number, line.kind.value, line.text)
        classified.append(line)

    if fence_state.is_open:
        logger.warning("Code fence opened at line %d is never closed; treating it as closed at end of input", fence_state.opened_at)

    return classified
