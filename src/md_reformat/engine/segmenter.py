"""Group classified lines into the ordered Block sequence of a document.

    header line                 -> Header
    consecutive text lines      -> Paragraph
    fence ... matching fence    -> CodeBlock   (verbatim; an open fence runs to EOF)
    consecutive table rows      -> Table
    markers + continuations     -> ListBlock   (blank lines inside loose lists kept)
    consecutive quote lines     -> BlockQuote
    thematic break              -> ThematicBreak
    leading front matter        -> FrontMatter
    consecutive blank lines     -> BlankRun

Every input line lands in exactly one block; nothing is dropped or duplicated.
"""

import logging
from collections.abc import Callable

from md_reformat.engine.classifiers import parse_alignment, split_row
from md_reformat.engine.schema import (
    BlankRun,
    Block,
    BlockQuote,
    ClassifiedLine,
    CodeBlock,
    FrontMatter,
    Header,
    LineKind,
    ListBlock,
    ListItem,
    Paragraph,
    Row,
    Table,
    ThematicBreak,
)

logger = logging.getLogger(__name__)

# Line kinds that may continue a list item when indented past its marker
CONTINUATION_KINDS = frozenset({LineKind.TEXT, LineKind.TABLE_ROW, LineKind.QUOTE, LineKind.RULE})


def _run_end(lines: list[ClassifiedLine], start: int, kind: LineKind) -> int:
    """Return the index just past the run of *kind* lines beginning at *start*."""
    end = start
    while end < len(lines) and lines[end].kind == kind:
        end += 1
    return end


# ── Simple run handlers ──────────────────────────────────────────────────────


def _consume_blank(lines: list[ClassifiedLine], start: int) -> tuple[list[Block], int]:
    end = _run_end(lines, start, LineKind.BLANK)
    return [BlankRun(count=end - start)], end


def _consume_header(lines: list[ClassifiedLine], start: int) -> tuple[list[Block], int]:
    line = lines[start]
    return [Header(level=line.level, text=line.header_text)], start + 1


def _consume_text(lines: list[ClassifiedLine], start: int) -> tuple[list[Block], int]:
    end = _run_end(lines, start, LineKind.TEXT)
    return [Paragraph(lines=[line.text for line in lines[start:end]])], end


def _consume_quote(lines: list[ClassifiedLine], start: int) -> tuple[list[Block], int]:
    end = _run_end(lines, start, LineKind.QUOTE)
    return [BlockQuote(lines=[line.text for line in lines[start:end]])], end


def _consume_rule(lines: list[ClassifiedLine], start: int) -> tuple[list[Block], int]:
    return [ThematicBreak(line=lines[start].text.rstrip())], start + 1


def _consume_front_matter(lines: list[ClassifiedLine], start: int) -> tuple[list[Block], int]:
    end = _run_end(lines, start, LineKind.FRONT_MATTER)
    return [FrontMatter(lines=[line.text for line in lines[start:end]])], end


def _consume_stray_code(lines: list[ClassifiedLine], start: int) -> tuple[list[Block], int]:
    # CODE lines only follow a FENCE; kept verbatim if one is ever seen alone
    end = _run_end(lines, start, LineKind.CODE)
    return [Paragraph(lines=[line.text for line in lines[start:end]])], end


# ── Code blocks ──────────────────────────────────────────────────────────────


def _consume_fence(lines: list[ClassifiedLine], start: int) -> tuple[list[Block], int]:
    """Collect a fenced code block verbatim up to its closing fence (or end of input)."""
    opener = lines[start]
    block = CodeBlock(
        fence_char=opener.fence_char,
        fence_len=opener.fence_len,
        info_string=opener.info_string,
        indent=opener.text[: opener.indent],
    )

    idx = start + 1
    while idx < len(lines) and lines[idx].kind == LineKind.CODE:
        block.lines.append(lines[idx].text)
        idx += 1

    if idx < len(lines) and lines[idx].kind == LineKind.FENCE and lines[idx].closes_fence:
        block.closing_line = lines[idx].text
        return [block], idx + 1

    # Unterminated fence: trailing blank lines at end of input are not code
    trailing = 0
    while block.lines and not block.lines[-1].strip():
        block.lines.pop()
        trailing += 1
    if trailing:
        return [block, BlankRun(count=trailing)], idx
    return [block], idx


# ── Tables ───────────────────────────────────────────────────────────────────


def _consume_table(lines: list[ClassifiedLine], start: int) -> tuple[list[Block], int]:
    """Collect consecutive table rows; only the first delimiter-shaped row is the delimiter row."""
    end = _run_end(lines, start, LineKind.TABLE_ROW)
    rows: list[Row] = []
    seen_delimiter = False
    for line in lines[start:end]:
        cells = split_row(line.text)
        if line.is_delimiter_row and not seen_delimiter:
            seen_delimiter = True
            rows.append(Row(cells=cells, is_delimiter_row=True, alignments=[parse_alignment(cell) for cell in cells]))
        else:
            rows.append(Row(cells=cells))
    return [Table(rows=rows, lines=[line.text for line in lines[start:end]])], end


# ── Lists ────────────────────────────────────────────────────────────────────


def _new_item(line: ClassifiedLine, level: int, blank_before: bool) -> ListItem:
    return ListItem(
        marker_text=line.marker_number,
        ordered=line.ordered,
        bullet=line.bullet or "-",
        delimiter=line.delimiter or ".",
        content_lines=[line.content],
        nesting_level=level,
        indent=line.indent,
        content_indent=line.content_column,
        blank_before=blank_before,
    )


def _is_continuation(line: ClassifiedLine, item: ListItem) -> bool:
    """Return True if a non-marker line belongs to *item* (indented deeper than its marker)."""
    return line.kind in CONTINUATION_KINDS and line.indent > item.indent


def _next_non_blank(lines: list[ClassifiedLine], start: int) -> int:
    return _run_end(lines, start, LineKind.BLANK)


def _consume_list(lines: list[ClassifiedLine], start: int) -> tuple[list[Block], int]:
    """Collect list items, their continuation lines and loose-list blank lines.

    Nesting: a marker indented deeper than an open item's marker nests inside
    it (so at or past its content column always nests); otherwise open items
    are closed until one admits it.  A blank line followed by any marker
    keeps the list open, so the grouping does not depend on source indentation.
    """
    items: list[ListItem] = []
    open_items: list[int] = []  # marker indent per open level
    blank_before = False

    idx = start
    while idx < len(lines):
        line = lines[idx]

        if line.kind == LineKind.LIST_MARKER:
            while open_items and line.indent <= open_items[-1]:
                open_items.pop()
            items.append(_new_item(line, len(open_items), blank_before))
            open_items.append(line.indent)
            blank_before = False
            idx += 1
            continue

        if line.kind == LineKind.BLANK:
            nxt = _next_non_blank(lines, idx)
            if nxt >= len(lines):
                break
            following = lines[nxt]
            if following.kind == LineKind.LIST_MARKER:
                blank_before = True
                idx = nxt
                continue
            if _is_continuation(following, items[-1]):
                items[-1].content_lines.append("")
                idx = nxt
                continue
            break

        if _is_continuation(line, items[-1]):
            items[-1].content_lines.append(line.text)
            idx += 1
            continue

        break

    return [ListBlock(ordered=items[0].ordered, items=items)], idx


# ── Main segmenting loop ─────────────────────────────────────────────────────

_HANDLERS: dict[LineKind, Callable[[list[ClassifiedLine], int], tuple[list[Block], int]]] = {
    LineKind.BLANK: _consume_blank,
    LineKind.HEADER: _consume_header,
    LineKind.TEXT: _consume_text,
    LineKind.QUOTE: _consume_quote,
    LineKind.RULE: _consume_rule,
    LineKind.FRONT_MATTER: _consume_front_matter,
    LineKind.FENCE: _consume_fence,
    LineKind.CODE: _consume_stray_code,
    LineKind.TABLE_ROW: _consume_table,
    LineKind.LIST_MARKER: _consume_list,
}


def segment(lines: list[ClassifiedLine]) -> list[Block]:
    """Group classified lines into blocks, preserving document order."""
    blocks: list[Block] = []
    idx = 0
    while idx < len(lines):
        handler = _HANDLERS[lines[idx].kind]
        produced, idx = handler(lines, idx)
        blocks.extend(produced)

    logger.debug("Segmented %d lines into %d blocks", len(lines), len(blocks))
    return blocks
