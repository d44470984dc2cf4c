"""Run the full reformatting pass over one document.

Stage order:

  1. classify_lines     -- tag each line with its kind (fence state threaded)
  2. segment            -- group lines into blocks
  3. format_tables      -- align table columns (cell text spaced first)
  4. normalize_lists    -- renumber, re-bullet and re-indent lists
  5. apply_text_spacing -- CJK/Latin and code-span spacing in prose
  6. place_blank_lines  -- insert, collapse and trim blank runs
  7. render             -- serialize with the document's own newline

Each stage returns a new block list; nothing is shared between calls, so
format_markdown() is safe to call repeatedly and from several threads.
"""

import logging
from collections import Counter

from md_reformat.config import FormatterConfig
from md_reformat.engine.classifiers import classify_lines
from md_reformat.engine.lists import normalize_lists
from md_reformat.engine.render import render
from md_reformat.engine.schema import BlankRun, Block, ListBlock, Table
from md_reformat.engine.segmenter import segment
from md_reformat.engine.spacing import apply_text_spacing, place_blank_lines
from md_reformat.engine.tables import format_tables

logger = logging.getLogger(__name__)


# ─── Newline Handling ─────────────────────────────────────────────────────────


def detect_newline(text: str) -> str:
    """Return '\\r\\n' if the document uses Windows line endings, else '\\n'."""
    return "\r\n" if "\r\n" in text else "\n"


def split_lines(text: str, newline: str = "\n") -> list[str]:
    """Split *text* into lines without terminators.

    A final newline does not start an extra empty line, and an empty document
    has no lines at all.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    if newline == "\r\n":
        lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    return lines


# ─── Statistics ───────────────────────────────────────────────────────────────


def collect_stats(source: list[Block], result: list[Block]) -> dict[str, int]:
    """Summarize one run: block counts by kind plus blank-line and list totals."""
    stats: dict[str, int] = dict(Counter(block.kind for block in result))
    blank_in = sum(block.count for block in source if isinstance(block, BlankRun))
    blank_out = sum(block.count for block in result if isinstance(block, BlankRun))
    stats["blank_lines_in"] = blank_in
    stats["blank_lines_out"] = blank_out
    stats["tables_aligned"] = sum(1 for block in result if isinstance(block, Table))
    stats["list_items"] = sum(len(block.items) for block in result if isinstance(block, ListBlock))
    return stats


# ─── Main Entry Point ─────────────────────────────────────────────────────────


def format_markdown(text: str, config: FormatterConfig | None = None) -> str:
    """Reformat a Markdown document and return the canonical text.

    Never raises on malformed Markdown: open fences close at end of input,
    pipe rows without a delimiter row stay text, short table rows are padded.
    """
    config = config or FormatterConfig()
    newline = detect_newline(text)
    lines = split_lines(text, newline)

    classified = classify_lines(lines, tab_width=config.tab_width)
    blocks = segment(classified)
    formatted = format_tables(blocks, config)
    formatted = normalize_lists(formatted, config)
    formatted = apply_text_spacing(formatted, config)
    formatted = place_blank_lines(formatted)

    stats = collect_stats(blocks, formatted)
    logger.info(
        "Reformatted %d lines into %d blocks (%s)",
        len(lines),
        len(formatted),
        ", ".join(f"{key}={value}" for key, value in sorted(stats.items())),
    )
    return render(formatted, newline)
