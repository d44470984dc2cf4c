"""Unit tests for grouping classified lines into blocks."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from md_reformat.engine.classifiers import classify_lines
from md_reformat.engine.schema import (
    Alignment,
    BlankRun,
    BlockQuote,
    CodeBlock,
    FrontMatter,
    Header,
    ListBlock,
    Paragraph,
    Table,
    ThematicBreak,
)
from md_reformat.engine.segmenter import segment


def blocks_of(lines: list[str]) -> list:
    return segment(classify_lines(lines))


# ===========================================================================
# Simple blocks
# ===========================================================================


class TestSimpleBlocks:

    def test_text_lines_merge(self):
        assert blocks_of(["para1", "para2"]) == [Paragraph(lines=["para1", "para2"])]

    def test_header_then_text(self):
        assert blocks_of(["# H", "text"]) == [Header(level=1, text="H"), Paragraph(lines=["text"])]

    def test_blank_run_keeps_count(self):
        blocks = blocks_of(["a", "", "", "", "b"])
        assert blocks[1] == BlankRun(count=3)
        assert len(blocks) == 3

    def test_quote_lines_merge(self):
        assert blocks_of(["> a", "> b"]) == [BlockQuote(lines=["> a", "> b"])]

    def test_rule(self):
        assert blocks_of(["***"]) == [ThematicBreak(line="***")]

    def test_front_matter(self):
        blocks = blocks_of(["---", "title: x", "---", "text"])
        assert blocks[0] == FrontMatter(lines=["---", "title: x", "---"])
        assert blocks[1] == Paragraph(lines=["text"])


# ===========================================================================
# Code blocks
# ===========================================================================


class TestCodeBlocks:

    def test_closed_fence(self):
        blocks = blocks_of(["```py", "# x", "", "```"])
        assert len(blocks) == 1
        block = blocks[0]
        assert isinstance(block, CodeBlock)
        assert block.info_string == "py"
        assert block.lines == ["# x", ""]
        assert block.closing_line == "```"

    def test_unterminated_fence_runs_to_end(self):
        blocks = blocks_of(["```", "code", "", ""])
        assert isinstance(blocks[0], CodeBlock)
        assert blocks[0].lines == ["code"]
        assert blocks[0].closing_line is None
        assert blocks[1] == BlankRun(count=2)

    def test_indent_recorded(self):
        block = blocks_of(["  ~~~", "x", "  ~~~"])[0]
        assert block.indent == "  "
        assert block.fence_char == "~"


# ===========================================================================
# Tables
# ===========================================================================


class TestTables:

    def test_rows_and_delimiter(self):
        blocks = blocks_of(["| a | b |", "|---|:-:|", "| 1 | 2 |"])
        assert len(blocks) == 1
        table = blocks[0]
        assert isinstance(table, Table)
        assert len(table.rows) == 3
        assert table.rows[1].is_delimiter_row
        assert table.delimiter_row.alignments == [Alignment.NONE, Alignment.CENTER]

    def test_only_first_delimiter_row_counts(self):
        table = blocks_of(["| a |", "|---|", "|---|"])[0]
        assert table.rows[1].is_delimiter_row
        assert not table.rows[2].is_delimiter_row

    def test_column_count_is_widest_row(self):
        table = blocks_of(["| a | b | c |", "|---|---|", "| 1 |"])[0]
        assert table.column_count == 3


# ===========================================================================
# Lists
# ===========================================================================


class TestLists:

    def test_nesting_levels(self):
        block = blocks_of(["- a", "- b", "    - c", "- d"])[0]
        assert isinstance(block, ListBlock)
        assert [item.nesting_level for item in block.items] == [0, 0, 1, 0]

    def test_continuation_line(self):
        block = blocks_of(["- a", "  more", "- b"])[0]
        assert block.items[0].content_lines == ["a", "  more"]
        assert len(block.items) == 2

    def test_loose_list_stays_one_block(self):
        blocks = blocks_of(["- a", "", "- b"])
        assert len(blocks) == 1
        assert blocks[0].items[1].blank_before

    def test_dedented_marker_after_blank_continues_list(self):
        blocks = blocks_of(["  1. a", "", "1. b"])
        assert len(blocks) == 1
        assert [item.nesting_level for item in blocks[0].items] == [0, 0]
        assert blocks[0].items[1].blank_before

    def test_blank_then_indented_text_continues_item(self):
        block = blocks_of(["- a", "", "  more"])[0]
        assert block.items[0].content_lines == ["a", "", "  more"]

    def test_blank_then_text_ends_list(self):
        blocks = blocks_of(["- a", "", "text"])
        assert isinstance(blocks[0], ListBlock)
        assert blocks[1] == BlankRun(count=1)
        assert blocks[2] == Paragraph(lines=["text"])

    def test_unindented_text_ends_list(self):
        blocks = blocks_of(["- a", "text"])
        assert isinstance(blocks[0], ListBlock)
        assert blocks[1] == Paragraph(lines=["text"])

    def test_fence_ends_list(self):
        blocks = blocks_of(["- a", "  ```", "  x", "  ```"])
        assert isinstance(blocks[0], ListBlock)
        assert isinstance(blocks[1], CodeBlock)

    def test_ordered_markers_recorded(self):
        block = blocks_of(["7. a", "2) b"])[0]
        assert block.ordered
        assert [item.marker_text for item in block.items] == ["7", "2"]
        assert [item.delimiter for item in block.items] == [".", ")"]
