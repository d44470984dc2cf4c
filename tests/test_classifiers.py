"""Unit tests for line classification and table row helpers."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import logging

from md_reformat.engine.classifiers import (
    FenceState,
    classify,
    classify_lines,
    expand_indent,
    has_unescaped_pipe,
    is_delimiter_row,
    parse_alignment,
    split_row,
)
from md_reformat.engine.schema import Alignment, LineKind


def kind_of(line: str) -> LineKind:
    return classify(line, FenceState()).kind


# ===========================================================================
# expand_indent tests
# ===========================================================================


class TestExpandIndent:

    def test_spaces(self):
        assert expand_indent("  x") == 2

    def test_tab_expands_to_next_stop(self):
        assert expand_indent("\t- x") == 4
        assert expand_indent("  \tx") == 4

    def test_custom_tab_width(self):
        assert expand_indent("\tx", tab_width=2) == 2

    def test_no_indent(self):
        assert expand_indent("x") == 0


# ===========================================================================
# Table row helper tests
# ===========================================================================


class TestSplitRow:

    def test_outer_pipes_removed(self):
        assert split_row("| a | b |") == ["a", "b"]

    def test_without_outer_pipes(self):
        assert split_row("a|b") == ["a", "b"]

    def test_pipe_inside_code_span_is_content(self):
        assert split_row("| `a|b` | c |") == ["`a|b`", "c"]

    def test_escaped_pipe_is_content(self):
        assert split_row("| a \\| b | c |") == ["a \\| b", "c"]

    def test_empty_cell(self):
        assert split_row("| a | |") == ["a", ""]


class TestHasUnescapedPipe:

    def test_plain_pipe(self):
        assert has_unescaped_pipe("a | b")

    def test_escaped_pipe(self):
        assert not has_unescaped_pipe("a \\| b")

    def test_pipe_in_code_span(self):
        assert not has_unescaped_pipe("run `a | b` now")


class TestDelimiterRow:

    def test_plain(self):
        assert is_delimiter_row("|---|---|")

    def test_with_alignment_colons(self):
        assert is_delimiter_row("| :--- | ---: | :-: |")

    def test_data_cell_is_not_delimiter(self):
        assert not is_delimiter_row("| a | --- |")

    def test_needs_a_pipe(self):
        assert not is_delimiter_row("---")

    def test_empty_segment_is_not_delimiter(self):
        assert not is_delimiter_row("| - | |")


class TestParseAlignment:

    def test_all_alignments(self):
        assert parse_alignment(":---") == Alignment.LEFT
        assert parse_alignment("---:") == Alignment.RIGHT
        assert parse_alignment(":-:") == Alignment.CENTER
        assert parse_alignment("---") == Alignment.NONE


# ===========================================================================
# classify tests
# ===========================================================================


class TestClassifyHeader:

    def test_level_and_text(self):
        line = classify("### Title", FenceState())
        assert line.kind == LineKind.HEADER
        assert line.level == 3
        assert line.header_text == "Title"

    def test_bare_hashes(self):
        line = classify("##", FenceState())
        assert line.kind == LineKind.HEADER
        assert line.header_text == ""

    def test_requires_space(self):
        assert kind_of("#Title") == LineKind.TEXT

    def test_seven_hashes_is_text(self):
        assert kind_of("####### seven") == LineKind.TEXT


class TestClassifyFence:

    def test_open_and_close(self):
        state = FenceState()
        opener = classify("```python", state)
        assert opener.kind == LineKind.FENCE
        assert opener.info_string == "python"
        assert state.is_open

        assert classify("# not a header", state).kind == LineKind.CODE
        assert classify("| a | b |", state).kind == LineKind.CODE

        closer = classify("```", state)
        assert closer.kind == LineKind.FENCE
        assert closer.closes_fence
        assert not state.is_open

    def test_shorter_fence_does_not_close(self):
        state = FenceState()
        classify("````", state)
        assert classify("```", state).kind == LineKind.CODE
        assert state.is_open

    def test_other_fence_char_does_not_close(self):
        state = FenceState()
        classify("~~~", state)
        assert classify("```", state).kind == LineKind.CODE

    def test_fence_with_info_does_not_close(self):
        state = FenceState()
        classify("```", state)
        assert classify("``` js", state).kind == LineKind.CODE

    def test_indented_fence(self):
        state = FenceState()
        line = classify("    ```", state)
        assert line.kind == LineKind.FENCE
        assert line.indent == 4

    def test_backtick_in_info_is_not_a_fence(self):
        state = FenceState()
        assert classify("``` a`b", state).kind == LineKind.TEXT
        assert not state.is_open


class TestClassifyListMarker:

    def test_bullet(self):
        line = classify("- item", FenceState())
        assert line.kind == LineKind.LIST_MARKER
        assert not line.ordered
        assert line.bullet == "-"
        assert line.content == "item"
        assert line.content_column == 2

    def test_ordered(self):
        line = classify("12. x", FenceState())
        assert line.ordered
        assert line.marker_number == "12"
        assert line.delimiter == "."
        assert line.content_column == 4

    def test_paren_delimiter(self):
        assert classify("3) y", FenceState()).delimiter == ")"

    def test_nested_indent(self):
        line = classify("    - nested", FenceState())
        assert line.indent == 4
        assert line.content_column == 6

    def test_tab_indent(self):
        assert classify("\t- tab", FenceState()).indent == 4

    def test_bare_marker_is_empty_item(self):
        line = classify("-", FenceState())
        assert line.kind == LineKind.LIST_MARKER
        assert line.content == ""

    def test_marker_needs_space(self):
        assert kind_of("-item") == LineKind.TEXT


class TestClassifyOther:

    def test_blank(self):
        assert kind_of("") == LineKind.BLANK
        assert kind_of("   ") == LineKind.BLANK

    def test_rules(self):
        assert kind_of("***") == LineKind.RULE
        assert kind_of("---") == LineKind.RULE
        assert kind_of("* * *") == LineKind.RULE

    def test_quote(self):
        assert kind_of("> quoted") == LineKind.QUOTE

    def test_table_rows(self):
        assert kind_of("| a | b |") == LineKind.TABLE_ROW
        delimiter = classify("|---|:-:|", FenceState())
        assert delimiter.kind == LineKind.TABLE_ROW
        assert delimiter.is_delimiter_row

    def test_escaped_pipe_is_text(self):
        assert kind_of("a \\| b") == LineKind.TEXT

    def test_plain_text(self):
        assert kind_of("just words") == LineKind.TEXT


# ===========================================================================
# classify_lines tests
# ===========================================================================


class TestClassifyLines:

    def test_front_matter(self):
        kinds = [line.kind for line in classify_lines(["---", "title: x", "---", "# H"])]
        assert kinds == [LineKind.FRONT_MATTER] * 3 + [LineKind.HEADER]

    def test_unclosed_front_matter_is_a_rule(self):
        kinds = [line.kind for line in classify_lines(["---", "text"])]
        assert kinds == [LineKind.RULE, LineKind.TEXT]

    def test_line_numbers(self):
        lines = classify_lines(["a", "b"])
        assert [line.line_number for line in lines] == [1, 2]

    def test_unterminated_fence_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="md_reformat.engine.classifiers"):
            lines = classify_lines(["```", "code"])
        assert [line.kind for line in lines] == [LineKind.FENCE, LineKind.CODE]
        assert "never closed" in caplog.text
