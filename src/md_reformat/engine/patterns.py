"""Compiled regex patterns and character classes for Markdown line detection.

These patterns identify structural elements of a Markdown document: ATX
headers, code fences, thematic breaks, list markers, block quotes, front
matter delimiters and inline code spans.  Used by classifiers.py and
spacing.py.
"""

import re

# ─── Block-Level Patterns ─────────────────────────────────────────────────────

# ATX header: 1-6 '#' followed by whitespace or end of line ("# Title", "##")
HEADER_RE = re.compile(r"^(#{1,6})(?:[ \t]+(.*?))?[ \t]*$")

# Code fence opener/closer at any indentation: "```python", "~~~~", "  ```"
FENCE_RE = re.compile(r"^(?P<indent>[ \t]*)(?P<fence>`{3,}|~{3,})(?P<info>.*)$")

# Thematic break: three or more '*', '-' or '_', optionally space-separated
RULE_RE = re.compile(r"^ {0,3}(?:(?:\*[ \t]*){3,}|(?:-[ \t]*){3,}|(?:_[ \t]*){3,})$")

# List item marker: "- x", "* x", "+ x", "1. x", "2) x" at any indentation.
# A bare marker at end of line ("-", "3.") is an empty item.
LIST_MARKER_RE = re.compile(
    r"^(?P<indent>[ \t]*)"
    r"(?:(?P<bullet>[-*+])|(?P<number>\d{1,9})(?P<delim>[.)]))"
    r"(?:(?P<gap>[ \t]+)(?P<content>.*)|$)"
)

# Block quote: '>' after at most three spaces of indentation
QUOTE_RE = re.compile(r"^ {0,3}>")

# Every nested ">" marker at the start of a quote line, with one optional space each
QUOTE_PREFIX_RE = re.compile(r"^(?: {0,3}>[ ]?)+")

# YAML front matter delimiters (opening must be the first line of the document)
FRONT_MATTER_OPEN = "---"
FRONT_MATTER_CLOSE = ("---", "...")


# ─── Table Patterns ───────────────────────────────────────────────────────────

# Characters allowed in a delimiter row such as "| :--- | ---: |"
DELIMITER_ROW_CHARS = frozenset("-:| \t")

# One delimiter cell after stripping: "---", ":--", "--:", ":-:"
DELIMITER_CELL_RE = re.compile(r"^:?-+:?$")


# ─── Inline Patterns ──────────────────────────────────────────────────────────

# Inline code span delimited by matching backtick runs: `x`, ``a ` b``
CODE_SPAN_RE = re.compile(r"(?<!`)(`+)(?!`)(.+?)(?<!`)\1(?!`)")

# Text that would read as a header or list marker if a space followed it: "#", "-", "3)"
BLOCK_MARKER_PREFIX_RE = re.compile(r"^[ \t]*(?:#{1,6}|[-*+]|\d{1,9}[.)])$")


# ─── Character Classes ────────────────────────────────────────────────────────

# CJK letters and digits: ideographs, kana, hangul, bopomofo and fullwidth
# alphanumerics.  CJK punctuation blocks (U+3000-303F, fullwidth punctuation)
# are excluded: no space is inserted next to them.
CJK_CHARS = (
    "\u2e80-\u2eff"  # CJK Radicals Supplement
    "\u2f00-\u2fdf"  # Kangxi Radicals
    "\u3041-\u3096"  # Hiragana
    "\u309d-\u309f"  # Hiragana iteration marks
    "\u30a1-\u30fa"  # Katakana
    "\u30fc-\u30ff"  # Katakana prolonged sound mark and iteration marks
    "\u3105-\u312f"  # Bopomofo
    "\u3131-\u318e"  # Hangul Compatibility Jamo
    "\u31f0-\u31ff"  # Katakana Phonetic Extensions
    "\u3400-\u4dbf"  # CJK Unified Ideographs Extension A
    "\u4e00-\u9fff"  # CJK Unified Ideographs
    "\u1100-\u11ff"  # Hangul Jamo
    "\uac00-\ud7af"  # Hangul Syllables
    "\uf900-\ufaff"  # CJK Compatibility Ideographs
    "\uff10-\uff19"  # Fullwidth digits
    "\uff21-\uff3a"  # Fullwidth Latin capitals
    "\uff41-\uff5a"  # Fullwidth Latin small letters
    "\uff66-\uff9f"  # Halfwidth Katakana
    "\U00020000-\U0002fa1f"  # CJK Unified Ideographs Extensions B-F and supplement
)

# Latin letters and digits: ASCII alphanumerics plus Latin-1 / Latin Extended
LATIN_CHARS = "A-Za-z0-9\u00c0-\u00d6\u00d8-\u00f6\u00f8-\u024f"

# Zero-width insertion point between a CJK letter and a Latin letter/digit
CJK_LATIN_BOUNDARY_RE = re.compile(rf"(?<=[{CJK_CHARS}])(?=[{LATIN_CHARS}])|(?<=[{LATIN_CHARS}])(?=[{CJK_CHARS}])")

# Punctuation that hugs an inline code span without a separating space
OPENING_PUNCTUATION = frozenset("([{<\"'\u201c\u2018\uff08\u3010\u300c\u300e\u300a\u3008")
CLOSING_PUNCTUATION = frozenset(")]}>\"'\u201d\u2019.,;:!?\u2026\uff09\u3011\u300d\u300f\u300b\u3009\u3001\u3002\uff0c\uff1b\uff1a\uff01\uff1f")
