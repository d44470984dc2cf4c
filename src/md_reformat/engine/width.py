"""Terminal display width of characters and strings.

East-Asian Wide and Fullwidth characters occupy two columns; combining marks,
enclosing marks, zero-width format characters and control characters occupy
none; everything else occupies one.  Classification comes from the Unicode
database bundled with the interpreter (``unicodedata``).
"""

import unicodedata
from functools import lru_cache

_ZERO_WIDTH_CATEGORIES = frozenset({"Mn", "Me", "Cf", "Cc"})


@lru_cache(maxsize=4096)
def char_width(char: str) -> int:
    """Return the number of terminal columns a single character occupies (0, 1 or 2)."""
    if unicodedata.combining(char) or unicodedata.category(char) in _ZERO_WIDTH_CATEGORIES:
        return 0
    if unicodedata.east_asian_width(char) in ("W", "F"):
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the display width of *text* as the sum of its character widths."""
    return sum(char_width(char) for char in text)
