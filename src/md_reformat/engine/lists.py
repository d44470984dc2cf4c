"""List marker normalization.

Ordered items are renumbered so each run counts up by one from its first
item's number, unordered items all take the configured bullet, and every item
is re-indented to ``nesting_level * indent_width`` spaces with its
continuation lines one level deeper.
"""

import logging

from md_reformat.config import FormatterConfig
from md_reformat.engine.schema import Block, ListBlock, ListItem

logger = logging.getLogger(__name__)


class _RunCounter:
    """Next number for the ordered run open at each nesting level.

    A run is keyed by (ordered, delimiter): a bullet item or a switch between
    '1.' and '1)' at the same level starts a new run, and any item closes the
    runs nested below it.
    """

    def __init__(self):
        self.runs: dict[int, tuple[tuple[bool, str], int]] = {}

    def next_marker(self, item: ListItem) -> str | None:
        level = item.nesting_level
        for deeper in [lvl for lvl in self.runs if lvl > level]:
            del self.runs[deeper]

        key = (item.ordered, item.delimiter if item.ordered else item.bullet)
        if not item.ordered:
            self.runs[level] = (key, 0)
            return None

        current = self.runs.get(level)
        number = current[1] if current and current[0] == key else int(item.marker_text or "1")
        self.runs[level] = (key, number + 1)
        return str(number)


def normalize_list(block: ListBlock, config: FormatterConfig) -> tuple[ListBlock, int]:
    """Renumber, re-bullet and re-indent one list.

    Returns the new block and the number of ordered markers whose number changed.
    """
    counter = _RunCounter()
    items: list[ListItem] = []
    renumbered = 0

    for item in block.items:
        level = item.nesting_level
        marker_text = counter.next_marker(item)
        if item.ordered and marker_text != item.marker_text:
            renumbered += 1

        # Continuation lines lose their source indentation; "" marks a blank line
        continuation = [line.strip() for line in item.content_lines[1:]]
        items.append(
            item.model_copy(
                update={
                    "marker_text": marker_text,
                    "bullet": config.unordered_bullet,
                    "content_lines": [item.content_lines[0].strip(), *continuation],
                    "indent": level * config.indent_width,
                    "content_indent": (level + 1) * config.indent_width,
                }
            )
        )

    return ListBlock(ordered=block.ordered, items=items), renumbered


def normalize_lists(blocks: list[Block], config: FormatterConfig) -> list[Block]:
    """Normalize every list in *blocks*, passing other blocks through unchanged."""
    output: list[Block] = []
    renumbered = 0
    for block in blocks:
        if isinstance(block, ListBlock):
            block, changed = normalize_list(block, config)
            renumbered += changed
        output.append(block)

    if renumbered:
        logger.debug("Renumbered %d ordered list markers", renumbered)
    return output
