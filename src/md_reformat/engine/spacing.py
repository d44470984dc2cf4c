"""Blank-line placement and CJK/Latin boundary spacing.

Two independent passes over the finalized block sequence:

  place_blank_lines   -- one blank line around tables, code blocks, quotes and
                         headers; every blank run collapsed to a single line;
                         no blank line at document start or end.
  apply_text_spacing  -- one ASCII space between touching CJK and Latin
                         letters/digits, and around inline code spans, in
                         paragraphs, headers, list items and quotes.  Code
                         blocks, front matter and inline code are never touched.

Table cells go through space_text() inside the table formatter, because their
padding depends on the final text.
"""

import logging

from md_reformat.config import FormatterConfig
from md_reformat.engine.classifiers import FenceState, classify
from md_reformat.engine.patterns import (
    BLOCK_MARKER_PREFIX_RE,
    CJK_LATIN_BOUNDARY_RE,
    CLOSING_PUNCTUATION,
    CODE_SPAN_RE,
    OPENING_PUNCTUATION,
    QUOTE_PREFIX_RE,
)
from md_reformat.engine.schema import (
    BlankRun,
    Block,
    BlockQuote,
    CodeBlock,
    Header,
    LineKind,
    ListBlock,
    Paragraph,
    Table,
)

logger = logging.getLogger(__name__)

# Blocks that want a blank line on the given side
BLANK_BEFORE = (Table, CodeBlock, BlockQuote, Header, ListBlock)
BLANK_AFTER = (Table, CodeBlock, BlockQuote, Header)


# ── Text spacing ─────────────────────────────────────────────────────────────


def space_cjk_latin(text: str) -> str:
    """Insert one space wherever a CJK letter touches a Latin letter or digit."""
    return CJK_LATIN_BOUNDARY_RE.sub(" ", text)


def _gap_before_code(previous: str) -> bool:
    return bool(previous) and not previous.isspace() and previous not in OPENING_PUNCTUATION


def _gap_after_code(following: str) -> bool:
    return bool(following) and not following.isspace() and following not in CLOSING_PUNCTUATION


def space_text(text: str, space_code_spans: bool = True) -> str:
    """Apply boundary spacing to one line of prose, leaving inline code spans intact.

    Trailing whitespace is stripped.  With *space_code_spans*, a code span that
    touches a neighbouring character gets one space on that side, unless the
    neighbour is bracketing or closing punctuation.  No space is added after a
    line-initial "#", bullet or item number, which would change the block kind.
    """
    text = text.rstrip()
    out: list[str] = []
    last_char = ""
    after_code = False
    pos = 0

    for match in CODE_SPAN_RE.finditer(text):
        segment = space_cjk_latin(text[pos : match.start()])
        if space_code_spans and after_code and _gap_after_code(segment[:1]):
            segment = " " + segment
        if segment:
            out.append(segment)
            last_char = segment[-1]
        # "#`x`" or "-`x`" at line start must not become a header or list item
        at_marker = pos == 0 and BLOCK_MARKER_PREFIX_RE.match(segment)
        if space_code_spans and not at_marker and _gap_before_code(last_char):
            out.append(" ")
        out.append(match.group(0))
        last_char = match.group(0)[-1]
        after_code = True
        pos = match.end()

    tail = space_cjk_latin(text[pos:])
    if space_code_spans and after_code and _gap_after_code(tail[:1]):
        tail = " " + tail
    out.append(tail)
    return "".join(out)


def _space_lines(lines: list[str], config: FormatterConfig) -> list[str]:
    return [space_text(line, config.space_code_spans) for line in lines]


def _space_quote_lines(lines: list[str], config: FormatterConfig) -> list[str]:
    """Space the text after each line's ">" markers, leaving fenced code inside the quote verbatim."""
    fence_state = FenceState()
    spaced: list[str] = []
    for line in lines:
        prefix = QUOTE_PREFIX_RE.match(line).group(0)
        body = line[len(prefix) :]
        if classify(body, fence_state, config.tab_width).kind in (LineKind.FENCE, LineKind.CODE):
            spaced.append(line)
        else:
            spaced.append((prefix + space_text(body, config.space_code_spans)).rstrip())
    return spaced


def apply_text_spacing(blocks: list[Block], config: FormatterConfig) -> list[Block]:
    """Return a new block list with boundary spacing applied to every text-bearing block."""
    output: list[Block] = []
    for block in blocks:
        if isinstance(block, Paragraph):
            output.append(block.model_copy(update={"lines": _space_lines(block.lines, config)}))
        elif isinstance(block, Header):
            output.append(block.model_copy(update={"text": space_text(block.text, config.space_code_spans)}))
        elif isinstance(block, BlockQuote):
            output.append(block.model_copy(update={"lines": _space_quote_lines(block.lines, config)}))
        elif isinstance(block, ListBlock):
            items = [item.model_copy(update={"content_lines": _space_lines(item.content_lines, config)}) for item in block.items]
            output.append(block.model_copy(update={"items": items}))
        else:
            # CodeBlock, Table (spaced by the table formatter), ThematicBreak, FrontMatter, BlankRun
            output.append(block)
    return output


# ── Blank-line placement ─────────────────────────────────────────────────────


def _wants_separator(previous: Block, block: Block) -> bool:
    return isinstance(block, BLANK_BEFORE) or isinstance(previous, BLANK_AFTER)


def place_blank_lines(blocks: list[Block]) -> list[Block]:
    """Insert, collapse and trim blank runs between blocks.

    A BlankRun(1) separates any block from a following Table, CodeBlock,
    BlockQuote, Header or List, and any Header, Table, CodeBlock or BlockQuote
    from what follows it.  Existing runs collapse to one line; runs at the
    start or end of the document are dropped.
    """
    output: list[Block] = []
    collapsed = inserted = 0

    for block in blocks:
        if isinstance(block, BlankRun):
            collapsed += block.count - 1
            if output and not isinstance(output[-1], BlankRun):
                output.append(BlankRun(count=1))
            else:
                collapsed += 1
            continue

        if output and not isinstance(output[-1], BlankRun) and _wants_separator(output[-1], block):
            output.append(BlankRun(count=1))
            inserted += 1
        output.append(block)

    while output and isinstance(output[-1], BlankRun):
        output.pop()
        collapsed += 1

    logger.debug("Blank lines: %d inserted, %d removed", inserted, collapsed)
    return output
