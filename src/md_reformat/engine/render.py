"""Serialize a block sequence back to Markdown text."""

from md_reformat.engine.schema import (
    BlankRun,
    Block,
    BlockQuote,
    CodeBlock,
    FrontMatter,
    Header,
    ListBlock,
    Paragraph,
    Table,
    ThematicBreak,
)


def render_header(block: Header) -> list[str]:
    prefix = "#" * block.level
    return [f"{prefix} {block.text}" if block.text else prefix]


def render_code(block: CodeBlock) -> list[str]:
    lines = [block.indent + block.fence_char * block.fence_len + block.info_string, *block.lines]
    if block.closing_line is not None:
        lines.append(block.closing_line)
    return lines


def render_table(block: Table) -> list[str]:
    return ["| " + " | ".join(row.cells) + " |" for row in block.rows]


def render_list(block: ListBlock) -> list[str]:
    lines: list[str] = []
    for item in block.items:
        if item.blank_before:
            lines.append("")
        first = item.content_lines[0]
        lines.append(" " * item.indent + item.marker + (f" {first}" if first else ""))
        for line in item.content_lines[1:]:
            lines.append(" " * item.content_indent + line if line else "")
    return lines


def render_block(block: Block) -> list[str]:
    """Return the output lines of one block, without newlines."""
    if isinstance(block, Header):
        return render_header(block)
    if isinstance(block, CodeBlock):
        return render_code(block)
    if isinstance(block, Table):
        return render_table(block)
    if isinstance(block, ListBlock):
        return render_list(block)
    if isinstance(block, Paragraph):
        return [line.rstrip() for line in block.lines]
    if isinstance(block, (BlockQuote, FrontMatter)):
        # Quotes may hold fenced code; the spacing pass already trimmed their prose
        return list(block.lines)
    if isinstance(block, ThematicBreak):
        return [block.line]
    if isinstance(block, BlankRun):
        return [""] * block.count
    raise TypeError(f"Unknown block type: {type(block).__name__}")


def render(blocks: list[Block], newline: str = "\n") -> str:
    """Join every block's lines with *newline* and end the document with exactly one newline.

    An empty document renders as a single newline.
    """
    lines: list[str] = []
    for block in blocks:
        lines.extend(render_block(block))
    return newline.join(lines) + newline
