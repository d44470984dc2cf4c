"""Command-line entry point: ``md-reformat [INPUT] [-o OUTPUT] [-i N] [-b BULLET]``.

Reads Markdown from INPUT (or stdin), reformats it and writes the result to
OUTPUT (or stdout).  Exit codes:

    0  success
    1  input or output could not be read/written
    2  invalid arguments or configuration
    3  input is not valid UTF-8
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from md_reformat import __version__
from md_reformat.config import BULLETS, FormatterConfig
from md_reformat.engine.pipeline import format_markdown

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_ENCODING_ERROR = 3


class InputEncodingError(ValueError):
    """Raised when the input bytes are not valid UTF-8."""


# ── I/O helpers ──────────────────────────────────────────────────────────────


def decode_input(data: bytes, source: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InputEncodingError(f"{source}: invalid UTF-8 at byte {exc.start}") from exc


def read_input(path: str | None) -> str:
    """Read the whole document from *path*, or from stdin when *path* is None."""
    if path is None:
        stream = sys.stdin
        if hasattr(stream, "buffer"):
            return decode_input(stream.buffer.read(), "<stdin>")
        return stream.read()
    return decode_input(Path(path).read_bytes(), path)


def write_output(text: str, path: str | None):
    """Write *text* to *path* (newlines untouched), or to stdout when *path* is None."""
    if path is None:
        stream = sys.stdout
        if hasattr(stream, "buffer"):
            stream.flush()
            stream.buffer.write(text.encode("utf-8"))
            stream.buffer.flush()
        else:
            stream.write(text)
        return
    with open(path, "w", encoding="utf-8", newline="") as fopen:
        fopen.write(text)


# ── Entry point ──────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="md-reformat",
        description="Reformat Markdown: blank lines, table alignment, list markers and CJK/Latin spacing",
    )
    parser.add_argument("input", nargs="?", metavar="INPUT", help="Markdown file to read (default: stdin)")
    parser.add_argument("-o", "--output", metavar="OUTPUT", help="File to write (default: stdout)")
    parser.add_argument("-i", "--indent", type=int, metavar="N", help="Spaces per list nesting level (default: 4)")
    parser.add_argument("-b", "--bullet", choices=BULLETS, help="Marker for unordered list items (default: -)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log progress to stderr (-vv for per-line detail)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _log_level(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, reformat the input and write the result; return the exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=_log_level(args.verbose), format="%(asctime)s - %(levelname)s - %(message)s")
    load_dotenv(find_dotenv(usecwd=True))

    try:
        config = FormatterConfig.from_env(indent_width=args.indent, unordered_bullet=args.bullet)
    except ValidationError as exc:
        print(f"md-reformat: invalid configuration: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        text = read_input(args.input)
    except InputEncodingError as exc:
        logger.error("Cannot decode input: %s", exc)
        print(f"md-reformat: {exc}", file=sys.stderr)
        return EXIT_ENCODING_ERROR
    except OSError as exc:
        logger.error("Cannot read input: %s", exc)
        print(f"md-reformat: {exc}", file=sys.stderr)
        return EXIT_IO_ERROR

    result = format_markdown(text, config)

    try:
        write_output(result, args.output)
    except OSError as exc:
        logger.error("Cannot write output: %s", exc)
        print(f"md-reformat: {exc}", file=sys.stderr)
        return EXIT_IO_ERROR

    logger.info("Wrote %d characters to %s", len(result), args.output or "<stdout>")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
