"""Canonical Markdown reformatter with CJK/Latin spacing and table alignment."""

from md_reformat.config import FormatterConfig
from md_reformat.engine.pipeline import format_markdown

__version__ = "0.3.0"

__all__ = ["FormatterConfig", "format_markdown", "__version__"]
