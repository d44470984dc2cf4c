"""Formatter configuration.

Defaults can be overridden from the environment (or a ``.env`` file at the
project root) and then from explicit keyword arguments, which is how the CLI
layers its flags on top:

    MD_REFORMAT_INDENT_WIDTH   spaces per list nesting level   (default 4)
    MD_REFORMAT_BULLET         unordered list marker: - * +    (default -)
    MD_REFORMAT_TAB_WIDTH      tab stop for measuring indents  (default 4)
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")

ENV_VARS = {
    "indent_width": "MD_REFORMAT_INDENT_WIDTH",
    "unordered_bullet": "MD_REFORMAT_BULLET",
    "tab_width": "MD_REFORMAT_TAB_WIDTH",
}

BULLETS = ("-", "*", "+")


class FormatterConfig(BaseModel):
    """Knobs for one formatting run; immutable once built."""

    model_config = ConfigDict(frozen=True)

    indent_width: int = Field(default=4, ge=1)
    unordered_bullet: str = "-"
    tab_width: int = Field(default=4, ge=1)
    space_code_spans: bool = True

    @field_validator("unordered_bullet")
    @classmethod
    def validate_bullet(cls, value: str) -> str:
        if value not in BULLETS:
            raise ValueError(f"unordered_bullet must be one of {', '.join(BULLETS)}; got {value!r}")
        return value

    @classmethod
    def from_env(cls, **overrides) -> "FormatterConfig":
        """Build a config from MD_REFORMAT_* variables, then apply non-None *overrides*.

        Raises pydantic.ValidationError if any resulting value is invalid.
        """
        values: dict[str, object] = {}
        for field, var in ENV_VARS.items():
            raw = os.getenv(var)
            if raw:
                logger.debug("%s=%s from environment", var, raw)
                values[field] = raw.strip()
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
