"""Shared test configuration and fixtures."""

import pytest

from md_reformat.config import ENV_VARS, FormatterConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep MD_REFORMAT_* variables from the developer's shell or .env out of every test."""
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def config() -> FormatterConfig:
    return FormatterConfig()
