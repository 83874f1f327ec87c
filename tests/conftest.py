"""Shared pytest fixtures."""

import logging
from pathlib import Path

import pytest

from hostel_picker.logging.config import ContextualFilter
from hostel_picker.logging.context import clear_log_context
from hostel_picker.parsing import TableParser

FIXTURES_DIR = Path(__file__).parent / "fixtures"

ENV_VARS = ("SHEET_CSV_URL", "LOG_LEVEL", "ENVIRONMENT", "CACHE_TTL")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep real environment variables out of every test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo configure_logging() calls made by a test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if any(isinstance(f, ContextualFilter) for f in handler.filters):
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def venues_csv():
    """Raw text of the sample venue sheet."""
    return (FIXTURES_DIR / "venues.csv").read_text(encoding="utf-8")


@pytest.fixture
def venues(venues_csv):
    """Parsed records from the sample venue sheet."""
    return TableParser().parse(venues_csv)


@pytest.fixture
def lima_profile():
    """Traveller heading to Lima who wants somewhere quiet with a kitchen."""
    return {
        "destination": "Lima",
        "maxPrice": 20,
        "vibe": "chill",
        "noiseLevel": 20,
        "age": 28,
        "size": "small",
        "nationalityPref": "german",
        "requirements": "kitchen",
    }
