"""Table sources for deterministic tests.

CountingTableSource serves fixture text without any network access and
records how often it was asked, so tests can assert on fetch behaviour.
"""

from pathlib import Path
from typing import Optional

from hostel_picker.sources.base import TableSource

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


def load_fixture_table(name: str = "venues.csv") -> str:
    """Read a fixture table by file name.

    Raises:
        FileNotFoundError: If the fixture does not exist
    """
    path = FIXTURES_DIR / name
    if not path.exists():
        raise FileNotFoundError(f"Fixture file not found: {path}")
    return path.read_text(encoding="utf-8")


class CountingTableSource(TableSource):
    """Serves fixed text, or raises a fixed error, and counts fetches."""

    def __init__(self, text: str = "", error: Optional[Exception] = None) -> None:
        self.text = text
        self.error = error
        self.fetch_count = 0

    def fetch_table(self) -> str:
        self.fetch_count += 1
        if self.error is not None:
            raise self.error
        return self.text
