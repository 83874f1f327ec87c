"""Table sources: where the raw spreadsheet text comes from.

Sources sit outside the pure parsing/scoring core. They own I/O and any
caching; the core only ever sees the text they return.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from hostel_picker.logging import get_logger

from .exceptions import SourceConfigurationError, SourceError

logger = get_logger(__name__, component="source")


class TableSource(ABC):
    """Base class for all table sources."""

    @abstractmethod
    def fetch_table(self) -> str:
        """Return the current raw table text.

        Raises:
            SourceError: If the text cannot be obtained
        """


class StaticTableSource(TableSource):
    """Serves a fixed string; handy for tests and for text already in memory."""

    def __init__(self, text: str) -> None:
        if not isinstance(text, str):
            raise SourceConfigurationError(f"text must be str, got {type(text).__name__}")
        self._text = text

    def fetch_table(self) -> str:
        return self._text


class FileTableSource(TableSource):
    """Reads a CSV export from disk on every fetch."""

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding

    def fetch_table(self) -> str:
        try:
            text = self.path.read_text(encoding=self.encoding)
        except FileNotFoundError as e:
            raise SourceConfigurationError(f"Table file not found: {self.path}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise SourceError(f"Failed to read table file {self.path}: {e}") from e

        logger.debug(
            f"Read table file {self.path}",
            extra={"event": "source.file.read", "path": str(self.path), "text_length": len(text)},
        )
        return text
