"""Table sources that supply raw spreadsheet text to the parser."""

from .base import FileTableSource, StaticTableSource, TableSource
from .exceptions import (
    SourceConfigurationError,
    SourceError,
    SourceHTTPError,
    SourceTimeoutError,
)
from .factory import build_source
from .sheet import SheetTableSource

__all__ = [
    "TableSource",
    "StaticTableSource",
    "FileTableSource",
    "SheetTableSource",
    "build_source",
    "SourceError",
    "SourceHTTPError",
    "SourceTimeoutError",
    "SourceConfigurationError",
]
