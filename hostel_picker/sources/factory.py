"""Factory function for choosing a table source from configuration."""

from pathlib import Path
from typing import Optional, Union

from hostel_picker.config.models import SourceConfig
from hostel_picker.logging import get_logger

from .base import FileTableSource, TableSource
from .exceptions import SourceConfigurationError
from .sheet import SheetTableSource

logger = get_logger(__name__, component="source")


def build_source(
    source_config: SourceConfig, table_path: Optional[Union[str, Path]] = None
) -> TableSource:
    """Instantiate the table source for a run.

    A local table path wins over the configured sheet URL.

    Args:
        source_config: Source configuration with URL, TTL and HTTP settings
        table_path: Optional CSV file to read instead of the sheet

    Returns:
        FileTableSource or SheetTableSource

    Raises:
        SourceConfigurationError: If neither a table path nor a sheet URL is set

    Example:
        >>> source = build_source(SourceConfig(), table_path="venues.csv")
        >>> type(source).__name__
        'FileTableSource'
    """
    if table_path is not None:
        logger.debug(
            "Using local table file",
            extra={"event": "source.selected", "source_type": "file", "path": str(table_path)},
        )
        return FileTableSource(table_path)

    if not source_config.sheet_url:
        raise SourceConfigurationError(
            "No table source configured: set source.sheet_url, SHEET_CSV_URL, or pass a table file"
        )

    logger.debug(
        "Using published sheet",
        extra={"event": "source.selected", "source_type": "sheet", "url": source_config.sheet_url},
    )
    return SheetTableSource(
        url=source_config.sheet_url,
        ttl_seconds=source_config.cache_ttl_seconds,
        timeout=source_config.request_timeout,
        user_agent=source_config.user_agent,
    )
