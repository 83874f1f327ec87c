"""Table parsing service: raw spreadsheet text to venue Records.

This module implements the parsing logic that:
1. Guards against empty or placeholder fetch results
2. Strips the byte-order mark and surrounding whitespace
3. Tokenizes the quoted, comma-delimited text
4. Normalizes header cells into record keys
5. Decodes cells that carry inline JSON objects
6. Drops rows without a usable venue name
"""

import logging
from typing import List, Optional, Sequence

from hostel_picker.domain.models import Record
from hostel_picker.logging import get_logger
from hostel_picker.utils.text import normalize_header

from .tokenizer import decode_cell, tokenize

logger = get_logger(__name__, component="parsing")

BOM = "\ufeff"


class TableParser:
    """Turns spreadsheet CSV text into an ordered list of Records.

    Parsing is total for string input: malformed quoting and broken JSON
    cells degrade to plain text rather than raising.

    Attributes:
        name_field: Record key that must hold the venue name
        min_text_length: Inputs shorter than this are treated as empty
    """

    MIN_TEXT_LENGTH = 10
    MIN_NAME_LENGTH = 2

    def __init__(
        self,
        name_field: str = "hostel_name",
        min_text_length: int = MIN_TEXT_LENGTH,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize TableParser.

        Args:
            name_field: Column whose value identifies a venue (normalized key)
            min_text_length: Shortest input that is worth tokenizing
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.name_field = normalize_header(name_field)
        self.min_text_length = min_text_length
        self.logger = logger_instance or logger

    def parse(self, text: str) -> List[Record]:
        """Parse raw table text into Records.

        Args:
            text: Spreadsheet export, optionally BOM-prefixed

        Returns:
            Records in row order; empty when the text is too short or has no data rows

        Raises:
            TypeError: If text is not a string
        """
        if not isinstance(text, str):
            raise TypeError(f"table text must be str, got {type(text).__name__}")

        if len(text) < self.min_text_length:
            self.logger.debug(
                "Table text too short to parse",
                extra={"event": "parsing.table.empty", "text_length": len(text)},
            )
            return []

        cleaned = text.lstrip(BOM).strip()
        rows = tokenize(cleaned)
        if not rows:
            return []

        headers = [normalize_header(cell) for cell in rows[0]]
        records = []
        dropped = 0
        for row in rows[1:]:
            record = self._build_record(headers, row)
            if len(record.text(self.name_field)) < self.MIN_NAME_LENGTH:
                dropped += 1
                continue
            records.append(record)

        if dropped:
            self.logger.debug(
                f"Dropped {dropped} rows without a venue name",
                extra={
                    "event": "parsing.rows.dropped",
                    "dropped_count": dropped,
                    "name_field": self.name_field,
                },
            )

        self.logger.info(
            f"Parsed {len(records)} records",
            extra={
                "event": "parsing.table.parsed",
                "record_count": len(records),
                "column_count": len(headers),
                "row_count": len(rows) - 1,
            },
        )
        return records

    @staticmethod
    def _build_record(headers: Sequence[str], row: Sequence[str]) -> Record:
        """Zip one row against the headers; missing trailing cells become empty."""
        cells = {}
        for index, key in enumerate(headers):
            if not key:
                continue
            raw = row[index] if index < len(row) else ""
            cells[key] = decode_cell(raw)
        return Record(cells)


def parse_table(text: str, name_field: str = "hostel_name") -> List[Record]:
    """Parse table text with a default TableParser.

    Example:
        >>> records = parse_table("hostel_name,city,pricing\\nAlpha,Lima,20\\n")
        >>> records[0].text("city")
        'Lima'
    """
    return TableParser(name_field=name_field).parse(text)
