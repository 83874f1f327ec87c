"""Parsing layer for spreadsheet-exported venue tables.

This module provides:
- tokenize: quote-aware splitting of raw text into rows of cells
- decode_cell: classification of a cell as text or inline JSON
- TableParser: service turning raw text into Records
- parse_table: convenience wrapper around a default TableParser
"""

from .service import TableParser, parse_table
from .tokenizer import decode_cell, strip_quote_pair, to_record, tokenize

__all__ = [
    "TableParser",
    "parse_table",
    "tokenize",
    "decode_cell",
    "strip_quote_pair",
    "to_record",
]
