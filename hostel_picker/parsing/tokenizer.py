"""Quote-aware tokenizer for spreadsheet CSV exports.

Published sheets embed JSON objects in cells and rely on RFC 4180 style
quoting, but exports in the wild are not always well formed. The scanner
below never fails: unbalanced quotes simply swallow the rest of the input
into the current cell.
"""

import json
from collections.abc import Mapping
from typing import Any, List

from hostel_picker.domain.models import CellValue, JsonCell, Record, TextCell

QUOTE = '"'
DELIMITER = ","
NEWLINE = "\n"
CARRIAGE_RETURN = "\r"


def tokenize(text: str) -> List[List[str]]:
    """Split delimited text into rows of raw cells.

    Rules, applied in a single left-to-right pass:
    - ``""`` inside a quoted field appends one literal quote
    - any other quote toggles the in-quotes state
    - a comma outside quotes ends the cell
    - a newline outside quotes ends the cell and the row
      (a carriage return right before it is dropped)
    - everything else, including commas and newlines inside quotes, is kept
    - a trailing cell/row without a final newline is still emitted

    Args:
        text: Raw table text

    Returns:
        List of rows, each a list of cell strings
    """
    rows: List[List[str]] = []
    row: List[str] = []
    cell: List[str] = []
    in_quotes = False
    i = 0
    length = len(text)

    while i < length:
        char = text[i]

        if char == QUOTE:
            if in_quotes and i + 1 < length and text[i + 1] == QUOTE:
                cell.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == DELIMITER and not in_quotes:
            row.append("".join(cell))
            cell = []
        elif char == NEWLINE and not in_quotes:
            if cell and cell[-1] == CARRIAGE_RETURN:
                cell.pop()
            row.append("".join(cell))
            rows.append(row)
            row, cell = [], []
        else:
            cell.append(char)
        i += 1

    if cell or row:
        row.append("".join(cell))
        rows.append(row)

    return rows


def strip_quote_pair(raw: str) -> str:
    """Remove one surrounding pair of double quotes, if present."""
    if len(raw) >= 2 and raw[0] == QUOTE and raw[-1] == QUOTE:
        return raw[1:-1]
    return raw


def decode_cell(raw: str) -> CellValue:
    """Classify a raw cell as text or an embedded JSON object.

    A cell is a JSON candidate when it contains both ``{`` and ``}``. The
    candidate has doubled quotes collapsed and is handed to ``json.loads``;
    anything that does not decode to an object stays a TextCell holding the
    original string.

    Never raises.
    """
    content = strip_quote_pair(raw)
    if "{" not in content or "}" not in content:
        return TextCell(content)

    try:
        decoded = json.loads(content.replace('""', '"'))
    except (ValueError, RecursionError):
        return TextCell(content)

    if not isinstance(decoded, dict):
        return TextCell(content)
    return JsonCell(value=decoded, raw=content)


def to_record(obj: Any) -> Record:
    """Return obj as a Record, converting plain mappings cell by cell.

    Existing CellValues are kept, dicts become JSON cells, None becomes an
    empty text cell and other values go through decode_cell as text.

    Raises:
        TypeError: If obj is not a mapping
    """
    if isinstance(obj, Record):
        return obj
    if not isinstance(obj, Mapping):
        raise TypeError(f"record must be a mapping, got {type(obj).__name__}")

    cells = {}
    for key, value in obj.items():
        if isinstance(value, (TextCell, JsonCell)):
            cells[key] = value
        elif isinstance(value, dict):
            cells[key] = JsonCell(value=value)
        elif value is None:
            cells[key] = TextCell("")
        else:
            cells[key] = decode_cell(str(value))
    return Record(cells)
