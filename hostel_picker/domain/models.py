"""Core domain models for venue records and user preferences.

This module defines the data structures used throughout the application:
- TextCell / JsonCell: the two shapes a parsed spreadsheet cell can take
- Record: one parsed venue row, keyed by normalized column name
- UserProfile: the traveller preferences every record is scored against
"""

import copy
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from hostel_picker.utils.text import parse_number, round_half_up


@dataclass(frozen=True)
class TextCell:
    """A cell kept as plain text (possibly empty)."""

    value: str

    def as_text(self) -> str:
        return self.value


@dataclass(frozen=True)
class JsonCell:
    """A cell whose text decoded to a JSON object.

    Attributes:
        value: The decoded object
        raw: The cell text it was decoded from
    """

    value: Dict[str, Any]
    raw: str = field(default="", compare=False)

    def as_text(self) -> str:
        """Canonical JSON text, so substring rules behave the same as for text cells."""
        return json.dumps(self.value, ensure_ascii=False)


CellValue = Union[TextCell, JsonCell]


class Record(Mapping):
    """One venue row: an immutable, ordered mapping of column key to CellValue."""

    __slots__ = ("_cells",)

    def __init__(self, cells: Mapping):
        self._cells = MappingProxyType(dict(cells))

    def __getitem__(self, key: str) -> CellValue:
        return self._cells[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"Record({dict(self._cells)!r})"

    def text(self, key: str) -> str:
        """Text form of a cell; empty string when the column is missing."""
        cell = self._cells.get(key)
        if cell is None:
            return ""
        return cell.as_text()

    def json(self, key: str) -> Optional[Dict[str, Any]]:
        """Decoded object of a JSON cell, or None for text/missing cells."""
        cell = self._cells.get(key)
        if isinstance(cell, JsonCell):
            return cell.value
        return None

    @property
    def name(self) -> str:
        """Text of the default ``hostel_name`` column.

        Always reads ``hostel_name``; code honouring a configured
        ``FieldMap.name`` uses ``text(columns.name)`` instead.
        """
        return self.text("hostel_name")

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict with text cells as str and JSON cells as their objects."""
        return {key: copy.deepcopy(cell.value) for key, cell in self._cells.items()}


_TEXT_FIELDS = ("destination", "vibe", "size", "nationality_pref", "requirements")
_TRUE_STRINGS = {"true", "1", "yes", "on", "y"}


class UserProfile(BaseModel):
    """Traveller preferences.

    Accepts the camelCase keys the front-end sends (``maxPrice``,
    ``noiseLevel``, ``nationalityPref``, ``nomadMode``, ``soloMode``) as
    well as the snake_case field names. Unknown keys are ignored and
    malformed values fall back to the field default instead of failing.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    destination: str = Field("", description="City the traveller is heading to")
    max_price: float = Field(30.0, alias="maxPrice", description="Ideal nightly price")
    vibe: str = Field("", description="Free-text vibe preference")
    noise_level: float = Field(50.0, alias="noiseLevel", description="0 quiet .. 100 loud")
    age: int = Field(25, description="Traveller age")
    size: str = Field("", description="small, medium or large")
    nationality_pref: str = Field("", alias="nationalityPref")
    requirements: str = Field("", description="Free-text must-haves")
    nomad_mode: bool = Field(False, alias="nomadMode")
    solo_mode: bool = Field(False, alias="soloMode")

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        """None becomes empty text; other scalars are stringified."""
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else str(v)

    @field_validator("max_price", "noise_level", mode="before")
    @classmethod
    def coerce_float(cls, v: Any, info: ValidationInfo) -> float:
        """Parse numbers out of loose input; unparseable values take the default."""
        number = parse_number(v)
        if number is None:
            return cls.model_fields[info.field_name].default
        return number

    @field_validator("age", mode="before")
    @classmethod
    def coerce_age(cls, v: Any) -> int:
        number = parse_number(v)
        if number is None or abs(number) > 1_000_000:
            return cls.model_fields["age"].default
        return round_half_up(number)

    @field_validator("nomad_mode", "solo_mode", mode="before")
    @classmethod
    def coerce_flag(cls, v: Any) -> bool:
        if isinstance(v, str):
            return v.strip().lower() in _TRUE_STRINGS
        return bool(v)

    @classmethod
    def coerce(cls, profile: Any) -> "UserProfile":
        """Accept a UserProfile or a mapping of profile fields.

        Raises:
            TypeError: If profile is neither
        """
        if isinstance(profile, cls):
            return profile
        if isinstance(profile, Mapping):
            return cls.model_validate(dict(profile))
        raise TypeError(
            f"profile must be a UserProfile or a mapping, got {type(profile).__name__}"
        )
