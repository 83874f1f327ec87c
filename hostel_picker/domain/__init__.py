"""Domain models for the hostel picker."""

from .models import CellValue, JsonCell, Record, TextCell, UserProfile

__all__ = ["CellValue", "TextCell", "JsonCell", "Record", "UserProfile"]
