"""Hostel shortlist picker: parse a venue sheet and rank it against a traveller profile."""

__version__ = "0.1.0"
