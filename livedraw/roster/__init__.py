"""Roster ingestion: CSV parsing and loading with a sample fallback."""

from .loader import (
    SAMPLE_ROSTER_CSV,
    fetch_roster_text,
    load_roster,
    load_sample_roster,
)
from .parser import RosterParseError, parse_entry_number, parse_roster

__all__ = [
    "RosterParseError",
    "SAMPLE_ROSTER_CSV",
    "fetch_roster_text",
    "load_roster",
    "load_sample_roster",
    "parse_entry_number",
    "parse_roster",
]
