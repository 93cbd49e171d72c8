"""Parse the participant roster from CSV text."""

from __future__ import annotations

import csv
import io
from typing import Optional

from ..models import Participant

NUMBER_COLUMNS = ("numero", "número", "number", "entry_number", "entry")
NAME_COLUMNS = ("nombre", "name", "display_name")
CONTACT_COLUMNS = ("telefono", "teléfono", "phone", "contact", "contact_handle")


class RosterParseError(ValueError):
    """Raised when roster text has no usable header row."""


def _find_column(fieldnames: list[str], aliases: tuple[str, ...]) -> Optional[str]:
    for name in fieldnames:
        if name.strip().lower() in aliases:
            return name
    return None


def parse_entry_number(value: Optional[str]) -> Optional[int]:
    """Coerce a roster cell into an entry number.

    Integers and integral floats (``"7"``, ``" 7 "``, ``"7.0"``) are accepted;
    anything else yields ``None``.
    """

    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    if not number.is_integer():
        return None
    return int(number)


def parse_roster(text: str) -> list[Participant]:
    """Parse CSV ``text`` into participants, in file order.

    Parameters
    ----------
    text : str
        CSV content with a header row. The entry number, name and contact
        columns are matched case-insensitively (``numero``/``number``,
        ``nombre``/``name``, ``telefono``/``phone`` and a few aliases);
        remaining columns are kept in :attr:`Participant.extra`.

    Returns
    -------
    list[Participant]
        One participant per non-blank row.

    Raises
    ------
    RosterParseError
        If the text has no header row, no entry number column, or is not
        valid CSV.
    """

    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    try:
        return _read_participants(reader)
    except csv.Error as exc:
        raise RosterParseError(f"Malformed roster CSV: {exc}") from exc


def _read_participants(reader: csv.DictReader) -> list[Participant]:
    fieldnames = reader.fieldnames
    if not fieldnames:
        raise RosterParseError("Roster has no header row")

    number_column = _find_column(fieldnames, NUMBER_COLUMNS)
    if number_column is None:
        raise RosterParseError(
            "Roster header has no entry number column: " + ", ".join(fieldnames)
        )
    name_column = _find_column(fieldnames, NAME_COLUMNS)
    contact_column = _find_column(fieldnames, CONTACT_COLUMNS)
    known = {number_column, name_column, contact_column}

    participants: list[Participant] = []
    for row in reader:
        if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
            continue
        extra = {
            key.strip(): (value or "").strip()
            for key, value in row.items()
            if key is not None and key not in known
        }
        participants.append(
            Participant(
                entry_number=parse_entry_number(row.get(number_column)),
                display_name=(row.get(name_column) or "").strip() if name_column else "",
                contact_handle=(row.get(contact_column) or "").strip() if contact_column else "",
                extra=extra,
            )
        )
    return participants


__all__ = ["RosterParseError", "parse_entry_number", "parse_roster"]
