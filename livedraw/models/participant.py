"""Participant records loaded from the raffle roster."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional


@dataclass(frozen=True)
class Participant:
    """A person who bought an entry, as read from the roster.

    Attributes
    ----------
    entry_number : Optional[int]
        Entry number bought by the participant. ``None`` when the roster cell
        could not be read as an integer; such a participant never owns an entry.
    display_name : str
        Name shown on the board.
    contact_handle : str
        Phone number or other contact handle.
    extra : Mapping[str, str]
        Any additional roster columns, keyed by header.
    """

    entry_number: Optional[int]
    display_name: str = ""
    contact_handle: str = ""
    extra: Mapping[str, str] = field(default_factory=dict)

    @property
    def initials(self) -> str:
        """Upper-cased first letter of every word in ``display_name``."""
        return "".join(part[0] for part in self.display_name.split()).upper()


__all__ = ["Participant"]
