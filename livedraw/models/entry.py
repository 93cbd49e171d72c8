"""Entry slots of the raffle pool."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .participant import Participant


@dataclass(frozen=True)
class Entry:
    """One numbered slot of the pool, sold or unsold.

    Entries are never stored; they are recomputed from the roster every time
    the pool is resolved.
    """

    number: int
    sold: bool = False
    participant: Optional[Participant] = None

    @property
    def display_name(self) -> str:
        return self.participant.display_name if self.participant else ""

    @property
    def contact_handle(self) -> str:
        return self.participant.contact_handle if self.participant else ""


__all__ = ["Entry"]
