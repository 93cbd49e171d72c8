"""Prize records and their draw lifecycle."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PrizeStatus(str, Enum):
    """Draw status of a single prize.

    A prize moves ``PENDING -> DRAWING -> DRAWN`` and only goes back to
    ``PENDING`` through a global reset (or an aborted draw with no candidates).
    """

    PENDING = "pending"
    DRAWING = "drawing"
    DRAWN = "drawn"
@dataclass
class Prize:
    """An awardable item with its own draw lifecycle.

    Attributes
    ----------
    id : int
        Identifier. Equal to ``rank`` when prizes are built from names.
    name : str
        Human readable prize name.
    status : PrizeStatus
        Current draw status. Mutated only by :class:`~livedraw.prize_draw.DrawEngine`.
    winning_entry : Optional[int]
        Committed winning entry number, set once the prize is ``DRAWN``.
    rank : int
        1-based position in the award order, assigned by the engine.
    """

    id: int
    name: str
    status: PrizeStatus = PrizeStatus.PENDING
    winning_entry: Optional[int] = None
    rank: int = 1

    @property
    def is_drawn(self) -> bool:
        return self.status is PrizeStatus.DRAWN

    def __repr__(self) -> str:
        return "<Prize(id={id}, rank={rank}, name={name!r}, status={status}, winning_entry={entry})>".format(
            id=self.id,
            rank=self.rank,
            name=self.name,
            status=self.status.value,
            entry=self.winning_entry,
        )


__all__ = ["Prize", "PrizeStatus"]
