"""Read-only board state and commands exposed to renderers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from .contact import ContactLinkBuilder
from .models import Entry, Participant, Prize
from .prize_draw import DrawEngine, DrawSession, SpinTick, resolve_pool, sold_count

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoardSnapshot:
    """Everything a renderer needs to draw one frame."""

    pool: tuple[Entry, ...]
    prizes: tuple[Prize, ...]
    session: Optional[DrawSession]
    all_drawn: bool
    sold_count: int

    @property
    def winning_entries(self) -> set[int]:
        return {p.winning_entry for p in self.prizes if p.winning_entry is not None}


class RaffleBoard:
    """Ties the roster, the pool size and a :class:`DrawEngine` together.

    The pool is resolved again from the roster on every call; the board never
    caches it. Renderers only read snapshots and issue the ``start_draw`` and
    ``reset_all`` commands.
    """

    def __init__(
        self,
        roster: Iterable[Participant],
        engine: DrawEngine,
        *,
        entry_count: int,
        contact_builder: Optional[ContactLinkBuilder] = None,
    ) -> None:
        if entry_count < 1:
            raise ValueError("entry_count must be positive")
        self._roster = tuple(roster)
        self._engine = engine
        self._entry_count = entry_count
        self._contact_builder = contact_builder

    @property
    def engine(self) -> DrawEngine:
        return self._engine

    @property
    def roster(self) -> tuple[Participant, ...]:
        return self._roster

    @property
    def entry_count(self) -> int:
        return self._entry_count

    def pool(self) -> list[Entry]:
        return resolve_pool(self._roster, self._entry_count)

    def start_draw(self, prize_id: int) -> bool:
        """Start drawing ``prize_id`` over a freshly resolved pool."""
        return self._engine.start_draw(prize_id, self.pool())

    def advance(self, generation: Optional[int] = None) -> Optional[SpinTick]:
        return self._engine.advance(generation=generation)

    def reset_all(self) -> None:
        self._engine.reset_all()

    def contact_link(self, number: int) -> Optional[str]:
        """Return a contact link to buy ``number``, if it is still for sale.

        ``None`` is returned for sold or out-of-range numbers and when no
        contact builder is configured.
        """

        if self._contact_builder is None:
            return None
        if not 1 <= number <= self._entry_count:
            logger.debug(f"No contact link for out-of-range entry {number}")
            return None
        entry = self.pool()[number - 1]
        if entry.sold:
            return None
        return self._contact_builder(number)

    def winner_participant(self, prize_id: int) -> Optional[Participant]:
        """Return the roster owner of the entry that won ``prize_id``."""
        prize = self._engine.get_prize(prize_id)
        if prize is None or prize.winning_entry is None:
            return None
        if not 1 <= prize.winning_entry <= self._entry_count:
            return None
        return self.pool()[prize.winning_entry - 1].participant

    def snapshot(self) -> BoardSnapshot:
        pool = self.pool()
        return BoardSnapshot(
            pool=tuple(pool),
            prizes=tuple(self._engine.prizes),
            session=self._engine.session,
            all_drawn=self._engine.all_drawn,
            sold_count=sold_count(pool),
        )


__all__ = ["BoardSnapshot", "RaffleBoard"]
