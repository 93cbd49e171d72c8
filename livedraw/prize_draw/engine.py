"""State machine that draws one prize at a time from the eligible pool."""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Iterator, Optional, Sequence, Union

from ..models import Entry, Prize, PrizeStatus
from .pool import eligible_entries
from .sequence import SpinTick, spin_sequence

logger = logging.getLogger(__name__)

DEFAULT_TICK_COUNT = 21

TickListener = Callable[[SpinTick], None]
CommitListener = Callable[[Prize], None]
AllDrawnListener = Callable[[list[Prize]], None]


@dataclass(frozen=True)
class DrawSession:
    """Read-only view of the draw currently in flight.

    Attributes
    ----------
    prize_id : int
        Prize being drawn.
    generation : int
        Identifier of this draw. Tick callbacks carrying another generation
        are discarded by :meth:`DrawEngine.advance`.
    candidates : tuple[int, ...]
        Eligible entry numbers computed when the draw started.
    displayed_entry : Optional[int]
        Entry shown by the latest tick, ``None`` before the first tick.
    tick_count : int
        Ticks consumed so far.
    total_ticks : int
        Ticks the draw lasts, the last one being the commit.
    """

    prize_id: int
    generation: int
    candidates: tuple[int, ...]
    displayed_entry: Optional[int] = None
    tick_count: int = 0
    total_ticks: int = DEFAULT_TICK_COUNT


class DrawEngine:
    """Owns the prize list and serializes draws over a shared pool.

    The engine guarantees that at most one prize is ``DRAWING`` at a time and
    that an entry number is never committed to two prizes until
    :meth:`reset_all` is called. Invalid commands are ignored rather than
    raised, so a renderer can issue them freely and only observe whether the
    state changed.
    """

    def __init__(
        self,
        prizes: Iterable[Union[str, Prize]],
        *,
        tick_count: int = DEFAULT_TICK_COUNT,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Create an engine with every prize ``PENDING``.

        Parameters
        ----------
        prizes : Iterable[Union[str, Prize]]
            Prizes in award order. Plain names get ids ``1..n``; ``Prize``
            objects keep their ``id`` and ``name`` but always start pending.
        tick_count : int, default: 21
            Number of animation ticks per draw, the last one being the commit.
        rng : Optional[random.Random], default: None
            Random source shared by every draw. Pass a seeded instance for
            reproducible draws.

        Raises
        ------
        ValueError
            If no prizes are given, prize ids repeat, or ``tick_count`` < 1.
        TypeError
            If a prize is neither a ``str`` nor a :class:`Prize`.
        """

        if tick_count < 1:
            raise ValueError("tick_count must be at least 1")

        self._prizes = self._build_prizes(prizes)
        self._by_id = {prize.id: prize for prize in self._prizes}
        self._tick_count = tick_count
        self._rng = rng or random.Random()
        # Guards every state transition; listeners run after it is released.
        self._lock = threading.RLock()
        self._generation = 0
        self._session: Optional[DrawSession] = None
        self._ticks: Optional[Iterator[SpinTick]] = None
        self._celebrated = False
        self._tick_listeners: list[TickListener] = []
        self._commit_listeners: list[CommitListener] = []
        self._all_drawn_listeners: list[AllDrawnListener] = []

    @staticmethod
    def _build_prizes(prizes: Iterable[Union[str, Prize]]) -> list[Prize]:
        built: list[Prize] = []
        for rank, item in enumerate(prizes, start=1):
            if isinstance(item, Prize):
                built.append(Prize(id=item.id, name=item.name, rank=rank))
            elif isinstance(item, str):
                built.append(Prize(id=rank, name=item, rank=rank))
            else:
                raise TypeError(f"Unsupported prize definition: {item!r}")
        if not built:
            raise ValueError("At least one prize is required")
        ids = [prize.id for prize in built]
        if len(set(ids)) != len(ids):
            raise ValueError("Prize ids must be unique")
        return built

    # -------- read-only state --------
    @property
    def prizes(self) -> list[Prize]:
        """Copies of the prizes in award order."""
        with self._lock:
            return [replace(prize) for prize in self._prizes]

    def get_prize(self, prize_id: int) -> Optional[Prize]:
        """Return a copy of the prize with ``prize_id``, if any."""
        with self._lock:
            prize = self._by_id.get(prize_id)
            return replace(prize) if prize is not None else None

    @property
    def session(self) -> Optional[DrawSession]:
        with self._lock:
            return self._session

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def is_drawing(self) -> bool:
        with self._lock:
            return self._session is not None

    @property
    def winners(self) -> dict[int, int]:
        """Committed winning entries keyed by prize id."""
        with self._lock:
            return {
                prize.id: prize.winning_entry
                for prize in self._prizes
                if prize.is_drawn and prize.winning_entry is not None
            }

    @property
    def all_drawn(self) -> bool:
        with self._lock:
            return all(prize.is_drawn for prize in self._prizes)

    # -------- listeners --------
    def on_tick(self, callback: TickListener) -> Callable[[], None]:
        """Call ``callback`` with every :class:`SpinTick`. Returns an unsubscriber."""
        return self._subscribe(self._tick_listeners, callback)

    def on_commit(self, callback: CommitListener) -> Callable[[], None]:
        """Call ``callback`` with the prize each time a winner is committed."""
        return self._subscribe(self._commit_listeners, callback)

    def on_all_drawn(self, callback: AllDrawnListener) -> Callable[[], None]:
        """Call ``callback`` once per cycle, when the last prize is committed."""
        return self._subscribe(self._all_drawn_listeners, callback)

    def _subscribe(self, listeners: list, callback: Callable) -> Callable[[], None]:
        listeners.append(callback)

        def unsubscribe() -> None:
            if callback in listeners:
                listeners.remove(callback)

        return unsubscribe

    def _notify(self, listeners: Sequence[Callable], payload: object) -> None:
        for callback in list(listeners):
            try:
                callback(payload)
            except Exception:
                logger.exception(f"Draw listener {callback!r} failed")

    # -------- commands --------
    def start_draw(self, prize_id: int, pool: Iterable[Entry]) -> bool:
        """Start drawing ``prize_id`` among the sold entries of ``pool``.

        Parameters
        ----------
        prize_id : int
            Prize to draw. It must be ``PENDING``.
        pool : Iterable[Entry]
            Freshly resolved entry pool.

        Returns
        -------
        bool
            ``True`` when a draw session was launched. ``False`` when the
            command was ignored (another draw in flight, unknown or already
            drawn prize) or aborted because no entry is eligible; in the last
            case the prize is back to ``PENDING``.
        """

        with self._lock:
            if self._session is not None:
                logger.debug(
                    f"Ignoring draw for prize {prize_id}: "
                    f"prize {self._session.prize_id} is drawing"
                )
                return False
            prize = self._by_id.get(prize_id)
            if prize is None:
                logger.debug(f"Ignoring draw for unknown prize {prize_id}")
                return False
            if prize.status is not PrizeStatus.PENDING:
                logger.debug(
                    f"Ignoring draw for prize {prize_id} with status {prize.status.value}"
                )
                return False

            prize.status = PrizeStatus.DRAWING
            candidates = eligible_entries(pool, self._committed_entries())
            if not candidates:
                prize.status = PrizeStatus.PENDING
                logger.warning(f"Draw for prize {prize_id} aborted: no eligible entries")
                return False

            self._generation += 1
            self._ticks = spin_sequence(candidates, self._tick_count, self._rng)
            self._session = DrawSession(
                prize_id=prize_id,
                generation=self._generation,
                candidates=tuple(candidates),
                total_ticks=self._tick_count,
            )
            logger.info(
                f"Drawing prize {prize.id} ({prize.name}) among {len(candidates)} "
                f"entries, generation {self._generation}"
            )
            return True

    def advance(self, generation: Optional[int] = None) -> Optional[SpinTick]:
        """Consume one tick of the draw in flight.

        Parameters
        ----------
        generation : Optional[int], default: None
            Generation the caller was scheduled for. When it does not match
            the current session the tick is stale (the engine was reset or a
            new draw started) and is discarded.

        Returns
        -------
        Optional[SpinTick]
            The tick just played, or ``None`` when there was nothing to
            advance. A tick with ``final=True`` has been committed.
        """

        committed: Optional[Prize] = None
        completed: Optional[list[Prize]] = None
        with self._lock:
            session = self._session
            if session is None or self._ticks is None:
                return None
            if generation is not None and generation != session.generation:
                logger.debug(
                    f"Discarding stale tick for generation {generation} "
                    f"(current {session.generation})"
                )
                return None

            tick = next(self._ticks)
            self._session = replace(
                session,
                displayed_entry=tick.entry,
                tick_count=session.tick_count + 1,
            )
            logger.debug(f"Prize {session.prize_id} tick {tick.index} shows {tick.entry}")
            if tick.final:
                committed, completed = self._commit(session.prize_id, tick.entry)

        self._notify(self._tick_listeners, tick)
        if committed is not None:
            self._notify(self._commit_listeners, committed)
        if completed is not None:
            self._notify(self._all_drawn_listeners, completed)
        return tick

    def _commit(
        self, prize_id: int, entry: int
    ) -> tuple[Optional[Prize], Optional[list[Prize]]]:
        """Assign ``entry`` to ``prize_id`` and close the session.

        Must be called with the lock held. Returns a copy of the prize and,
        when this commit completed the cycle, copies of all prizes. When
        ``entry`` already won another prize nothing is committed, the draw is
        aborted and ``(None, None)`` is returned.
        """

        if entry in self._committed_entries():
            logger.error(
                f"Entry {entry} has already won a prize; aborting draw for prize {prize_id}"
            )
            self._abort_session()
            return None, None

        prize = self._by_id[prize_id]
        prize.status = PrizeStatus.DRAWN
        prize.winning_entry = entry
        self._session = None
        self._ticks = None
        logger.info(f"Prize {prize.id} ({prize.name}) won by entry {entry}")

        completed: Optional[list[Prize]] = None
        if not self._celebrated and all(p.is_drawn for p in self._prizes):
            self._celebrated = True
            completed = [replace(p) for p in self._prizes]
            logger.info(f"All {len(self._prizes)} prizes drawn")
        return replace(prize), completed

    def _committed_entries(self) -> set[int]:
        return {
            prize.winning_entry
            for prize in self._prizes
            if prize.is_drawn and prize.winning_entry is not None
        }

    def _abort_session(self) -> None:
        """Put the prize being drawn back to ``PENDING`` and drop the session."""
        if self._session is not None:
            prize = self._by_id[self._session.prize_id]
            prize.status = PrizeStatus.PENDING
            prize.winning_entry = None
        self._session = None
        self._ticks = None

    def cancel_draw(self, generation: Optional[int] = None) -> bool:
        """Abandon the draw in flight without touching drawn prizes.

        The prize being drawn goes back to ``PENDING``; no winner is
        committed. ``generation``, when given, must match the session.

        Returns
        -------
        bool
            ``True`` when a draw was cancelled.
        """

        with self._lock:
            session = self._session
            if session is None:
                return False
            if generation is not None and generation != session.generation:
                return False
            self._abort_session()
            self._generation += 1
            logger.info(f"Draw for prize {session.prize_id} cancelled")
            return True

    def reset_all(self) -> None:
        """Return every prize to ``PENDING`` and cancel the draw in flight.

        Idempotent. Pending tick callbacks of the cancelled draw are discarded
        because the generation they carry no longer matches.
        """

        with self._lock:
            for prize in self._prizes:
                prize.status = PrizeStatus.PENDING
                prize.winning_entry = None
            self._session = None
            self._ticks = None
            self._celebrated = False
            self._generation += 1
            logger.info(f"Draw engine reset, generation {self._generation}")


__all__ = [
    "DEFAULT_TICK_COUNT",
    "DrawEngine",
    "DrawSession",
]
