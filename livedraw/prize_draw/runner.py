"""Cooperative asyncio coordinator that plays draws at a fixed cadence."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Sequence

from ..models import Entry, PrizeStatus
from .engine import DrawEngine

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL = 0.1
DEFAULT_DRAW_PAUSE = 2.0

Sleep = Callable[[float], Awaitable[None]]
PoolProvider = Callable[[], Sequence[Entry]]


async def run_draw(
    engine: DrawEngine,
    prize_id: int,
    pool: Sequence[Entry],
    *,
    interval: float = DEFAULT_TICK_INTERVAL,
    sleep: Sleep = asyncio.sleep,
) -> Optional[int]:
    """Start a draw and advance it once per ``interval`` seconds.

    Parameters
    ----------
    engine : DrawEngine
        Engine owning the prizes.
    prize_id : int
        Prize to draw.
    pool : Sequence[Entry]
        Freshly resolved entry pool.
    interval : float, default: 0.1
        Seconds between ticks.
    sleep : Callable[[float], Awaitable[None]], default: asyncio.sleep
        Awaitable used to wait between ticks; tests pass an instant one.

    Returns
    -------
    Optional[int]
        The committed entry number, or ``None`` when the draw did not start
        or was cancelled by :meth:`DrawEngine.reset_all`. When the awaiting
        task itself is cancelled the draw is cancelled too and the prize is
        back to ``PENDING``.
    """

    if not engine.start_draw(prize_id, pool):
        return None
    session = engine.session
    if session is None:
        return None
    generation = session.generation

    try:
        while True:
            await sleep(interval)
            tick = engine.advance(generation=generation)
            if tick is None:
                logger.info(f"Draw for prize {prize_id} cancelled")
                return None
            if tick.final:
                return tick.entry
    except asyncio.CancelledError:
        engine.cancel_draw(generation)
        raise


async def run_all(
    engine: DrawEngine,
    pool_provider: PoolProvider,
    *,
    interval: float = DEFAULT_TICK_INTERVAL,
    pause: float = DEFAULT_DRAW_PAUSE,
    sleep: Sleep = asyncio.sleep,
) -> dict[int, int]:
    """Draw every pending prize in award order.

    The pool is resolved again before each draw. Between two draws the
    coordinator waits ``pause`` seconds so the previous winner stays on
    screen. The run stops at the first draw that does not commit.

    Returns
    -------
    dict[int, int]
        Winning entries committed during this run, keyed by prize id.
    """

    committed: dict[int, int] = {}
    pending = [
        prize.id for prize in engine.prizes if prize.status is PrizeStatus.PENDING
    ]
    for position, prize_id in enumerate(pending):
        if position > 0:
            await sleep(pause)
        winner = await run_draw(
            engine, prize_id, pool_provider(), interval=interval, sleep=sleep
        )
        if winner is None:
            logger.warning(f"Stopping run: prize {prize_id} was not drawn")
            break
        committed[prize_id] = winner
    return committed


__all__ = [
    "DEFAULT_DRAW_PAUSE",
    "DEFAULT_TICK_INTERVAL",
    "run_all",
    "run_draw",
]
