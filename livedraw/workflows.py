"""High level helpers that assemble and play a raffle board."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Optional

import requests

from .board import RaffleBoard
from .config import Settings, load_settings
from .contact import ContactLinkBuilder, whatsapp_link_builder
from .prize_draw import DrawEngine, run_all
from .prize_draw.runner import Sleep
from .roster import load_roster

logger = logging.getLogger(__name__)


def open_board(
    settings: Optional[Settings] = None,
    *,
    http: Optional[requests.Session] = None,
    rng: Optional[random.Random] = None,
) -> RaffleBoard:
    """Load the roster and build a ready-to-draw :class:`RaffleBoard`.

    The workflow performs three steps:

    1. Load settings from the environment when none are supplied.
    2. Load the roster, falling back to the sample roster on any failure.
    3. Build the draw engine and, when a seller phone is configured, the
       contact link builder.

    Parameters
    ----------
    settings : Optional[Settings], default: None
        Board configuration. Read with :func:`load_settings` when omitted.
    http : Optional[requests.Session], default: None
        Session used to fetch an HTTP roster.
    rng : Optional[random.Random], default: None
        Random source for every draw of the board.

    Returns
    -------
    RaffleBoard
        A board with every prize pending.
    """

    if settings is None:
        settings = load_settings()

    roster = load_roster(
        settings.roster_source, timeout=settings.roster_timeout, http=http
    )
    engine = DrawEngine(settings.prize_names, tick_count=settings.tick_count, rng=rng)

    contact_builder: Optional[ContactLinkBuilder] = None
    if settings.contact_phone:
        contact_builder = whatsapp_link_builder(
            settings.contact_phone, settings.contact_message
        )

    board = RaffleBoard(
        roster,
        engine,
        entry_count=settings.entry_count,
        contact_builder=contact_builder,
    )
    logger.info(
        f"Board ready: {board.snapshot().sold_count} of {settings.entry_count} "
        f"entries sold, {len(settings.prize_names)} prizes"
    )
    return board


async def draw_remaining_prizes(
    board: RaffleBoard,
    settings: Optional[Settings] = None,
    *,
    sleep: Sleep = asyncio.sleep,
) -> dict[int, int]:
    """Draw every pending prize of ``board`` at the configured cadence.

    Returns the winners committed by this call, keyed by prize id.
    """

    if settings is None:
        settings = load_settings()
    return await run_all(
        board.engine,
        board.pool,
        interval=settings.tick_interval,
        pause=settings.draw_pause,
        sleep=sleep,
    )


__all__ = ["draw_remaining_prizes", "open_board"]
