"""Live, animated prize drawing over a fixed pool of numbered entries."""

from .board import BoardSnapshot, RaffleBoard
from .config import Settings, load_settings
from .models import Entry, Participant, Prize, PrizeStatus
from .prize_draw import DrawEngine, DrawSession, SpinTick, resolve_pool
from .workflows import draw_remaining_prizes, open_board

__all__ = [
    "BoardSnapshot",
    "DrawEngine",
    "DrawSession",
    "Entry",
    "Participant",
    "Prize",
    "PrizeStatus",
    "RaffleBoard",
    "Settings",
    "SpinTick",
    "draw_remaining_prizes",
    "load_settings",
    "open_board",
    "resolve_pool",
]
