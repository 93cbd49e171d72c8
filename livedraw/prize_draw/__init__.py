"""Prize drawing subsystem: pool resolution, spin sequence and draw engine."""

from .engine import DEFAULT_TICK_COUNT, DrawEngine, DrawSession
from .pool import eligible_entries, resolve_pool, sold_count
from .runner import run_all, run_draw
from .sequence import SpinTick, spin_sequence

__all__ = [
    "DEFAULT_TICK_COUNT",
    "DrawEngine",
    "DrawSession",
    "SpinTick",
    "eligible_entries",
    "resolve_pool",
    "run_all",
    "run_draw",
    "sold_count",
    "spin_sequence",
]
