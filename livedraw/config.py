"""Runtime settings read from the environment (and an optional ``.env``)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .contact import validate_message_template

load_dotenv()
# Project root directory (repo root)
ROOT_DIR = Path(__file__).resolve().parents[1]

DEFAULT_PRIZES = ("Cafetera", "Sanguchera", "Miniprocesadora (Minipymer)")
DEFAULT_CONTACT_MESSAGE = "Hola! Quiero comprar el número {number}"


def resolve_roster_source(source: str, project_root: Path) -> str:
    """Resolve a relative roster path against ``project_root``.

    URLs and absolute paths are returned unchanged.
    """
    if source.lower().startswith(("http://", "https://")):
        return source
    path = Path(source)
    if path.is_absolute():
        return source
    return str((project_root / path).resolve())


@dataclass(frozen=True)
class Settings:
    """Configuration of a raffle board.

    Attributes
    ----------
    entry_count : int
        Size of the pool; entries are numbered ``1..entry_count``.
    prize_names : tuple[str, ...]
        Prizes in award order.
    tick_count : int
        Animation ticks per draw, including the committing tick.
    tick_interval_ms : int
        Milliseconds between two ticks.
    draw_pause_ms : int
        Milliseconds to wait between two prizes when drawing them all.
    roster_source : Optional[str]
        URL or path of the roster CSV. ``None`` uses the sample roster.
    roster_timeout : float
        HTTP timeout in seconds when the roster is a URL.
    contact_phone : Optional[str]
        Phone number buyers are sent to for unsold entries. Contact links are
        disabled when unset.
    contact_message : str
        Message template for contact links; ``{number}`` is the entry number.
    """

    entry_count: int = 200
    prize_names: tuple[str, ...] = DEFAULT_PRIZES
    tick_count: int = 21
    tick_interval_ms: int = 100
    draw_pause_ms: int = 2000
    roster_source: Optional[str] = None
    roster_timeout: float = 10.0
    contact_phone: Optional[str] = None
    contact_message: str = DEFAULT_CONTACT_MESSAGE

    @property
    def tick_interval(self) -> float:
        return self.tick_interval_ms / 1000

    @property
    def draw_pause(self) -> float:
        return self.draw_pause_ms / 1000


def _int_setting(env: Mapping[str, str], name: str, default: int, *, minimum: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"Environment variable '{name}' must be an integer") from exc
    if value < minimum:
        raise ValueError(f"Environment variable '{name}' must be at least {minimum}")
    return value


def _float_setting(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw.strip())
    except ValueError as exc:
        raise ValueError(f"Environment variable '{name}' must be a number") from exc
    if value <= 0:
        raise ValueError(f"Environment variable '{name}' must be positive")
    return value


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    *,
    project_root: Path = ROOT_DIR,
) -> Settings:
    """Build :class:`Settings` from ``environ`` (``os.environ`` by default).

    Raises
    ------
    ValueError
        If a variable holds a malformed value.
    """

    env = os.environ if environ is None else environ

    prize_names = DEFAULT_PRIZES
    raw_prizes = env.get("LIVEDRAW_PRIZES")
    if raw_prizes is not None:
        prize_names = tuple(name.strip() for name in raw_prizes.split(",") if name.strip())
        if not prize_names:
            raise ValueError("Environment variable 'LIVEDRAW_PRIZES' lists no prizes")

    roster_source = env.get("LIVEDRAW_ROSTER_SOURCE", "participantes.csv").strip()

    return Settings(
        entry_count=_int_setting(env, "LIVEDRAW_ENTRY_COUNT", 200, minimum=1),
        prize_names=prize_names,
        tick_count=_int_setting(env, "LIVEDRAW_TICK_COUNT", 21, minimum=1),
        tick_interval_ms=_int_setting(env, "LIVEDRAW_TICK_INTERVAL_MS", 100, minimum=0),
        draw_pause_ms=_int_setting(env, "LIVEDRAW_DRAW_PAUSE_MS", 2000, minimum=0),
        roster_source=(
            resolve_roster_source(roster_source, project_root) if roster_source else None
        ),
        roster_timeout=_float_setting(env, "LIVEDRAW_ROSTER_TIMEOUT", 10.0),
        contact_phone=(env.get("LIVEDRAW_CONTACT_PHONE") or "").strip() or None,
        contact_message=validate_message_template(
            env.get("LIVEDRAW_CONTACT_MESSAGE") or DEFAULT_CONTACT_MESSAGE
        ),
    )


__all__ = [
    "DEFAULT_PRIZES",
    "ROOT_DIR",
    "Settings",
    "load_settings",
    "resolve_roster_source",
]
