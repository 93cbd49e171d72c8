"""Spin sequence producing the animation ticks of a draw."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence


@dataclass(frozen=True)
class SpinTick:
    """One animation step of a draw in progress.

    Attributes
    ----------
    index : int
        Zero-based tick position within the draw.
    entry : int
        Entry number shown on this tick.
    final : bool
        ``True`` on the terminal tick, whose entry becomes the winner.
    """

    index: int
    entry: int
    final: bool = False


def spin_sequence(
    candidates: Sequence[int],
    tick_count: int,
    rng: Optional[random.Random] = None,
) -> Iterator[SpinTick]:
    """Yield ``tick_count`` ticks, each a uniform sample from ``candidates``.

    Samples are drawn with replacement so the same entry may be shown on
    consecutive ticks. Since every tick is an independent uniform sample,
    the final tick is itself a uniform draw over ``candidates``.

    Parameters
    ----------
    candidates : Sequence[int]
        Eligible entry numbers. Must not be empty.
    tick_count : int
        Total number of ticks, including the final one.
    rng : Optional[random.Random], default: None
        Random source. A fresh :class:`random.Random` is used when omitted.

    Raises
    ------
    ValueError
        If ``candidates`` is empty or ``tick_count`` is smaller than 1.
    """

    if not candidates:
        raise ValueError("candidates must not be empty")
    if tick_count < 1:
        raise ValueError("tick_count must be at least 1")

    pool = tuple(candidates)
    source = rng or random.Random()

    # Validation above runs eagerly; the generator below is lazy.
    def _ticks() -> Iterator[SpinTick]:
        for index in range(tick_count):
            yield SpinTick(
                index=index,
                entry=source.choice(pool),
                final=index == tick_count - 1,
            )

    return _ticks()


__all__ = ["SpinTick", "spin_sequence"]
