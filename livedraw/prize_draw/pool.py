"""Resolve the raffle pool from the current roster snapshot."""

from __future__ import annotations

from typing import Collection, Dict, Iterable, Sequence

from ..models import Entry, Participant


def _first_owners(roster: Iterable[Participant]) -> Dict[int, Participant]:
    """Map every entry number to the first participant that claims it.

    Later participants with the same number stay in the roster but are not
    shown as owners of the entry.
    """

    owners: Dict[int, Participant] = {}
    for participant in roster:
        number = participant.entry_number
        if number is None or number in owners:
            continue
        owners[number] = participant
    return owners


def resolve_pool(roster: Iterable[Participant], entry_count: int) -> list[Entry]:
    """Build the full pool of ``entry_count`` entries from ``roster``.

    Parameters
    ----------
    roster : Iterable[Participant]
        Participants currently loaded. May be empty, contain numbers outside
        ``[1, entry_count]`` (they never match) or duplicate numbers (the
        first one wins).
    entry_count : int
        Number of entries in the pool.

    Returns
    -------
    list[Entry]
        Exactly ``entry_count`` entries numbered ``1..entry_count`` in
        ascending order. Unmatched slots are unsold.

    Raises
    ------
    ValueError
        If ``entry_count`` is not a positive integer.
    """

    if isinstance(entry_count, bool) or not isinstance(entry_count, int):
        raise ValueError("entry_count must be an integer")
    if entry_count < 1:
        raise ValueError("entry_count must be positive")

    owners = _first_owners(roster)
    pool: list[Entry] = []
    for number in range(1, entry_count + 1):
        participant = owners.get(number)
        pool.append(
            Entry(number=number, sold=participant is not None, participant=participant)
        )
    return pool


def eligible_entries(
    pool: Iterable[Entry], excluded: Collection[int] = ()
) -> list[int]:
    """Return sold entry numbers not in ``excluded``, in ascending order."""

    excluded_set = set(excluded)
    return sorted(
        entry.number
        for entry in pool
        if entry.sold and entry.number not in excluded_set
    )


def sold_count(pool: Sequence[Entry]) -> int:
    """Return how many entries of ``pool`` are sold."""
    return sum(1 for entry in pool if entry.sold)


__all__ = ["eligible_entries", "resolve_pool", "sold_count"]
