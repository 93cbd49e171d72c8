from __future__ import annotations

import random
import unittest

from livedraw.models import Participant
from livedraw.prize_draw import (
    SpinTick,
    eligible_entries,
    resolve_pool,
    sold_count,
    spin_sequence,
)


def _roster(*numbers):
    return [
        Participant(entry_number=n, display_name=f"Buyer {n}", contact_handle=f"+56{n}")
        for n in numbers
    ]


class ResolvePoolTests(unittest.TestCase):
    def test_pool_has_every_number_once(self) -> None:
        pool = resolve_pool(_roster(3, 7), 10)
        self.assertEqual(len(pool), 10)
        self.assertEqual([entry.number for entry in pool], list(range(1, 11)))

    def test_sold_iff_number_in_roster(self) -> None:
        pool = resolve_pool(_roster(3, 7), 10)
        sold = [entry.number for entry in pool if entry.sold]
        self.assertEqual(sold, [3, 7])
        self.assertEqual(pool[2].display_name, "Buyer 3")
        self.assertEqual(pool[2].contact_handle, "+563")
        self.assertIsNone(pool[0].participant)
        self.assertEqual(pool[0].display_name, "")

    def test_empty_roster_gives_unsold_pool(self) -> None:
        pool = resolve_pool([], 200)
        self.assertEqual(len(pool), 200)
        self.assertEqual(sold_count(pool), 0)

    def test_out_of_range_and_unparsed_numbers_never_match(self) -> None:
        roster = _roster(0, 11, -4) + [Participant(entry_number=None, display_name="x")]
        pool = resolve_pool(roster, 10)
        self.assertEqual(sold_count(pool), 0)

    def test_first_duplicate_owns_the_entry(self) -> None:
        first = Participant(entry_number=2, display_name="First")
        second = Participant(entry_number=2, display_name="Second")
        pool = resolve_pool([first, second], 3)
        self.assertIs(pool[1].participant, first)
        self.assertEqual(sold_count(pool), 1)

    def test_resolving_twice_does_not_share_state(self) -> None:
        roster = _roster(1)
        first = resolve_pool(roster, 5)
        roster.append(Participant(entry_number=2, display_name="Late buyer"))
        second = resolve_pool(roster, 5)
        self.assertFalse(first[1].sold)
        self.assertTrue(second[1].sold)

    def test_invalid_entry_count_raises(self) -> None:
        with self.assertRaises(ValueError):
            resolve_pool([], 0)
        with self.assertRaises(ValueError):
            resolve_pool([], True)  # type: ignore[arg-type]

    def test_eligible_entries_excludes_winners_and_unsold(self) -> None:
        pool = resolve_pool(_roster(5, 1, 3), 6)
        self.assertEqual(eligible_entries(pool), [1, 3, 5])
        self.assertEqual(eligible_entries(pool, {3, 4}), [1, 5])


class SpinSequenceTests(unittest.TestCase):
    def test_yields_exact_tick_count_with_single_final(self) -> None:
        ticks = list(spin_sequence([1, 2, 3], 21, random.Random(7)))
        self.assertEqual(len(ticks), 21)
        self.assertEqual([t.index for t in ticks], list(range(21)))
        self.assertEqual([t.final for t in ticks].count(True), 1)
        self.assertTrue(ticks[-1].final)
        for tick in ticks:
            self.assertIn(tick.entry, (1, 2, 3))

    def test_seeded_sequences_are_reproducible(self) -> None:
        first = list(spin_sequence([4, 8, 15, 16], 10, random.Random(42)))
        second = list(spin_sequence([4, 8, 15, 16], 10, random.Random(42)))
        self.assertEqual(first, second)

    def test_single_candidate_always_shown(self) -> None:
        ticks = list(spin_sequence([9], 3))
        self.assertEqual(
            ticks,
            [SpinTick(0, 9), SpinTick(1, 9), SpinTick(2, 9, final=True)],
        )

    def test_sequence_is_lazy(self) -> None:
        calls = []

        class CountingRandom(random.Random):
            def choice(self, seq):
                calls.append(seq)
                return super().choice(seq)

        iterator = spin_sequence([1, 2], 5, CountingRandom(1))
        self.assertEqual(calls, [])
        next(iterator)
        self.assertEqual(len(calls), 1)

    def test_invalid_arguments_raise(self) -> None:
        with self.assertRaises(ValueError):
            spin_sequence([], 5)
        with self.assertRaises(ValueError):
            spin_sequence([1], 0)


if __name__ == "__main__":
    unittest.main()
