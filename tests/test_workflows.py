from __future__ import annotations

import asyncio
import random
import unittest

from livedraw import RaffleBoard, Settings, open_board
from livedraw.contact import whatsapp_link_builder
from livedraw.models import Participant, PrizeStatus
from livedraw.prize_draw import DrawEngine
from livedraw.workflows import draw_remaining_prizes


async def _instant(_delay: float) -> None:
    return None


class DummyResponse:
    def __init__(self, text: str):
        self.text = text
        self.encoding = "utf-8"

    def raise_for_status(self):
        pass


class DummySession:
    def __init__(self, text: str):
        self.text = text
        self.urls = []

    def get(self, url, timeout=None):
        self.urls.append(url)
        return DummyResponse(self.text)


class OpenBoardTests(unittest.TestCase):
    def test_board_from_sample_roster(self) -> None:
        board = open_board(Settings(roster_source=None), rng=random.Random(4))
        snapshot = board.snapshot()
        self.assertEqual(len(snapshot.pool), 200)
        self.assertEqual(snapshot.sold_count, 5)
        self.assertEqual([p.name for p in snapshot.prizes][0], "Cafetera")
        self.assertFalse(snapshot.all_drawn)
        self.assertIsNone(snapshot.session)
        self.assertEqual(board.engine.tick_count, 21)

    def test_board_from_http_roster(self) -> None:
        session = DummySession("numero,nombre,telefono\n10,Ana,+56\n20,Luis,+57\n")
        settings = Settings(entry_count=20, roster_source="https://example.com/p.csv")
        board = open_board(settings, http=session)
        sold = [entry.number for entry in board.pool() if entry.sold]
        self.assertEqual(sold, [10, 20])
        self.assertEqual(session.urls, ["https://example.com/p.csv"])

    def test_full_live_draw(self) -> None:
        settings = Settings(roster_source=None, tick_count=4)
        board = open_board(settings, rng=random.Random(8))
        celebrations = []
        board.engine.on_all_drawn(celebrations.append)

        winners = asyncio.run(draw_remaining_prizes(board, settings, sleep=_instant))

        self.assertEqual(sorted(winners), [1, 2, 3])
        self.assertEqual(len(set(winners.values())), 3)
        self.assertTrue(set(winners.values()) <= {1, 2, 3, 4, 5})
        snapshot = board.snapshot()
        self.assertTrue(snapshot.all_drawn)
        self.assertEqual(snapshot.winning_entries, set(winners.values()))
        self.assertEqual(len(celebrations), 1)
        for prize_id, entry in winners.items():
            owner = board.winner_participant(prize_id)
            assert owner is not None
            self.assertEqual(owner.entry_number, entry)


class RaffleBoardTests(unittest.TestCase):
    def setUp(self) -> None:
        roster = [
            Participant(entry_number=1, display_name="Juan Pérez", contact_handle="+1"),
            Participant(entry_number=2, display_name="María López", contact_handle="+2"),
        ]
        self.board = RaffleBoard(
            roster,
            DrawEngine(["TV", "Radio"], tick_count=2),
            entry_count=10,
            contact_builder=whatsapp_link_builder("+56 9 1111-2222", "Number {number}"),
        )

    def test_contact_link_only_for_unsold_entries(self) -> None:
        self.assertEqual(
            self.board.contact_link(6), "https://wa.me/56911112222?text=Number%206"
        )
        self.assertIsNone(self.board.contact_link(1))
        self.assertIsNone(self.board.contact_link(0))
        self.assertIsNone(self.board.contact_link(11))

    def test_contact_link_disabled_without_builder(self) -> None:
        board = RaffleBoard([], DrawEngine(["TV"]), entry_count=5)
        self.assertIsNone(board.contact_link(3))

    def test_start_draw_uses_fresh_pool(self) -> None:
        self.assertTrue(self.board.start_draw(1))
        session = self.board.snapshot().session
        assert session is not None
        self.assertEqual(session.candidates, (1, 2))
        self.assertFalse(self.board.start_draw(2))
        self.board.advance()
        tick = self.board.advance()
        assert tick is not None and tick.final
        self.assertIsNone(self.board.snapshot().session)
        self.assertIsNone(self.board.winner_participant(2))

    def test_reset_all_clears_board(self) -> None:
        self.board.start_draw(1)
        self.board.advance()
        self.board.advance()
        self.board.reset_all()
        snapshot = self.board.snapshot()
        self.assertTrue(all(p.status is PrizeStatus.PENDING for p in snapshot.prizes))
        self.assertEqual(snapshot.winning_entries, set())
        self.assertIsNone(self.board.winner_participant(1))

    def test_invalid_entry_count_raises(self) -> None:
        with self.assertRaises(ValueError):
            RaffleBoard([], DrawEngine(["TV"]), entry_count=0)

    def test_whatsapp_builder_requires_digits(self) -> None:
        with self.assertRaises(ValueError):
            whatsapp_link_builder("call me", "{number}")

    def test_whatsapp_builder_rejects_bad_templates(self) -> None:
        for template in ("Quiero el {numero}", "Quiero el {", "{0}", "{number.real.x}"):
            with self.subTest(template=template):
                with self.assertRaises(ValueError):
                    whatsapp_link_builder("+56 9", template)


if __name__ == "__main__":
    unittest.main()
