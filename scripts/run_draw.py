from __future__ import annotations

import asyncio
import logging

from livedraw import Prize, RaffleBoard, SpinTick, load_settings, open_board
from livedraw.workflows import draw_remaining_prizes


def print_grid(board: RaffleBoard, columns: int = 10) -> None:
    """Print the pool as a grid, showing owner initials and marking winners."""
    snapshot = board.snapshot()
    winners = snapshot.winning_entries
    for start in range(0, len(snapshot.pool), columns):
        cells = []
        for entry in snapshot.pool[start : start + columns]:
            label = entry.participant.initials if entry.participant else "--"
            marker = "*" if entry.number in winners else " "
            cells.append(f"{entry.number:>4}{marker}{label:<3}")
        print(" ".join(cells))


def attach_printers(board: RaffleBoard) -> None:
    """Print ticks, winners and the final celebration as they happen."""

    def show_tick(tick: SpinTick) -> None:
        print(f"\r  ... {tick.entry:>4}", end="", flush=True)

    def show_winner(prize: Prize) -> None:
        entry = board.pool()[prize.winning_entry - 1]
        name = entry.display_name or "?"
        print(f"\r  {prize.name}: number {entry.number} ({name} {entry.contact_handle})")

    def celebrate(prizes: list[Prize]) -> None:
        print(f"Draw complete, all {len(prizes)} prizes awarded!")

    board.engine.on_tick(show_tick)
    board.engine.on_commit(show_winner)
    board.engine.on_all_drawn(celebrate)


def main() -> None:
    """Load the configured board and play every pending prize in the terminal."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    settings = load_settings()
    board = open_board(settings)

    snapshot = board.snapshot()
    print(f"{snapshot.sold_count} of {board.entry_count} numbers sold")
    print_grid(board)
    print("Prizes: " + ", ".join(prize.name for prize in snapshot.prizes))

    attach_printers(board)
    winners = asyncio.run(draw_remaining_prizes(board, settings))
    if not winners:
        print("No prize could be drawn: there are no sold numbers.")
        return
    print_grid(board)


if __name__ == "__main__":
    main()
