from __future__ import annotations

import argparse
import random
from typing import Optional

from config import get_ui_settings, setup_logging
from soulchess.board import parse_square, square_name
from soulchess.generator import PuzzleGenerator
from soulchess.render import path_to_str, render_board
from soulchess.session import PuzzleSession
from soulchess.types import GameState, Position

HELP = "Commands: <from> <to> (e.g. a1 a4) | hint | undo | restart | new | next | quit"


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Generate and play Soul Chess puzzles")
    ap.add_argument("--level", type=int, default=1, help="Difficulty level (1+)")
    ap.add_argument("--seed", type=int, default=None, help="Random seed for reproducible puzzles")
    ap.add_argument("--size", type=int, default=None, help="Override board size (4-7)")
    ap.add_argument("--solution", action="store_true", help="Print the unique solution path")
    ap.add_argument("--interactive", action="store_true", help="Play the puzzle in the terminal")
    return ap.parse_args(argv)


def show(session: PuzzleSession, hint: Optional[Position] = None) -> None:
    ui = get_ui_settings()
    print(render_board(session.board, use_unicode=ui.use_unicode, show_coordinates=ui.show_coordinates,
                       hint=hint, use_color=ui.use_color))
    print(f"Level {session.level} | Moves {session.moves_made} / {session.min_moves} | Souls {session.souls}")
    if session.feedback:
        print(session.feedback)


def run_interactive(session: PuzzleSession) -> None:
    print(HELP)
    show(session)
    while True:
        try:
            line = input("> ").strip().lower()
        except EOFError:
            break
        if not line:
            continue
        if line in ("quit", "q", "exit"):
            break
        hint = None
        if line == "hint":
            hint = session.hint()
        elif line == "undo":
            session.undo()
        elif line == "restart":
            session.restart()
        elif line == "new":
            session.new_puzzle()
        elif line == "next":
            session.next_level()
        else:
            parts = line.split()
            rows, cols = session.board.shape
            squares = [parse_square(rows, cols, p) for p in parts]
            if len(squares) != 2 or None in squares:
                print(HELP)
                continue
            if not session.play(squares[0], squares[1]):
                session.feedback = "Illegal move."
        show(session, hint)
        if session.state != GameState.PLAYING:
            verdict = session.verdict()
            if verdict == "optimal":
                print("Victory! Perfect! Optimal path found.")
            elif verdict == "suboptimal":
                print(f"Victory! Solved, but not optimal ({session.min_moves} moves).")
            else:
                print("Defeat. You are stuck.")


def main(argv: Optional[list] = None) -> None:
    setup_logging()
    args = parse_args(argv)

    rng = random.Random(args.seed)
    session = PuzzleSession(level=args.level, generator=PuzzleGenerator(rng=rng), size=args.size)
    puzzle = session.new_puzzle()

    if args.interactive:
        run_interactive(session)
        return

    show(session)
    if args.solution:
        start = puzzle.board.controlled_position()
        if start is None or not puzzle.solution_path:
            print("No solution available.")
        else:
            print(f"Solution from {square_name(puzzle.board.rows, *start)}: "
                  f"{path_to_str(puzzle.board.rows, start, puzzle.solution_path)}")


if __name__ == "__main__":
    main()
