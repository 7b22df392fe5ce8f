#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Text-mode robots runner.

Replays a move script against a level and prints the board after every turn.
Script tokens: a robot id (``1``..``4``) selects that robot, ``U``/``D``/``L``/``R``
slides the selected robot.
"""

from __future__ import annotations

import argparse
import logging
import random
from pathlib import Path
from typing import Iterable, List, Optional

from config import LEVEL_FILE
from display import grid_to_text
from level_loader import LevelFileError, LevelFormatError
from model import Direction, MoveResult
from session import GameSession

TOKEN_DIRECTIONS = {
    "U": Direction.UP,
    "D": Direction.DOWN,
    "L": Direction.LEFT,
    "R": Direction.RIGHT,
}


def parse_moves(script: str) -> List[str]:
    return [tok.upper() for tok in script.replace(",", " ").split() if tok]


def _dump_board(session: GameSession) -> None:
    print(grid_to_text(session.get_char_grid()))


def run_text_session(
    level_path: str | Path,
    moves: Iterable[str],
    *,
    randomize: bool = False,
    seed: Optional[int] = None,
) -> GameSession:
    session = GameSession.from_file(level_path, randomize=randomize, rng=random.Random(seed))
    print(f"[TEXT-SIM] {session.objective_text()}")
    _dump_board(session)

    for turn, token in enumerate(moves, start=1):
        if token.isdigit():
            ok = session.select_robot(int(token))
            print(f"\n[{turn:02d}] select {token}: {'ok' if ok else 'ignored'}")
            continue
        direction = TOKEN_DIRECTIONS.get(token)
        if direction is None:
            print(f"\n[{turn:02d}] unknown token {token!r} ignored")
            continue

        result = session.on_direction_key(direction)
        print(f"\n[{turn:02d}] robot {session.current_robot} {direction.value}")
        _dump_board(session)
        if result == MoveResult.WIN:
            print(f"\n[TEXT-SIM] WIN after {session.move_count} moves")
            break
    else:
        print("\n[TEXT-SIM] script finished without a win")
    return session


def main() -> None:
    parser = argparse.ArgumentParser(description="Text-mode robots runner")
    parser.add_argument("--level", default=str(LEVEL_FILE), help="Path to level file")
    parser.add_argument("--moves", default="", help="Move script, e.g. '2 R D 1 L'")
    parser.add_argument("--randomize", action="store_true", help="Pick target letter and robot at random")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    try:
        run_text_session(args.level, parse_moves(args.moves), randomize=args.randomize, seed=args.seed)
    except (LevelFileError, LevelFormatError) as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
