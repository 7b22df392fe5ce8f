#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Play session: selection state, phase and per-frame input handling.

The session owns the board. UI adapters only read the compiled grid and feed
clicks/keys back through the methods below.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from config import BOARD_SIZE, MAX_ROBOTS, MAX_SESSION_LOGS
from display import CharGrid, compile_board, robot_pixel_position
from level_loader import LoadedLevel, load_level
from model import Board, Direction, MoveResult, SessionPhase
from movement import find_robot, move_robot

logger = logging.getLogger(__name__)


class Key(Enum):
    NONE = "none"
    ESCAPE = "escape"
    UP = "up"
    LEFT = "left"
    DOWN = "down"
    RIGHT = "right"


# at most one key per tick, first match wins
KEY_PRIORITY: Tuple[Key, ...] = (Key.RIGHT, Key.UP, Key.DOWN, Key.LEFT, Key.ESCAPE)

_KEY_DIRECTION = {
    Key.UP: Direction.UP,
    Key.DOWN: Direction.DOWN,
    Key.LEFT: Direction.LEFT,
    Key.RIGHT: Direction.RIGHT,
}


def resolve_key(pressed: Iterable[Key]) -> Key:
    pressed_set = set(pressed)
    for key in KEY_PRIORITY:
        if key in pressed_set:
            return key
    return Key.NONE


def key_direction(key: Key) -> Optional[Direction]:
    return _KEY_DIRECTION.get(key)


@dataclass
class GameSession:
    board: Board
    destination_letter: str
    winning_robot: int
    current_robot: int = 0
    phase: SessionPhase = SessionPhase.PLAYING
    max_robots: int = MAX_ROBOTS
    move_count: int = 0
    exit_requested: bool = False
    logs: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.current_robot:
            self.current_robot = self.winning_robot

    @classmethod
    def from_level(cls, level: LoadedLevel, *, max_robots: int = MAX_ROBOTS) -> "GameSession":
        session = cls(
            board=level.board,
            destination_letter=level.destination_letter,
            winning_robot=level.origin_robot,
            max_robots=max_robots,
        )
        session.add_log(f"[boot] {session.objective_text()}")
        return session

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        *,
        board_size: int = BOARD_SIZE,
        max_robots: int = MAX_ROBOTS,
        randomize: bool = False,
        rng: Optional[random.Random] = None,
    ) -> "GameSession":
        level = load_level(path, board_size=board_size, max_robots=max_robots, randomize=randomize, rng=rng)
        return cls.from_level(level, max_robots=max_robots)

    @property
    def is_over(self) -> bool:
        return self.phase == SessionPhase.WIN

    def add_log(self, message: str) -> None:
        self.logs.append(message)
        if len(self.logs) > MAX_SESSION_LOGS:
            self.logs = self.logs[-MAX_SESSION_LOGS:]

    def objective_text(self) -> str:
        return f"Move Robot #{self.winning_robot} to {self.destination_letter} to win!"

    def select_robot(self, robot_id: int) -> bool:
        if self.is_over:
            return False
        if robot_id < 1 or robot_id > self.max_robots:
            return False
        self.current_robot = robot_id
        self.add_log(f"[select] robot {robot_id}")
        return True

    def on_robot_activated(self, tag: str) -> bool:
        """Click callback; False lets the click propagate."""
        tag = str(tag or "").strip()
        if not tag or not tag.isdigit():
            return False
        return self.select_robot(int(tag))

    def on_direction_key(self, direction: Direction) -> MoveResult:
        if self.is_over:
            return MoveResult.NORMAL
        before = find_robot(self.board, self.current_robot)
        result = move_robot(
            self.board,
            self.current_robot,
            direction,
            destination_letter=self.destination_letter,
            winning_robot=self.winning_robot,
            max_robots=self.max_robots,
        )
        if find_robot(self.board, self.current_robot) != before:
            self.move_count += 1
        if result == MoveResult.WIN:
            self.phase = SessionPhase.WIN
            self.add_log(f"[win] robot {self.current_robot} reached {self.destination_letter} in {self.move_count} moves")
            logger.info("session won after %d moves", self.move_count)
        return result

    def get_char_grid(self) -> CharGrid:
        return compile_board(self.board)

    def get_robot_pixel_position(self, robot_id: int) -> Optional[Tuple[int, int]]:
        return robot_pixel_position(self.get_char_grid(), robot_id)

    def request_exit(self) -> None:
        """Exit-button callback; the next ``tick`` stops the session."""
        self.exit_requested = True
        self.add_log("[exit] requested")

    def tick(self, pressed: Iterable[Key]) -> bool:
        """Per-frame hook. Returns False when the session should stop."""
        if self.is_over or self.exit_requested:
            return False
        key = resolve_key(pressed)
        if key == Key.ESCAPE:
            logger.info("session aborted by escape")
            return False
        direction = key_direction(key)
        if direction is None:
            return True
        return self.on_direction_key(direction) != MoveResult.WIN
