#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Data model (Enums + dataclasses).

Pure board model, independent of any UI framework.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from enum import IntFlag
from typing import List, Optional, Tuple


Coord = Tuple[int, int]  # (row, col)


# =============================
# Enums
# =============================
class WallFlag(IntFlag):
    """Wall bits, in level-file mask order."""

    NONE = 0
    LEFT = 1 << 0
    TOP = 1 << 1
    RIGHT = 1 << 2
    BOTTOM = 1 << 3


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> Coord:
        return _DIR_DELTA[self]

    @property
    def facing_wall(self) -> WallFlag:
        """Wall on the current cell that blocks leaving in this direction."""
        return _FACING_WALL[self]

    @property
    def opposite_wall(self) -> WallFlag:
        """Wall on the next cell that blocks entering it from this direction."""
        return _FACING_WALL[_OPPOSITE[self]]


_DIR_DELTA = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}

_FACING_WALL = {
    Direction.UP: WallFlag.TOP,
    Direction.DOWN: WallFlag.BOTTOM,
    Direction.LEFT: WallFlag.LEFT,
    Direction.RIGHT: WallFlag.RIGHT,
}

_OPPOSITE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class MoveResult(Enum):
    NORMAL = "normal"
    WIN = "win"


class SessionPhase(Enum):
    PLAYING = "playing"
    WIN = "win"


def robot_glyph(robot_id: int) -> str:
    return chr(ord("0") + int(robot_id))


def is_robot_glyph(glyph: Optional[str], max_robots: int) -> bool:
    if not glyph or len(glyph) != 1:
        return False
    return "1" <= glyph <= robot_glyph(max_robots)


def is_letter_glyph(glyph: Optional[str]) -> bool:
    return bool(glyph) and len(glyph) == 1 and "A" <= glyph <= "Z"


# =============================
# Board objects
# =============================
@dataclass
class Cell:
    """One grid position.

    ``piece`` is the single visible occupant (robot digit or letter).
    ``stashed_letter`` holds a target letter while a robot stands on it;
    it is never rendered.
    """

    walls: WallFlag = WallFlag.NONE
    piece: Optional[str] = None
    stashed_letter: Optional[str] = None

    @property
    def has_piece(self) -> bool:
        return self.piece is not None

    def has_wall(self, wall: WallFlag) -> bool:
        return bool(self.walls & wall)

    def add_walls(self, walls: WallFlag) -> None:
        self.walls |= walls

    def occupy(self, glyph: str) -> None:
        """Put ``glyph`` on the cell, stashing a letter that was showing."""
        if is_letter_glyph(self.piece) and not is_letter_glyph(glyph):
            self.stashed_letter = self.piece
        self.piece = glyph

    def vacate(self) -> None:
        if self.stashed_letter is not None:
            self.piece = self.stashed_letter
            self.stashed_letter = None
        else:
            self.piece = None


@dataclass
class Board:
    size: int
    cells: List[List[Cell]] = field(default_factory=list)

    @classmethod
    def empty(cls, size: int) -> "Board":
        if size <= 0:
            raise ValueError(f"board size must be positive: {size}")
        return cls(size=size, cells=[[Cell() for _ in range(size)] for _ in range(size)])

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def index_to_coord(self, index: int) -> Optional[Coord]:
        """Row-major linear index -> (row, col); None outside [0, N²)."""
        if index < 0 or index >= self.size * self.size:
            return None
        return index // self.size, index % self.size

    def iter_cells(self):
        for row in range(self.size):
            for col in range(self.size):
                yield (row, col), self.cells[row][col]

    def snapshot(self) -> Tuple[Tuple[int, Optional[str], Optional[str]], ...]:
        return tuple((int(c.walls), c.piece, c.stashed_letter) for _, c in self.iter_cells())
