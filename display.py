#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Board -> character grid compiler.

Each board cell (i, j) lands on grid centre (2i+1, 2j+1); the odd/even
neighbours around it carry wall glyphs. The grid is rebuilt from scratch on
every call and the board is never touched.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from config import BOARD_ORIGIN, MAX_ROBOTS, NO_PIECE, ROBOT_Y_OFFSET, SPACE, TILE_SIZE, WALL_HORIZ, WALL_VERT
from model import Board, WallFlag, is_letter_glyph, is_robot_glyph, robot_glyph

CharGrid = List[List[str]]


class TileKind(Enum):
    EMPTY = "empty"
    WALL = "wall"
    FLOOR = "floor"
    LETTER = "letter"
    ROBOT = "robot"


def display_size(board_size: int) -> int:
    return (board_size << 1) + 1


def compile_board(board: Board) -> CharGrid:
    n = board.size
    size = display_size(n)
    out: CharGrid = [[SPACE for _ in range(size)] for _ in range(size)]

    for i in range(n):
        for j in range(n):
            cell = board.cells[i][j]
            bi = (i << 1) + 1
            bj = (j << 1) + 1

            if j == 0 or cell.has_wall(WallFlag.LEFT):
                out[bi][bj - 1] = WALL_VERT
                if j == 0:
                    out[bi - 1][bj - 1] = WALL_VERT
                    out[bi + 1][bj - 1] = WALL_VERT
            elif out[bi][bj - 1] != WALL_VERT:
                out[bi][bj - 1] = SPACE

            right_edge = j == n - 1
            if right_edge or cell.has_wall(WallFlag.RIGHT):
                out[bi][bj + 1] = WALL_VERT
                if right_edge:
                    out[bi - 1][bj + 1] = WALL_VERT
                    out[bi + 1][bj + 1] = WALL_VERT
            elif out[bi][bj + 1] != WALL_VERT:
                out[bi][bj + 1] = SPACE

            if i == 0 or cell.has_wall(WallFlag.TOP):
                out[bi - 1][bj] = WALL_HORIZ
            elif out[bi - 1][bj] != WALL_HORIZ:
                out[bi - 1][bj] = SPACE

            if i == n - 1 or cell.has_wall(WallFlag.BOTTOM):
                out[bi + 1][bj] = WALL_HORIZ
            elif out[bi + 1][bj] != WALL_HORIZ:
                out[bi + 1][bj] = SPACE

            out[bi][bj] = cell.piece if cell.has_piece else NO_PIECE
    return out


def grid_to_text(grid: CharGrid) -> str:
    return "\n".join("".join(row) for row in grid)


def find_glyph(grid: CharGrid, glyph: str) -> Optional[Tuple[int, int]]:
    for r, row in enumerate(grid):
        for c, ch in enumerate(row):
            if ch == glyph:
                return r, c
    return None


def tile_kind(grid: CharGrid, row: int, col: int, *, max_robots: int = MAX_ROBOTS) -> TileKind:
    ch = grid[row][col]
    # first/last rows are drawn solid to close the frame
    if ch in (WALL_VERT, WALL_HORIZ) or row == 0 or row == len(grid) - 1:
        return TileKind.WALL
    if is_letter_glyph(ch):
        return TileKind.LETTER
    if is_robot_glyph(ch, max_robots):
        return TileKind.ROBOT
    if ch == NO_PIECE:
        return TileKind.FLOOR
    return TileKind.EMPTY


def grid_to_pixel(
    row: int,
    col: int,
    *,
    origin: Tuple[int, int] = BOARD_ORIGIN,
    tile_size: int = TILE_SIZE,
    y_offset: int = 0,
) -> Tuple[int, int]:
    ox, oy = origin
    return ox + col * tile_size, oy + row * tile_size - y_offset


def robot_pixel_position(
    grid: CharGrid,
    robot_id: int,
    *,
    origin: Tuple[int, int] = BOARD_ORIGIN,
    tile_size: int = TILE_SIZE,
    y_offset: int = ROBOT_Y_OFFSET,
) -> Optional[Tuple[int, int]]:
    found = find_glyph(grid, robot_glyph(robot_id))
    if found is None:
        return None
    return grid_to_pixel(found[0], found[1], origin=origin, tile_size=tile_size, y_offset=y_offset)
