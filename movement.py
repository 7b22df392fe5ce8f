#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import logging
from typing import Optional

from config import MAX_ROBOTS
from model import Board, Coord, Direction, MoveResult, robot_glyph

logger = logging.getLogger(__name__)


def find_robot(board: Board, robot_id: int) -> Optional[Coord]:
    glyph = robot_glyph(robot_id)
    for (row, col), cell in board.iter_cells():
        if cell.piece == glyph:
            return row, col
    return None


def slide_target(
    board: Board,
    start: Coord,
    direction: Direction,
    *,
    destination_letter: str,
) -> Coord:
    """Return where a piece starting at ``start`` comes to rest.

    The destination letter does not block: the slide ends on top of it.
    """
    glyph = board.cells[start[0]][start[1]].piece
    dr, dc = direction.delta
    cur_r, cur_c = start

    while True:
        if board.cells[cur_r][cur_c].has_wall(direction.facing_wall):
            break

        next_r, next_c = cur_r + dr, cur_c + dc
        if not board.in_bounds(next_r, next_c):
            break

        nxt = board.cells[next_r][next_c]
        if nxt.has_wall(direction.opposite_wall):
            break

        if nxt.has_piece and nxt.piece != glyph:
            if nxt.piece == destination_letter:
                cur_r, cur_c = next_r, next_c
            break

        cur_r, cur_c = next_r, next_c
    return cur_r, cur_c


def move_robot(
    board: Board,
    robot_id: int,
    direction: Direction,
    *,
    destination_letter: str,
    winning_robot: int,
    max_robots: int = MAX_ROBOTS,
) -> MoveResult:
    """Slide ``robot_id`` until blocked and commit the new position.

    Invalid ids/directions and robots missing from the board are ignored.
    Returns WIN once ``winning_robot`` lands on ``destination_letter``; the
    board already shows the robot on the target at that point.
    """
    if not isinstance(robot_id, int) or robot_id <= 0 or robot_id > max_robots:
        return MoveResult.NORMAL
    if not isinstance(direction, Direction):
        return MoveResult.NORMAL

    start = find_robot(board, robot_id)
    if start is None:
        return MoveResult.NORMAL

    end = slide_target(board, start, direction, destination_letter=destination_letter)
    if end == start:
        return MoveResult.NORMAL

    src = board.cells[start[0]][start[1]]
    dst = board.cells[end[0]][end[1]]
    reached_letter = dst.piece == destination_letter

    dst.occupy(robot_glyph(robot_id))
    src.vacate()
    logger.debug("robot %d moved %s: %s -> %s", robot_id, direction.value, start, end)

    if reached_letter and robot_id == winning_robot:
        logger.info("robot %d reached %s", robot_id, destination_letter)
        return MoveResult.WIN
    return MoveResult.NORMAL
