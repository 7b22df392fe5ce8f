#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Text level file -> Board loader.

Level files are line oriented (blank lines are ignored)::

    <letter count>
    <reserved>
    <cell index> <wall mask LTRB> [letter]
    ...
    <robot 1 start index>
    ...
    <robot MAX_ROBOTS start index>

Record shapes are validated with pydantic. Malformed cell and robot records
are logged and skipped; a file too short to hold the robots raises
``LevelFormatError``.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from config import BOARD_SIZE, DEFAULT_DESTINATION, DEFAULT_ORIGIN_ROBOT, HEADER_LINES, MAX_ROBOTS
from model import Board, Coord, WallFlag, is_letter_glyph, is_robot_glyph, robot_glyph

logger = logging.getLogger(__name__)

_MASK_ORDER = (WallFlag.LEFT, WallFlag.TOP, WallFlag.RIGHT, WallFlag.BOTTOM)


class LevelFileError(OSError):
    """Level file is missing or unreadable."""


class LevelFormatError(ValueError):
    """Level file does not have the expected structure."""


class LevelHeader(BaseModel):
    model_config = ConfigDict(extra="forbid")

    letter_count: int = Field(ge=1)


class CellRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    index: int = Field(ge=0)
    walls: int = Field(ge=0, le=15)
    letter: Optional[str] = None

    @field_validator("index")
    @classmethod
    def _index_on_board(cls, v: int, info: ValidationInfo) -> int:
        size = (info.context or {}).get("board_size", BOARD_SIZE)
        if v >= size * size:
            raise ValueError(f"cell index {v} outside board of size {size}")
        return v

    @field_validator("walls", mode="before")
    @classmethod
    def _walls_from_mask(cls, v: object) -> int:
        if isinstance(v, int):
            return v
        walls = WallFlag.NONE
        for ch, flag in zip(str(v), _MASK_ORDER):
            if ch == "1":
                walls |= flag
        return int(walls)

    @field_validator("letter", mode="before")
    @classmethod
    def _first_char(cls, v: object) -> Optional[str]:
        if v is None:
            return None
        s = str(v)
        return s[0] if s else None


class RobotRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    robot_id: int = Field(ge=1)
    index: int = Field(ge=0)


@dataclass
class LoadedLevel:
    board: Board
    destination_letter: str
    origin_robot: int
    letter_count: int = 0
    letter_cells: Dict[str, Coord] = field(default_factory=dict)
    skipped_records: int = 0


def read_level_lines(path: str | Path) -> List[str]:
    """Read all non-blank lines in file order. ``\\r`` also ends a line."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LevelFileError(f"File '{path}' could not be opened. Are you sure that it exists?") from exc
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    return [ln for ln in lines if ln]


def parse_header(line: str) -> LevelHeader:
    tokens = line.split()
    try:
        return LevelHeader.model_validate({"letter_count": tokens[0] if tokens else ""})
    except ValidationError as exc:
        raise LevelFormatError(f"invalid letter count line: {line!r}") from exc


def parse_cell_record(line: str, board_size: int = BOARD_SIZE) -> Optional[CellRecord]:
    """Parse ``<index> <mask> [letter]``; None when the record is malformed."""
    tokens = line.split()
    if len(tokens) < 2:
        logger.warning("malformed cell record skipped: %r", line)
        return None
    payload = {"index": tokens[0], "walls": tokens[1], "letter": tokens[2] if len(tokens) > 2 else None}
    try:
        return CellRecord.model_validate(payload, context={"board_size": board_size})
    except ValidationError as exc:
        logger.warning("malformed cell record skipped: %r (%s)", line, exc.errors()[0]["msg"])
        return None


def parse_robot_record(line: str, robot_id: int, board_size: int = BOARD_SIZE) -> Optional[RobotRecord]:
    """Parse a robot start line; None (logged) when the index is unusable."""
    tokens = line.split()
    try:
        record = RobotRecord.model_validate({"robot_id": robot_id, "index": tokens[0] if tokens else ""})
    except ValidationError:
        logger.warning("robot %d left off the board, invalid start index: %r", robot_id, line)
        return None
    if record.index >= board_size * board_size:
        logger.warning("robot %d left off the board, start index %d is off the board", robot_id, record.index)
        return None
    return record


def choose_destination(letter_count: int, *, randomize: bool, rng: random.Random) -> str:
    if not randomize:
        return DEFAULT_DESTINATION
    count = max(1, min(26, int(letter_count)))
    return chr(ord("A") + rng.randrange(count))


def choose_origin_robot(*, randomize: bool, rng: random.Random, max_robots: int = MAX_ROBOTS) -> int:
    if not randomize:
        return DEFAULT_ORIGIN_ROBOT
    return rng.randint(1, max_robots)


def parse_level(
    lines: Sequence[str],
    *,
    board_size: int = BOARD_SIZE,
    max_robots: int = MAX_ROBOTS,
    randomize: bool = False,
    rng: Optional[random.Random] = None,
) -> LoadedLevel:
    if len(lines) < HEADER_LINES + max_robots:
        raise LevelFormatError(
            f"level needs at least {HEADER_LINES + max_robots} non-blank lines, got {len(lines)}"
        )
    rng = rng or random.Random()

    # the count only matters when the target is drawn at random
    try:
        letter_count = parse_header(lines[0]).letter_count
    except LevelFormatError:
        if randomize:
            logger.warning("invalid letter count line %r, drawing the target from 'A' only", lines[0])
            letter_count = 1
        else:
            logger.warning("ignoring invalid letter count line: %r", lines[0])
            letter_count = 0

    destination = choose_destination(letter_count, randomize=randomize, rng=rng)
    origin_robot = choose_origin_robot(randomize=randomize, rng=rng, max_robots=max_robots)

    board = Board.empty(board_size)
    level = LoadedLevel(
        board=board,
        destination_letter=destination,
        origin_robot=origin_robot,
        letter_count=letter_count,
    )

    robots_start = len(lines) - max_robots
    for line in lines[HEADER_LINES:robots_start]:
        record = parse_cell_record(line, board_size)
        if record is None:
            level.skipped_records += 1
            continue
        row, col = board.index_to_coord(record.index)
        cell = board.cells[row][col]
        cell.add_walls(WallFlag(record.walls))
        if record.letter is None or not is_letter_glyph(record.letter):
            continue
        first = level.letter_cells.setdefault(record.letter, (row, col))
        if first != (row, col):
            logger.warning(
                "letter %s repeated at index %d, keeping the first at %s", record.letter, record.index, first
            )
            continue
        if record.letter == destination:
            cell.piece = record.letter

    for robot_id, line in enumerate(lines[robots_start:], start=1):
        record = parse_robot_record(line, robot_id, board_size)
        if record is None:
            level.skipped_records += 1
            continue
        row, col = board.index_to_coord(record.index)
        cell = board.cells[row][col]
        if is_robot_glyph(cell.piece, max_robots):
            logger.warning(
                "robot %d left off the board, index %d already holds robot %s", robot_id, record.index, cell.piece
            )
            level.skipped_records += 1
            continue
        # a robot loaded onto the target keeps the letter underneath
        cell.occupy(robot_glyph(robot_id))

    logger.info(
        "level parsed: size=%d destination=%s origin_robot=%d skipped=%d",
        board_size,
        destination,
        origin_robot,
        level.skipped_records,
    )
    return level


def load_level(
    path: str | Path,
    *,
    board_size: int = BOARD_SIZE,
    max_robots: int = MAX_ROBOTS,
    randomize: bool = False,
    rng: Optional[random.Random] = None,
) -> LoadedLevel:
    lines = read_level_lines(path)
    logger.debug("read %d level lines from %s", len(lines), path)
    return parse_level(lines, board_size=board_size, max_robots=max_robots, randomize=randomize, rng=rng)
