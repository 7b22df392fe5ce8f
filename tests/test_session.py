from __future__ import annotations

import pytest

from config import LEVEL_FILE, MAX_SESSION_LOGS
from model import Board, Direction, MoveResult, SessionPhase
from movement import find_robot
from session import GameSession, Key, resolve_key


def _session() -> GameSession:
    board = Board.empty(3)
    board.cells[0][0].piece = "1"
    board.cells[2][0].piece = "2"
    board.cells[2][2].piece = "A"
    return GameSession(board=board, destination_letter="A", winning_robot=1)


def test_current_robot_starts_as_winning_robot():
    session = _session()

    assert session.current_robot == 1
    assert session.phase == SessionPhase.PLAYING
    assert session.objective_text() == "Move Robot #1 to A to win!"


@pytest.mark.parametrize(
    "pressed,expected",
    [
        ({Key.LEFT, Key.RIGHT}, Key.RIGHT),
        ({Key.UP, Key.DOWN, Key.LEFT}, Key.UP),
        ({Key.DOWN, Key.LEFT, Key.ESCAPE}, Key.DOWN),
        ({Key.LEFT, Key.ESCAPE}, Key.LEFT),
        ({Key.ESCAPE}, Key.ESCAPE),
        (set(), Key.NONE),
    ],
)
def test_resolve_key_uses_fixed_priority(pressed, expected):
    assert resolve_key(pressed) == expected


def test_select_robot_bounds():
    session = _session()

    assert session.select_robot(2) is True
    assert session.current_robot == 2
    assert session.select_robot(0) is False
    assert session.select_robot(5) is False
    assert session.current_robot == 2


@pytest.mark.parametrize("tag,accepted", [("3", True), ("", False), ("x", False), ("9", False), (None, False)])
def test_on_robot_activated_parses_tag(tag, accepted):
    session = _session()

    assert session.on_robot_activated(tag) is accepted
    assert session.current_robot == (int(tag) if accepted else 1)


def test_direction_key_moves_selected_robot():
    session = _session()
    session.select_robot(2)

    assert session.on_direction_key(Direction.UP) == MoveResult.NORMAL
    assert find_robot(session.board, 2) == (1, 0)
    assert session.move_count == 1


def test_blocked_move_does_not_count():
    session = _session()

    session.on_direction_key(Direction.UP)

    assert session.move_count == 0


def test_win_is_terminal_and_freezes_session():
    session = _session()

    assert session.on_direction_key(Direction.RIGHT) == MoveResult.NORMAL
    assert session.on_direction_key(Direction.DOWN) == MoveResult.WIN
    assert session.phase == SessionPhase.WIN
    assert session.logs[-1].startswith("[win]")

    before = session.board.snapshot()
    assert session.on_direction_key(Direction.LEFT) == MoveResult.NORMAL
    assert session.select_robot(2) is False
    assert session.tick({Key.UP}) is False
    assert session.board.snapshot() == before


def test_tick_continues_on_normal_and_stops_on_escape_or_win():
    session = _session()

    assert session.tick(set()) is True
    assert session.tick({Key.RIGHT, Key.LEFT}) is True
    assert find_robot(session.board, 1) == (0, 2)
    assert session.tick({Key.ESCAPE}) is False
    assert session.phase == SessionPhase.PLAYING
    assert session.tick({Key.DOWN}) is False
    assert session.phase == SessionPhase.WIN


def test_requested_exit_stops_the_next_tick_without_moving():
    session = _session()
    before = session.board.snapshot()

    session.request_exit()

    assert session.tick({Key.RIGHT}) is False
    assert session.board.snapshot() == before
    assert session.phase == SessionPhase.PLAYING
    assert session.logs[-1] == "[exit] requested"


def test_char_grid_and_pixel_position_follow_moves():
    session = _session()
    start = session.get_robot_pixel_position(1)

    session.on_direction_key(Direction.RIGHT)

    grid = session.get_char_grid()
    assert grid[1][5] == "1"
    assert session.get_robot_pixel_position(1) == (start[0] + 4 * 16, start[1])


def test_logs_are_bounded():
    session = _session()

    for _ in range(MAX_SESSION_LOGS + 5):
        session.select_robot(1)

    assert len(session.logs) == MAX_SESSION_LOGS


def test_reference_level_is_solvable_by_robot_two():
    session = GameSession.from_file(LEVEL_FILE)

    assert session.current_robot == 2
    assert session.logs[0] == "[boot] Move Robot #2 to M to win!"
    assert session.on_direction_key(Direction.UP) == MoveResult.NORMAL
    assert session.on_direction_key(Direction.LEFT) == MoveResult.NORMAL
    assert session.on_direction_key(Direction.UP) == MoveResult.WIN
    assert find_robot(session.board, 2) == (6, 3)
    assert session.move_count == 3
