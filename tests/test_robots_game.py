from __future__ import annotations

import importlib.util
import sys

import pytest

HAS_ARCADE = importlib.util.find_spec("arcade") is not None

pytestmark = pytest.mark.skipif(not HAS_ARCADE, reason="requires arcade")


def test_parse_args_defaults(monkeypatch):
    import robots_game

    monkeypatch.setattr(sys, "argv", ["robots_game.py"])
    args = robots_game._parse_args()

    assert args.level is None
    assert args.randomize is None
    assert args.settings.endswith("data/settings.json")
    assert args.log_level == "INFO"


def test_parse_args_overrides(monkeypatch):
    import robots_game

    monkeypatch.setattr(sys, "argv", ["robots_game.py", "--level", "x.txt", "--randomize", "--seed", "7"])
    args = robots_game._parse_args()

    assert (args.level, args.randomize, args.seed) == ("x.txt", True, 7)


def test_keys_from_codes_maps_arrows_and_escape():
    import arcade

    import robots_game
    from session import Key

    keys = robots_game.keys_from_codes([arcade.key.LEFT, arcade.key.ESCAPE, arcade.key.A])

    assert keys == {Key.LEFT, Key.ESCAPE}


def test_robot_tiles_are_tagged_and_clickable():
    import robots_game
    from display import compile_board
    from model import Board

    board = Board.empty(2)
    board.cells[0][1].piece = "3"
    board.cells[1][0].piece = "M"

    tiles = robots_game.robot_tiles(compile_board(board))

    assert [t.tag for t in tiles] == ["3"]
    tile = tiles[0]
    assert (tile.x, tile.y) == (270 + 3 * 16, 120 + 16 - 42)
    assert robots_game.pick_robot_tag(tiles, tile.x + 1, tile.y + 1) == "3"
    assert robots_game.pick_robot_tag(tiles, 0, 0) == ""


def test_exit_button_hit_box_and_title():
    import robots_game
    from config import TITLE_TEXT

    button = robots_game.EXIT_BUTTON

    assert button.tag == "X (Exit)"
    assert button.collidepoint(14, 30)
    assert button.collidepoint(83, 49)
    assert not button.collidepoint(84, 30)
    assert not button.collidepoint(14, 50)
    assert TITLE_TEXT == "Program 3: Robots"


def test_exit_button_does_not_overlap_robot_tiles():
    import robots_game
    from config import LEVEL_FILE
    from session import GameSession

    session = GameSession.from_file(LEVEL_FILE)
    tiles = robots_game.robot_tiles(session.get_char_grid())
    button = robots_game.EXIT_BUTTON

    assert len(tiles) == 4
    for tile in tiles:
        assert not button.collidepoint(tile.x, tile.y)
    assert robots_game.pick_robot_tag(tiles, button.x, button.y) == ""
