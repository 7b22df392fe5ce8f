from __future__ import annotations

import pytest

from display import TileKind, compile_board, display_size, find_glyph, grid_to_text, robot_pixel_position, tile_kind
from model import Board, WallFlag


@pytest.mark.parametrize("size", [1, 2, 3, 16])
def test_grid_dimensions_are_two_n_plus_one(size):
    grid = compile_board(Board.empty(size))

    assert len(grid) == display_size(size) == 2 * size + 1
    assert all(len(row) == 2 * size + 1 for row in grid)


def test_empty_board_renders_outer_frame_only():
    grid = compile_board(Board.empty(2))

    assert grid_to_text(grid) == "\n".join(
        [
            "|- -|",
            "|. .|",
            "|   |",
            "|. .|",
            "|- -|",
        ]
    )


def test_compile_is_pure_and_repeatable():
    board = Board.empty(4)
    board.cells[1][1].add_walls(WallFlag.RIGHT | WallFlag.BOTTOM)
    board.cells[2][3].piece = "3"
    before = board.snapshot()

    first = compile_board(board)
    second = compile_board(board)

    assert first == second
    assert first is not second
    assert board.snapshot() == before


def test_interior_wall_is_shared_between_neighbours():
    left_side = Board.empty(2)
    left_side.cells[0][0].add_walls(WallFlag.RIGHT)
    right_side = Board.empty(2)
    right_side.cells[0][1].add_walls(WallFlag.LEFT)

    assert grid_to_text(compile_board(left_side)).splitlines()[1] == "|.|.|"
    assert grid_to_text(compile_board(right_side)).splitlines()[1] == "|.|.|"


def test_horizontal_wall_is_not_cleared_by_cell_below():
    board = Board.empty(2)
    board.cells[0][0].add_walls(WallFlag.BOTTOM)

    assert grid_to_text(compile_board(board)).splitlines()[2] == "|-  |"


def test_boundary_cells_render_walls_without_flags():
    grid = compile_board(Board.empty(3))
    last = len(grid) - 1

    for k in range(1, last, 2):
        assert grid[k][0] == "|"
        assert grid[k][last] == "|"
        assert grid[0][k] == "-"
        assert grid[last][k] == "-"


def test_pieces_render_and_stash_stays_hidden():
    board = Board.empty(3)
    board.cells[0][0].piece = "1"
    board.cells[2][2].piece = "M"
    board.cells[1][1].occupy("M")
    board.cells[1][1].occupy("2")

    grid = compile_board(board)

    assert grid[1][1] == "1"
    assert grid[5][5] == "M"
    assert grid[3][3] == "2"
    assert find_glyph(grid, "M") == (5, 5)


def test_robot_pixel_position_uses_origin_tile_and_offset():
    board = Board.empty(2)
    board.cells[0][1].piece = "1"
    grid = compile_board(board)

    assert robot_pixel_position(grid, 1) == (270 + 3 * 16, 120 + 1 * 16 - 42)
    assert robot_pixel_position(grid, 1, origin=(0, 0), tile_size=10, y_offset=0) == (30, 10)
    assert robot_pixel_position(grid, 4) is None


def test_tile_kind_classifies_grid_cells():
    board = Board.empty(2)
    board.cells[0][0].piece = "1"
    board.cells[1][1].piece = "M"
    grid = compile_board(board)

    assert tile_kind(grid, 0, 2) == TileKind.WALL
    assert tile_kind(grid, 1, 0) == TileKind.WALL
    assert tile_kind(grid, 1, 1) == TileKind.ROBOT
    assert tile_kind(grid, 3, 3) == TileKind.LETTER
    assert tile_kind(grid, 1, 3) == TileKind.FLOOR
    assert tile_kind(grid, 2, 2) == TileKind.EMPTY
