#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Arcade runtime for the robots puzzle.

Usage:
    python robots_game.py [--level data/level.txt] [--randomize] [--seed 7]
"""

from __future__ import annotations

import argparse
import logging
import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Set

import arcade

from config import (
    BOARD_ORIGIN,
    FPS,
    MAX_ROBOTS,
    ROBOT_Y_OFFSET,
    SCREEN_H,
    SCREEN_W,
    SETTINGS_FILE,
    TILE_SIZE,
    TITLE_TEXT,
    WINDOW_TITLE,
)
from display import CharGrid, TileKind, grid_to_pixel, tile_kind
from level_loader import LevelFileError, LevelFormatError
from session import GameSession, Key
from settings import apply_overrides, load_settings

logger = logging.getLogger(__name__)

BACKGROUND = (0, 0, 179, 255)
WALL_COLOR = (150, 70, 50, 255)
FLOOR_COLOR = (40, 40, 150, 255)
LETTER_COLOR = (106, 255, 89, 255)
ROBOT_COLOR = (90, 90, 100, 255)
TEXT_COLOR = (255, 255, 255, 255)
EXIT_COLOR = (255, 0, 0, 255)
ROBOT_HEIGHT = TILE_SIZE + 10

ARCADE_KEYS: Dict[int, Key] = {
    arcade.key.UP: Key.UP,
    arcade.key.DOWN: Key.DOWN,
    arcade.key.LEFT: Key.LEFT,
    arcade.key.RIGHT: Key.RIGHT,
    arcade.key.ESCAPE: Key.ESCAPE,
}


@dataclass(frozen=True)
class ClickTile:
    """Clickable widget (robot or button) in top-left window coordinates."""

    tag: str
    x: int
    y: int
    w: int = TILE_SIZE
    h: int = ROBOT_HEIGHT

    def collidepoint(self, px: float, py: float) -> bool:
        return self.x <= px < self.x + self.w and self.y <= py < self.y + self.h


EXIT_BUTTON = ClickTile(tag="X (Exit)", x=14, y=30, w=70, h=20)


def keys_from_codes(codes: Iterable[int]) -> Set[Key]:
    return {ARCADE_KEYS[c] for c in codes if c in ARCADE_KEYS}


def robot_tiles(grid: CharGrid, *, max_robots: int = MAX_ROBOTS) -> List[ClickTile]:
    out: List[ClickTile] = []
    for r, row in enumerate(grid):
        for c, ch in enumerate(row):
            if tile_kind(grid, r, c, max_robots=max_robots) != TileKind.ROBOT:
                continue
            x, y = grid_to_pixel(r, c, origin=BOARD_ORIGIN, tile_size=TILE_SIZE, y_offset=ROBOT_Y_OFFSET)
            out.append(ClickTile(tag=ch, x=x, y=y))
    return out


def pick_robot_tag(tiles: Iterable[ClickTile], x: float, y: float) -> str:
    """Tag of the robot under (x, y) in top-left coordinates, or ''."""
    for tile in tiles:
        if tile.collidepoint(x, y):
            return tile.tag
    return ""


class RobotsArcadeWindow(arcade.Window):
    def __init__(self, session: GameSession):
        super().__init__(SCREEN_W, SCREEN_H, WINDOW_TITLE, update_rate=1 / FPS)
        self.session = session
        self.grid: CharGrid = session.get_char_grid()
        self.tiles: List[ClickTile] = robot_tiles(self.grid, max_robots=session.max_robots)
        self._pending_keys: Set[Key] = set()

    def _flip_y(self, top: float, height: float) -> float:
        # arcade's origin is bottom-left
        return self.height - top - height

    def _refresh(self) -> None:
        self.grid = self.session.get_char_grid()
        self.tiles = robot_tiles(self.grid, max_robots=self.session.max_robots)

    def _draw_tile(self, x: int, y: int, w: int, h: int, color) -> None:
        bottom = self._flip_y(y, h)
        arcade.draw_lrbt_rectangle_filled(x, x + w, bottom, bottom + h, color)

    def on_update(self, delta_time: float):
        pressed, self._pending_keys = self._pending_keys, set()
        keep_going = self.session.tick(pressed)
        if pressed:
            self._refresh()
        if not keep_going:
            if self.session.is_over:
                logger.info("%s", self.session.logs[-1])
            self.close()

    def on_draw(self):
        self.clear(BACKGROUND)
        ox, oy = BOARD_ORIGIN

        for r, row in enumerate(self.grid):
            for c, ch in enumerate(row):
                kind = tile_kind(self.grid, r, c, max_robots=self.session.max_robots)
                x, y = grid_to_pixel(r, c, origin=(ox, oy), tile_size=TILE_SIZE)
                if kind == TileKind.WALL:
                    self._draw_tile(x, y, TILE_SIZE, TILE_SIZE, WALL_COLOR)
                elif kind == TileKind.FLOOR:
                    self._draw_tile(x, y, TILE_SIZE, TILE_SIZE, FLOOR_COLOR)
                elif kind == TileKind.LETTER:
                    arcade.draw_text(ch, x, self._flip_y(y - 7, TILE_SIZE), LETTER_COLOR, 18, bold=True)

        for tile in self.tiles:
            self._draw_tile(tile.x, tile.y, tile.w, tile.h, ROBOT_COLOR)
            bottom = self._flip_y(tile.y, tile.h)
            arcade.draw_text(tile.tag, tile.x + 2, bottom + 4, TEXT_COLOR, 14, bold=True)
            if tile.tag == str(self.session.current_robot):
                arcade.draw_lrbt_rectangle_outline(tile.x, tile.x + tile.w, bottom, bottom + tile.h, TEXT_COLOR, 2)

        arcade.draw_text(TITLE_TEXT, 400, self.height - 58, TEXT_COLOR, 28, bold=True, italic=True)
        arcade.draw_text(self.session.objective_text(), 400, self.height - 98, LETTER_COLOR, 18, bold=True)
        self._draw_tile(EXIT_BUTTON.x, EXIT_BUTTON.y, EXIT_BUTTON.w, EXIT_BUTTON.h, EXIT_COLOR)
        arcade.draw_text(
            EXIT_BUTTON.tag,
            EXIT_BUTTON.x + 4,
            self._flip_y(EXIT_BUTTON.y, EXIT_BUTTON.h) + 5,
            TEXT_COLOR,
            11,
            bold=True,
        )
        arcade.draw_text(
            "Click: select robot | Arrows: slide | Esc or X: quit",
            12,
            12,
            TEXT_COLOR,
            12,
        )

        y = self.height - 140
        arcade.draw_text("Logs:", 12, y, (200, 200, 180, 255), 11)
        for line in reversed(self.session.logs[-6:]):
            y -= 16
            arcade.draw_text(line, 12, y, (210, 210, 210, 255), 11)

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int):
        if button != arcade.MOUSE_BUTTON_LEFT:
            return
        top_y = self.height - y
        if EXIT_BUTTON.collidepoint(x, top_y):
            self.session.request_exit()
            return
        tag = pick_robot_tag(self.tiles, x, top_y)
        if self.session.on_robot_activated(tag):
            self._refresh()

    def on_key_press(self, key: int, modifiers: int):
        self._pending_keys |= keys_from_codes([key])


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Robots puzzle (arcade)")
    parser.add_argument("--level", default=None, help="Path to level file")
    parser.add_argument("--settings", default=str(SETTINGS_FILE), help="Path to settings.json")
    parser.add_argument("--randomize", action="store_true", default=None, help="Pick target letter and robot at random")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser.parse_args()


def main():
    args = _parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    settings = apply_overrides(load_settings(args.settings), level_path=args.level, randomize=args.randomize, seed=args.seed)
    rng = random.Random(settings.seed)
    try:
        session = GameSession.from_file(
            settings.level_path,
            board_size=settings.board_size,
            randomize=settings.randomize,
            rng=rng,
        )
    except (LevelFileError, LevelFormatError) as exc:
        raise SystemExit(str(exc)) from exc

    RobotsArcadeWindow(session)
    arcade.run()


if __name__ == "__main__":
    main()
