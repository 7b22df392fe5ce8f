#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Game configuration.

Constants and settings only, no logic.
"""

from pathlib import Path

# --- Board ---
BOARD_SIZE = 16
MAX_ROBOTS = 4
HEADER_LINES = 2             # letter count + reserved line

# --- Glyphs ---
WALL_VERT = "|"
WALL_HORIZ = "-"
SPACE = " "
NO_PIECE = "."

# --- Objective (fixed mode) ---
DEFAULT_DESTINATION = "M"
DEFAULT_ORIGIN_ROBOT = 2

# --- Rendering ---
TILE_SIZE = 16               # px per display-grid cell
BOARD_ORIGIN = (270, 120)    # top-left of the board in window px
ROBOT_Y_OFFSET = 42          # robots are drawn raised by this many px

# --- Window ---
SCREEN_W, SCREEN_H = 1024, 768
FPS = 60
WINDOW_TITLE = "Robots"
TITLE_TEXT = "Program 3: Robots"

# --- Logs ---
MAX_SESSION_LOGS = 8

# --- Files ---
DATA_DIR = Path(__file__).parent / "data"
LEVEL_FILE = DATA_DIR / "level.txt"
SETTINGS_FILE = DATA_DIR / "settings.json"
