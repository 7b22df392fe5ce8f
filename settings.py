#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""settings.json read/write (orjson + pydantic).

The file is optional. When it is missing or broken, defaults are used and
CLI flags still apply on top.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from config import BOARD_SIZE, LEVEL_FILE, SETTINGS_FILE

logger = logging.getLogger(__name__)


class GameSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    level_path: str = str(LEVEL_FILE)
    randomize: bool = False
    seed: Optional[int] = None
    board_size: int = Field(default=BOARD_SIZE, ge=1, le=64)


def _write_json(path: Path, obj: object) -> None:
    path.write_bytes(orjson.dumps(obj, option=orjson.OPT_INDENT_2))


def load_settings(path: str | Path = SETTINGS_FILE) -> GameSettings:
    p = Path(path)
    if not p.exists():
        return GameSettings()
    try:
        return GameSettings.model_validate(orjson.loads(p.read_bytes()))
    except (OSError, orjson.JSONDecodeError, ValidationError) as exc:
        logger.warning("settings file %s ignored: %s", p, exc)
        return GameSettings()


def save_settings(settings: GameSettings, path: str | Path = SETTINGS_FILE) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    _write_json(p, settings.model_dump())


def ensure_settings_file(path: str | Path = SETTINGS_FILE) -> GameSettings:
    p = Path(path)
    if not p.exists():
        save_settings(GameSettings(), p)
    return load_settings(p)


def apply_overrides(
    settings: GameSettings,
    *,
    level_path: Optional[str] = None,
    randomize: Optional[bool] = None,
    seed: Optional[int] = None,
) -> GameSettings:
    updates = {}
    if level_path:
        updates["level_path"] = str(level_path)
    if randomize is not None:
        updates["randomize"] = bool(randomize)
    if seed is not None:
        updates["seed"] = int(seed)
    return settings.model_copy(update=updates)
