"""Logical input keys and the curses key mapping."""

from __future__ import annotations

import curses
from enum import Enum
from typing import Optional

__all__ = [
    "InputKey",
    "inputKey_get",
]

_CTRL_C: int = 3
_ESCAPE: int = 27


class InputKey(Enum):
    """Key events the transition policy understands"""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    SELECT = "select"
    ESCAPE = "escape"
    QUIT = "quit"
    HELP = "help"
    MANUAL = "manual"


_KEY_MAP: dict[int, InputKey] = {
    curses.KEY_UP: InputKey.UP,
    ord("k"): InputKey.UP,
    curses.KEY_DOWN: InputKey.DOWN,
    ord("j"): InputKey.DOWN,
    curses.KEY_LEFT: InputKey.LEFT,
    curses.KEY_RIGHT: InputKey.RIGHT,
    curses.KEY_ENTER: InputKey.SELECT,
    ord("\n"): InputKey.SELECT,
    ord("\r"): InputKey.SELECT,
    ord(" "): InputKey.SELECT,
    _ESCAPE: InputKey.ESCAPE,
    ord("q"): InputKey.QUIT,
    _CTRL_C: InputKey.QUIT,
    ord("h"): InputKey.HELP,
    ord("?"): InputKey.HELP,
    ord("m"): InputKey.MANUAL,
}


def inputKey_get(code: int) -> Optional[InputKey]:
    """
    Map a curses key code to a logical key.

    Args:
        code: Value returned by `window.getch()`.

    Returns:
        Logical key, or None for unbound keys.
    """
    return _KEY_MAP.get(code)
