"""
Curses runtime loop.

The loop only orchestrates: read one key, run the transition, execute the
returned effects, fold apply outcomes back into the state, redraw. All policy
lives in `hyprscale.tui.transition_state`.
"""

from __future__ import annotations

import curses
import logging
from typing import Any

from hyprscale.monitor.backend import ConfigApplier, ScalingEngine
from hyprscale.tui.effects import effects_execute
from hyprscale.tui.keys import InputKey, inputKey_get
from hyprscale.tui.state import InteractionState
from hyprscale.tui.transition_state import applyOutcome_process, event_process
from hyprscale.tui.view import screen_render

logger = logging.getLogger(__name__)

__all__ = [
    "session_run",
    "session_step",
]

C_TITLE = 1
C_ERROR = 2
C_STATUS = 3
C_SELECTED = 4


def session_step(
    state: InteractionState,
    key: InputKey,
    engine: ScalingEngine,
    applier: ConfigApplier,
) -> tuple[InteractionState, bool]:
    """
    Process one key including its effects.

    Args:
        state: Current session state.
        key: Logical key pressed.
        engine: Scaling engine.
        applier: Applier for confirmed changes.

    Returns:
        Tuple of `(next_state, quit_requested)`.
    """
    next_state, effects = event_process(state, key, engine)
    if next_state.mode != state.mode:
        logger.debug("Mode %s -> %s", state.mode.value, next_state.mode.value)

    report = effects_execute(effects, applier)
    for effect, error in report.outcomes:
        next_state = applyOutcome_process(next_state, effect, error)
    return next_state, report.quit_requested


def _colors_init() -> None:
    if not curses.has_colors():
        return
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(C_TITLE, curses.COLOR_CYAN, -1)
    curses.init_pair(C_ERROR, curses.COLOR_RED, -1)
    curses.init_pair(C_STATUS, curses.COLOR_GREEN, -1)
    curses.init_pair(C_SELECTED, curses.COLOR_YELLOW, -1)


def _lineAttr_get(index: int, line: str) -> int:
    if not curses.has_colors():
        return curses.A_BOLD if index == 0 or line.startswith("> ") else curses.A_NORMAL
    if index == 0:
        return curses.color_pair(C_TITLE) | curses.A_BOLD
    if line.startswith("Error: "):
        return curses.color_pair(C_ERROR) | curses.A_BOLD
    if line.startswith("Applied "):
        return curses.color_pair(C_STATUS)
    if line.startswith("> "):
        return curses.color_pair(C_SELECTED) | curses.A_BOLD
    return curses.A_NORMAL


def _screen_draw(stdscr: Any, state: InteractionState) -> None:
    height, width = stdscr.getmaxyx()
    stdscr.erase()
    for row, line in enumerate(screen_render(state, width, height)):
        try:
            stdscr.addstr(row, 0, line, _lineAttr_get(row, line))
        except curses.error:
            # Writing the bottom-right cell raises after the text is drawn.
            pass
    stdscr.refresh()


def _session_loop(
    stdscr: Any,
    state: InteractionState,
    engine: ScalingEngine,
    applier: ConfigApplier,
) -> InteractionState:
    try:
        curses.curs_set(0)
    except curses.error:
        logger.debug("Terminal cannot hide the cursor")
    stdscr.keypad(True)
    curses.set_escdelay(25)
    _colors_init()

    while True:
        _screen_draw(stdscr, state)
        try:
            code: int = stdscr.getch()
        except KeyboardInterrupt:
            logger.info("Interrupted, leaving session")
            return state

        if code == curses.KEY_RESIZE:
            stdscr.clear()
            continue

        key = inputKey_get(code)
        if key is None:
            continue

        state, quit_requested = session_step(state, key, engine, applier)
        if quit_requested:
            return state


def session_run(
    state: InteractionState,
    engine: ScalingEngine,
    applier: ConfigApplier,
) -> InteractionState:
    """
    Run the interactive session until the user quits.

    Args:
        state: Initial session state.
        engine: Scaling engine.
        applier: Applier for confirmed changes.

    Returns:
        Final session state.
    """
    return curses.wrapper(_session_loop, state, engine, applier)
