"""Interactive terminal session: state, transitions, rendering and runtime loop."""

from hyprscale.tui.keys import InputKey
from hyprscale.tui.state import AppMode, InteractionState, PendingAction, initialState_create
from hyprscale.tui.transition_state import applyOutcome_process, event_process

__all__ = [
    "AppMode",
    "InputKey",
    "InteractionState",
    "PendingAction",
    "applyOutcome_process",
    "event_process",
    "initialState_create",
]
