"""
Interactive transition policy.

This module owns every mode transition of the interactive session. It is a
pure function of `(state, key)` plus the scaling engine: no terminal, no
subprocess, no environment access. Anything that must touch the system is
returned as an effect for the runtime loop to execute.

Policy responsibilities:
1. Apply global keys (quit, help) ahead of per-mode handling.
2. Keep every cursor inside its collection.
3. Recompute options whenever the selected monitor changes.
4. Stage and confirm pending scaling changes.
5. Fold apply outcomes back into inline status and error messages.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional

from hyprscale.common.errors import ApplyRejectedError
from hyprscale.common.settings import settings
from hyprscale.common.types import Monitor, ScalingOption
from hyprscale.monitor.backend import ScalingEngine
from hyprscale.monitor.scaling import effectiveSize_get
from hyprscale.tui.effects import ApplyScalingEffect, Effect, QuitEffect
from hyprscale.tui.keys import InputKey
from hyprscale.tui.navigation import index_clamp, indexDown_step, indexUp_step, validScale_step
from hyprscale.tui.state import MENU_ITEMS, AppMode, InteractionState, PendingAction

logger = logging.getLogger(__name__)

__all__ = [
    "applyOutcome_process",
    "event_process",
    "manualOption_build",
]

MANUAL_OPTION_NAME: str = "Manual Settings"
NO_MONITORS_MESSAGE: str = "No monitors detected; nothing to apply"
NO_OPTIONS_MESSAGE: str = "No scaling options for this monitor; nothing to apply"

Transition = tuple[InteractionState, list[Effect]]
ModeHandler = Callable[[InteractionState, InputKey, ScalingEngine], Transition]


def manualOption_build(state: InteractionState, monitor: Monitor) -> ScalingOption:
    """
    Build the synthetic option for the manual control values.

    Args:
        state: State carrying the manual values.
        monitor: Monitor the option targets.

    Returns:
        Non-recommended option named "Manual Settings".
    """
    effective_width, effective_height = effectiveSize_get(monitor, state.manual_monitor_scale)
    return ScalingOption(
        monitor_scale=state.manual_monitor_scale,
        gtk_scale=state.manual_gtk_scale,
        font_dpi=state.manual_font_dpi,
        font_scale=round(state.manual_font_dpi / settings.BASE_DPI, 2),
        display_name=MANUAL_OPTION_NAME,
        description="Custom scaling values",
        reasoning="Values chosen in manual scaling mode.",
        is_recommended=False,
        effective_width=effective_width,
        effective_height=effective_height,
    )


def _dashboard_return(state: InteractionState) -> InteractionState:
    return replace(state, mode=AppMode.DASHBOARD, menu_index=0)


def _pending_clear(state: InteractionState) -> InteractionState:
    return replace(
        state,
        pending_action=PendingAction.NONE,
        pending_monitor=None,
        pending_option=None,
    )


def _monitorSelection_set(
    state: InteractionState, index: int, engine: ScalingEngine
) -> InteractionState:
    if index == state.selected_monitor_index or not state.monitors:
        return state
    monitor: Monitor = state.monitors[index]
    options = tuple(engine.scalingOptions_get(monitor))
    logger.debug("Selected monitor %s (%d options)", monitor.name, len(options))
    return replace(
        state,
        selected_monitor_index=index,
        scaling_options=options,
        selected_option_index=0,
    )


def _dashboard_process(
    state: InteractionState, key: InputKey, engine: ScalingEngine
) -> Transition:
    if key == InputKey.UP:
        return replace(state, menu_index=indexUp_step(state.menu_index, len(MENU_ITEMS))), []
    if key == InputKey.DOWN:
        return replace(state, menu_index=indexDown_step(state.menu_index, len(MENU_ITEMS))), []
    if key == InputKey.SELECT:
        label, target = MENU_ITEMS[index_clamp(state.menu_index, len(MENU_ITEMS))]
        if target is None:
            return state, [QuitEffect()]
        logger.debug("Menu selection: %s", label)
        return replace(state, mode=target), []
    if key == InputKey.ESCAPE:
        return _dashboard_return(state), []
    return state, []


def _monitorSelection_process(
    state: InteractionState, key: InputKey, engine: ScalingEngine
) -> Transition:
    count: int = len(state.monitors)
    if key == InputKey.UP:
        return _monitorSelection_set(state, indexUp_step(state.selected_monitor_index, count), engine), []
    if key == InputKey.DOWN:
        return _monitorSelection_set(state, indexDown_step(state.selected_monitor_index, count), engine), []
    if key in (InputKey.SELECT, InputKey.ESCAPE):
        return _dashboard_return(state), []
    return state, []


def _scalingOptions_process(
    state: InteractionState, key: InputKey, engine: ScalingEngine
) -> Transition:
    count: int = len(state.scaling_options)
    if key == InputKey.UP:
        return replace(state, selected_option_index=indexUp_step(state.selected_option_index, count)), []
    if key == InputKey.DOWN:
        return replace(state, selected_option_index=indexDown_step(state.selected_option_index, count)), []
    if key == InputKey.SELECT:
        monitor: Optional[Monitor] = state.selectedMonitor_get()
        option: Optional[ScalingOption] = state.selectedOption_get()
        if monitor is None:
            return replace(state, error_message=NO_MONITORS_MESSAGE), []
        if option is None:
            return replace(state, error_message=NO_OPTIONS_MESSAGE), []
        return replace(
            state,
            mode=AppMode.CONFIRMATION,
            pending_action=PendingAction.APPLY_SMART,
            pending_monitor=monitor,
            pending_option=option,
        ), []
    if key == InputKey.MANUAL:
        return replace(state, mode=AppMode.MANUAL_SCALING), []
    if key == InputKey.ESCAPE:
        return _dashboard_return(state), []
    return state, []


def _manualControl_adjust(state: InteractionState, up: bool) -> InteractionState:
    control: int = state.selected_manual_control
    if control == 0:
        return replace(state, manual_monitor_scale=validScale_step(state.manual_monitor_scale, up))
    if control == 1:
        step: int = 1 if up else -1
        gtk_scale: int = max(
            settings.MIN_GTK_SCALE, min(settings.MAX_GTK_SCALE, state.manual_gtk_scale + step)
        )
        return replace(state, manual_gtk_scale=gtk_scale)
    dpi_step: int = settings.MANUAL_FONT_DPI_STEP if up else -settings.MANUAL_FONT_DPI_STEP
    font_dpi: int = max(
        settings.MANUAL_FONT_DPI_MIN,
        min(settings.MANUAL_FONT_DPI_MAX, state.manual_font_dpi + dpi_step),
    )
    return replace(state, manual_font_dpi=font_dpi)


def _manualScaling_process(
    state: InteractionState, key: InputKey, engine: ScalingEngine
) -> Transition:
    count: int = settings.MANUAL_CONTROL_COUNT
    if key == InputKey.UP:
        return replace(state, selected_manual_control=indexUp_step(state.selected_manual_control, count)), []
    if key == InputKey.DOWN:
        return replace(state, selected_manual_control=indexDown_step(state.selected_manual_control, count)), []
    if key == InputKey.LEFT:
        return _manualControl_adjust(state, up=False), []
    if key == InputKey.RIGHT:
        return _manualControl_adjust(state, up=True), []
    if key == InputKey.SELECT:
        monitor: Optional[Monitor] = state.selectedMonitor_get()
        if monitor is None:
            return replace(state, error_message=NO_MONITORS_MESSAGE), []
        return replace(
            state,
            mode=AppMode.CONFIRMATION,
            pending_action=PendingAction.APPLY_MANUAL,
            pending_monitor=monitor,
            pending_option=manualOption_build(state, monitor),
        ), []
    if key == InputKey.ESCAPE:
        return _dashboard_return(state), []
    return state, []


def _confirmation_process(
    state: InteractionState, key: InputKey, engine: ScalingEngine
) -> Transition:
    if key == InputKey.SELECT:
        monitor: Optional[Monitor] = state.pending_monitor
        option: Optional[ScalingOption] = state.pending_option
        if monitor is None or option is None:
            return _dashboard_return(_pending_clear(state)), []

        effect = ApplyScalingEffect(action=state.pending_action, monitor=monitor, option=option)
        monitors = tuple(
            replace(candidate, scale=option.monitor_scale)
            if candidate.name == monitor.name
            else candidate
            for candidate in state.monitors
        )
        next_state = _dashboard_return(_pending_clear(replace(state, monitors=monitors)))
        return next_state, [effect]

    if key == InputKey.ESCAPE:
        if state.pending_action == PendingAction.APPLY_SMART:
            target: AppMode = AppMode.SCALING_OPTIONS
        elif state.pending_action == PendingAction.APPLY_MANUAL:
            target = AppMode.MANUAL_SCALING
        else:
            target = AppMode.DASHBOARD
        return replace(_pending_clear(state), mode=target), []
    return state, []


def _infoScreen_process(
    state: InteractionState, key: InputKey, engine: ScalingEngine
) -> Transition:
    if key == InputKey.ESCAPE:
        return _dashboard_return(state), []
    return state, []


_MODE_HANDLERS: dict[AppMode, ModeHandler] = {
    AppMode.DASHBOARD: _dashboard_process,
    AppMode.MONITOR_SELECTION: _monitorSelection_process,
    AppMode.SCALING_OPTIONS: _scalingOptions_process,
    AppMode.MANUAL_SCALING: _manualScaling_process,
    AppMode.CONFIRMATION: _confirmation_process,
    AppMode.SETTINGS: _infoScreen_process,
    AppMode.HELP: _infoScreen_process,
}


def event_process(
    state: InteractionState,
    key: InputKey,
    engine: ScalingEngine,
) -> Transition:
    """
    Process one key press.

    Args:
        state:
            Current session state.
        key:
            Logical key pressed.
        engine:
            Scaling engine, used when the selected monitor changes.

    Returns:
        Tuple of `(next_state, effects)`.
    """
    state = replace(state, status_message=None, error_message=None)

    if key == InputKey.QUIT:
        return state, [QuitEffect()]

    if key == InputKey.HELP:
        if state.mode == AppMode.HELP:
            return state, []
        if state.mode == AppMode.CONFIRMATION:
            state = _pending_clear(state)
        return replace(state, mode=AppMode.HELP), []

    return _MODE_HANDLERS[state.mode](state, key, engine)


def applyOutcome_process(
    state: InteractionState,
    effect: ApplyScalingEffect,
    error: Optional[ApplyRejectedError],
) -> InteractionState:
    """
    Fold the result of an executed apply into the state.

    A rejected apply puts the monitor scale from before the confirmation
    back in place.

    Args:
        state:
            State after the confirming transition.
        effect:
            Apply effect that was executed.
        error:
            Rejection raised by the applier, or None on success.

    Returns:
        State with `status_message` or `error_message` set.
    """
    if error is not None:
        monitors = tuple(
            replace(candidate, scale=effect.monitor.scale)
            if candidate.name == effect.monitor.name
            else candidate
            for candidate in state.monitors
        )
        return replace(
            state,
            monitors=monitors,
            error_message=f"Failed to apply {effect.option.display_name}: {error}",
        )
    return replace(
        state,
        status_message=(
            f"Applied {effect.option.display_name} to {effect.monitor.name} "
            f"(scale {effect.option.monitor_scale:.2f}, GTK {effect.option.gtk_scale}, "
            f"DPI {effect.option.font_dpi})"
        ),
    )
