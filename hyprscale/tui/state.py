"""
Interactive session state model.

The state is a frozen value. Transitions build a new value with
`dataclasses.replace`, so the runtime loop can hold the previous state while
rendering and tests can compare states directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from hyprscale.common.settings import settings
from hyprscale.common.types import DetectionResult, Monitor, ScalingOption
from hyprscale.monitor.backend import ScalingEngine

__all__ = [
    "AppMode",
    "InteractionState",
    "MENU_ITEMS",
    "PendingAction",
    "initialState_create",
]


class AppMode(Enum):
    """Screen the session is showing"""
    DASHBOARD = "dashboard"
    MONITOR_SELECTION = "monitor_selection"
    SCALING_OPTIONS = "scaling_options"
    MANUAL_SCALING = "manual_scaling"
    SETTINGS = "settings"
    HELP = "help"
    CONFIRMATION = "confirmation"


class PendingAction(Enum):
    """What CONFIRMATION will apply"""
    NONE = "none"
    APPLY_SMART = "apply_smart"
    APPLY_MANUAL = "apply_manual"


MENU_ITEMS: tuple[tuple[str, Optional[AppMode]], ...] = (
    ("Dashboard", AppMode.DASHBOARD),
    ("Monitor Selection", AppMode.MONITOR_SELECTION),
    ("Smart Scaling", AppMode.SCALING_OPTIONS),
    ("Manual Scaling", AppMode.MANUAL_SCALING),
    ("Settings", AppMode.SETTINGS),
    ("Help", AppMode.HELP),
    ("Exit", None),
)
"""Dashboard menu labels with their target modes; None means quit"""


@dataclass(frozen=True)
class InteractionState:
    """
    Complete UI state for one session.

    Attributes:
        mode:
            Current screen.
        menu_index:
            Dashboard cursor into `MENU_ITEMS`.
        monitors:
            Detected monitors, in detection order.
        selected_monitor_index:
            Monitor that options and manual values target.
        scaling_options:
            Engine output for the selected monitor.
        selected_option_index:
            Cursor into `scaling_options`.
        manual_monitor_scale, manual_gtk_scale, manual_font_dpi:
            Manual control values.
        selected_manual_control:
            Manual control cursor (scale, GTK, DPI).
        pending_action, pending_monitor, pending_option:
            What CONFIRMATION applies; all set or all cleared together.
        is_demo_mode, detection_source, tool_status:
            Detection facts shown on the dashboard and settings screens.
        status_message, error_message:
            Result of the last apply, shown until the next key press.
    """

    mode: AppMode = AppMode.DASHBOARD
    menu_index: int = 0
    monitors: tuple[Monitor, ...] = ()
    selected_monitor_index: int = 0
    scaling_options: tuple[ScalingOption, ...] = ()
    selected_option_index: int = 0
    manual_monitor_scale: float = 1.0
    manual_gtk_scale: int = 1
    manual_font_dpi: int = settings.BASE_DPI
    selected_manual_control: int = 0
    pending_action: PendingAction = PendingAction.NONE
    pending_monitor: Optional[Monitor] = None
    pending_option: Optional[ScalingOption] = None
    is_demo_mode: bool = False
    detection_source: str = ""
    tool_status: tuple[tuple[str, bool], ...] = ()
    status_message: Optional[str] = None
    error_message: Optional[str] = None

    def selectedMonitor_get(self) -> Optional[Monitor]:
        """Selected monitor, or None when the monitor list is empty"""
        if not self.monitors:
            return None
        return self.monitors[self.selected_monitor_index]

    def selectedOption_get(self) -> Optional[ScalingOption]:
        """Highlighted scaling option, or None when there are no options"""
        if not self.scaling_options:
            return None
        return self.scaling_options[self.selected_option_index]


def initialState_create(
    detection: DetectionResult,
    engine: ScalingEngine,
    tool_status: tuple[tuple[str, bool], ...] = (),
) -> InteractionState:
    """
    Build the starting state from one detection pass.

    Args:
        detection: Detection result.
        engine: Scaling engine used for the first monitor's options.
        tool_status: `(tool, available)` pairs shown on the settings screen.

    Returns:
        DASHBOARD state with options computed for the first monitor.
    """
    monitors: tuple[Monitor, ...] = tuple(detection.monitors)
    options: tuple[ScalingOption, ...] = ()
    if monitors:
        options = tuple(engine.scalingOptions_get(monitors[0]))
    return InteractionState(
        monitors=monitors,
        scaling_options=options,
        is_demo_mode=detection.is_demo_mode,
        detection_source=detection.source,
        tool_status=tool_status,
    )
