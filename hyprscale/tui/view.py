"""
Plain-text screen rendering.

`screen_render` turns a state into the exact lines curses draws. It has no
terminal dependency, so every screen can be asserted on in tests.
"""

from __future__ import annotations

from hyprscale import __version__
from hyprscale.common.settings import settings
from hyprscale.common.types import Monitor, ScalingOption
from hyprscale.monitor.applier import hyprlandScale_snap
from hyprscale.monitor.scaling import effectiveSize_get, fontMultiplier_get, screenRealEstate_get
from hyprscale.tui.state import MENU_ITEMS, AppMode, InteractionState, PendingAction

__all__ = [
    "monitorSummary_format",
    "screen_render",
]

_CONTROL_EXPLANATIONS: tuple[str, ...] = (
    "Controls the compositor-level scaling. Affects the entire display output.",
    "Controls GTK application scaling. Affects GTK-based applications.",
    "Controls font rendering DPI. Affects text size and clarity.",
)

_SELECTOR: str = "> "
_UNSELECTED: str = "  "

_MODE_TITLES: dict[AppMode, str] = {
    AppMode.DASHBOARD: "Dashboard",
    AppMode.MONITOR_SELECTION: "Monitor Selection",
    AppMode.SCALING_OPTIONS: "Smart Scaling",
    AppMode.MANUAL_SCALING: "Manual Scaling",
    AppMode.SETTINGS: "Settings",
    AppMode.HELP: "Help & Controls",
    AppMode.CONFIRMATION: "Confirm Scaling Changes",
}

_MODE_HINTS: dict[AppMode, str] = {
    AppMode.DASHBOARD: "up/down move  enter select  h help  q quit",
    AppMode.MONITOR_SELECTION: "up/down choose monitor  enter done  esc back  q quit",
    AppMode.SCALING_OPTIONS: "up/down choose  enter apply  m manual  esc back  q quit",
    AppMode.MANUAL_SCALING: "up/down control  left/right adjust  enter apply  esc back",
    AppMode.SETTINGS: "esc back  q quit",
    AppMode.HELP: "esc back  q quit",
    AppMode.CONFIRMATION: "enter confirm  esc cancel",
}


def _prefix_get(is_selected: bool) -> str:
    return _SELECTOR if is_selected else _UNSELECTED


def monitorSummary_format(monitor: Monitor) -> str:
    """One-line monitor description: name, mode, scale, and make/model"""
    summary = (
        f"{monitor.name}  {monitor.resolution_format()}@{monitor.refresh_rate:.1f}Hz"
        f"  scale {monitor.scale:.2f}"
    )
    label = monitor.label_get()
    if label:
        summary += f"  ({label})"
    if monitor.is_primary:
        summary += "  [primary]"
    if not monitor.is_active:
        summary += "  [inactive]"
    return summary


def _option_format(option: ScalingOption) -> str:
    marker = " *" if option.is_recommended else ""
    return (
        f"{option.display_name}{marker}  scale {option.monitor_scale:.2f}"
        f"  GTK {option.gtk_scale}x  DPI {option.font_dpi}"
        f"  -> {option.effective_width}x{option.effective_height}"
    )


def _dashboard_lines(state: InteractionState) -> list[str]:
    lines: list[str] = ["Navigation", ""]
    for index, (label, _target) in enumerate(MENU_ITEMS):
        lines.append(f"{_prefix_get(index == state.menu_index)}{label}")
    lines += ["", "Display Overview", ""]
    if not state.monitors:
        lines.append("  No monitors detected")
    for index, monitor in enumerate(state.monitors):
        lines.append(f"{_prefix_get(index == state.selected_monitor_index)}{monitorSummary_format(monitor)}")
    return lines


def _monitorSelection_lines(state: InteractionState) -> list[str]:
    if not state.monitors:
        return ["No monitors detected."]
    lines: list[str] = ["Select the monitor to configure:", ""]
    for index, monitor in enumerate(state.monitors):
        lines.append(f"{_prefix_get(index == state.selected_monitor_index)}{monitorSummary_format(monitor)}")
    return lines


def _scalingOptions_lines(state: InteractionState) -> list[str]:
    monitor = state.selectedMonitor_get()
    if monitor is None or not state.scaling_options:
        return ["No monitors detected."]
    lines: list[str] = [f"Options for {monitorSummary_format(monitor)}", ""]
    for index, option in enumerate(state.scaling_options):
        lines.append(f"{_prefix_get(index == state.selected_option_index)}{_option_format(option)}")
    selected = state.selectedOption_get()
    if selected is not None:
        lines += ["", f"  {selected.description}", f"  {selected.reasoning}"]
    lines += ["", "  * recommended"]
    return lines


def _manualScaling_lines(state: InteractionState) -> list[str]:
    monitor = state.selectedMonitor_get()
    lines: list[str] = []
    if monitor is not None:
        lines += [f"Target: {monitorSummary_format(monitor)}", ""]
    controls = (
        f"Monitor scale: {state.manual_monitor_scale:.2f}x",
        f"GTK scale:     {state.manual_gtk_scale}x",
        f"Font DPI:      {state.manual_font_dpi}",
    )
    for index, control in enumerate(controls):
        lines.append(f"{_prefix_get(index == state.selected_manual_control)}{control}")
    explanation_index = min(state.selected_manual_control, len(_CONTROL_EXPLANATIONS) - 1)
    lines += ["", f"  {_CONTROL_EXPLANATIONS[explanation_index]}", ""]
    if monitor is not None:
        width, height = effectiveSize_get(monitor, state.manual_monitor_scale)
        lines.append(f"  Effective desktop: {width}x{height}")
    lines += [
        f"  Screen real estate: {screenRealEstate_get(state.manual_monitor_scale):.0f}%",
        f"  Font multiplier: {fontMultiplier_get(state.manual_font_dpi):.1f}x",
    ]
    return lines


def _settings_lines(state: InteractionState) -> list[str]:
    mode = "Demo" if state.is_demo_mode else "Live"
    lines: list[str] = [
        "Application Info",
        "",
        f"  Version: {__version__}",
        f"  Mode: {mode}",
        f"  Detected with: {state.detection_source or 'unknown'}",
        "",
        "Detection Methods",
        "",
    ]
    for tool, is_available in state.tool_status:
        status = "available" if is_available else "not found"
        lines.append(f"  {tool:<12}{status}")
    lines += [
        "",
        "Scaling Limits",
        "",
        f"  GTK scale: {settings.MIN_GTK_SCALE}-{settings.MAX_GTK_SCALE}",
        f"  Font DPI: {settings.MIN_FONT_DPI}-{settings.MAX_FONT_DPI}",
    ]
    return lines


def _help_lines(state: InteractionState) -> list[str]:
    return [
        "Navigation",
        "",
        "  up/down  k/j   Move in menus and lists",
        "  left/right     Adjust values (manual scaling)",
        "  enter  space   Select option or apply changes",
        "",
        "Global Commands",
        "",
        "  h  ?           Show this help screen",
        "  esc            Return to the previous screen",
        "  q  ctrl+c      Quit",
        "",
        "Mode-Specific Controls",
        "",
        "  m              Switch from smart to manual scaling",
    ]


def _confirmation_lines(state: InteractionState) -> list[str]:
    monitor = state.pending_monitor
    option = state.pending_option
    if monitor is None or option is None:
        return ["Nothing to apply."]
    kind = "manual" if state.pending_action == PendingAction.APPLY_MANUAL else "smart"
    lines: list[str] = [
        "WARNING: applications may need a restart to pick up new scaling.",
        "",
        "Target Monitor",
        "",
        f"  {monitorSummary_format(monitor)}",
        "",
        f"Settings to Apply ({kind})",
        "",
        f"  Monitor Scale: {option.monitor_scale:.2f}x",
        f"  GTK Scale: {option.gtk_scale}x",
        f"  Font DPI: {option.font_dpi}",
    ]
    snapped = hyprlandScale_snap(option.monitor_scale)
    if abs(snapped - option.monitor_scale) > settings.SCALE_MATCH_TOLERANCE:
        lines.append(f"  (Hyprland will use {snapped:.2f}x)")
    if state.is_demo_mode:
        lines += ["", "Demo mode: changes are only logged."]
    return lines


_MODE_BODIES = {
    AppMode.DASHBOARD: _dashboard_lines,
    AppMode.MONITOR_SELECTION: _monitorSelection_lines,
    AppMode.SCALING_OPTIONS: _scalingOptions_lines,
    AppMode.MANUAL_SCALING: _manualScaling_lines,
    AppMode.SETTINGS: _settings_lines,
    AppMode.HELP: _help_lines,
    AppMode.CONFIRMATION: _confirmation_lines,
}


def screen_render(state: InteractionState, width: int, height: int) -> list[str]:
    """
    Render the state into screen lines.

    Args:
        state: Session state.
        width: Terminal columns.
        height: Terminal rows.

    Returns:
        At most `height` lines, each shorter than `width`.
    """
    if width < settings.MIN_TERMINAL_WIDTH or height < settings.MIN_TERMINAL_HEIGHT:
        lines = [
            "Terminal too small",
            f"Need {settings.MIN_TERMINAL_WIDTH}x{settings.MIN_TERMINAL_HEIGHT}, have {width}x{height}",
        ]
        return [line[: max(width - 1, 0)] for line in lines[: max(height, 0)]]

    title = f"hyprscale - {_MODE_TITLES[state.mode]}"
    if state.is_demo_mode:
        title += "  [DEMO]"
    header: list[str] = [title, ""]

    footer: list[str] = [""]
    if state.error_message:
        footer.append(f"Error: {state.error_message}")
    elif state.status_message:
        footer.append(state.status_message)
    footer.append(_MODE_HINTS[state.mode])

    body: list[str] = _MODE_BODIES[state.mode](state)
    body = body[: max(height - len(header) - len(footer), 0)]

    return [line[: width - 1] for line in header + body + footer]
