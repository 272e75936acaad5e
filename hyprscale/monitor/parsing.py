"""
Text parsers for display tool output.

Every parser shares one shape: scan line by line, keep a draft record for
the monitor currently being described, flush it when the next header line
appears, and flush the last one at end of input. Field patterns are matched
independently, so a malformed line only leaves its field at the zero value.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace

from hyprscale.common.types import Monitor, Position

logger = logging.getLogger(__name__)

__all__ = [
    "hyprctlOutput_parse",
    "wlrRandrOutput_parse",
    "xrandrOutput_parse",
    "primaryDefault_apply",
]

_HYPRCTL_HEADER = re.compile(r"^Monitor\s+(\S+)")
_HYPRCTL_MODE = re.compile(
    r"^(\S+?)x(\S+?)@([^\s@]+?)(?:Hz)?(?:\s+at\s+(\S+?)x(\S+))?(?:\s|$)"
)
_HYPRCTL_SCALE = re.compile(r"^scale:\s*(\S+)")
_HYPRCTL_MAKE = re.compile(r"^make:\s*(.*)$")
_HYPRCTL_MODEL = re.compile(r"^model:\s*(.*)$")
_HYPRCTL_FOCUSED = re.compile(r"^focused:\s*yes\b")
_HYPRCTL_DISABLED = re.compile(r"^disabled:\s*true\b")

_WLR_MODE = re.compile(r"^(\d+)x(\d+)\s+px,\s*([\d.]+)\s*Hz(.*)$")
_WLR_POSITION = re.compile(r"^Position:\s*(-?\d+)\s*,\s*(-?\d+)")
_WLR_SCALE = re.compile(r"^Scale:\s*(\S+)")
_WLR_MAKE = re.compile(r"^Make:\s*(.*)$")
_WLR_MODEL = re.compile(r"^Model:\s*(.*)$")
_WLR_ENABLED = re.compile(r"^Enabled:\s*(yes|no)\b")

_XRANDR_HEADER = re.compile(r"^(\S+)\s+(connected|disconnected)\b(.*)$")
_XRANDR_GEOMETRY = re.compile(r"(\d+)x(\d+)\+(-?\d+)\+(-?\d+)")
_XRANDR_CURRENT_RATE = re.compile(r"([\d.]+)\*")


@dataclass
class _MonitorDraft:
    """Mutable accumulator for the monitor currently being parsed."""

    name: str
    width: int = 0
    height: int = 0
    refresh_rate: float = 0.0
    scale: float = 0.0
    x: int = 0
    y: int = 0
    make: str = ""
    model: str = ""
    is_active: bool = False
    is_primary: bool = False
    has_current_mode: bool = False

    def monitor_build(self) -> Monitor:
        """Freeze the draft into a Monitor record."""
        return Monitor(
            name=self.name,
            width=self.width,
            height=self.height,
            refresh_rate=self.refresh_rate,
            scale=self.scale,
            position=Position(x=self.x, y=self.y),
            make=self.make,
            model=self.model,
            is_active=self.is_active,
            is_primary=self.is_primary,
        )


def _int_parse(text: str | None) -> int:
    if text is None:
        return 0
    try:
        return int(text)
    except ValueError:
        return 0


def _float_parse(text: str | None) -> float:
    if text is None:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return 0.0


def _draft_flush(draft: _MonitorDraft | None, monitors: list[Monitor]) -> None:
    if draft is None or not draft.name:
        return
    monitor = draft.monitor_build()
    logger.debug(
        "Parsed monitor %s (%s@%.2fHz, scale %.2f)",
        monitor.name,
        monitor.resolution_format(),
        monitor.refresh_rate,
        monitor.scale,
    )
    monitors.append(monitor)


def primaryDefault_apply(monitors: list[Monitor]) -> list[Monitor]:
    """
    Mark the first monitor primary when no monitor claims to be.

    Args:
        monitors:
            Parsed monitors in output order.

    Returns:
        Monitor list with its existing primaries, or with the first one marked.
    """
    if not monitors or any(monitor.is_primary for monitor in monitors):
        return monitors
    return [replace(monitors[0], is_primary=True)] + monitors[1:]


def hyprctlOutput_parse(output: str) -> list[Monitor]:
    """
    Parse `hyprctl monitors` text output.

    Example block::

        Monitor eDP-1 (ID 0):
            2880x1920@120.00000 at 0x0
            make: BOE
            model: NE135A1M-NY1
            scale: 2.00
            focused: yes

    Args:
        output:
            Captured tool output.

    Returns:
        Parsed monitors, possibly empty.
    """
    monitors: list[Monitor] = []
    draft: _MonitorDraft | None = None

    for raw_line in output.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        header_match = _HYPRCTL_HEADER.match(line)
        if header_match:
            _draft_flush(draft, monitors)
            draft = _MonitorDraft(name=header_match.group(1))
            continue

        if draft is None:
            continue

        mode_match = _HYPRCTL_MODE.match(line)
        if mode_match:
            draft.width = _int_parse(mode_match.group(1))
            draft.height = _int_parse(mode_match.group(2))
            draft.refresh_rate = _float_parse(mode_match.group(3))
            draft.x = _int_parse(mode_match.group(4))
            draft.y = _int_parse(mode_match.group(5))
            draft.is_active = True
            continue

        scale_match = _HYPRCTL_SCALE.match(line)
        if scale_match:
            draft.scale = _float_parse(scale_match.group(1))
            continue

        make_match = _HYPRCTL_MAKE.match(line)
        if make_match:
            draft.make = make_match.group(1).strip()
            continue

        model_match = _HYPRCTL_MODEL.match(line)
        if model_match:
            draft.model = model_match.group(1).strip()
            continue

        if _HYPRCTL_FOCUSED.match(line):
            draft.is_active = True
            draft.is_primary = True
            continue

        if _HYPRCTL_DISABLED.match(line):
            draft.is_active = False

    _draft_flush(draft, monitors)
    return primaryDefault_apply(monitors)


def wlrRandrOutput_parse(output: str) -> list[Monitor]:
    """
    Parse `wlr-randr` text output.

    Headers are the non-indented lines; the output name is their first word.
    The mode tagged ``current`` wins; the first listed mode is used when no
    mode is tagged.

    Args:
        output:
            Captured tool output.

    Returns:
        Parsed monitors, possibly empty.
    """
    monitors: list[Monitor] = []
    draft: _MonitorDraft | None = None

    for raw_line in output.splitlines():
        if not raw_line.strip():
            continue

        if not raw_line[0].isspace():
            _draft_flush(draft, monitors)
            draft = _MonitorDraft(name=raw_line.split()[0])
            continue

        if draft is None:
            continue

        line = raw_line.strip()

        mode_match = _WLR_MODE.match(line)
        if mode_match:
            is_current = "current" in mode_match.group(4)
            if is_current or (not draft.has_current_mode and draft.width == 0):
                draft.width = _int_parse(mode_match.group(1))
                draft.height = _int_parse(mode_match.group(2))
                draft.refresh_rate = _float_parse(mode_match.group(3))
            if is_current:
                draft.has_current_mode = True
            continue

        position_match = _WLR_POSITION.match(line)
        if position_match:
            draft.x = _int_parse(position_match.group(1))
            draft.y = _int_parse(position_match.group(2))
            continue

        scale_match = _WLR_SCALE.match(line)
        if scale_match:
            draft.scale = _float_parse(scale_match.group(1))
            continue

        make_match = _WLR_MAKE.match(line)
        if make_match:
            draft.make = make_match.group(1).strip()
            continue

        model_match = _WLR_MODEL.match(line)
        if model_match:
            draft.model = model_match.group(1).strip()
            continue

        enabled_match = _WLR_ENABLED.match(line)
        if enabled_match:
            draft.is_active = enabled_match.group(1) == "yes"

    _draft_flush(draft, monitors)
    return primaryDefault_apply(monitors)


def xrandrOutput_parse(output: str) -> list[Monitor]:
    """
    Parse `xrandr` query output.

    Only connected outputs produce monitors. X11 has no per-output scale, so
    every monitor reports 1.0.

    Args:
        output:
            Captured tool output.

    Returns:
        Parsed monitors, possibly empty.
    """
    monitors: list[Monitor] = []
    draft: _MonitorDraft | None = None

    for raw_line in output.splitlines():
        if not raw_line.strip():
            continue

        header_match = _XRANDR_HEADER.match(raw_line)
        if header_match:
            _draft_flush(draft, monitors)
            draft = None
            if header_match.group(2) != "connected":
                continue

            draft = _MonitorDraft(name=header_match.group(1), scale=1.0)
            details = header_match.group(3)
            draft.is_primary = " primary" in f" {details}"
            geometry_match = _XRANDR_GEOMETRY.search(details)
            if geometry_match:
                draft.width = _int_parse(geometry_match.group(1))
                draft.height = _int_parse(geometry_match.group(2))
                draft.x = _int_parse(geometry_match.group(3))
                draft.y = _int_parse(geometry_match.group(4))
                draft.is_active = True
            continue

        if draft is None or draft.has_current_mode:
            continue

        rate_match = _XRANDR_CURRENT_RATE.search(raw_line)
        if rate_match:
            draft.refresh_rate = _float_parse(rate_match.group(1))
            draft.has_current_mode = True

    _draft_flush(draft, monitors)
    return primaryDefault_apply(monitors)
