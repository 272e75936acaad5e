"""
Scaling application against Hyprland and the process environment.

Compositor scale goes through `hyprctl keyword monitor`. GTK scale and font
DPI are exported as environment variables for child processes of this
process only. In demo mode nothing is touched and every call only logs what
it would have done.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
from typing import Callable, MutableMapping, Optional

from hyprscale.common.config import AppConfig
from hyprscale.common.errors import ApplyRejectedError
from hyprscale.common.settings import settings
from hyprscale.common.types import Monitor, ScalingOption

logger = logging.getLogger(__name__)

__all__ = [
    "HyprlandConfigApplier",
    "hyprlandScale_snap",
    "monitorName_sanitize",
    "value_clamp",
]

Runner = Callable[..., "subprocess.CompletedProcess[str]"]

_UNSAFE_NAME_CHARS = re.compile(r"[;&|`$()'\"<>\\]")
_WHITESPACE = re.compile(r"\s")
_REJECTION_MARKERS: tuple[str, ...] = ("invalid scale", "failed to find clean divisor")


def hyprlandScale_snap(scale: float) -> float:
    """
    Snap a scale to the nearest value Hyprland accepts.

    Args:
        scale: Requested scale factor.

    Returns:
        Nearest valid scale; the first candidate wins an exact tie.
    """
    best: float = settings.VALID_HYPRLAND_SCALES[0]
    best_distance: float = abs(scale - best)
    for candidate in settings.VALID_HYPRLAND_SCALES[1:]:
        distance = abs(scale - candidate)
        if distance < best_distance:
            best, best_distance = candidate, distance
    return best


def monitorName_sanitize(name: str) -> str:
    """
    Make a monitor name safe to embed in a hyprctl argument.

    Args:
        name: Raw monitor name.

    Returns:
        Name with whitespace turned into `_` and shell metacharacters removed.
    """
    return _UNSAFE_NAME_CHARS.sub("", _WHITESPACE.sub("_", name))


def value_clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, value))


class HyprlandConfigApplier:
    """Production applier for Hyprland sessions."""

    def __init__(
        self,
        config: AppConfig,
        is_demo_mode: bool,
        environ: Optional[MutableMapping[str, str]] = None,
        runner: Runner = subprocess.run,
    ) -> None:
        """
        Initialize applier.

        Args:
            config: Application configuration (timeouts, Hyprland check).
            is_demo_mode: Log intended actions instead of performing them.
            environ: Environment mapping to write; `os.environ` by default.
            runner: Subprocess runner (injectable for tests).
        """
        self._config: AppConfig = config
        self.is_demo_mode: bool = is_demo_mode
        self._environ: MutableMapping[str, str] = environ if environ is not None else os.environ
        self._runner: Runner = runner

    def _hyprlandSession_check(self) -> None:
        if self._config.no_hyprland_check:
            return
        if not self._environ.get(settings.HYPRLAND_SIGNATURE_ENV):
            raise ApplyRejectedError(
                f"{settings.HYPRLAND_SIGNATURE_ENV} is not set; not running under Hyprland"
            )

    def monitorScale_apply(self, monitor: Monitor, scale: float) -> None:
        """
        Apply compositor scale to one monitor.

        Args:
            monitor: Target monitor.
            scale: Requested scale, snapped before use.

        Raises:
            ApplyRejectedError: hyprctl failed, timed out, or refused the scale.
        """
        if self.is_demo_mode:
            logger.info("Demo: would apply monitor scale %.2fx to %s", scale, monitor.name)
            return

        self._hyprlandSession_check()

        snapped: float = hyprlandScale_snap(scale)
        if abs(snapped - scale) > settings.SCALE_MATCH_TOLERANCE:
            logger.info("Adjusted scale from %.3f to %.3f for Hyprland compatibility", scale, snapped)

        argument: str = f"{monitorName_sanitize(monitor.name)},preferred,auto,{snapped:.5f}"
        command: list[str] = ["hyprctl", "keyword", "monitor", argument]
        logger.debug("Running: %s", " ".join(command))

        timeout: float = self._config.detection.apply_timeout_seconds
        try:
            completed = self._runner(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise ApplyRejectedError(f"hyprctl timed out after {timeout:g}s") from exc
        except OSError as exc:
            raise ApplyRejectedError(f"hyprctl could not be run: {exc}") from exc

        output: str = (completed.stdout or "").strip()
        if completed.returncode != 0:
            raise ApplyRejectedError(
                f"hyprctl exited with status {completed.returncode}: {output}"
            )
        lowered: str = output.lower()
        for marker in _REJECTION_MARKERS:
            if marker in lowered:
                raise ApplyRejectedError(f"Hyprland rejected scale {snapped:.5f}: {output}")

        logger.info("Applied scale %.5f to %s", snapped, monitor.name)

    def gtkScale_apply(self, scale: int) -> None:
        """Export `GDK_SCALE`, clamped to the supported integer range"""
        if self.is_demo_mode:
            logger.info("Demo: would apply GTK scale %dx", scale)
            return
        clamped: int = value_clamp(scale, settings.MIN_GTK_SCALE, settings.MAX_GTK_SCALE)
        self._environ[settings.GTK_SCALE_ENV] = str(clamped)
        logger.info("Set %s=%d", settings.GTK_SCALE_ENV, clamped)

    def fontDPI_apply(self, dpi: int) -> None:
        """Export `XFT_DPI`, clamped to the supported range"""
        if self.is_demo_mode:
            logger.info("Demo: would set font DPI to %d", dpi)
            return
        clamped: int = value_clamp(dpi, settings.MIN_FONT_DPI, settings.MAX_FONT_DPI)
        self._environ[settings.FONT_DPI_ENV] = str(clamped)
        logger.info("Set %s=%d", settings.FONT_DPI_ENV, clamped)

    def scalingOption_apply(self, monitor: Monitor, option: ScalingOption) -> None:
        """
        Apply monitor scale, GTK scale and font DPI in that order.

        Args:
            monitor: Target monitor.
            option: Option to apply.

        Raises:
            ApplyRejectedError: first failing step, named in the message.
        """
        if self.is_demo_mode:
            logger.info(
                "Demo: would apply '%s' to %s (scale %.2f, GTK %d, DPI %d)",
                option.display_name,
                monitor.name,
                option.monitor_scale,
                option.gtk_scale,
                option.font_dpi,
            )
            return

        try:
            self.monitorScale_apply(monitor, option.monitor_scale)
        except ApplyRejectedError as exc:
            raise ApplyRejectedError(f"failed to apply monitor scale: {exc}") from exc
        try:
            self.gtkScale_apply(option.gtk_scale)
        except ApplyRejectedError as exc:
            raise ApplyRejectedError(f"failed to apply GTK scale: {exc}") from exc
        try:
            self.fontDPI_apply(option.font_dpi)
        except ApplyRejectedError as exc:
            raise ApplyRejectedError(f"failed to apply font DPI: {exc}") from exc
