"""Capability protocols for detection, recommendation, and application."""

from __future__ import annotations

from typing import Protocol

from hyprscale.common.types import DetectionResult, Monitor, ScalingOption


class MonitorDetector(Protocol):
    """Abstract monitor detection interface."""

    def monitors_detect(self) -> DetectionResult:
        """
        Detect attached monitors.

        Returns:
            Detection result with a non-empty monitor tuple.
        """


class ScalingEngine(Protocol):
    """Abstract scaling recommendation interface."""

    def scalingOptions_get(self, monitor: Monitor) -> list[ScalingOption]:
        """
        Build ranked scaling options for one monitor.

        Args:
            monitor: monitor value.

        Returns:
            Non-empty list with at least one recommended option.
        """

    def recommendedScale_get(self, monitor: Monitor) -> float:
        """
        Return the compositor scale of the first recommended option.

        Args:
            monitor: monitor value.

        Returns:
            Recommended monitor scale.
        """


class ConfigApplier(Protocol):
    """Abstract scaling application interface.

    Every method raises ``ApplyRejectedError`` when the change is refused.
    """

    def monitorScale_apply(self, monitor: Monitor, scale: float) -> None:
        """Apply compositor scale to one monitor."""

    def gtkScale_apply(self, scale: int) -> None:
        """Apply integer GTK scale."""

    def fontDPI_apply(self, dpi: int) -> None:
        """Apply font rendering DPI."""

    def scalingOption_apply(self, monitor: Monitor, option: ScalingOption) -> None:
        """Apply monitor scale, GTK scale and font DPI, stopping at the first error."""
