"""In-memory implementations of the capability protocols."""

from __future__ import annotations

from typing import Optional, Sequence

from hyprscale.common.errors import ApplyRejectedError
from hyprscale.common.types import DetectionResult, Monitor, ScalingOption

__all__ = [
    "FixedScalingEngine",
    "RecordingConfigApplier",
    "StaticMonitorDetector",
]


class StaticMonitorDetector:
    """Detector that returns a preset monitor list."""

    def __init__(
        self,
        monitors: Sequence[Monitor],
        is_demo_mode: bool = False,
        source: str = "memory",
    ) -> None:
        self._result = DetectionResult(
            monitors=tuple(monitors),
            is_demo_mode=is_demo_mode,
            source=source,
        )
        self.calls: int = 0

    def monitors_detect(self) -> DetectionResult:
        self.calls += 1
        return self._result


class FixedScalingEngine:
    """Engine returning the same options for every monitor."""

    def __init__(self, options: Sequence[ScalingOption]) -> None:
        self._options: list[ScalingOption] = list(options)
        self.requested: list[str] = []

    def scalingOptions_get(self, monitor: Monitor) -> list[ScalingOption]:
        self.requested.append(monitor.name)
        return list(self._options)

    def recommendedScale_get(self, monitor: Monitor) -> float:
        for option in self._options:
            if option.is_recommended:
                return option.monitor_scale
        return 1.0


class RecordingConfigApplier:
    """
    Applier that records every call instead of touching the system.

    Each call is stored as a tuple whose first element names the method.
    When `fail_with` is set every call records itself and then raises
    ``ApplyRejectedError`` with that message.
    """

    def __init__(self, fail_with: Optional[str] = None) -> None:
        self.calls: list[tuple[object, ...]] = []
        self._fail_with: Optional[str] = fail_with

    def _failure_raise(self) -> None:
        if self._fail_with is not None:
            raise ApplyRejectedError(self._fail_with)

    def monitorScale_apply(self, monitor: Monitor, scale: float) -> None:
        self.calls.append(("monitor_scale", monitor.name, scale))
        self._failure_raise()

    def gtkScale_apply(self, scale: int) -> None:
        self.calls.append(("gtk_scale", scale))
        self._failure_raise()

    def fontDPI_apply(self, dpi: int) -> None:
        self.calls.append(("font_dpi", dpi))
        self._failure_raise()

    def scalingOption_apply(self, monitor: Monitor, option: ScalingOption) -> None:
        self.calls.append(("scaling_option", monitor.name, option))
        self._failure_raise()
