"""Monitor detection, scaling recommendation and application."""

from hyprscale.monitor.backend import ConfigApplier, MonitorDetector, ScalingEngine
from hyprscale.monitor.factory import Services, services_create

__all__ = [
    "ConfigApplier",
    "MonitorDetector",
    "ScalingEngine",
    "Services",
    "services_create",
]
