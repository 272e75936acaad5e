"""Service factory functions."""

from __future__ import annotations

from dataclasses import dataclass

from hyprscale.common.config import AppConfig
from hyprscale.monitor.applier import HyprlandConfigApplier
from hyprscale.monitor.backend import ConfigApplier, MonitorDetector, ScalingEngine
from hyprscale.monitor.detector import ToolMonitorDetector
from hyprscale.monitor.scaling import TieredScalingEngine


@dataclass
class Services:
    """
    Production collaborators for one run.

    Attributes:
        detector:
            Monitor detector.
        engine:
            Scaling recommendation engine.
        config:
            Configuration the applier is built from once detection has run.
    """

    detector: MonitorDetector
    engine: ScalingEngine
    config: AppConfig

    def demoMode_resolve(self, detected_demo_mode: bool) -> bool:
        """
        Effective demo flag for the session.

        Args:
            detected_demo_mode: True when detection fell back to synthetic monitors.

        Returns:
            False when live mode is forced, otherwise the detected flag.
        """
        return detected_demo_mode and not self.config.force_live_mode

    def applier_create(self, is_demo_mode: bool) -> ConfigApplier:
        """
        Create the applier for the detection outcome.

        Args:
            is_demo_mode: True when detection fell back to synthetic monitors.

        Returns:
            Applier that acts on the system unless demo mode holds.
        """
        return HyprlandConfigApplier(
            config=self.config, is_demo_mode=self.demoMode_resolve(is_demo_mode)
        )


def services_create(config: AppConfig) -> Services:
    """
    Create production services.

    Args:
        config: Application configuration.

    Returns:
        Services bundle with the tool detector and tier engine.
    """
    return Services(
        detector=ToolMonitorDetector(config),
        engine=TieredScalingEngine(),
        config=config,
    )
