"""
Monitor detection via external display tools.

Strategies run in a fixed priority order. The first one that executes
cleanly and yields at least one monitor wins; when every strategy fails the
detector returns synthetic monitors and flags demo mode instead of raising.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from typing import Callable, Optional, Sequence

from hyprscale.common.config import AppConfig
from hyprscale.common.errors import ToolUnavailableError
from hyprscale.common.types import DetectionResult, Monitor, Position
from hyprscale.monitor.parsing import (
    hyprctlOutput_parse,
    wlrRandrOutput_parse,
    xrandrOutput_parse,
)

logger = logging.getLogger(__name__)

__all__ = [
    "DetectionStrategy",
    "ToolMonitorDetector",
    "fallbackMonitors_get",
    "strategies_create",
    "toolStatus_get",
]

FALLBACK_SOURCE: str = "fallback"

Runner = Callable[..., "subprocess.CompletedProcess[str]"]
Which = Callable[[str], Optional[str]]
OutputParser = Callable[[str], list[Monitor]]


class DetectionStrategy:
    """One external tool plus the parser for its output."""

    def __init__(
        self,
        name: str,
        command: Sequence[str],
        parser: OutputParser,
        timeout_seconds: float,
        runner: Runner = subprocess.run,
        which: Which = shutil.which,
    ) -> None:
        """
        Initialize detection strategy.

        Args:
            name: Strategy label used in logs and detection results.
            command: Tool invocation; the first element is the executable.
            parser: Text parser for the captured output.
            timeout_seconds: Upper bound for one tool invocation.
            runner: Subprocess runner (injectable for tests).
            which: Executable resolver (injectable for tests).
        """
        self.name: str = name
        self._command: list[str] = list(command)
        self._parser: OutputParser = parser
        self._timeout_seconds: float = timeout_seconds
        self._runner: Runner = runner
        self._which: Which = which

    @property
    def tool(self) -> str:
        return self._command[0]

    def isAvailable(self) -> bool:
        """Check whether the tool resolves on PATH"""
        return self._which(self.tool) is not None

    def monitors_detect(self) -> list[Monitor]:
        """
        Run the tool and parse its output.

        Returns:
            Parsed monitors (possibly empty).

        Raises:
            ToolUnavailableError: tool missing, failed, or timed out.
        """
        if not self.isAvailable():
            raise ToolUnavailableError(self.tool, "not found on PATH")

        try:
            completed = self._runner(
                self._command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=self._timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise ToolUnavailableError(
                self.tool, f"timed out after {self._timeout_seconds:g}s"
            ) from exc
        except OSError as exc:
            raise ToolUnavailableError(self.tool, str(exc)) from exc

        output: str = completed.stdout or ""
        if completed.returncode != 0:
            raise ToolUnavailableError(
                self.tool, f"exited with status {completed.returncode}: {output.strip()}"
            )

        logger.debug("%s output (%d bytes):\n%s", self.tool, len(output), output)
        return self._parser(output)


def strategies_create(
    config: AppConfig,
    runner: Runner = subprocess.run,
    which: Which = shutil.which,
) -> list[DetectionStrategy]:
    """
    Build the detection strategies in priority order.

    Args:
        config: Application configuration (tool timeout).
        runner: Subprocess runner shared by all strategies.
        which: Executable resolver shared by all strategies.

    Returns:
        Strategies: hyprctl, wlr-randr, xrandr.
    """
    timeout: float = config.detection.tool_timeout_seconds
    return [
        DetectionStrategy("hyprctl", ["hyprctl", "monitors"], hyprctlOutput_parse, timeout, runner, which),
        DetectionStrategy("wlr-randr", ["wlr-randr"], wlrRandrOutput_parse, timeout, runner, which),
        DetectionStrategy("xrandr", ["xrandr", "--query"], xrandrOutput_parse, timeout, runner, which),
    ]


def fallbackMonitors_get(platform: str = sys.platform) -> list[Monitor]:
    """
    Synthetic monitors used when no detection tool produced results.

    Args:
        platform: Platform token, `sys.platform` by default.

    Returns:
        Two plausible monitors for the platform.
    """
    if platform == "darwin":
        return [
            Monitor(
                name="Built-in Retina Display",
                width=2880,
                height=1800,
                refresh_rate=60.0,
                scale=2.0,
                position=Position(0, 0),
                make="Apple",
                model='MacBook Pro 14"',
                is_active=True,
                is_primary=True,
            ),
            Monitor(
                name="Studio Display",
                width=5120,
                height=2880,
                refresh_rate=60.0,
                scale=2.0,
                position=Position(1440, 0),
                make="Apple",
                model="Studio Display",
                is_active=True,
                is_primary=False,
            ),
        ]

    return [
        Monitor(
            name="eDP-1",
            width=2880,
            height=1920,
            refresh_rate=120.0,
            scale=2.0,
            position=Position(0, 0),
            make="Framework",
            model="13 Inch Laptop",
            is_active=True,
            is_primary=True,
        ),
        Monitor(
            name="DP-1",
            width=3840,
            height=2160,
            refresh_rate=60.0,
            scale=1.5,
            position=Position(2880, 0),
            make="LG",
            model="27UP850-W",
            is_active=True,
            is_primary=False,
        ),
    ]


class ToolMonitorDetector:
    """Production detector walking the tool strategies in order."""

    def __init__(
        self,
        config: AppConfig,
        strategies: Optional[list[DetectionStrategy]] = None,
        platform: str = sys.platform,
    ) -> None:
        """
        Initialize detector.

        Args:
            config: Application configuration. With `debug_mode` set, skip
                reasons and every detected monitor are logged at INFO.
            strategies: Strategies in priority order; built from config when None.
            platform: Platform token for the fallback monitors.
        """
        self._config: AppConfig = config
        self._strategies: list[DetectionStrategy] = (
            strategies if strategies is not None else strategies_create(config)
        )
        self._platform: str = platform
        self._diagnostic_level: int = logging.INFO if config.debug_mode else logging.DEBUG

    @property
    def strategies(self) -> list[DetectionStrategy]:
        return list(self._strategies)

    def monitors_detect(self) -> DetectionResult:
        """
        Detect monitors, falling back to synthetic data.

        Returns:
            Detection result; never empty, never raises for tool failures.
        """
        for strategy in self._strategies:
            logger.debug("Trying detection strategy: %s", strategy.name)
            try:
                monitors = strategy.monitors_detect()
            except ToolUnavailableError as exc:
                logger.log(self._diagnostic_level, "Skipping %s: %s", strategy.name, exc.reason)
                continue

            if not monitors:
                logger.log(self._diagnostic_level, "%s reported no monitors", strategy.name)
                continue

            logger.info("Detected %d monitor(s) using %s", len(monitors), strategy.name)
            for monitor in monitors:
                logger.log(
                    self._diagnostic_level,
                    "  %s %dx%d@%.1fHz scale %.2f at %d,%d",
                    monitor.name,
                    monitor.width,
                    monitor.height,
                    monitor.refresh_rate,
                    monitor.scale,
                    monitor.position.x,
                    monitor.position.y,
                )
            return DetectionResult(
                monitors=tuple(monitors),
                is_demo_mode=False,
                source=strategy.name,
            )

        logger.warning("No display tool produced monitors, using demo data")
        return DetectionResult(
            monitors=tuple(fallbackMonitors_get(self._platform)),
            is_demo_mode=True,
            source=FALLBACK_SOURCE,
        )


def toolStatus_get(strategies: Sequence[DetectionStrategy]) -> tuple[tuple[str, bool], ...]:
    """
    Report which detection tools resolve on PATH.

    Args:
        strategies: Strategies to inspect.

    Returns:
        Tuple of `(tool, available)` pairs in strategy order.
    """
    return tuple((strategy.tool, strategy.isAvailable()) for strategy in strategies)
