"""Pytest configuration and shared fixtures for hyprscale tests

This module provides sample tool output, monitor records and in-memory
collaborators used across the unit tests.
"""

import logging
import subprocess
from typing import Callable, Optional

import pytest

from hyprscale.common.config import AppConfig
from hyprscale.common.types import Monitor, Position, ScalingOption


HYPRCTL_TWO_MONITORS = """\
Monitor eDP-1 (ID 0):
\t2880x1920@120.00000 at 0x0
\tdescription: BOE NE135A1M-NY1
\tmake: BOE
\tmodel: NE135A1M-NY1
\tserial:
\tactive workspace: 1 (1)
\tspecial workspace: 0 ()
\treserved: 0 30 0 0
\tscale: 2.00
\ttransform: 0
\tfocused: yes
\tdpmsStatus: 1
\tvrr: false
\tdisabled: false
\tavailableModes: 2880x1920@120.00Hz 2880x1920@60.00Hz

Monitor DP-1 (ID 1):
\t3840x2160@60.00000 at 2880x0
\tdescription: LG Electronics LG HDR 4K
\tmake: LG Electronics
\tmodel: LG HDR 4K
\tscale: 1.50
\ttransform: 0
\tfocused: no
\tdisabled: false
\tavailableModes: 3840x2160@60.00Hz 2560x1440@59.95Hz
"""

WLR_RANDR_OUTPUT = """\
eDP-1 "BOE 0x0BCA (eDP-1)"
  Make: BOE
  Model: 0x0BCA
  Enabled: yes
  Modes:
    2256x1504 px, 59.999001 Hz (preferred, current)
    1920x1200 px, 59.999001 Hz
  Position: 0,0
  Transform: normal
  Scale: 1.500000
HDMI-A-1 "Dell Inc. DELL U2720Q"
  Make: Dell Inc.
  Model: DELL U2720Q
  Enabled: no
  Modes:
    3840x2160 px, 60.000000 Hz (preferred)
    2560x1440 px, 59.951000 Hz
  Position: 2256,0
  Scale: 1.000000
"""

XRANDR_OUTPUT = """\
Screen 0: minimum 8 x 8, current 4480 x 1440, maximum 32767 x 32767
eDP-1 connected primary 1920x1080+0+0 (normal left inverted right x axis y axis) 344mm x 194mm
   1920x1080     60.02*+  59.93
   1680x1050     59.88
HDMI-1 disconnected (normal left inverted right x axis y axis)
DP-1 connected 2560x1440+1920+0 (normal left inverted right x axis y axis) 597mm x 336mm
   2560x1440     59.95 +  143.97*
   1920x1080     60.00
"""


class FakeCompleted:
    """Minimal stand-in for subprocess.CompletedProcess"""

    def __init__(self, stdout: str = "", returncode: int = 0) -> None:
        self.stdout = stdout
        self.returncode = returncode


class FakeRunner:
    """Records commands and returns preset results keyed by executable"""

    def __init__(
        self,
        outputs: Optional[dict[str, FakeCompleted]] = None,
        raises: Optional[dict[str, BaseException]] = None,
    ) -> None:
        self.outputs = outputs or {}
        self.raises = raises or {}
        self.commands: list[list[str]] = []
        self.kwargs: list[dict] = []

    def __call__(self, command, **kwargs):
        self.commands.append(list(command))
        self.kwargs.append(kwargs)
        tool = command[0]
        if tool in self.raises:
            raise self.raises[tool]
        return self.outputs.get(tool, FakeCompleted())


def which_factory(available: set[str]) -> Callable[[str], Optional[str]]:
    """Build a `shutil.which` replacement that knows only `available` tools"""
    def which(tool: str) -> Optional[str]:
        return f"/usr/bin/{tool}" if tool in available else None
    return which


@pytest.fixture
def app_config() -> AppConfig:
    """Default configuration"""
    return AppConfig()


@pytest.fixture
def laptop_monitor() -> Monitor:
    """2.8K laptop panel"""
    return Monitor(
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
    )


@pytest.fixture
def uhd_monitor() -> Monitor:
    """4K external monitor"""
    return Monitor(
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
    )


@pytest.fixture
def sample_options() -> list[ScalingOption]:
    """Three options with the first one recommended"""
    return [
        ScalingOption(2.0, 2, 192, 1.0, "2x Perfect", "d", "r", True, 1920, 1080),
        ScalingOption(1.66667, 1, 160, 1.67, "1.67x Enhanced", "d", "r", False, 2303, 1295),
        ScalingOption(1.5, 1, 144, 1.5, "1.5x Balanced", "d", "r", False, 2560, 1440),
    ]


@pytest.fixture
def timeout_error() -> subprocess.TimeoutExpired:
    return subprocess.TimeoutExpired(cmd="hyprctl", timeout=5)


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Setup logging for tests"""
    caplog.set_level(logging.DEBUG)
