"""Unit tests for common types (Position, Monitor, ScalingOption, DetectionResult)"""

import pytest

from hyprscale.common.types import DetectionResult, Monitor, Position, ScalingOption


class TestPosition:
    """Test Position dataclass"""

    def test_defaults(self):
        """Test Position defaults to the origin"""
        pos = Position()
        assert (pos.x, pos.y) == (0, 0)

    def test_immutable(self):
        """Test Position is immutable"""
        pos = Position(x=100, y=200)
        with pytest.raises(AttributeError):
            pos.x = 300


class TestMonitor:
    """Test Monitor dataclass"""

    def test_zero_defaults(self):
        """Test unparsed fields stay at their zero value"""
        monitor = Monitor(name="DP-3")
        assert monitor.width == 0
        assert monitor.scale == 0.0
        assert monitor.make == ""
        assert monitor.is_active is False
        assert monitor.position == Position(0, 0)

    def test_pixelCount_get(self, uhd_monitor):
        """Test pixel count multiplies width and height"""
        assert uhd_monitor.pixelCount_get() == 3840 * 2160

    def test_resolution_format(self, laptop_monitor):
        """Test resolution string"""
        assert laptop_monitor.resolution_format() == "2880x1920"

    def test_label_get_skips_empty_parts(self):
        """Test label joins make and model and skips blanks"""
        assert Monitor(name="a", make="LG", model="27UP850-W").label_get() == "LG 27UP850-W"
        assert Monitor(name="a", model="Panel").label_get() == "Panel"
        assert Monitor(name="a").label_get() == ""

    def test_immutable(self, laptop_monitor):
        """Test Monitor is immutable"""
        with pytest.raises(AttributeError):
            laptop_monitor.scale = 1.0


class TestScalingOption:
    """Test ScalingOption dataclass"""

    def test_equality_by_value(self):
        """Test two options with the same fields compare equal"""
        first = ScalingOption(2.0, 2, 192, 1.0, "2x", "d", "r", True, 1920, 1080)
        second = ScalingOption(2.0, 2, 192, 1.0, "2x", "d", "r", True, 1920, 1080)
        assert first == second


class TestDetectionResult:
    """Test DetectionResult dataclass"""

    def test_fields(self, laptop_monitor):
        """Test result carries monitors, demo flag and source"""
        result = DetectionResult(monitors=(laptop_monitor,), is_demo_mode=False, source="hyprctl")
        assert result.monitors[0].name == "eDP-1"
        assert result.source == "hyprctl"
        assert not result.is_demo_mode
