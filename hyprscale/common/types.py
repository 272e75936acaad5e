"""Common types and data structures for hyprscale"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Position:
    """Monitor origin in the compositor layout"""
    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class Monitor:
    """Detected (or synthetic) display

    Parsers leave fields they could not read at their zero value, so
    consumers must tolerate ``width == 0`` or ``scale == 0.0``.
    """
    name: str
    width: int = 0
    height: int = 0
    refresh_rate: float = 0.0
    scale: float = 0.0
    position: Position = field(default_factory=Position)
    make: str = ""
    model: str = ""
    is_active: bool = False
    is_primary: bool = False

    def pixelCount_get(self) -> int:
        """Total pixel count of the current mode"""
        return self.width * self.height

    def resolution_format(self) -> str:
        """Resolution as ``WIDTHxHEIGHT``"""
        return f"{self.width}x{self.height}"

    def label_get(self) -> str:
        """Human readable ``make model`` label, empty parts skipped"""
        return " ".join(part for part in (self.make, self.model) if part)


@dataclass(frozen=True)
class ScalingOption:
    """One scaling recommendation for a monitor"""
    monitor_scale: float
    gtk_scale: int
    font_dpi: int
    font_scale: float
    display_name: str
    description: str
    reasoning: str
    is_recommended: bool
    effective_width: int
    effective_height: int


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of one detection pass

    ``monitors`` is never empty. ``is_demo_mode`` is True when synthetic
    fallback data was returned because no real tool produced monitors.
    """
    monitors: tuple[Monitor, ...]
    is_demo_mode: bool
    source: str
