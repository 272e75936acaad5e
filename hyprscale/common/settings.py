"""Application constants - single source of truth for scaling limits

This module provides a Settings class that consolidates the numeric limits
shared by the scaling engine, the applier, and the interactive controller.
Unlike runtime configuration (see ``hyprscale.common.config``), these values
never change while the process runs.

Usage:
    from hyprscale.common.settings import settings

    dpi = min(max(dpi, settings.MIN_FONT_DPI), settings.MAX_FONT_DPI)
"""


class Settings:
    """Read-only constants for scaling validation and manual controls"""

    # =========================================================================
    # Compositor Scale Constants
    # =========================================================================

    VALID_HYPRLAND_SCALES: tuple[float, ...] = (
        1.0, 1.25, 1.33333, 1.5, 1.66667, 1.75, 2.0, 2.25, 2.5, 3.0,
    )
    """Scale factors Hyprland accepts without a clean-divisor warning

    Arbitrary floats are rejected by the compositor, so every requested
    scale is snapped to the nearest entry before it is applied.
    """

    SCALE_MATCH_TOLERANCE: float = 0.001
    """Two scales closer than this are treated as the same step"""

    # =========================================================================
    # Toolkit Constants
    # =========================================================================

    MIN_GTK_SCALE: int = 1
    MAX_GTK_SCALE: int = 3
    """GTK only supports integer scaling"""

    MIN_FONT_DPI: int = 72
    MAX_FONT_DPI: int = 300
    """Range accepted by the applier for Xft.dpi"""

    BASE_DPI: int = 96
    """DPI that corresponds to 1x font scaling"""

    # =========================================================================
    # Manual Control Constants
    # =========================================================================

    MANUAL_FONT_DPI_STEP: int = 12
    MANUAL_FONT_DPI_MIN: int = 72
    MANUAL_FONT_DPI_MAX: int = 288
    """Font DPI adjuster bounds in manual scaling mode

    The upper bound is a whole number of steps above the base DPI, so the
    adjuster never lands between steps.
    """

    MANUAL_CONTROL_COUNT: int = 3
    """Manual controls: monitor scale, GTK scale, font DPI"""

    # =========================================================================
    # Environment
    # =========================================================================

    GTK_SCALE_ENV: str = "GDK_SCALE"
    FONT_DPI_ENV: str = "XFT_DPI"
    HYPRLAND_SIGNATURE_ENV: str = "HYPRLAND_INSTANCE_SIGNATURE"

    # =========================================================================
    # Terminal
    # =========================================================================

    MIN_TERMINAL_WIDTH: int = 80
    MIN_TERMINAL_HEIGHT: int = 20


settings = Settings()
"""Global settings instance

Import this anywhere in the application:
    from hyprscale.common.settings import settings
"""
