"""
Resolution-tier scaling recommendations.

A monitor is bucketed into a tier by total pixel count. Each tier carries a
fixed, ordered set of option templates with one baseline recommendation.
Monitors whose estimated density is above the high-PPI threshold additionally
get every 2x option recommended, since integer scaling renders without blur.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

from hyprscale.common.settings import settings
from hyprscale.common.types import Monitor, ScalingOption

logger = logging.getLogger(__name__)

__all__ = [
    "OptionTemplate",
    "ResolutionTier",
    "TieredScalingEngine",
    "HIGH_PPI_THRESHOLD",
    "RESOLUTION_TIERS",
    "effectiveSize_get",
    "fontMultiplier_get",
    "ppi_estimate",
    "preferredOption_get",
    "resolutionTier_get",
    "screenRealEstate_get",
]

HIGH_PPI_THRESHOLD: float = 200.0
HIGH_PPI_REASONING: str = " High PPI display benefits from integer scaling."
INTEGER_SCALE: float = 2.0


@dataclass(frozen=True)
class OptionTemplate:
    """Monitor-independent part of a scaling option"""
    monitor_scale: float
    gtk_scale: int
    font_dpi: int
    font_scale: float
    display_name: str
    description: str
    reasoning: str
    is_recommended: bool = False


@dataclass(frozen=True)
class ResolutionTier:
    """Pixel-count bucket with its option templates"""
    name: str
    min_pixels: int
    templates: tuple[OptionTemplate, ...]


_ENHANCED_167 = OptionTemplate(
    1.66667, 1, 160, 1.67,
    "1.67x Enhanced",
    "Great balance of clarity and space",
    "Excellent for productivity. Good text clarity with more screen real estate.",
)

_ENHANCED_125 = OptionTemplate(
    1.25, 1, 120, 1.25,
    "1.25x Enhanced",
    "Slightly larger text for better readability",
    "Good for users who prefer larger text without losing too much screen space.",
)

RESOLUTION_TIERS: tuple[ResolutionTier, ...] = (
    ResolutionTier("6K+", 20_000_000, (
        OptionTemplate(
            3.0, 2, 288, 1.0,
            "3x Ultra Sharp",
            "Perfect scaling for 6K+ displays",
            "Ideal for 6K displays. Maximum clarity with perfect integer scaling.",
            is_recommended=True,
        ),
        OptionTemplate(
            2.0, 2, 192, 1.0,
            "2x High DPI",
            "Excellent clarity with more screen space",
            "Great for productivity on 6K displays. Sharp text with good real estate.",
        ),
        OptionTemplate(
            1.5, 1, 144, 1.5,
            "1.5x Balanced",
            "Maximum screen space with readable text",
            "Maximum productivity mode. Good for multi-window workflows.",
        ),
    )),
    ResolutionTier("5K", 14_745_600, (
        OptionTemplate(
            2.0, 2, 192, 1.0,
            "2x Perfect",
            "Perfect scaling for 5K displays",
            "Ideal for 5K displays. Sharp text with excellent clarity.",
            is_recommended=True,
        ),
        _ENHANCED_167,
        OptionTemplate(
            1.5, 1, 144, 1.5,
            "1.5x Productive",
            "Maximum screen space for workflows",
            "Maximum productivity mode. Ideal for development and design work.",
        ),
    )),
    ResolutionTier("4K", 8_294_400, (
        OptionTemplate(
            2.0, 2, 192, 1.0,
            "2x Perfect",
            "Sharp 4K experience with crisp text",
            "Industry standard for 4K displays. Perfect integer scaling with no blur.",
            is_recommended=True,
        ),
        _ENHANCED_167,
        OptionTemplate(
            1.5, 1, 144, 1.5,
            "1.5x Balanced",
            "More screen space with readable text",
            "Good compromise between space and readability for productivity.",
        ),
    )),
    ResolutionTier("2.8K", 5_184_000, (
        OptionTemplate(
            2.0, 2, 192, 1.0,
            "2x Ultra Sharp",
            "Perfect scaling for 2.8K displays",
            "Ideal for 2.8K displays like Framework 13. Maximum clarity with perfect integer scaling.",
            is_recommended=True,
        ),
        _ENHANCED_167,
        OptionTemplate(
            1.5, 1, 144, 1.5,
            "1.5x Productive",
            "Maximum screen space for workflows",
            "Maximum productivity mode. Ideal for development and multi-tasking.",
        ),
    )),
    ResolutionTier("2.5K/1440p", 3_686_400, (
        OptionTemplate(
            1.5, 1, 144, 1.5,
            "1.5x Sharp",
            "Perfect scaling for 2.5K displays",
            "Ideal for 2.5K displays. Provides crisp text and good screen real estate.",
            is_recommended=True,
        ),
        OptionTemplate(
            1.25, 1, 120, 1.25,
            "1.25x Balanced",
            "More space with readable text",
            "Good balance between space and readability for productivity work.",
        ),
        OptionTemplate(
            1.0, 1, 96, 1.0,
            "1x Native",
            "Native resolution for maximum space",
            "Maximum screen real estate. Good for users with excellent vision.",
        ),
    )),
    ResolutionTier("1080p", 2_073_600, (
        OptionTemplate(
            1.0, 1, 96, 1.0,
            "1x Native",
            "Native resolution with standard scaling",
            "Standard scaling for 1080p displays. Good for most use cases.",
            is_recommended=True,
        ),
        _ENHANCED_125,
        OptionTemplate(
            1.5, 1, 144, 1.5,
            "1.5x Large",
            "Larger text for accessibility",
            "Good for accessibility needs or users with vision difficulties.",
        ),
    )),
    ResolutionTier("low-res", 0, (
        OptionTemplate(
            1.0, 1, 96, 1.0,
            "1x Native",
            "Native resolution with standard scaling",
            "Standard scaling for lower resolution displays.",
            is_recommended=True,
        ),
        _ENHANCED_125,
    )),
)


def resolutionTier_get(monitor: Monitor) -> ResolutionTier:
    """
    Select the tier for a monitor by total pixel count.

    Args:
        monitor: Monitor to classify.

    Returns:
        First tier whose minimum the pixel count reaches.
    """
    pixels: int = monitor.pixelCount_get()
    for tier in RESOLUTION_TIERS:
        if pixels >= tier.min_pixels:
            return tier
    return RESOLUTION_TIERS[-1]


def ppi_estimate(monitor: Monitor) -> float:
    """
    Guess pixel density from the resolution alone.

    No physical size is available, so typical panel sizes for each
    resolution class stand in for it.

    Args:
        monitor: Monitor to estimate.

    Returns:
        Estimated pixels per inch.
    """
    width, height = monitor.width, monitor.height
    if width >= 3840:
        if height >= 2160:
            return 220.0 if width >= 5120 else 160.0
        return 120.0
    if width >= 2880:
        return 220.0 if height >= 1800 else 200.0
    if width >= 2560:
        return 180.0 if height >= 1600 else 140.0
    if width >= 1920:
        return 120.0
    return 100.0


def effectiveSize_get(monitor: Monitor, scale: float) -> tuple[int, int]:
    """
    Logical desktop size after scaling.

    Args:
        monitor: Source monitor.
        scale: Compositor scale factor.

    Returns:
        `(width, height)` floored to whole pixels; zero for a zero scale.
    """
    if scale <= 0:
        return 0, 0
    return math.floor(monitor.width / scale), math.floor(monitor.height / scale)


def screenRealEstate_get(scale: float) -> float:
    """
    Percentage of the native desktop area left after scaling.

    Args:
        scale: Compositor scale factor.

    Returns:
        `100 / scale`; zero for a zero scale.
    """
    if scale <= 0:
        return 0.0
    return 100.0 / scale


def fontMultiplier_get(font_dpi: int, base_dpi: int = settings.BASE_DPI) -> float:
    return font_dpi / base_dpi


def preferredOption_get(options: Sequence[ScalingOption]) -> Optional[ScalingOption]:
    """
    Pick one option when several are recommended.

    The lowest compositor scale among recommended options wins; list order
    breaks ties.

    Args:
        options: Engine output for one monitor.

    Returns:
        Preferred option, or None when nothing is recommended.
    """
    preferred: Optional[ScalingOption] = None
    for option in options:
        if not option.is_recommended:
            continue
        if preferred is None or option.monitor_scale < preferred.monitor_scale:
            preferred = option
    return preferred


class TieredScalingEngine:
    """Production scaling engine backed by the resolution tier table."""

    def scalingOptions_get(self, monitor: Monitor) -> list[ScalingOption]:
        """
        Build ranked scaling options for one monitor.

        Args:
            monitor: Monitor to recommend for.

        Returns:
            Tier options in table order, with the high-PPI override applied.
        """
        tier: ResolutionTier = resolutionTier_get(monitor)
        ppi: float = ppi_estimate(monitor)
        is_high_ppi: bool = ppi > HIGH_PPI_THRESHOLD

        options: list[ScalingOption] = []
        for template in tier.templates:
            effective_width, effective_height = effectiveSize_get(monitor, template.monitor_scale)
            is_recommended: bool = template.is_recommended
            reasoning: str = template.reasoning
            if is_high_ppi and template.monitor_scale == INTEGER_SCALE:
                is_recommended = True
                reasoning += HIGH_PPI_REASONING
            options.append(
                ScalingOption(
                    monitor_scale=template.monitor_scale,
                    gtk_scale=template.gtk_scale,
                    font_dpi=template.font_dpi,
                    font_scale=template.font_scale,
                    display_name=template.display_name,
                    description=template.description,
                    reasoning=reasoning,
                    is_recommended=is_recommended,
                    effective_width=effective_width,
                    effective_height=effective_height,
                )
            )

        logger.debug(
            "%s: tier %s, ~%.0f PPI, %d option(s)",
            monitor.name,
            tier.name,
            ppi,
            len(options),
        )
        return options

    def recommendedScale_get(self, monitor: Monitor) -> float:
        """Compositor scale of the first recommended option, 1.0 if none"""
        for option in self.scalingOptions_get(monitor):
            if option.is_recommended:
                return option.monitor_scale
        return 1.0
