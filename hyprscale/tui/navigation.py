"""Bounded cursor helpers shared by the transition policy."""

from __future__ import annotations

from typing import Sequence

from hyprscale.common.settings import settings

__all__ = [
    "index_clamp",
    "indexDown_step",
    "indexUp_step",
    "validScale_step",
]


def index_clamp(index: int, count: int) -> int:
    """
    Clamp an index into `[0, count - 1]`.

    Args:
        index: Candidate index.
        count: Collection length.

    Returns:
        Clamped index; 0 for an empty collection.
    """
    if count <= 0:
        return 0
    return max(0, min(count - 1, index))


def indexUp_step(index: int, count: int) -> int:
    return index_clamp(index - 1, count)


def indexDown_step(index: int, count: int) -> int:
    return index_clamp(index + 1, count)


def validScale_step(
    current: float,
    up: bool,
    valid_scales: Sequence[float] = settings.VALID_HYPRLAND_SCALES,
) -> float:
    """
    Move one step through the valid scale list.

    A value that is not on the list first snaps to its nearest entry, then
    steps from there. Both ends of the list are sticky.

    Args:
        current: Current scale value.
        up: Step toward larger scales.
        valid_scales: Ascending list of allowed scales.

    Returns:
        Neighboring valid scale.
    """
    current_index: int = -1
    for index, scale in enumerate(valid_scales):
        if abs(scale - current) < settings.SCALE_MATCH_TOLERANCE:
            current_index = index
            break

    if current_index == -1:
        current_index = min(
            range(len(valid_scales)), key=lambda index: abs(valid_scales[index] - current)
        )

    step: int = 1 if up else -1
    return valid_scales[index_clamp(current_index + step, len(valid_scales))]
