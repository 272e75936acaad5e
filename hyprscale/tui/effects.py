"""
Side effects requested by the transition policy.

Transitions never touch the system. They return effect values, and the
runtime loop runs them here between key presses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

from hyprscale.common.errors import ApplyRejectedError
from hyprscale.common.types import Monitor, ScalingOption
from hyprscale.monitor.backend import ConfigApplier
from hyprscale.tui.state import PendingAction

logger = logging.getLogger(__name__)

__all__ = [
    "ApplyScalingEffect",
    "Effect",
    "EffectsReport",
    "QuitEffect",
    "effects_execute",
]


@dataclass(frozen=True)
class QuitEffect:
    """End the session"""


@dataclass(frozen=True)
class ApplyScalingEffect:
    """Apply one option to one monitor"""
    action: PendingAction
    monitor: Monitor
    option: ScalingOption


Effect = Union[QuitEffect, ApplyScalingEffect]


@dataclass
class EffectsReport:
    """
    Outcome of one batch of effects.

    Attributes:
        quit_requested:
            A QuitEffect was in the batch.
        outcomes:
            `(effect, error)` for every apply; `error` is None on success.
    """

    quit_requested: bool = False
    outcomes: list[tuple[ApplyScalingEffect, Optional[ApplyRejectedError]]] = field(
        default_factory=list
    )


def _scaling_apply(effect: ApplyScalingEffect, applier: ConfigApplier) -> None:
    if effect.action == PendingAction.APPLY_MANUAL:
        applier.monitorScale_apply(effect.monitor, effect.option.monitor_scale)
        applier.gtkScale_apply(effect.option.gtk_scale)
        applier.fontDPI_apply(effect.option.font_dpi)
        return
    applier.scalingOption_apply(effect.monitor, effect.option)


def effects_execute(effects: Sequence[Effect], applier: ConfigApplier) -> EffectsReport:
    """
    Run effects in order.

    Apply rejections are caught and reported, never raised; the session
    keeps running after a failed apply.

    Args:
        effects: Effects returned by one transition.
        applier: Applier that performs scaling changes.

    Returns:
        Report with the quit flag and per-apply outcomes.
    """
    report = EffectsReport()
    for effect in effects:
        if isinstance(effect, QuitEffect):
            report.quit_requested = True
            continue

        logger.info(
            "Applying '%s' to %s (%s)",
            effect.option.display_name,
            effect.monitor.name,
            effect.action.value,
        )
        try:
            _scaling_apply(effect, applier)
        except ApplyRejectedError as exc:
            logger.warning("Apply to %s failed: %s", effect.monitor.name, exc)
            report.outcomes.append((effect, exc))
            continue
        report.outcomes.append((effect, None))

    return report
