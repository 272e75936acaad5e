"""Unit tests for the interactive transition policy."""

from __future__ import annotations

from dataclasses import replace

import pytest

from hyprscale.common.errors import ApplyRejectedError
from hyprscale.common.types import DetectionResult
from hyprscale.monitor.memory import FixedScalingEngine
from hyprscale.monitor.scaling import TieredScalingEngine
from hyprscale.tui.effects import ApplyScalingEffect, QuitEffect
from hyprscale.tui.keys import InputKey
from hyprscale.tui.state import (
    MENU_ITEMS,
    AppMode,
    InteractionState,
    PendingAction,
    initialState_create,
)
from hyprscale.tui.transition_state import (
    NO_OPTIONS_MESSAGE,
    applyOutcome_process,
    event_process,
    manualOption_build,
)


@pytest.fixture
def engine() -> TieredScalingEngine:
    return TieredScalingEngine()


@pytest.fixture
def state(laptop_monitor, uhd_monitor, engine) -> InteractionState:
    detection = DetectionResult(
        monitors=(laptop_monitor, uhd_monitor), is_demo_mode=False, source="hyprctl"
    )
    return initialState_create(detection, engine, (("hyprctl", True),))


def keys_press(state: InteractionState, engine, *keys: InputKey) -> InteractionState:
    for key in keys:
        state, _effects = event_process(state, key, engine)
    return state


class TestInitialState:
    """Tests for the starting state."""

    def test_dashboardWithFirstMonitorOptions(self, state, engine, laptop_monitor) -> None:
        """
        Session starts on the dashboard with options for the first monitor.

        Returns:
            None.
        """
        assert state.mode == AppMode.DASHBOARD
        assert state.selected_monitor_index == 0
        assert list(state.scaling_options) == engine.scalingOptions_get(laptop_monitor)
        assert (state.manual_monitor_scale, state.manual_gtk_scale, state.manual_font_dpi) == (1.0, 1, 96)

    def test_emptyDetection_hasNoOptions(self, engine) -> None:
        empty = initialState_create(DetectionResult((), True, "memory"), engine)
        assert empty.scaling_options == ()
        assert empty.selectedMonitor_get() is None


class TestGlobalKeys:
    """Tests for quit and help handling."""

    @pytest.mark.parametrize("mode", list(AppMode))
    def test_quit_fromEveryMode(self, state, engine, mode: AppMode) -> None:
        current = replace(state, mode=mode)
        next_state, effects = event_process(current, InputKey.QUIT, engine)
        assert effects == [QuitEffect()]
        assert next_state.mode == mode

    def test_help_fromConfirmation_dropsPending(self, state, engine) -> None:
        """
        Leaving CONFIRMATION through help discards the staged change.

        Returns:
            None.
        """
        confirming = keys_press(state, engine, InputKey.DOWN, InputKey.DOWN, InputKey.SELECT, InputKey.SELECT)
        assert confirming.mode == AppMode.CONFIRMATION

        helped, effects = event_process(confirming, InputKey.HELP, engine)
        assert helped.mode == AppMode.HELP
        assert helped.pending_action == PendingAction.NONE
        assert helped.pending_option is None
        assert effects == []

    def test_help_inHelp_isNoop(self, state, engine) -> None:
        helped = keys_press(state, engine, InputKey.HELP)
        again, effects = event_process(helped, InputKey.HELP, engine)
        assert again == helped
        assert effects == []


class TestDashboard:
    """Tests for menu navigation."""

    def test_menuIndex_clamped(self, state, engine) -> None:
        assert keys_press(state, engine, InputKey.UP).menu_index == 0
        bottom = keys_press(state, engine, *([InputKey.DOWN] * 20))
        assert bottom.menu_index == len(MENU_ITEMS) - 1

    @pytest.mark.parametrize(
        "index,mode",
        [
            (0, AppMode.DASHBOARD),
            (1, AppMode.MONITOR_SELECTION),
            (2, AppMode.SCALING_OPTIONS),
            (3, AppMode.MANUAL_SCALING),
            (4, AppMode.SETTINGS),
            (5, AppMode.HELP),
        ],
    )
    def test_select_entersMode(self, state, engine, index: int, mode: AppMode) -> None:
        next_state, effects = event_process(replace(state, menu_index=index), InputKey.SELECT, engine)
        assert next_state.mode == mode
        assert effects == []

    def test_selectExit_quits(self, state, engine) -> None:
        _next, effects = event_process(replace(state, menu_index=6), InputKey.SELECT, engine)
        assert effects == [QuitEffect()]


class TestMonitorSelection:
    """Tests for monitor switching."""

    def test_down_recomputesOptionsAndResetsCursor(self, state, engine, uhd_monitor) -> None:
        """
        Changing monitor re-runs the engine and resets the option cursor.

        Returns:
            None.
        """
        selecting = replace(state, mode=AppMode.MONITOR_SELECTION, selected_option_index=2)
        next_state = keys_press(selecting, engine, InputKey.DOWN)

        assert next_state.selected_monitor_index == 1
        assert list(next_state.scaling_options) == engine.scalingOptions_get(uhd_monitor)
        assert next_state.selected_option_index == 0

    def test_unchangedIndex_doesNotQueryEngine(self, state, sample_options) -> None:
        engine = FixedScalingEngine(sample_options)
        selecting = replace(state, mode=AppMode.MONITOR_SELECTION)
        keys_press(selecting, engine, InputKey.UP)
        assert engine.requested == []

    def test_select_returnsToDashboard(self, state, engine) -> None:
        selecting = replace(state, mode=AppMode.MONITOR_SELECTION, menu_index=1)
        next_state = keys_press(selecting, engine, InputKey.SELECT)
        assert next_state.mode == AppMode.DASHBOARD
        assert next_state.menu_index == 0

    def test_emptyMonitors_safe(self, engine) -> None:
        """
        Moving and selecting with no monitors never raises.

        Returns:
            None.
        """
        empty = replace(initialState_create(DetectionResult((), True, "memory"), engine), mode=AppMode.MONITOR_SELECTION)
        moved = keys_press(empty, engine, InputKey.DOWN, InputKey.UP)
        assert moved.selected_monitor_index == 0
        assert keys_press(moved, engine, InputKey.SELECT).mode == AppMode.DASHBOARD


class TestScalingOptions:
    """Tests for smart scaling selection."""

    def test_select_entersConfirmationWithSmartPending(self, state, engine, laptop_monitor) -> None:
        options_state = replace(state, mode=AppMode.SCALING_OPTIONS)
        next_state = keys_press(options_state, engine, InputKey.DOWN, InputKey.SELECT)

        assert next_state.mode == AppMode.CONFIRMATION
        assert next_state.pending_action == PendingAction.APPLY_SMART
        assert next_state.pending_monitor == laptop_monitor
        assert next_state.pending_option == state.scaling_options[1]

    def test_escapeFromConfirmation_returnsToOptions(self, state, engine) -> None:
        confirming = keys_press(replace(state, mode=AppMode.SCALING_OPTIONS), engine, InputKey.SELECT)
        back = keys_press(confirming, engine, InputKey.ESCAPE)

        assert back.mode == AppMode.SCALING_OPTIONS
        assert back.pending_action == PendingAction.NONE
        assert back.pending_monitor is None

    def test_optionCursor_clamped(self, state, engine) -> None:
        options_state = replace(state, mode=AppMode.SCALING_OPTIONS)
        bottom = keys_press(options_state, engine, *([InputKey.DOWN] * 10))
        assert bottom.selected_option_index == len(state.scaling_options) - 1

    def test_manualKey_switchesToManual(self, state, engine) -> None:
        options_state = replace(state, mode=AppMode.SCALING_OPTIONS)
        assert keys_press(options_state, engine, InputKey.MANUAL).mode == AppMode.MANUAL_SCALING


class TestManualScaling:
    """Tests for manual control adjustment."""

    @pytest.fixture
    def manual(self, state) -> InteractionState:
        return replace(state, mode=AppMode.MANUAL_SCALING)

    def test_scaleSteps_throughValidList(self, manual, engine) -> None:
        stepped = keys_press(manual, engine, InputKey.RIGHT, InputKey.RIGHT)
        assert stepped.manual_monitor_scale == 1.33333

    def test_scaleClamped_atBothEnds(self, manual, engine) -> None:
        assert keys_press(manual, engine, InputKey.LEFT).manual_monitor_scale == 1.0
        top = keys_press(manual, engine, *([InputKey.RIGHT] * 20))
        assert top.manual_monitor_scale == 3.0

    def test_offListScale_snapsThenSteps(self, manual, engine) -> None:
        stepped = keys_press(replace(manual, manual_monitor_scale=1.4), engine, InputKey.RIGHT)
        assert stepped.manual_monitor_scale == 1.5

    def test_gtkScale_clamped(self, manual, engine) -> None:
        on_gtk = keys_press(manual, engine, InputKey.DOWN)
        assert keys_press(on_gtk, engine, *([InputKey.RIGHT] * 5)).manual_gtk_scale == 3
        assert keys_press(on_gtk, engine, InputKey.LEFT).manual_gtk_scale == 1

    def test_fontDpi_stepsAndClamps(self, manual, engine) -> None:
        on_dpi = keys_press(manual, engine, InputKey.DOWN, InputKey.DOWN)
        assert keys_press(on_dpi, engine, InputKey.RIGHT).manual_font_dpi == 108
        assert keys_press(on_dpi, engine, *([InputKey.RIGHT] * 30)).manual_font_dpi == 288
        assert keys_press(on_dpi, engine, *([InputKey.LEFT] * 5)).manual_font_dpi == 72

    def test_controlCursor_clamped(self, manual, engine) -> None:
        assert keys_press(manual, engine, *([InputKey.DOWN] * 5)).selected_manual_control == 2

    def test_select_buildsManualOption(self, manual, engine, laptop_monitor) -> None:
        """
        Selecting stages a synthetic option built from the manual values.

        Returns:
            None.
        """
        staged = keys_press(manual, engine, InputKey.RIGHT, InputKey.RIGHT, InputKey.RIGHT, InputKey.SELECT)

        assert staged.mode == AppMode.CONFIRMATION
        assert staged.pending_action == PendingAction.APPLY_MANUAL
        assert staged.pending_option.display_name == "Manual Settings"
        assert staged.pending_option.monitor_scale == 1.5
        assert staged.pending_option.effective_width == 1920
        assert staged.pending_monitor == laptop_monitor

    def test_escapeFromManualConfirmation_returnsToManual(self, manual, engine) -> None:
        confirming = keys_press(manual, engine, InputKey.SELECT)
        assert keys_press(confirming, engine, InputKey.ESCAPE).mode == AppMode.MANUAL_SCALING

    def test_emptyMonitors_selectSetsError(self, engine) -> None:
        """
        With no monitors the mode stays and an error is shown.

        Returns:
            None.
        """
        empty = replace(
            initialState_create(DetectionResult((), True, "memory"), engine),
            mode=AppMode.MANUAL_SCALING,
        )
        next_state, effects = event_process(empty, InputKey.SELECT, engine)
        assert next_state.mode == AppMode.MANUAL_SCALING
        assert next_state.error_message
        assert effects == []

    def test_noOptions_selectNamesEmptyOptionList(self, state) -> None:
        """
        With monitors but no options the error names the missing options.

        Returns:
            None.
        """
        engine = FixedScalingEngine([])
        no_options = replace(state, mode=AppMode.SCALING_OPTIONS, scaling_options=())
        next_state, effects = event_process(no_options, InputKey.SELECT, engine)
        assert next_state.mode == AppMode.SCALING_OPTIONS
        assert next_state.error_message == NO_OPTIONS_MESSAGE
        assert "monitors" not in next_state.error_message
        assert effects == []

    def test_manualOption_build_fontScale(self, state, laptop_monitor) -> None:
        option = manualOption_build(replace(state, manual_font_dpi=144), laptop_monitor)
        assert option.font_scale == 1.5
        assert option.is_recommended is False


class TestConfirmation:
    """Tests for applying a staged change."""

    def test_select_emitsApplyAndUpdatesScale(self, state, engine, uhd_monitor) -> None:
        """
        Confirming emits one apply effect and updates the matching monitor.

        Returns:
            None.
        """
        on_uhd = keys_press(replace(state, mode=AppMode.MONITOR_SELECTION), engine, InputKey.DOWN)
        confirming = keys_press(replace(on_uhd, mode=AppMode.SCALING_OPTIONS), engine, InputKey.SELECT)
        done, effects = event_process(confirming, InputKey.SELECT, engine)

        assert effects == [
            ApplyScalingEffect(
                action=PendingAction.APPLY_SMART,
                monitor=uhd_monitor,
                option=confirming.pending_option,
            )
        ]
        assert done.mode == AppMode.DASHBOARD
        assert done.menu_index == 0
        assert done.monitors[1].scale == 2.0
        assert done.monitors[0].scale == state.monitors[0].scale
        assert done.pending_action == PendingAction.NONE
        assert done.pending_option is None

    def test_pendingMonitorMissing_scaleUntouched(self, state, engine, sample_options) -> None:
        """
        A pending monitor no longer in the list leaves monitors unchanged.

        Returns:
            None.
        """
        ghost = replace(state.monitors[0], name="HDMI-A-9")
        confirming = replace(
            state,
            mode=AppMode.CONFIRMATION,
            pending_action=PendingAction.APPLY_SMART,
            pending_monitor=ghost,
            pending_option=sample_options[2],
        )
        done, effects = event_process(confirming, InputKey.SELECT, engine)
        assert done.monitors == state.monitors
        assert len(effects) == 1


class TestApplyOutcome:
    """Tests for folding apply results into the state."""

    def test_success_setsStatus(self, state, sample_options, uhd_monitor) -> None:
        effect = ApplyScalingEffect(PendingAction.APPLY_SMART, uhd_monitor, sample_options[0])
        next_state = applyOutcome_process(state, effect, None)
        assert "Applied 2x Perfect to DP-1" in next_state.status_message
        assert next_state.error_message is None

    def test_failure_setsError(self, state, sample_options, uhd_monitor) -> None:
        effect = ApplyScalingEffect(PendingAction.APPLY_SMART, uhd_monitor, sample_options[0])
        next_state = applyOutcome_process(state, effect, ApplyRejectedError("invalid scale"))
        assert "invalid scale" in next_state.error_message
        assert next_state.status_message is None

    def test_failure_restoresPreviousScale(self, state, sample_options, uhd_monitor) -> None:
        """
        A rejected apply puts back the scale the monitor had before confirming.

        Returns:
            None.
        """
        effect = ApplyScalingEffect(PendingAction.APPLY_SMART, uhd_monitor, sample_options[0])
        applied = replace(
            state, monitors=(state.monitors[0], replace(uhd_monitor, scale=2.0))
        )

        next_state = applyOutcome_process(applied, effect, ApplyRejectedError("invalid scale"))

        assert next_state.monitors[1].scale == 1.5
        assert next_state.monitors[0] == state.monitors[0]

    def test_success_keepsAppliedScale(self, state, sample_options, uhd_monitor) -> None:
        effect = ApplyScalingEffect(PendingAction.APPLY_SMART, uhd_monitor, sample_options[0])
        applied = replace(
            state, monitors=(state.monitors[0], replace(uhd_monitor, scale=2.0))
        )
        assert applyOutcome_process(applied, effect, None).monitors[1].scale == 2.0

    def test_nextKey_clearsMessages(self, state, engine) -> None:
        shown = replace(state, status_message="done", error_message="bad")
        cleared = keys_press(shown, engine, InputKey.DOWN)
        assert cleared.status_message is None
        assert cleared.error_message is None
