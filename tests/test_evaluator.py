from __future__ import annotations

import logging
import math

import pytest

from sailtact.core.evaluator import ManeuverEvaluator
from sailtact.core.models import ManeuverKind, TackSide, TurnDirection
from sailtact.core.performance import PerformanceModel
from sailtact.core.vmg import vmg

from tests.helpers import FixedSettings, build_state


def _evaluator(
    model: PerformanceModel | None = None,
    *,
    threshold: float = 0.1,
    turn: float = 90.0,
) -> ManeuverEvaluator:
    return ManeuverEvaluator(
        model or PerformanceModel(),
        FixedSettings(threshold_mps=threshold, preferred_turn_angle_deg=turn),
        clock=lambda: 1234.0,
    )


def test_upwind_tack_uses_learned_opposite_tack_speed() -> None:
    model = PerformanceModel()
    # Heading 0, TWD 10: port tack, a 30° turn lands at TWA 40 on starboard.
    model.record_sample(40.0, TackSide.STARBOARD, 8.0)
    evaluator = _evaluator(model, turn=30.0)

    recommendation = evaluator.evaluate(build_state(0.0, sog_mps=5.0), 10.0)

    assert recommendation is not None
    assert recommendation.kind is ManeuverKind.TACK
    assert recommendation.turn_direction is TurnDirection.LEFT
    assert recommendation.message == "Tack now ←"
    assert recommendation.alternate_heading_deg == pytest.approx(330.0)
    assert recommendation.predicted_sog_mps == pytest.approx(8.0)
    assert recommendation.current_vmg == pytest.approx(5.0 * math.cos(math.radians(10.0)))
    assert recommendation.predicted_vmg == pytest.approx(8.0 * math.cos(math.radians(40.0)))
    assert recommendation.emitted_at == 1234.0
    assert recommendation.gain > 0.1


def test_upwind_without_learned_edge_emits_nothing() -> None:
    evaluator = _evaluator(turn=30.0)
    assert evaluator.evaluate(build_state(0.0, sog_mps=5.0), 10.0) is None


def test_ninety_degree_turn_from_close_hauled_emits_nothing() -> None:
    model = PerformanceModel()
    model.record_sample(100.0, TackSide.STARBOARD, 30.0)
    evaluator = _evaluator(model, turn=90.0)

    assert evaluator.evaluate(build_state(0.0, sog_mps=5.0), 10.0) is None


def test_downwind_on_port_recommends_jibe_left_with_fallback_speed() -> None:
    evaluator = _evaluator()

    recommendation = evaluator.evaluate(build_state(200.0, sog_mps=5.0), 10.0)

    assert recommendation is not None
    assert recommendation.kind is ManeuverKind.JIBE
    assert recommendation.turn_direction is TurnDirection.LEFT
    assert recommendation.message == "Jibe now ←"
    assert recommendation.alternate_heading_deg == pytest.approx(110.0)
    assert recommendation.predicted_sog_mps == pytest.approx(5.0)
    assert recommendation.predicted_vmg == pytest.approx(vmg(5.0, 110.0, 10.0))


def test_downwind_on_starboard_turns_right() -> None:
    recommendation = _evaluator().evaluate(build_state(160.0, sog_mps=5.0), 10.0)

    assert recommendation is not None
    assert recommendation.kind is ManeuverKind.JIBE
    assert recommendation.turn_direction is TurnDirection.RIGHT
    assert recommendation.arrow == "→"
    assert recommendation.alternate_heading_deg == pytest.approx(250.0)


def test_threshold_suppresses_small_gains() -> None:
    # Heading 200, TWD 10 gains roughly 4.06 m/s by jibing.
    assert _evaluator(threshold=2.0).evaluate(build_state(200.0), 10.0) is not None
    model = PerformanceModel()
    model.record_sample(100.0, TackSide.STARBOARD, 0.0)
    low_speed = _evaluator(model, threshold=2.0)
    # A learned speed of zero predicts VMG 0, gain 4.92 still above 2.0.
    assert low_speed.evaluate(build_state(200.0), 10.0) is not None
    stalled = _evaluator(model, threshold=2.0)
    state = build_state(200.0, sog_mps=1.0)
    # Gain of ~0.98 m/s with a stalled prediction stays under the threshold.
    assert stalled.evaluate(state, 10.0) is None


def test_course_over_ground_replaces_missing_heading() -> None:
    state = build_state(None, cog_deg=200.0)
    recommendation = _evaluator().evaluate(state, 10.0)

    assert recommendation is not None
    assert recommendation.kind is ManeuverKind.JIBE


@pytest.mark.parametrize(
    ("state", "twd"),
    [
        (build_state(None, cog_deg=None), 10.0),
        (build_state(200.0, sog_mps=None), 10.0),
        (build_state(200.0), None),
        (build_state(200.0), float("nan")),
        (build_state(float("inf")), 10.0),
    ],
)
def test_incomplete_inputs_skip_silently(state, twd, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="sailtact")

    assert _evaluator().evaluate(state, twd) is None
    assert any(getattr(record, "event", None) == "evaluator.skipped" for record in caplog.records)


def test_explicit_now_overrides_clock() -> None:
    recommendation = _evaluator().evaluate(build_state(200.0), 10.0, now=42.0)
    assert recommendation is not None
    assert recommendation.emitted_at == 42.0


def test_settings_are_read_on_every_evaluation() -> None:
    current = {"settings": FixedSettings(threshold_mps=0.1)}
    evaluator = ManeuverEvaluator(PerformanceModel(), lambda: current["settings"])

    assert evaluator.evaluate(build_state(200.0), 10.0) is not None
    current["settings"] = FixedSettings(threshold_mps=2.0, preferred_turn_angle_deg=10.0)
    # A 10° turn from 200 to 190 barely changes VMG.
    assert evaluator.evaluate(build_state(200.0), 10.0) is None


def test_as_dict_carries_message() -> None:
    recommendation = _evaluator().evaluate(build_state(200.0), 10.0, now=5.0)
    assert recommendation is not None

    payload = recommendation.as_dict()

    assert payload["message"] == "Jibe now ←"
    assert payload["kind"] == "Jibe"
    assert payload["arrow"] == "←"
    assert payload["emitted_at"] == 5.0
