"""Periodic maneuver decision.

Each evaluation compares the VMG on the current heading with the VMG the
boat is predicted to make after turning through the configured angle onto
the other tack.  The predicted speed comes from the learned
:class:`~sailtact.core.performance.PerformanceModel` for the opposite tack at
the new wind angle, falling back to the current speed when nothing has been
learned for that bin yet.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Callable

from sailtact.core.angles import normalize_unsigned, signed_delta
from sailtact.core.interfaces import SupportsEvaluationSettings
from sailtact.core.models import (
    ManeuverKind,
    ManeuverRecommendation,
    NavigationState,
    TackSide,
    TurnDirection,
)
from sailtact.core.performance import PerformanceModel
from sailtact.core.vmg import tack_for, true_wind_angle, vmg

__all__ = ["ManeuverEvaluator"]


logger = logging.getLogger(__name__)


def _finite(value: float | None) -> float | None:
    if value is None or not math.isfinite(value):
        return None
    return float(value)


class ManeuverEvaluator:
    """Turn the current state and learned model into zero or one recommendation."""

    def __init__(
        self,
        model: PerformanceModel,
        settings: Callable[[], SupportsEvaluationSettings],
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._model = model
        self._settings = settings
        self._clock = clock

    @property
    def model(self) -> PerformanceModel:
        return self._model

    def evaluate(
        self,
        state: NavigationState,
        twd_deg: float | None,
        *,
        now: float | None = None,
    ) -> ManeuverRecommendation | None:
        """Return a recommendation when switching tack gains enough VMG.

        Missing heading, wind direction or speed make the tick a no-op.
        """

        heading = _finite(state.effective_heading)
        twd = _finite(twd_deg)
        sog = _finite(state.sog_mps)
        if heading is None or twd is None or sog is None:
            logger.debug(
                "Maneuver evaluation skipped (incomplete inputs).",
                extra={
                    "event": "evaluator.skipped",
                    "has_heading": heading is not None,
                    "has_twd": twd is not None,
                    "has_sog": sog is not None,
                },
            )
            return None

        settings = self._settings()
        current_vmg = vmg(sog, heading, twd)
        current_tack = tack_for(heading, twd)
        turn_sign = -1.0 if current_tack is TackSide.PORT else 1.0
        alt_heading = normalize_unsigned(heading + turn_sign * settings.preferred_turn_angle_deg)
        alt_twa = true_wind_angle(alt_heading, twd)

        learned = self._model.average_speed(alt_twa, current_tack.opposite)
        predicted_sog = learned if learned is not None else sog
        alt_vmg = vmg(predicted_sog, alt_heading, twd)

        if not alt_vmg > current_vmg + settings.threshold_mps:
            logger.debug(
                "No maneuver gain above threshold.",
                extra={
                    "event": "evaluator.no_gain",
                    "current_vmg": current_vmg,
                    "predicted_vmg": alt_vmg,
                    "threshold_mps": settings.threshold_mps,
                    "learned": learned is not None,
                },
            )
            return None

        kind = ManeuverKind.TACK if current_vmg >= 0.0 else ManeuverKind.JIBE
        if signed_delta(heading, alt_heading) > 0.0:
            direction = TurnDirection.RIGHT
        else:
            direction = TurnDirection.LEFT

        return ManeuverRecommendation(
            kind=kind,
            turn_direction=direction,
            emitted_at=self._clock() if now is None else now,
            current_vmg=current_vmg,
            predicted_vmg=alt_vmg,
            alternate_heading_deg=alt_heading,
            predicted_sog_mps=predicted_sog,
        )
