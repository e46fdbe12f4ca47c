"""Replay recorded fixes through the advisor on a simulated clock."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterable, List, Mapping, Tuple

from sailtact.core.geodesy import track_distance_meters
from sailtact.core.interfaces import SupportsNotification
from sailtact.core.models import ManeuverRecommendation, NavigationFix
from sailtact.core.performance import BinKey, BinSummary
from sailtact.ingestion.wind import WindInput
from sailtact.runtime.advisor import TacticalAdvisor
from sailtact.settings import AdvisorSettings

__all__ = ["ReplayResult", "replay_track"]


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplayResult:
    """Outcome of :func:`replay_track`."""

    recommendations: Tuple[ManeuverRecommendation, ...]
    fixes: int
    accepted_fixes: int
    recorded_samples: int
    evaluations: int
    distance_m: float
    duration_s: float
    performance: Mapping[BinKey, BinSummary]


def replay_track(
    fixes: Iterable[NavigationFix],
    wind: WindInput,
    settings: AdvisorSettings | None = None,
    *,
    notifier: SupportsNotification | None = None,
) -> ReplayResult:
    """Feed ``fixes`` in order and evaluate every ``eval_interval_s`` of fix time.

    Fix timestamps drive both the throttling of the navigation feed and the
    evaluation cadence: an evaluation due at time *t* sees the state built
    from the fixes recorded before *t*.
    """

    ordered = list(fixes)
    settings = (settings or AdvisorSettings()).validate()
    clock_value = [ordered[0].timestamp if ordered else 0.0]
    advisor = TacticalAdvisor(
        settings,
        notifier=notifier,
        clock=lambda: clock_value[0],
        monotonic=lambda: clock_value[0],
    )
    advisor.set_wind(wind)

    recommendations: List[ManeuverRecommendation] = []
    evaluations = 0
    accepted = 0
    interval = settings.eval_interval_s
    next_evaluation = ordered[0].timestamp + interval if ordered else 0.0

    with advisor:
        for fix in ordered:
            while next_evaluation <= fix.timestamp:
                clock_value[0] = next_evaluation
                evaluations += 1
                recommendation = advisor.evaluate(now=next_evaluation)
                if recommendation is not None:
                    recommendations.append(recommendation)
                next_evaluation += interval
            clock_value[0] = fix.timestamp
            if advisor.submit_fix(fix, arrival=fix.timestamp):
                accepted += 1

    coordinates = [fix.coordinate for fix in ordered if fix.coordinate is not None]
    duration = ordered[-1].timestamp - ordered[0].timestamp if ordered else 0.0
    result = ReplayResult(
        recommendations=tuple(recommendations),
        fixes=len(ordered),
        accepted_fixes=accepted,
        recorded_samples=advisor.recorded_samples,
        evaluations=evaluations,
        distance_m=track_distance_meters(coordinates),
        duration_s=duration,
        performance=advisor.model.snapshot(),
    )
    logger.info(
        "Track replay finished.",
        extra={
            "event": "replay.finished",
            "fixes": result.fixes,
            "accepted_fixes": accepted,
            "evaluations": evaluations,
            "recommendations": len(recommendations),
        },
    )
    return result
