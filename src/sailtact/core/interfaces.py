"""Structural typing interfaces for the decision engine collaborators.

The protocols describe the attributes the core reads so that callers can
hand in their own settings objects or notification sinks without depending
on the concrete classes shipped with the package.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from sailtact.core.models import ManeuverRecommendation

__all__ = [
    "SupportsEvaluationSettings",
    "SupportsNotification",
]


@runtime_checkable
class SupportsEvaluationSettings(Protocol):
    """Parameters consumed by :class:`~sailtact.core.evaluator.ManeuverEvaluator`."""

    threshold_mps: float
    preferred_turn_angle_deg: float


@runtime_checkable
class SupportsNotification(Protocol):
    """Sink for maneuver recommendations (haptics, speech, banners, ...)."""

    def notify(self, recommendation: ManeuverRecommendation, *, announce: bool = False) -> None:
        ...
