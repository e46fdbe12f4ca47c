"""Runtime services: event bus, periodic ticker, advisor and replay."""

from sailtact.runtime.advisor import TacticalAdvisor
from sailtact.runtime.events import (
    AdvisorEvent,
    EventBus,
    RecommendationEmitted,
    StateChanged,
    Subscription,
)
from sailtact.runtime.replay import ReplayResult, replay_track
from sailtact.runtime.scheduler import PeriodicTicker, TickHandle

__all__ = [
    "AdvisorEvent",
    "EventBus",
    "PeriodicTicker",
    "RecommendationEmitted",
    "ReplayResult",
    "StateChanged",
    "Subscription",
    "TacticalAdvisor",
    "TickHandle",
    "replay_track",
]
