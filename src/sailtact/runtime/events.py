"""Explicit publish/subscribe channel for advisor events."""

from __future__ import annotations

from dataclasses import dataclass
import itertools
import logging
import threading
from typing import Any, Callable, Dict, Tuple, Type, TypeVar

from sailtact.core.models import ManeuverRecommendation, NavigationState

__all__ = [
    "AdvisorEvent",
    "EventBus",
    "RecommendationEmitted",
    "StateChanged",
    "Subscription",
]


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AdvisorEvent:
    """Base class of the events delivered by :class:`EventBus`."""


@dataclass(frozen=True, slots=True)
class StateChanged(AdvisorEvent):
    """Navigation snapshot after an accepted update, with the resolved TWD."""

    state: NavigationState
    twd_deg: float | None = None


@dataclass(frozen=True, slots=True)
class RecommendationEmitted(AdvisorEvent):
    recommendation: ManeuverRecommendation


_E = TypeVar("_E", bound=AdvisorEvent)


@dataclass(frozen=True)
class Subscription:
    """Handle returned by :meth:`EventBus.subscribe`."""

    bus: "EventBus"
    token: int

    def cancel(self) -> None:
        self.bus.unsubscribe(self)


class EventBus:
    """Deliver events synchronously to the subscribers of their type.

    Callbacks run on the publishing thread.  A subscriber that raises is
    logged and does not prevent delivery to the remaining subscribers.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscribers: Dict[int, Tuple[Type[AdvisorEvent], Callable[[Any], None]]] = {}
        self._tokens = itertools.count(1)

    def subscribe(self, event_type: Type[_E], callback: Callable[[_E], None]) -> Subscription:
        with self._lock:
            token = next(self._tokens)
            self._subscribers[token] = (event_type, callback)
        return Subscription(self, token)

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove ``subscription``; unknown or repeated calls are ignored."""

        with self._lock:
            self._subscribers.pop(subscription.token, None)

    def publish(self, event: AdvisorEvent) -> int:
        """Deliver ``event`` and return how many subscribers received it."""

        with self._lock:
            targets = [
                callback
                for event_type, callback in self._subscribers.values()
                if isinstance(event, event_type)
            ]
        delivered = 0
        for callback in targets:
            try:
                callback(event)
            except Exception:
                logger.exception(
                    "Event subscriber failed.",
                    extra={"event": "events.subscriber_failed", "event_type": type(event).__name__},
                )
                continue
            delivered += 1
        return delivered

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscribers)
