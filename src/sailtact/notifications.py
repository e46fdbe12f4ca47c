"""Notification sinks for maneuver recommendations."""

from __future__ import annotations

import logging
from typing import Callable, List

from sailtact.core.models import ManeuverRecommendation

__all__ = ["CollectingNotifier", "LoggingNotifier"]


logger = logging.getLogger(__name__)


class LoggingNotifier:
    """Default sink: log each recommendation at ``INFO``.

    Devices with haptics or speech plug in their own object implementing
    :class:`~sailtact.core.interfaces.SupportsNotification`.
    """

    def __init__(self, target: logging.Logger | None = None) -> None:
        self._logger = target or logger

    def notify(self, recommendation: ManeuverRecommendation, *, announce: bool = False) -> None:
        payload = recommendation.as_dict()
        # ``message`` is reserved on log records.
        payload.pop("message", None)
        self._logger.info(
            recommendation.message,
            extra={
                "event": "notification.recommendation",
                "announce": announce,
                **payload,
            },
        )


class CollectingNotifier:
    """Keep delivered messages in memory, forwarding them to ``on_message``."""

    def __init__(self, on_message: Callable[[str], None] | None = None) -> None:
        self.messages: List[str] = []
        self.announced: List[str] = []
        self._on_message = on_message

    def notify(self, recommendation: ManeuverRecommendation, *, announce: bool = False) -> None:
        message = recommendation.message
        self.messages.append(message)
        if announce:
            self.announced.append(message)
        if self._on_message is not None:
            self._on_message(message)
