"""Navigation state maintained from a positioning and compass source.

:class:`NavigationFeed` is the boundary between raw sensor readings and the
decision engine.  It translates negative "unknown" sentinels to ``None``,
drops location fixes that arrive faster than the configured minimum
interval and publishes an immutable :class:`NavigationState` after every
accepted update.  It also tracks the optional start waypoint.
"""

from __future__ import annotations

from dataclasses import replace
import logging
import math
import threading
import time
from typing import Callable, Optional

from sailtact.core.angles import normalize_unsigned
from sailtact.core.geodesy import bearing_degrees, distance_meters
from sailtact.core.models import Coordinate, NavigationFix, NavigationState, WaypointInfo

__all__ = ["NavigationFeed", "StateCallback"]


logger = logging.getLogger(__name__)


StateCallback = Callable[[NavigationState], None]

DEFAULT_MIN_FIX_INTERVAL = 0.8


def _measured(value: float | None) -> float | None:
    """Return ``value`` unless it is a negative or non-finite sentinel."""

    if value is None or not math.isfinite(value) or value < 0.0:
        return None
    return float(value)


class NavigationFeed:
    """Thread-safe holder of the latest navigation snapshot."""

    def __init__(
        self,
        *,
        min_fix_interval_s: float = DEFAULT_MIN_FIX_INTERVAL,
        on_update: StateCallback | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._lock = threading.Lock()
        self._state = NavigationState()
        self._waypoint: Optional[Coordinate] = None
        self._last_fix_arrival: Optional[float] = None
        self._min_fix_interval_s = float(min_fix_interval_s)
        self._on_update = on_update
        self._clock = clock
        self._accepted = 0
        self._throttled = 0

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def min_fix_interval_s(self) -> float:
        return self._min_fix_interval_s

    @min_fix_interval_s.setter
    def min_fix_interval_s(self, value: float) -> None:
        self._min_fix_interval_s = max(0.0, float(value))

    @property
    def statistics(self) -> dict[str, int]:
        return {"accepted": self._accepted, "throttled": self._throttled}

    @property
    def start_waypoint(self) -> Optional[Coordinate]:
        return self._waypoint

    def update_fix(self, fix: NavigationFix, *, arrival: float | None = None) -> bool:
        """Merge a location fix into the state.

        Returns ``False`` when the fix was dropped for arriving too soon after
        the previously accepted one.
        """

        now = self._clock() if arrival is None else arrival
        with self._lock:
            last = self._last_fix_arrival
            if last is not None and now - last < self._min_fix_interval_s:
                self._throttled += 1
                logger.debug(
                    "Navigation fix throttled.",
                    extra={
                        "event": "navigation.fix_throttled",
                        "elapsed": now - last,
                        "min_interval": self._min_fix_interval_s,
                    },
                )
                return False
            self._last_fix_arrival = now
            cog = _measured(fix.cog_deg)
            heading = _measured(fix.heading_deg)
            state = replace(
                self._state,
                coordinate=fix.coordinate,
                sog_mps=_measured(fix.sog_mps),
                cog_deg=normalize_unsigned(cog) if cog is not None else None,
                timestamp=fix.timestamp,
            )
            if heading is not None:
                state = replace(state, heading_deg=normalize_unsigned(heading))
            self._state = state
            self._accepted += 1
        self._publish(state)
        return True

    def update_heading(
        self,
        true_heading_deg: float | None,
        magnetic_heading_deg: float | None = None,
    ) -> None:
        """Record a compass reading, preferring true over magnetic heading."""

        heading = _measured(true_heading_deg)
        if heading is None:
            heading = _measured(magnetic_heading_deg)
        if heading is None:
            return
        with self._lock:
            state = replace(self._state, heading_deg=normalize_unsigned(heading))
            self._state = state
        self._publish(state)

    def set_start_waypoint(self) -> Optional[Coordinate]:
        """Store the current position as start waypoint; no-op without a fix."""

        with self._lock:
            coordinate = self._state.coordinate
            if coordinate is None:
                return None
            self._waypoint = coordinate
        logger.info(
            "Start waypoint saved.",
            extra={
                "event": "navigation.waypoint_saved",
                "latitude": coordinate.latitude,
                "longitude": coordinate.longitude,
            },
        )
        return coordinate

    def clear_start_waypoint(self) -> None:
        with self._lock:
            self._waypoint = None

    def waypoint_info(self) -> Optional[WaypointInfo]:
        """Distance and bearing from the current position to the start waypoint."""

        with self._lock:
            waypoint = self._waypoint
            position = self._state.coordinate
        if waypoint is None or position is None:
            return None
        return WaypointInfo(
            waypoint=waypoint,
            distance_m=distance_meters(position, waypoint),
            bearing_deg=bearing_degrees(position, waypoint),
        )

    def _publish(self, state: NavigationState) -> None:
        callback = self._on_update
        if callback is not None:
            callback(state)
