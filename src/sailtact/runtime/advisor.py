"""Runtime wiring of the maneuver decision engine.

:class:`TacticalAdvisor` connects the navigation feed, the wind input, the
learned performance model, the evaluator, the settings store, the event bus,
the periodic ticker and a notification sink:

* every accepted navigation update records one speed sample when heading,
  true wind direction and speed are all known, then publishes
  :class:`~sailtact.runtime.events.StateChanged`;
* every ticker period runs :meth:`TacticalAdvisor.evaluate`, which publishes
  :class:`~sailtact.runtime.events.RecommendationEmitted` and notifies the
  sink when switching tack gains enough VMG.
"""

from __future__ import annotations

import logging
import threading
import time
from types import TracebackType
from typing import Callable, Optional, Type

from sailtact.core.evaluator import ManeuverEvaluator
from sailtact.core.interfaces import SupportsNotification
from sailtact.core.models import (
    Coordinate,
    ManeuverRecommendation,
    NavigationFix,
    NavigationState,
    WaypointInfo,
)
from sailtact.core.performance import PerformanceModel
from sailtact.core.vmg import tack_for, true_wind_angle
from sailtact.ingestion.navigation import NavigationFeed
from sailtact.ingestion.wind import WindInput
from sailtact.notifications import LoggingNotifier
from sailtact.runtime.events import EventBus, RecommendationEmitted, StateChanged
from sailtact.runtime.scheduler import PeriodicTicker, TickHandle
from sailtact.settings import AdvisorSettings, SettingsStore

__all__ = ["TacticalAdvisor"]


logger = logging.getLogger(__name__)


class TacticalAdvisor:
    """Live tack/jibe advisor for a single boat."""

    def __init__(
        self,
        settings: AdvisorSettings | SettingsStore | None = None,
        *,
        model: PerformanceModel | None = None,
        bus: EventBus | None = None,
        notifier: SupportsNotification | None = None,
        ticker: PeriodicTicker | None = None,
        clock: Callable[[], float] = time.time,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        if isinstance(settings, SettingsStore):
            self.settings = settings
        else:
            self.settings = SettingsStore(settings)
        current = self.settings.get()

        self.model = model or PerformanceModel(
            bin_width_deg=current.bin_width_deg,
            max_samples_per_bin=current.max_samples_per_bin,
        )
        self.bus = bus or EventBus()
        self.notifier: SupportsNotification = notifier or LoggingNotifier()
        self.feed = NavigationFeed(
            min_fix_interval_s=current.min_fix_interval_s,
            on_update=self._on_state,
            clock=monotonic,
        )
        self.evaluator = ManeuverEvaluator(self.model, self.settings.get, clock=clock)

        self._ticker = ticker or PeriodicTicker()
        self._handle: Optional[TickHandle] = None
        self._alerts_lock = threading.Lock()
        self._wind = WindInput()
        self._recorded = 0
        self._recorded_lock = threading.Lock()
        self.settings.add_listener(self._apply_settings)

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------
    @property
    def wind(self) -> WindInput:
        return self._wind

    def set_wind(self, wind: WindInput) -> None:
        self._wind = wind

    def set_wind_direction(self, text: str) -> None:
        """Use a typed true wind direction (compass degrees)."""

        self._wind = WindInput.direction(text)

    def set_wind_angle(self, text: str) -> None:
        """Use a typed true wind angle relative to the bow."""

        self._wind = WindInput.angle(text)

    def submit_fix(self, fix: NavigationFix, *, arrival: float | None = None) -> bool:
        return self.feed.update_fix(fix, arrival=arrival)

    def submit_heading(
        self,
        true_heading_deg: float | None,
        magnetic_heading_deg: float | None = None,
    ) -> None:
        self.feed.update_heading(true_heading_deg, magnetic_heading_deg)

    @property
    def state(self) -> NavigationState:
        return self.feed.state

    @property
    def recorded_samples(self) -> int:
        return self._recorded

    def current_twd(self, state: NavigationState | None = None) -> float | None:
        """Resolve the wind input against ``state`` (default: latest state)."""

        state = state or self.feed.state
        return self._wind.resolve_twd(
            state.effective_heading,
            twa_positive_starboard=self.settings.get().twa_positive_starboard,
        )

    # ------------------------------------------------------------------
    # Waypoint
    # ------------------------------------------------------------------
    def set_start_waypoint(self) -> Optional[Coordinate]:
        return self.feed.set_start_waypoint()

    def waypoint_info(self) -> Optional[WaypointInfo]:
        return self.feed.waypoint_info()

    # ------------------------------------------------------------------
    # Recording and evaluation
    # ------------------------------------------------------------------
    def _on_state(self, state: NavigationState) -> None:
        twd = self.current_twd(state)
        self._record(state, twd)
        self.bus.publish(StateChanged(state=state, twd_deg=twd))

    def _record(self, state: NavigationState, twd: float | None) -> bool:
        heading = state.effective_heading
        sog = state.sog_mps
        if heading is None or sog is None or twd is None:
            return False
        self.model.record_sample(true_wind_angle(heading, twd), tack_for(heading, twd), sog)
        with self._recorded_lock:
            self._recorded += 1
        return True

    def evaluate(self, *, now: float | None = None) -> ManeuverRecommendation | None:
        """Run one evaluation tick against the latest state."""

        state = self.feed.state
        recommendation = self.evaluator.evaluate(state, self.current_twd(state), now=now)
        if recommendation is None:
            return None
        logger.info(
            "Maneuver recommended.",
            extra={
                "event": "advisor.recommendation",
                "kind": recommendation.kind.value,
                "arrow": recommendation.arrow,
                "current_vmg": recommendation.current_vmg,
                "predicted_vmg": recommendation.predicted_vmg,
            },
        )
        self.bus.publish(RecommendationEmitted(recommendation))
        self.notifier.notify(recommendation, announce=self.settings.get().voice_announce)
        return recommendation

    # ------------------------------------------------------------------
    # Alerts ticker
    # ------------------------------------------------------------------
    @property
    def alerts_enabled(self) -> bool:
        handle = self._handle
        return handle is not None and handle.active

    def start_alerts(self) -> TickHandle:
        """(Re)start periodic evaluation; the cadence restarts from now."""

        with self._alerts_lock:
            self._ticker.stop(self._handle)
            interval = self.settings.get().eval_interval_s
            self._handle = self._ticker.start(interval, self._tick, name="sailtact-evaluation")
            handle = self._handle
        logger.info(
            "Maneuver alerts enabled.",
            extra={"event": "advisor.alerts_started", "interval": interval},
        )
        return handle

    def stop_alerts(self) -> None:
        """Stop scheduling evaluations; idempotent."""

        with self._alerts_lock:
            handle, self._handle = self._handle, None
        if handle is not None:
            self._ticker.stop(handle)
            logger.info("Maneuver alerts disabled.", extra={"event": "advisor.alerts_stopped"})

    def _tick(self) -> None:
        self.evaluate()

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    def update_settings(self, **changes: object) -> AdvisorSettings:
        return self.settings.update(**changes)

    def _apply_settings(self, previous: AdvisorSettings, updated: AdvisorSettings) -> None:
        if updated.bin_width_deg != previous.bin_width_deg:
            self.model.bin_width_deg = updated.bin_width_deg
        if updated.max_samples_per_bin != previous.max_samples_per_bin:
            self.model.max_samples_per_bin = updated.max_samples_per_bin
        if updated.min_fix_interval_s != previous.min_fix_interval_s:
            self.feed.min_fix_interval_s = updated.min_fix_interval_s
        if updated.eval_interval_s != previous.eval_interval_s and self.alerts_enabled:
            self.start_alerts()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def close(self) -> None:
        self.stop_alerts()
        self.settings.remove_listener(self._apply_settings)

    def __enter__(self) -> "TacticalAdvisor":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()
