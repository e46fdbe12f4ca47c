"""Runtime settings for the tactical advisor.

:class:`AdvisorSettings` is an immutable snapshot.  :class:`SettingsStore`
holds the current snapshot and swaps it atomically so the recording path,
the evaluation ticker and a settings UI can run concurrently: each operation
reads one consistent snapshot and changes only affect later operations.
"""

from __future__ import annotations

from collections.abc import Mapping as ABCMapping
from dataclasses import dataclass, fields, replace
import logging
import math
import threading
from typing import Any, Callable, List, Mapping, Tuple

__all__ = [
    "AdvisorSettings",
    "SETTING_RANGES",
    "SettingsError",
    "SettingsListener",
    "SettingsStore",
]


logger = logging.getLogger(__name__)


SETTING_RANGES: Mapping[str, Tuple[float, float]] = {
    "threshold_mps": (0.0, 2.0),
    "eval_interval_s": (10.0, 120.0),
    "preferred_turn_angle_deg": (10.0, 180.0),
    "bin_width_deg": (1.0, 20.0),
    "max_samples_per_bin": (5, 500),
    "min_fix_interval_s": (0.0, 60.0),
}

_BOOL_FIELDS = ("twa_positive_starboard", "voice_announce")


class SettingsError(ValueError):
    """Raised when a setting is missing, of the wrong type or out of range."""


@dataclass(frozen=True, slots=True)
class AdvisorSettings:
    """Tunable parameters of the advisor."""

    threshold_mps: float = 0.1
    eval_interval_s: float = 30.0
    preferred_turn_angle_deg: float = 90.0
    bin_width_deg: float = 5.0
    max_samples_per_bin: int = 50
    twa_positive_starboard: bool = True
    voice_announce: bool = False
    min_fix_interval_s: float = 0.8

    def validate(self) -> "AdvisorSettings":
        """Return ``self`` when every value is inside its allowed range."""

        for name, (low, high) in SETTING_RANGES.items():
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise SettingsError(f"{name} must be numeric, got {value!r}")
            if name == "max_samples_per_bin" and int(value) != value:
                raise SettingsError(f"{name} must be an integer, got {value!r}")
            if not math.isfinite(value) or not low <= value <= high:
                raise SettingsError(f"{name}={value!r} outside the allowed range [{low}, {high}]")
        for name in _BOOL_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise SettingsError(f"{name} must be a boolean, got {value!r}")
        return self

    def with_changes(self, **changes: Any) -> "AdvisorSettings":
        """Return a validated copy with ``changes`` applied."""

        known = {field.name for field in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise SettingsError(f"Unknown advisor settings: {', '.join(unknown)}")
        return replace(self, **changes).validate()

    def as_dict(self) -> dict[str, Any]:
        return {field.name: getattr(self, field.name) for field in fields(self)}

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None = None) -> "AdvisorSettings":
        """Coerce the ``[advisor]`` table of a configuration mapping.

        Values that cannot be interpreted fall back to the defaults and
        numbers outside the allowed range are clamped; both cases are logged.
        """

        defaults = cls()
        section = config.get("advisor") if config else None
        if not isinstance(section, ABCMapping):
            return defaults

        def _coerce_bool(name: str, value: Any, fallback: bool) -> bool:
            if isinstance(value, bool):
                return value
            if isinstance(value, str):
                lowered = value.strip().lower()
                if lowered in {"1", "true", "yes", "on"}:
                    return True
                if lowered in {"0", "false", "no", "off"}:
                    return False
            _warn_invalid(name, value, fallback)
            return fallback

        def _coerce_number(name: str, value: Any, fallback: float) -> float:
            try:
                numeric = float(value)
            except (TypeError, ValueError):
                _warn_invalid(name, value, fallback)
                return fallback
            if isinstance(value, bool) or not math.isfinite(numeric):
                _warn_invalid(name, value, fallback)
                return fallback
            low, high = SETTING_RANGES[name]
            clamped = min(high, max(low, numeric))
            if clamped != numeric:
                logger.warning(
                    "Advisor setting clamped to its allowed range.",
                    extra={
                        "event": "settings.clamped",
                        "setting": name,
                        "value": numeric,
                        "clamped": clamped,
                    },
                )
            return clamped

        values: dict[str, Any] = {}
        for name in SETTING_RANGES:
            if name in section:
                values[name] = _coerce_number(name, section[name], getattr(defaults, name))
        if "max_samples_per_bin" in values:
            values["max_samples_per_bin"] = int(round(values["max_samples_per_bin"]))
        for name in _BOOL_FIELDS:
            if name in section:
                values[name] = _coerce_bool(name, section[name], getattr(defaults, name))

        ignored = sorted(set(section) - set(values))
        if ignored:
            logger.warning(
                "Ignoring unknown advisor settings.",
                extra={"event": "settings.unknown_keys", "keys": ignored},
            )
        return replace(defaults, **values).validate()


def _warn_invalid(name: str, value: Any, fallback: Any) -> None:
    logger.warning(
        "Invalid advisor setting replaced by its default.",
        extra={
            "event": "settings.invalid",
            "setting": name,
            "value": repr(value),
            "fallback": fallback,
        },
    )


SettingsListener = Callable[[AdvisorSettings, AdvisorSettings], None]


class SettingsStore:
    """Thread-safe holder of the current :class:`AdvisorSettings`."""

    def __init__(self, initial: AdvisorSettings | None = None) -> None:
        self._lock = threading.RLock()
        # Serializes the swap together with listener delivery.
        self._delivery_lock = threading.RLock()
        self._current = (initial or AdvisorSettings()).validate()
        self._listeners: List[SettingsListener] = []

    def get(self) -> AdvisorSettings:
        return self._current

    __call__ = get

    def update(self, **changes: Any) -> AdvisorSettings:
        """Apply ``changes`` atomically and notify listeners with ``(old, new)``.

        Concurrent updates are delivered one at a time, so the last snapshot a
        listener receives is always the one :meth:`get` returns.
        """

        with self._delivery_lock:
            with self._lock:
                previous = self._current
                updated = previous.with_changes(**changes)
                self._current = updated
                listeners = tuple(self._listeners)
            if updated != previous:
                logger.info(
                    "Advisor settings updated.",
                    extra={"event": "settings.updated", "changes": sorted(changes)},
                )
                for listener in listeners:
                    listener(previous, updated)
        return updated

    def add_listener(self, listener: SettingsListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: SettingsListener) -> None:
        with self._lock:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass
