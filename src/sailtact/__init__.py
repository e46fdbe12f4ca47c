"""Top-level package for SailTact.

SailTact tells a sailor, in real time, whether tacking or jibing would
improve velocity made good toward or away from the true wind.  Instead of
assuming the boat sails equally well on both tacks it learns per-tack,
per-wind-angle speeds from the live navigation stream.
"""

from ._version import __version__
from .configuration import load_project_config
from .core import (
    Coordinate,
    ManeuverEvaluator,
    ManeuverKind,
    ManeuverRecommendation,
    NavigationFix,
    NavigationState,
    PerformanceModel,
    TackSide,
    TurnDirection,
    WaypointInfo,
    bearing_degrees,
    distance_meters,
    normalize_signed,
    normalize_unsigned,
    predicted_alt_vmg,
    signed_delta,
    tack_for,
    vmg,
)
from .ingestion import NavigationFeed, WindInput, read_track_log
from .notifications import LoggingNotifier
from .runtime import (
    EventBus,
    PeriodicTicker,
    RecommendationEmitted,
    StateChanged,
    TacticalAdvisor,
    replay_track,
)
from .settings import AdvisorSettings, SettingsError, SettingsStore

__all__ = [
    "AdvisorSettings",
    "Coordinate",
    "EventBus",
    "LoggingNotifier",
    "ManeuverEvaluator",
    "ManeuverKind",
    "ManeuverRecommendation",
    "NavigationFeed",
    "NavigationFix",
    "NavigationState",
    "PerformanceModel",
    "PeriodicTicker",
    "RecommendationEmitted",
    "SettingsError",
    "SettingsStore",
    "StateChanged",
    "TackSide",
    "TacticalAdvisor",
    "TurnDirection",
    "WaypointInfo",
    "WindInput",
    "bearing_degrees",
    "distance_meters",
    "load_project_config",
    "normalize_signed",
    "normalize_unsigned",
    "predicted_alt_vmg",
    "read_track_log",
    "replay_track",
    "signed_delta",
    "tack_for",
    "vmg",
    "__version__",
]
