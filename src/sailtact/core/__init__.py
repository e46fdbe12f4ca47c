"""Maneuver decision engine: angle math, VMG, learned performance and evaluation."""

from sailtact.core.angles import normalize_signed, normalize_unsigned, signed_delta
from sailtact.core.evaluator import ManeuverEvaluator
from sailtact.core.geodesy import bearing_degrees, distance_meters, track_distance_meters
from sailtact.core.interfaces import SupportsEvaluationSettings, SupportsNotification
from sailtact.core.models import (
    Coordinate,
    ManeuverKind,
    ManeuverRecommendation,
    NavigationFix,
    NavigationState,
    TackSide,
    TurnDirection,
    WaypointInfo,
)
from sailtact.core.performance import BinSummary, PerformanceModel
from sailtact.core.vmg import (
    mps_to_knots,
    predicted_alt_vmg,
    tack_for,
    true_wind_angle,
    twd_from_twa,
    vmg,
)

__all__ = [
    "BinSummary",
    "Coordinate",
    "ManeuverEvaluator",
    "ManeuverKind",
    "ManeuverRecommendation",
    "NavigationFix",
    "NavigationState",
    "PerformanceModel",
    "SupportsEvaluationSettings",
    "SupportsNotification",
    "TackSide",
    "TurnDirection",
    "WaypointInfo",
    "bearing_degrees",
    "distance_meters",
    "mps_to_knots",
    "normalize_signed",
    "normalize_unsigned",
    "predicted_alt_vmg",
    "signed_delta",
    "tack_for",
    "track_distance_meters",
    "true_wind_angle",
    "twd_from_twa",
    "vmg",
]
