"""Velocity-made-good computations relative to the true wind.

VMG is positive when the boat makes progress toward the wind source
(upwind) and negative when it makes progress away from it (downwind).
"""

from __future__ import annotations

import math

from sailtact.core.angles import normalize_unsigned, signed_delta
from sailtact.core.models import TackSide

__all__ = [
    "KNOTS_PER_MPS",
    "mps_to_knots",
    "predicted_alt_vmg",
    "tack_for",
    "true_wind_angle",
    "twd_from_twa",
    "vmg",
]


KNOTS_PER_MPS = 1.0 / 0.514444


def vmg(sog_mps: float, heading_deg: float, twd_deg: float) -> float:
    """Return the component of ``sog_mps`` directed toward the wind source."""

    delta = signed_delta(heading_deg, twd_deg)
    return sog_mps * math.cos(math.radians(delta))


def predicted_alt_vmg(sog_mps: float, heading_deg: float, twd_deg: float) -> tuple[float, float]:
    """Mirror ``heading_deg`` across the wind axis and recompute VMG.

    Assumes the boat is equally fast on both tacks; the learned prediction
    in :mod:`sailtact.core.evaluator` supersedes this symmetric reference.
    """

    alt_heading = normalize_unsigned(2.0 * twd_deg - heading_deg)
    return alt_heading, vmg(sog_mps, alt_heading, twd_deg)


def true_wind_angle(heading_deg: float, twd_deg: float) -> float:
    """Unsigned angle between the bow and the true wind, in ``[0, 180]``."""

    return abs(signed_delta(heading_deg, twd_deg))


def tack_for(heading_deg: float, twd_deg: float) -> TackSide:
    """Tack implied by ``heading_deg`` and ``twd_deg``.

    A wind direction clockwise of the heading means port tack; dead ahead
    counts as starboard.
    """

    if signed_delta(heading_deg, twd_deg) > 0.0:
        return TackSide.PORT
    return TackSide.STARBOARD


def twd_from_twa(heading_deg: float, twa_deg: float, *, positive_starboard: bool = True) -> float:
    """Convert a true wind angle relative to the bow into a compass TWD."""

    raw = heading_deg + twa_deg if positive_starboard else heading_deg - twa_deg
    return normalize_unsigned(raw)


def mps_to_knots(speed_mps: float) -> float:
    return speed_mps * KNOTS_PER_MPS
