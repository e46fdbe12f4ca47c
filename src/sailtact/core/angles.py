"""Arithmetic on circular (mod 360°) quantities.

Two canonical representations are used throughout the package: unsigned
angles in ``[0, 360)`` and signed angles in ``(-180, 180]``.  Every tack and
turn decision is derived from :func:`signed_delta`.
"""

from __future__ import annotations

import math

__all__ = [
    "FULL_TURN_DEG",
    "HALF_TURN_DEG",
    "normalize_signed",
    "normalize_unsigned",
    "signed_delta",
]


FULL_TURN_DEG = 360.0
HALF_TURN_DEG = 180.0


def normalize_unsigned(angle: float) -> float:
    """Return ``angle`` wrapped into ``[0, 360)``."""

    wrapped = math.fmod(float(angle), FULL_TURN_DEG)
    if wrapped < 0.0:
        wrapped += FULL_TURN_DEG
    # Tiny negative remainders round up to exactly 360 once shifted.
    if wrapped >= FULL_TURN_DEG:
        wrapped -= FULL_TURN_DEG
    return wrapped


def normalize_signed(angle: float) -> float:
    """Return ``angle`` wrapped into ``(-180, 180]``."""

    wrapped = normalize_unsigned(angle)
    if wrapped > HALF_TURN_DEG:
        wrapped -= FULL_TURN_DEG
    return wrapped


def signed_delta(source: float, target: float) -> float:
    """Smallest signed rotation from ``source`` to ``target`` in degrees.

    Positive values mean ``target`` lies clockwise of ``source`` (to the right
    when facing ``source``).  Opposite directions resolve to ``+180``.
    """

    return normalize_signed(float(target) - float(source))
