"""True wind direction input.

The sailor types either the true wind direction (TWD, compass degrees the
wind blows from) or the true wind angle (TWA, relative to the bow).  TWA is
turned into TWD using the current heading and the configured sign
convention.  Unparsable text behaves exactly like a missing value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math

from sailtact.core.angles import normalize_unsigned
from sailtact.core.vmg import twd_from_twa

__all__ = ["WindInput", "WindInputMode", "parse_angle"]


class WindInputMode(str, Enum):
    TWD = "twd"
    TWA = "twa"


def parse_angle(text: str | None) -> float | None:
    """Return the finite number in ``text`` or ``None``."""

    if text is None:
        return None
    try:
        value = float(text.strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


@dataclass(frozen=True, slots=True)
class WindInput:
    """User supplied wind reference."""

    mode: WindInputMode = WindInputMode.TWD
    text: str = "0"

    @classmethod
    def direction(cls, text: str) -> "WindInput":
        return cls(WindInputMode.TWD, text)

    @classmethod
    def angle(cls, text: str) -> "WindInput":
        return cls(WindInputMode.TWA, text)

    def resolve_twd(
        self,
        heading_deg: float | None,
        *,
        twa_positive_starboard: bool = True,
    ) -> float | None:
        """Return the TWD in ``[0, 360)`` or ``None`` when it cannot be derived."""

        value = parse_angle(self.text)
        if value is None:
            return None
        if self.mode is WindInputMode.TWD:
            return normalize_unsigned(value)
        if heading_deg is None:
            return None
        return twd_from_twa(heading_deg, value, positive_starboard=twa_positive_starboard)
