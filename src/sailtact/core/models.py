"""Value objects shared by the decision engine and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

__all__ = [
    "Coordinate",
    "ManeuverKind",
    "ManeuverRecommendation",
    "NavigationFix",
    "NavigationState",
    "TackSide",
    "TurnDirection",
    "WaypointInfo",
]


class Coordinate(NamedTuple):
    """Geographic position in decimal degrees."""

    latitude: float
    longitude: float


class TackSide(str, Enum):
    """Side of the boat the true wind strikes."""

    PORT = "port"
    STARBOARD = "starboard"

    @property
    def opposite(self) -> "TackSide":
        return TackSide.STARBOARD if self is TackSide.PORT else TackSide.PORT


class ManeuverKind(str, Enum):
    TACK = "Tack"
    JIBE = "Jibe"


class TurnDirection(str, Enum):
    LEFT = "left"
    RIGHT = "right"

    @property
    def arrow(self) -> str:
        return "←" if self is TurnDirection.LEFT else "→"


@dataclass(frozen=True, slots=True)
class NavigationFix:
    """Raw location sample as delivered by a positioning source.

    ``sog_mps`` and ``cog_deg`` may carry negative sentinels meaning the
    source could not measure them; :class:`~sailtact.ingestion.navigation.NavigationFeed`
    translates those to ``None`` before they reach the core.
    """

    timestamp: float
    latitude: float | None = None
    longitude: float | None = None
    sog_mps: float | None = None
    cog_deg: float | None = None
    heading_deg: float | None = None

    @property
    def coordinate(self) -> Coordinate | None:
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinate(self.latitude, self.longitude)


@dataclass(frozen=True, slots=True)
class NavigationState:
    """Latest known navigation snapshot."""

    heading_deg: float | None = None
    cog_deg: float | None = None
    sog_mps: float | None = None
    coordinate: Coordinate | None = None
    timestamp: float | None = None

    @property
    def effective_heading(self) -> float | None:
        """Device heading, falling back to course over ground."""

        if self.heading_deg is not None:
            return self.heading_deg
        return self.cog_deg


@dataclass(frozen=True, slots=True)
class WaypointInfo:
    """Distance and initial bearing from the current position to a waypoint."""

    waypoint: Coordinate
    distance_m: float
    bearing_deg: float


@dataclass(frozen=True, slots=True)
class ManeuverRecommendation:
    """Single maneuver advice produced by one evaluation tick."""

    kind: ManeuverKind
    turn_direction: TurnDirection
    emitted_at: float
    current_vmg: float
    predicted_vmg: float
    alternate_heading_deg: float
    predicted_sog_mps: float

    @property
    def arrow(self) -> str:
        return self.turn_direction.arrow

    @property
    def message(self) -> str:
        return f"{self.kind.value} now {self.arrow}"

    @property
    def gain(self) -> float:
        return self.predicted_vmg - self.current_vmg

    def as_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind.value,
            "arrow": self.arrow,
            "message": self.message,
            "emitted_at": self.emitted_at,
            "current_vmg": self.current_vmg,
            "predicted_vmg": self.predicted_vmg,
            "alternate_heading_deg": self.alternate_heading_deg,
            "predicted_sog_mps": self.predicted_sog_mps,
        }
