"""Boundary adapters turning sensor readings and user input into core values."""

from sailtact.ingestion.navigation import NavigationFeed
from sailtact.ingestion.track_log import (
    DEFAULT_TRACK_SCHEMA,
    TrackFormatError,
    TrackSchema,
    read_track_log,
)
from sailtact.ingestion.wind import WindInput, WindInputMode, parse_angle

__all__ = [
    "DEFAULT_TRACK_SCHEMA",
    "NavigationFeed",
    "TrackFormatError",
    "TrackSchema",
    "WindInput",
    "WindInputMode",
    "parse_angle",
    "read_track_log",
]
