"""CSV track log ingestion.

Recorded sessions are replayed through the advisor from a small CSV format::

    timestamp,latitude,longitude,sog_mps,cog_deg[,heading_deg]

Timestamps must never decrease.  Blank cells mean the value was not measured.
Negative speed or course values are kept as-is;
:class:`~sailtact.ingestion.navigation.NavigationFeed` turns them into missing
values like it does for live sources.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, TextIO

from sailtact.core.models import NavigationFix

__all__ = [
    "DEFAULT_TRACK_SCHEMA",
    "TrackFormatError",
    "TrackSchema",
    "read_track_log",
]


@dataclass(frozen=True)
class TrackSchema:
    """Column layout of a track log.

    Attributes
    ----------
    required:
        Columns that must appear, in this order, at the start of the header.
    optional:
        Trailing columns that may be omitted.
    delimiter:
        Field separator.
    """

    required: Sequence[str]
    optional: Sequence[str] = ()
    delimiter: str = ","


DEFAULT_TRACK_SCHEMA = TrackSchema(
    required=("timestamp", "latitude", "longitude", "sog_mps", "cog_deg"),
    optional=("heading_deg",),
)


class TrackFormatError(ValueError):
    """Raised when a track log cannot be parsed."""


def _optional_float(token: str, *, column: str, line_number: int) -> float | None:
    token = token.strip()
    if not token:
        return None
    try:
        return float(token)
    except ValueError as exc:
        raise TrackFormatError(
            f"Line {line_number}: column {column!r} is not a number: {token!r}"
        ) from exc


def _open_source(source: str | Path | TextIO | Iterable[str]) -> Iterator[str]:
    if isinstance(source, (str, Path)):
        with open(source, "r", encoding="utf8") as handle:
            yield from handle
        return
    yield from source


def read_track_log(
    source: str | Path | TextIO | Iterable[str],
    *,
    schema: TrackSchema = DEFAULT_TRACK_SCHEMA,
) -> List[NavigationFix]:
    """Return the fixes stored in ``source`` in file order.

    ``source`` is either a filesystem path or any iterable of text lines.
    """

    iterator = _open_source(source)
    header = next(iterator, None)
    if header is None:
        return []

    columns = tuple(column.strip().lower() for column in header.split(schema.delimiter))
    required = tuple(schema.required)
    if columns[: len(required)] != required:
        raise TrackFormatError(f"Unexpected header {columns!r}. Expected {required!r} first")
    extra = columns[len(required):]
    unknown = [column for column in extra if column not in schema.optional]
    if unknown:
        raise TrackFormatError(f"Unknown track log columns: {unknown!r}")

    fixes: List[NavigationFix] = []
    for line_number, line in enumerate(iterator, start=2):
        if not line.strip():
            continue
        values = line.rstrip("\r\n").split(schema.delimiter)
        if len(values) != len(columns):
            raise TrackFormatError(
                f"Line {line_number}: expected {len(columns)} columns, got {len(values)}"
            )
        row = {
            column: _optional_float(value, column=column, line_number=line_number)
            for column, value in zip(columns, values)
        }
        timestamp = row["timestamp"]
        if timestamp is None:
            raise TrackFormatError(f"Line {line_number}: missing timestamp")
        if fixes and timestamp < fixes[-1].timestamp:
            raise TrackFormatError(
                f"Line {line_number}: timestamp {timestamp:g} precedes the previous fix "
                f"at {fixes[-1].timestamp:g}"
            )
        fixes.append(
            NavigationFix(
                timestamp=timestamp,
                latitude=row["latitude"],
                longitude=row["longitude"],
                sog_mps=row["sog_mps"],
                cog_deg=row["cog_deg"],
                heading_deg=row.get("heading_deg"),
            )
        )
    return fixes
