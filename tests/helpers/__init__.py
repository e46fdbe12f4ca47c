"""Reusable builders for the test-suite."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Any, Dict, List, Tuple

_MODULE_EXPORTS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("navigation", ("build_fix", "build_state", "FixedSettings", "ManualClock")),
    ("tracks", ("TRACK_HEADER", "beat_track", "track_lines", "write_track")),
)

_NAME_TO_MODULE: Dict[str, str] = {
    name: module for module, names in _MODULE_EXPORTS for name in names
}

__all__ = [name for _, names in _MODULE_EXPORTS for name in names]


def __getattr__(name: str) -> Any:
    try:
        module_name = _NAME_TO_MODULE[name]
    except KeyError as exc:  # pragma: no cover - standard AttributeError path
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}") from exc

    module = importlib.import_module(f".{module_name}", __name__)
    return getattr(module, name)


def __dir__() -> List[str]:
    return sorted(set(__all__) | set(globals()))


if TYPE_CHECKING:
    from .navigation import FixedSettings, ManualClock, build_fix, build_state
    from .tracks import TRACK_HEADER, beat_track, track_lines, write_track
