"""Adaptive per-tack boat speed model learned from streaming samples.

Speeds are grouped by true-wind-angle bin and tack side.  Each group keeps a
bounded FIFO history so the running average follows the boat's current
performance instead of the whole session.  The evaluator uses the average of
the opposite tack to predict the speed after a maneuver.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
import logging
import math
import threading
from types import MappingProxyType
from typing import Deque, Dict, Mapping, Tuple

from sailtact.core.angles import HALF_TURN_DEG
from sailtact.core.models import TackSide

__all__ = [
    "DEFAULT_BIN_WIDTH_DEG",
    "DEFAULT_MAX_SAMPLES_PER_BIN",
    "BinSummary",
    "PerformanceModel",
]


logger = logging.getLogger(__name__)


DEFAULT_BIN_WIDTH_DEG = 5.0
DEFAULT_MAX_SAMPLES_PER_BIN = 50

BinKey = Tuple[int, TackSide]


@dataclass(frozen=True, slots=True)
class BinSummary:
    """Immutable view of a single performance bin."""

    bin_index: int
    tack: TackSide
    lower_twa_deg: float
    count: int
    mean_sog_mps: float


class PerformanceModel:
    """Thread-safe mapping ``(bin index, tack) -> recent speeds``.

    Writers (:meth:`record_sample`) and readers (:meth:`average_speed`) share
    a single lock held only for the append/evict or the summation, so the
    producer path never waits behind anything but another short critical
    section.  Samples keep the bin index computed at record time; changing
    :attr:`bin_width_deg` later does not rebucket them.
    """

    __slots__ = ("_bin_width_deg", "_max_samples", "_bins", "_lock")

    def __init__(
        self,
        bin_width_deg: float = DEFAULT_BIN_WIDTH_DEG,
        max_samples_per_bin: int = DEFAULT_MAX_SAMPLES_PER_BIN,
    ) -> None:
        self._lock = threading.Lock()
        self._bins: Dict[BinKey, Deque[float]] = {}
        self._bin_width_deg = self._check_bin_width(bin_width_deg)
        self._max_samples = self._check_max_samples(max_samples_per_bin)

    @staticmethod
    def _check_bin_width(value: float) -> float:
        width = float(value)
        if not math.isfinite(width) or width <= 0.0:
            raise ValueError("bin_width_deg must be a positive number of degrees")
        return width

    @staticmethod
    def _check_max_samples(value: int) -> int:
        size = int(value)
        if size <= 0:
            raise ValueError("max_samples_per_bin must be positive")
        return size

    @property
    def bin_width_deg(self) -> float:
        return self._bin_width_deg

    @bin_width_deg.setter
    def bin_width_deg(self, value: float) -> None:
        width = self._check_bin_width(value)
        with self._lock:
            self._bin_width_deg = width

    @property
    def max_samples_per_bin(self) -> int:
        return self._max_samples

    @max_samples_per_bin.setter
    def max_samples_per_bin(self, value: int) -> None:
        size = self._check_max_samples(value)
        with self._lock:
            self._max_samples = size

    def bin_index(self, twa_deg: float) -> int:
        """Return the bin holding the unsigned wind angle ``|twa_deg|``."""

        clamped = min(HALF_TURN_DEG, max(0.0, abs(float(twa_deg))))
        return int(math.floor(clamped / self._bin_width_deg))

    def record_sample(self, twa_deg: float, tack: TackSide, sog_mps: float) -> None:
        """Append ``sog_mps`` to the bin of ``twa_deg`` on ``tack``."""

        with self._lock:
            key = (self.bin_index(twa_deg), tack)
            history = self._bins.get(key)
            if history is None:
                history = deque()
                self._bins[key] = history
            history.append(float(sog_mps))
            while len(history) > self._max_samples:
                history.popleft()

    def average_speed(self, twa_deg: float, tack: TackSide) -> float | None:
        """Mean recent speed for ``twa_deg`` on ``tack`` or ``None`` when unknown."""

        with self._lock:
            history = self._bins.get((self.bin_index(twa_deg), tack))
            if not history:
                return None
            return math.fsum(history) / len(history)

    def sample_count(self, twa_deg: float, tack: TackSide) -> int:
        with self._lock:
            history = self._bins.get((self.bin_index(twa_deg), tack))
            return len(history) if history else 0

    def snapshot(self) -> Mapping[BinKey, BinSummary]:
        """Return an immutable summary of every populated bin."""

        with self._lock:
            width = self._bin_width_deg
            summaries = {
                key: BinSummary(
                    bin_index=key[0],
                    tack=key[1],
                    lower_twa_deg=key[0] * width,
                    count=len(history),
                    mean_sog_mps=math.fsum(history) / len(history),
                )
                for key, history in self._bins.items()
                if history
            }
        ordered = dict(sorted(summaries.items(), key=lambda item: (item[0][0], item[0][1].value)))
        return MappingProxyType(ordered)

    def clear(self) -> None:
        """Drop every stored sample."""

        with self._lock:
            dropped = sum(len(history) for history in self._bins.values())
            self._bins.clear()
        logger.debug(
            "Performance model cleared.",
            extra={"event": "performance.cleared", "dropped_samples": dropped},
        )

    def __len__(self) -> int:
        with self._lock:
            return sum(len(history) for history in self._bins.values())
