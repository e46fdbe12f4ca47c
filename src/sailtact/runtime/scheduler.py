"""Cancellable periodic task execution.

``PeriodicTicker.start(interval, callback)`` runs ``callback`` every
``interval`` seconds on a daemon thread, the first run one interval after
the start.  ``stop(handle)`` is idempotent and may be called from any
thread, including from inside the callback.  A tick already running when
``stop`` is called is allowed to finish.
"""

from __future__ import annotations

import itertools
import logging
import threading
from typing import Callable, Optional

__all__ = ["PeriodicTicker", "TickHandle"]


logger = logging.getLogger(__name__)


class TickHandle:
    """Running periodic task returned by :meth:`PeriodicTicker.start`."""

    __slots__ = ("name", "interval", "_callback", "_stopped", "_thread", "_ticks")

    def __init__(self, name: str, interval: float, callback: Callable[[], None]) -> None:
        self.name = name
        self.interval = interval
        self._callback = callback
        self._stopped = threading.Event()
        self._ticks = 0
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    @property
    def active(self) -> bool:
        return not self._stopped.is_set() and self._thread.is_alive()

    @property
    def ticks(self) -> int:
        return self._ticks

    def cancel(self) -> None:
        self._stopped.set()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is threading.current_thread():
            return
        if self._thread.is_alive():
            self._thread.join(timeout)

    def _start(self) -> None:
        self._thread.start()

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            self._ticks += 1
            try:
                self._callback()
            except Exception:
                logger.exception(
                    "Periodic task failed.",
                    extra={"event": "scheduler.tick_failed", "task": self.name, "tick": self._ticks},
                )


class PeriodicTicker:
    """Factory and registry of :class:`TickHandle` objects."""

    _names = itertools.count(1)

    def start(
        self,
        interval: float,
        callback: Callable[[], None],
        *,
        name: str | None = None,
    ) -> TickHandle:
        """Begin calling ``callback`` every ``interval`` seconds."""

        period = float(interval)
        if not period > 0.0:
            raise ValueError("interval must be positive")
        handle = TickHandle(name or f"sailtact-ticker-{next(self._names)}", period, callback)
        handle._start()
        logger.debug(
            "Periodic task started.",
            extra={"event": "scheduler.started", "task": handle.name, "interval": period},
        )
        return handle

    def stop(self, handle: Optional[TickHandle], *, wait: bool = False) -> None:
        """Cancel ``handle``; ``None`` or an already stopped handle is ignored.

        With ``wait`` the call blocks until an in-flight tick has completed,
        except when invoked from the tick itself.
        """

        if handle is None:
            return
        already_stopped = handle._stopped.is_set()
        handle.cancel()
        if wait:
            handle.join()
        if not already_stopped:
            logger.debug(
                "Periodic task stopped.",
                extra={"event": "scheduler.stopped", "task": handle.name, "ticks": handle.ticks},
            )
