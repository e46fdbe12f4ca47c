"""Error type raised by the SailTact command handlers."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

__all__ = ["EXIT_STATUS", "CliError"]


#: Process exit status for each error category.
EXIT_STATUS: Mapping[str, int] = {
    "runtime": 1,
    "usage": 2,
    "io": 3,
    "not_found": 4,
}

logger = logging.getLogger("sailtact.cli")


def _loggable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


class CliError(RuntimeError):
    """Handler failure mapped to a process exit status.

    ``category`` selects the exit status from :data:`EXIT_STATUS`; ``context``
    values that are not JSON scalars are stringified so the JSON log formatter
    can emit them.
    """

    def __init__(
        self,
        message: str,
        *,
        category: str = "runtime",
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if category not in EXIT_STATUS:
            raise ValueError(f"Unknown CLI error category {category!r}")
        super().__init__(message)
        self.message = message
        self.category = category
        self.context = {key: _loggable(value) for key, value in (context or {}).items()}
        self.reported = False

    @property
    def status_code(self) -> int:
        return EXIT_STATUS[self.category]

    def report(self, target: Optional[logging.Logger] = None) -> None:
        """Log the failure once as a ``cli.error`` event."""

        if self.reported:
            return
        (target or logger).error(
            self.message,
            extra={
                "event": "cli.error",
                "category": self.category,
                "status_code": self.status_code,
                "context": dict(self.context),
            },
            exc_info=self,
        )
        self.reported = True
