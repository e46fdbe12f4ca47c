"""Logging configuration for the ``sailtact`` logger hierarchy."""

from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
import sys
from pathlib import Path
from typing import Any, Mapping

__all__ = ["JsonFormatter", "ROOT_LOGGER_NAME", "setup_logging"]


ROOT_LOGGER_NAME = "sailtact"

_HANDLER_MARKER = "_sailtact_handler"

# Attributes present on every LogRecord; anything else came from ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object.

    Structured context passed through ``extra`` (``event``, identifiers,
    counters) is copied verbatim next to the standard fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key in _RESERVED_ATTRS or key.startswith("_"):
                continue
            payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def _resolve_level(value: Any) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).strip().upper())
    if isinstance(level, int):
        return level
    raise ValueError(f"Unknown logging level: {value!r}")


def _build_handler(output: str) -> logging.Handler:
    target = output.strip()
    if target.lower() == "stdout":
        return logging.StreamHandler(sys.stdout)
    if target.lower() == "stderr":
        return logging.StreamHandler(sys.stderr)
    path = Path(target).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, encoding="utf8")


def setup_logging(config: Mapping[str, Any] | None = None) -> logging.Logger:
    """Configure the ``sailtact`` logger from ``config["logging"]``.

    Recognised keys are ``level`` (default ``info``), ``output`` (``stdout``,
    ``stderr`` or a file path, default ``stderr``) and ``format`` (``json`` or
    ``text``, default ``json``).  Handlers installed by a previous call are
    replaced so the function can be called repeatedly.
    """

    logging_cfg: Mapping[str, Any] = {}
    if config:
        candidate = config.get("logging", {})
        if isinstance(candidate, Mapping):
            logging_cfg = candidate

    level = _resolve_level(logging_cfg.get("level", "info"))
    output = str(logging_cfg.get("output", "stderr"))
    fmt = str(logging_cfg.get("format", "json")).lower()
    if fmt not in {"json", "text"}:
        raise ValueError(f"Unknown logging format: {fmt!r}")

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root.removeHandler(handler)
            handler.close()

    handler = _build_handler(output)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    setattr(handler, _HANDLER_MARKER, True)
    root.addHandler(handler)
    root.setLevel(level)
    return root
