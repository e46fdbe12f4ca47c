from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest

from sailtact.core.models import ManeuverKind, ManeuverRecommendation, TurnDirection
from sailtact.logging import JsonFormatter, setup_logging
from sailtact.notifications import LoggingNotifier


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord("sailtact.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_structured_extras() -> None:
    payload = json.loads(JsonFormatter().format(_record(event="test.event", tick=3)))

    assert payload["message"] == "hello world"
    assert payload["level"] == "info"
    assert payload["logger"] == "sailtact.test"
    assert payload["event"] == "test.event"
    assert payload["tick"] == 3
    assert "timestamp" in payload
    assert "args" not in payload


def test_json_formatter_renders_exceptions() -> None:
    try:
        raise ValueError("broken")
    except ValueError:
        record = logging.LogRecord("sailtact", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())

    payload = json.loads(JsonFormatter().format(record))

    assert "ValueError: broken" in payload["exc_info"]


def test_setup_logging_writes_json_to_file(tmp_path: Path) -> None:
    destination = tmp_path / "logs" / "sailtact.log"

    logger = setup_logging({"logging": {"level": "debug", "output": str(destination)}})
    logging.getLogger("sailtact.runtime").debug("ticked", extra={"event": "test.ticked"})
    for handler in logger.handlers:
        handler.flush()

    lines = destination.read_text(encoding="utf8").splitlines()
    assert json.loads(lines[-1])["event"] == "test.ticked"
    assert logger.level == logging.DEBUG


def test_setup_logging_replaces_previous_handler(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging({"logging": {"output": "stdout", "format": "text"}})
    logger = setup_logging({"logging": {"output": "stdout", "format": "text", "level": "warning"}})

    installed = [h for h in logger.handlers if getattr(h, "_sailtact_handler", False)]
    assert len(installed) == 1
    logging.getLogger("sailtact.cli").warning("careful")
    assert "WARNING sailtact.cli: careful" in capsys.readouterr().out


@pytest.mark.parametrize(
    "config",
    [
        {"logging": {"level": "chatty"}},
        {"logging": {"format": "xml"}},
    ],
)
def test_setup_logging_rejects_unknown_options(config: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        setup_logging(config)


def test_logging_notifier_keeps_message_reserved_key(tmp_path: Path) -> None:
    destination = tmp_path / "advice.log"
    setup_logging({"logging": {"level": "info", "output": str(destination)}})
    recommendation = ManeuverRecommendation(
        kind=ManeuverKind.TACK,
        turn_direction=TurnDirection.LEFT,
        emitted_at=12.0,
        current_vmg=3.0,
        predicted_vmg=3.5,
        alternate_heading_deg=300.0,
        predicted_sog_mps=5.5,
    )

    LoggingNotifier().notify(recommendation, announce=True)
    for handler in logging.getLogger("sailtact").handlers:
        handler.flush()

    payload = json.loads(destination.read_text(encoding="utf8").splitlines()[-1])
    assert payload["message"] == "Tack now ←"
    assert payload["event"] == "notification.recommendation"
    assert payload["announce"] is True
    assert payload["predicted_vmg"] == 3.5
