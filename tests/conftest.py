from __future__ import annotations

import logging
import sys
from pathlib import Path
from textwrap import dedent

import pytest


ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = ROOT / "src"
for entry in (SRC_ROOT, ROOT):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))


def write_pyproject(directory: Path, contents: str) -> Path:
    """Persist a ``pyproject.toml`` under ``directory`` and return its path."""

    payload = dedent(contents).lstrip()
    target = directory / "pyproject.toml"
    target.write_text(payload, encoding="utf8")
    return target


@pytest.fixture
def pyproject_factory(tmp_path: Path):
    def _factory(contents: str) -> Path:
        return write_pyproject(tmp_path, contents)

    return _factory


@pytest.fixture(autouse=True)
def _reset_sailtact_logger():
    """Undo handlers installed by ``setup_logging`` between tests."""

    yield
    root = logging.getLogger("sailtact")
    for handler in list(root.handlers):
        if getattr(handler, "_sailtact_handler", False):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(logging.NOTSET)
    root.propagate = True
