"""Configuration and track-log loading for the CLI."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ..configuration import PROJECT_CONFIG_FILENAME, load_project_config
from ..core.models import NavigationFix
from ..ingestion.track_log import TrackFormatError, read_track_log
from .errors import CliError

__all__ = ["CONFIG_ENV_VAR", "load_cli_config", "load_track"]


CONFIG_ENV_VAR = "SAILTACT_CONFIG"


def _normalise_cli_config(payload: Mapping[str, Any], source: Path) -> dict[str, Any]:
    data = {str(key): value for key, value in payload.items()}
    data["_config_path"] = str(source.expanduser().resolve())
    return data


def _iter_unique_paths(candidates: List[Path]) -> List[Path]:
    seen: Dict[Path, None] = {}
    ordered: List[Path] = []
    for candidate in candidates:
        resolved = candidate.expanduser().resolve(strict=False)
        if resolved in seen:
            continue
        seen[resolved] = None
        ordered.append(resolved)
    return ordered


def _pyproject_candidates(base: Path) -> List[Path]:
    base = base.expanduser()
    if base.name == PROJECT_CONFIG_FILENAME:
        return [base]
    if base.suffix:
        return []
    return [base / PROJECT_CONFIG_FILENAME]


def load_cli_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load CLI defaults from ``pyproject.toml`` files.

    Lookup order: ``path``, the ``SAILTACT_CONFIG`` environment variable and
    finally the current working directory.
    """

    env_config = os.environ.get(CONFIG_ENV_VAR)
    bases: List[Path] = []
    if path is not None:
        bases.append(path)
    if env_config:
        bases.append(Path(env_config))
    bases.append(Path.cwd())

    for base in bases:
        for candidate in _iter_unique_paths(_pyproject_candidates(base)):
            loaded = load_project_config(candidate)
            if not loaded:
                continue
            payload, resolved = loaded
            return _normalise_cli_config(payload, resolved)

    return {"_config_path": None}


def load_track(source: Path) -> List[NavigationFix]:
    """Read a track log, mapping failures onto :class:`CliError` categories."""

    if not source.exists():
        raise CliError(
            f"Track log '{source}' does not exist.",
            category="not_found",
            context={"path": source},
        )
    try:
        return read_track_log(source)
    except TrackFormatError as exc:
        raise CliError(
            f"Track log '{source}' is malformed: {exc}",
            category="io",
            context={"path": source},
        ) from exc
    except OSError as exc:
        raise CliError(
            f"Unable to read track log '{source}': {exc}",
            category="io",
            context={"path": source},
        ) from exc
