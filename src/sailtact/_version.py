"""Package version, read from the installed metadata or the changelog."""

from __future__ import annotations

import re
from importlib import metadata
from pathlib import Path
from typing import Iterable, Optional

from packaging.version import InvalidVersion, Version

DISTRIBUTION = "sailtact"

_RELEASE_HEADING = re.compile(r"^## v(\S+)")


def check_release(text: str) -> str:
    """Return ``text`` if it is a three component release such as ``1.4.0``."""

    try:
        release = Version(text).release
    except InvalidVersion as exc:
        raise RuntimeError(f"{DISTRIBUTION} version {text!r} is not a PEP 440 version") from exc
    if len(release) != 3:
        raise RuntimeError(
            f"{DISTRIBUTION} version {text!r} needs MAJOR.MINOR.PATCH, got {len(release)} parts"
        )
    return text


def latest_changelog_release(changelog: Path) -> Optional[str]:
    """Version of the first ``## vX.Y.Z`` heading in ``changelog``."""

    if not changelog.is_file():
        return None
    with changelog.open(encoding="utf-8") as handle:
        for line in handle:
            match = _RELEASE_HEADING.match(line)
            if match:
                return match.group(1)
    return None


def _checkout_changelogs() -> Iterable[Path]:
    # src/sailtact/_version.py -> src/, then the repository root
    for parent in Path(__file__).resolve().parents[1:3]:
        yield parent / "CHANGELOG.md"


def resolve_version() -> str:
    try:
        return check_release(metadata.version(DISTRIBUTION))
    except metadata.PackageNotFoundError:
        pass
    for changelog in _checkout_changelogs():
        found = latest_changelog_release(changelog)
        if found is not None:
            return check_release(found)
    raise RuntimeError(f"{DISTRIBUTION} is not installed and no CHANGELOG.md release was found")


__version__ = resolve_version()

__all__ = ["__version__"]
