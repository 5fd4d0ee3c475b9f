"""Line-oriented text file access for the interchange format.

Failures are reported as ``None`` / ``False`` and logged, never raised:
a missing or empty file is an ordinary "nothing to import" outcome for
the callers.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

_BOM = "\ufeff"


def read_all_lines(path: Path) -> list[str] | None:
    """Return every line of the UTF-8 file at *path*, or None on failure.

    An empty file counts as a failure. Line terminators are removed.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Cannot read %s: %s", path, exc)
        return None

    lines = content.removeprefix(_BOM).splitlines()
    if not lines:
        logger.warning("File %s is empty", path)
        return None
    return lines


def write_lines(path: Path, lines: Iterable[str]) -> bool:
    """Write *lines* to *path* as UTF-8, one per line.

    Creates parent directories if they don't exist. Returns False on failure.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    except OSError as exc:
        logger.warning("Cannot write %s: %s", path, exc)
        return False
    return True
