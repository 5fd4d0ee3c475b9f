"""Locating and reading ``roomctl.toml``.

The file sits next to the store it describes, so it is looked up from
the working directory upwards. ``ROOMCTL_CONFIG`` names one explicitly.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import click

CONFIG_FILENAME = "roomctl.toml"
CONFIG_ENV_VAR = "ROOMCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the ``roomctl.toml`` in effect, or None.

    ``ROOMCTL_CONFIG`` wins when set, even if it names no file. Otherwise
    the nearest ``roomctl.toml`` in *start* (default: CWD) or its parents.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    candidates = (folder / CONFIG_FILENAME for folder in (here, *here.parents))
    return next((c for c in candidates if c.is_file()), None)


def read_config(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML; a syntax error is reported as a CLI error."""
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc
