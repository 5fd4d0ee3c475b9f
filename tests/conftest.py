"""Shared pytest fixtures and test helpers for roomctl tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator, Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from roomctl.config.models import ConnectionParams
from roomctl.domain.directory import Directory
from roomctl.domain.post import Post
from roomctl.infrastructure.database.session import StoreSession
from roomctl.services.telemetry import set_timing


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop any ROOMCTL_* variables from the developer's shell."""
    for key in list(os.environ):
        if key.startswith("ROOMCTL_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test (the CLI reconfigures it)."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    room = logging.getLogger("roomctl")
    room_level = room.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    room.setLevel(room_level)


@pytest.fixture(autouse=True)
def _reset_timing() -> Generator[None]:
    """``roomctl -v`` leaves stage timing on for the rest of the thread."""
    yield
    set_timing(False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def params(tmp_path: Path) -> ConnectionParams:
    """Connection parameters for a SQLite store file under tmp_path."""
    return ConnectionParams(url=f"sqlite:///{tmp_path / 'store.db'}")


@pytest.fixture
def store(params: ConnectionParams) -> Iterator[StoreSession]:
    """An open store session, closed after the test."""
    session = StoreSession(params).open()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def room() -> Directory:
    """Directory ``IC`` holding three posts."""
    return make_directory(
        "IC",
        {
            "IC01": ("PC100", "Ana", "Ruiz"),
            "IC02": ("PC101", "Bea", "Soto"),
            "IC03": ("PC102", "Carlos", "Núñez Gil"),
        },
    )


@pytest.fixture
def _isolated_room(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to tmp_path so the CLI uses an isolated default store.

    Use via ``@pytest.mark.usefixtures("_isolated_room")`` on command test
    classes. The default ``sqlite:///roomctl.db`` then lands in tmp_path.
    """
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_directory(prefix: str, entries: dict[str, tuple[str, str, str]]) -> Directory:
    """Build a directory from ``{code: (machine, first, surname)}``."""
    directory = Directory.create(prefix)
    for code, (machine_id, first_name, surname) in entries.items():
        directory.add(code, Post(machine_id, first_name, surname))
    return directory


def as_mapping(directory: Directory) -> dict[str, Post]:
    """Snapshot a directory's code -> post mapping for equality checks."""
    return {code: directory.get(code) for code in directory.codes()}


def write_interchange(path: Path, lines: list[str]) -> Path:
    """Write interchange *lines* to *path* as UTF-8."""
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    return path
