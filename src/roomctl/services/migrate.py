"""MigrationService — bulk import of an interchange file into the store.

Pipeline: READ → PARSE → PERSIST → RESPOND. Corrupt records are skipped
during PARSE; a store failure during PERSIST leaves the rows written so
far in place (the import is not transactional).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from roomctl.domain.directory import Directory
from roomctl.domain.errors import ValidationError
from roomctl.infrastructure.database.session import StoreError
from roomctl.infrastructure.textfile import read_all_lines
from roomctl.services.base import BaseService
from roomctl.services.result import (
    NOTHING_MIGRATED,
    NOTHING_TO_IMPORT,
    STORE_ERROR,
    VALIDATION_ERROR,
    ServiceResult,
)
from roomctl.services.telemetry import stage, traced

if TYPE_CHECKING:
    from pathlib import Path

    from roomctl.config.models import ConnectionParams

logger = logging.getLogger(__name__)


class MigrationService(BaseService):
    """Move a room's interchange file into the relational store."""

    def __init__(self, params: ConnectionParams, *, replace_existing: bool = False) -> None:
        super().__init__(params)
        self._replace_existing = replace_existing

    @traced
    def migrate(self, source: Path, *, replace: bool | None = None) -> ServiceResult:
        """Import *source* and append its posts to the store.

        With *replace* (default: the ``replace_existing`` setting) the rows
        already stored under the file's prefix are deleted first.
        Never raises: every outcome is reported through the result.
        """
        op = "migrate"
        if replace is None:
            replace = self._replace_existing

        # ── READ ──────────────────────────────────────────────────
        with stage("read") as timing:
            lines = read_all_lines(source)
            if timing and lines is not None:
                timing.note(lines=len(lines))
        if lines is None or len(lines) < 2:
            logger.warning("Nothing to import from %s", source)
            return ServiceResult.failure(
                op,
                NOTHING_TO_IMPORT,
                f"Nothing to import from {source}",
                source=str(source),
            )
        # Blank lines are padding, not records.
        seen = sum(1 for line in lines[1:] if line.strip())

        # ── PARSE ─────────────────────────────────────────────────
        with stage("parse") as timing:
            try:
                directory = Directory.from_lines(lines)
            except ValidationError as exc:
                return ServiceResult.failure(
                    op,
                    VALIDATION_ERROR,
                    f"Import error: {exc}",
                    source=str(source),
                )
            if timing:
                timing.note(seen=seen, parsed=directory.count())

        parsed = directory.count()
        if directory.is_empty():
            return ServiceResult.failure(
                op,
                NOTHING_MIGRATED,
                f"{seen} records seen, 0 migrated",
                data={"prefix": directory.prefix, "seen": seen, "migrated": 0},
                source=str(source),
            )

        warnings: list[str] = []
        skipped = seen - parsed
        if skipped:
            warnings.append(f"{skipped} corrupt record(s) skipped")

        # ── PERSIST ───────────────────────────────────────────────
        cleared = 0
        with stage("persist") as timing:
            try:
                with self._session() as store:
                    if replace:
                        cleared = store.clear(directory.prefix)
                    written = store.write_all(directory)
                if timing:
                    timing.note(cleared=cleared, written=written)
            except StoreError as exc:
                logger.error("Migration of %s failed: %s", source, exc)
                return ServiceResult.failure(
                    op,
                    STORE_ERROR,
                    str(exc),
                    data={"prefix": directory.prefix, "seen": seen, "parsed": parsed},
                    operation=exc.operation,
                )

        # ── RESPOND ───────────────────────────────────────────────
        logger.info("Migrated %d of %d records for %s", written, seen, directory.prefix)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "prefix": directory.prefix,
                "seen": seen,
                "parsed": parsed,
                "skipped": skipped,
                "written": written,
                "cleared": cleared,
            },
            warnings=warnings,
        )
