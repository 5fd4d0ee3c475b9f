"""InventoryService — read, export, and clear rooms held in the store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from roomctl.domain.directory import normalize_prefix
from roomctl.domain.errors import ValidationError
from roomctl.infrastructure.database.session import StoreError
from roomctl.infrastructure.textfile import write_lines
from roomctl.services.base import BaseService
from roomctl.services.result import STORE_ERROR, VALIDATION_ERROR, WRITE_FAILED, ServiceResult
from roomctl.services.telemetry import stage, traced

if TYPE_CHECKING:
    from pathlib import Path

    from roomctl.domain.directory import Directory

logger = logging.getLogger(__name__)


class InventoryService(BaseService):
    """Query-side operations over stored rooms."""

    def _load(self, prefix: str) -> Directory:
        with stage("load") as timing, self._session() as store:
            directory = store.load(prefix)
            if timing:
                timing.note(posts=directory.count())
        return directory

    @traced
    def show(self, prefix: str) -> ServiceResult:
        """List the posts stored under *prefix* as display lines."""
        op = "show"
        try:
            directory = self._load(prefix)
        except StoreError as exc:
            return ServiceResult.failure(op, STORE_ERROR, str(exc), operation=exc.operation)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "prefix": directory.prefix,
                "count": directory.count(),
                "posts": sorted(directory.to_display_lines()),
            },
        )

    @traced
    def export(self, prefix: str, output: Path) -> ServiceResult:
        """Write the room stored under *prefix* to *output* in interchange format."""
        op = "export"
        try:
            directory = self._load(prefix)
        except StoreError as exc:
            return ServiceResult.failure(op, STORE_ERROR, str(exc), operation=exc.operation)

        try:
            lines = directory.to_interchange_lines()
        except ValidationError as exc:
            return ServiceResult.failure(op, VALIDATION_ERROR, str(exc), output=str(output))

        if not write_lines(output, lines):
            return ServiceResult.failure(
                op,
                WRITE_FAILED,
                f"Cannot write {output}",
                output=str(output),
            )

        warnings: list[str] = []
        if directory.is_empty():
            warnings.append(f"No posts stored under '{directory.prefix}'")
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "prefix": directory.prefix,
                "count": directory.count(),
                "output": str(output),
            },
            warnings=warnings,
        )

    @traced
    def clear(self, prefix: str | None = None) -> ServiceResult:
        """Delete stored rows (all, or those under *prefix*) and compact the store."""
        op = "clear"
        try:
            normalized = normalize_prefix(prefix) if prefix is not None else None
        except ValidationError as exc:
            return ServiceResult.failure(op, VALIDATION_ERROR, str(exc))

        try:
            with self._session() as store:
                deleted = store.clear(normalized)
                store.compact()
        except StoreError as exc:
            return ServiceResult.failure(op, STORE_ERROR, str(exc), operation=exc.operation)

        logger.info("Deleted %d rows", deleted)
        return ServiceResult(ok=True, op=op, data={"deleted": deleted, "prefix": normalized})
