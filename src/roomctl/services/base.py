"""BaseService — shared foundation for roomctl services.

Every service receives resolved :class:`ConnectionParams` at construction
time and opens a fresh :class:`StoreSession` per operation, so no
connection outlives the call that needed it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from roomctl.infrastructure.database.session import StoreSession

if TYPE_CHECKING:
    from roomctl.config.models import ConnectionParams


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class InventoryService(BaseService):
            def show(self, prefix: str) -> ServiceResult:
                with self._session() as store:
                    ...
    """

    def __init__(self, params: ConnectionParams) -> None:
        self._params = params

    def _session(self) -> StoreSession:
        """A new, unopened session; enter it with ``with`` to connect."""
        return StoreSession(self._params)
