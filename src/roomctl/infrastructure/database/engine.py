"""Store engine setup.

SQLAlchemy Core only: one table, short-lived CLI processes. SQLite is the
default backend; any SQLAlchemy URL with an installed driver works.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url

from roomctl.infrastructure.database.schema import metadata

if TYPE_CHECKING:
    from sqlalchemy import Connection
    from sqlalchemy.engine import URL, Engine

    from roomctl.config.models import ConnectionParams


def _connect_args(url: URL, timeout: int) -> dict[str, Any]:
    """Driver arguments that bound every statement by *timeout* seconds."""
    backend = url.get_backend_name()
    if backend == "sqlite":
        return {"timeout": timeout}
    if backend == "postgresql":
        return {"options": f"-c statement_timeout={timeout * 1000}"}
    if backend in ("mysql", "mariadb"):
        return {"read_timeout": timeout, "write_timeout": timeout}
    return {}


def build_url(params: ConnectionParams) -> URL:
    """Parse the store URL, injecting the principal and credential when set."""
    url = make_url(params.url)
    if params.user:
        url = url.set(username=params.user)
    if params.password:
        url = url.set(password=params.password)
    return url


def create_store_engine(params: ConnectionParams) -> Engine:
    """Create an engine whose statements time out after ``params.timeout`` seconds."""
    url = build_url(params)
    return create_engine(url, echo=False, connect_args=_connect_args(url, params.timeout))


def init_schema(bind: Engine | Connection) -> None:
    """Create the ``posts`` table if absent. Idempotent."""
    metadata.create_all(bind)
