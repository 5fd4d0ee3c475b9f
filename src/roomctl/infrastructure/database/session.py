"""StoreSession — one live store connection plus its lazily built statements.

State machine: ``CLOSED -> OPEN`` on a successful :meth:`StoreSession.open`,
``OPEN -> CLOSED`` on :meth:`StoreSession.close`. Opening an open session is
a no-op. Every operation on a closed session raises :class:`StoreError`.

Writes are not transactional as a batch: each insert commits on its own,
so a failure partway through :meth:`StoreSession.write_all` leaves the
earlier rows in place.
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING

from sqlalchemy import bindparam, delete, insert, select
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from roomctl.domain.directory import Directory
from roomctl.domain.errors import ValidationError
from roomctl.domain.post import Post
from roomctl.infrastructure.database.engine import create_store_engine, init_schema
from roomctl.infrastructure.database.schema import posts

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy import Connection, Delete, Insert, Select
    from sqlalchemy.engine import Engine

    from roomctl.config.models import ConnectionParams

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


class StoreError(Exception):
    """A store connection, statement, or timeout failure.

    The underlying driver exception, when there is one, is chained as
    ``__cause__``.
    """

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.message = message


class SessionState(enum.Enum):
    CLOSED = "closed"
    OPEN = "open"


def _describe(exc: BaseException) -> str:
    """Driver-level message for *exc*, without SQLAlchemy's statement dump."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


def _like_pattern(prefix: str) -> str:
    """``prefix%`` with LIKE metacharacters in *prefix* escaped."""
    escaped = (
        prefix.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"{escaped}%"


class StoreSession:
    """Exclusive owner of one store connection.

    Usage::

        with StoreSession(params) as store:
            store.write_all(directory)
            room = store.load("IC")

    Not safe for concurrent use; give each worker its own session.
    """

    def __init__(self, params: ConnectionParams) -> None:
        self._params = params
        self._engine: Engine | None = None
        self._conn: Connection | None = None
        self._insert_stmt: Insert | None = None
        self._query_stmt: Select | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return SessionState.OPEN if self._conn is not None else SessionState.CLOSED

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> StoreSession:
        """Connect and ensure the schema exists. No-op if already open."""
        if self._conn is not None:
            return self

        engine: Engine | None = None
        conn: Connection | None = None
        try:
            engine = create_store_engine(self._params)
            conn = engine.connect()
            init_schema(conn)
            conn.commit()
        except (SQLAlchemyError, ImportError) as exc:
            if conn is not None:
                conn.close()
            if engine is not None:
                engine.dispose()
            msg = f"{self._params.url} — connection failed: {_describe(exc)}"
            raise StoreError("open", msg) from exc

        self._engine = engine
        self._conn = conn
        logger.debug("Store session opened on %s", self._params.url)
        return self

    def close(self) -> None:
        """Release the connection and discard both statements. Idempotent."""
        if self._conn is None:
            return
        conn, engine = self._conn, self._engine
        self._conn = None
        self._engine = None
        self._insert_stmt = None
        self._query_stmt = None
        try:
            conn.close()
        except SQLAlchemyError as exc:
            raise StoreError("close", _describe(exc)) from exc
        finally:
            if engine is not None:
                engine.dispose()
        logger.debug("Store session closed")

    def __enter__(self) -> StoreSession:
        return self.open()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _connection(self, operation: str) -> Connection:
        if self._conn is None:
            raise StoreError(operation, "session is closed")
        return self._conn

    def _rollback(self, conn: Connection) -> None:
        try:
            conn.rollback()
        except SQLAlchemyError:
            logger.warning("Rollback failed", exc_info=True)

    # ------------------------------------------------------------------
    # Statements (built on first use, reused until close)
    # ------------------------------------------------------------------

    def _insert(self) -> Insert:
        if self._insert_stmt is None:
            self._insert_stmt = insert(posts).values(
                post_code=bindparam("code"),
                machine_id=bindparam("machine_id"),
                first_name=bindparam("first_name"),
                surname=bindparam("surname"),
            )
        return self._insert_stmt

    def _query(self) -> Select:
        if self._query_stmt is None:
            self._query_stmt = select(posts).where(
                posts.c.post_code.like(bindparam("pattern"), escape=LIKE_ESCAPE)
            )
        return self._query_stmt

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def load(self, prefix: str) -> Directory:
        """Read every stored post whose code starts with *prefix*.

        Rows go through :meth:`Directory.add`; a row that breaks a directory
        invariant (e.g. a duplicate code) means the store is inconsistent
        and aborts the read.
        """
        conn = self._connection("load")
        try:
            directory = Directory.create(prefix)
            rows = conn.execute(self._query(), {"pattern": _like_pattern(directory.prefix)})
            for row in rows:
                directory.add(row.post_code, Post(row.machine_id, row.first_name, row.surname))
        except (ValidationError, SQLAlchemyError) as exc:
            msg = f"Failed to load room '{prefix}': {_describe(exc)}"
            raise StoreError("load", msg) from exc
        finally:
            self._rollback(conn)

        logger.debug("Loaded %d posts for %s", directory.count(), directory.prefix)
        return directory

    def insert(self, code: str, post: Post | None) -> int:
        """Insert one row and commit. Returns the affected row count."""
        conn = self._connection("insert")
        if post is None:
            raise StoreError("insert", f"No post to insert under '{code}'")
        params = {
            "code": code,
            "machine_id": post.machine_id,
            "first_name": post.first_name,
            "surname": post.surname,
        }
        try:
            result = conn.execute(self._insert(), params)
            conn.commit()
        except SQLAlchemyError as exc:
            self._rollback(conn)
            raise StoreError("insert", f"Failed to insert post '{code}': {_describe(exc)}") from exc
        return result.rowcount

    def write_all(self, directory: Directory | None) -> int:
        """Insert every post of *directory*. Returns the total row count.

        Stops at the first failing insert; rows inserted before it stay.
        """
        if directory is None:
            raise StoreError("write_all", "No directory to write")
        total = 0
        for code in list(directory.codes()):
            total += self.insert(code, directory.get(code))
        logger.info("Wrote %d rows for %s", total, directory.prefix)
        return total

    def clear(self, prefix: str | None = None) -> int:
        """Delete stored rows, all of them or those under *prefix*.

        Returns the number of deleted rows.
        """
        conn = self._connection("clear")
        stmt: Delete = delete(posts)
        try:
            if prefix is not None:
                pattern = _like_pattern(Directory.create(prefix).prefix)
                stmt = stmt.where(posts.c.post_code.like(pattern, escape=LIKE_ESCAPE))
            result = conn.execute(stmt)
            conn.commit()
        except (ValidationError, SQLAlchemyError) as exc:
            self._rollback(conn)
            raise StoreError("clear", _describe(exc)) from exc
        logger.info("Cleared %d rows", result.rowcount)
        return result.rowcount

    def compact(self) -> None:
        """Reclaim unused space. Only SQLite needs it; other backends no-op."""
        conn = self._connection("compact")
        if conn.dialect.name != "sqlite":
            return
        try:
            conn.commit()
            conn.exec_driver_sql("VACUUM")
            conn.commit()
        except SQLAlchemyError as exc:
            self._rollback(conn)
            raise StoreError("compact", _describe(exc)) from exc
