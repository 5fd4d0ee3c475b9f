"""Relational store engine, schema, and session via SQLAlchemy Core."""

from roomctl.infrastructure.database.engine import create_store_engine, init_schema
from roomctl.infrastructure.database.schema import metadata, posts
from roomctl.infrastructure.database.session import SessionState, StoreError, StoreSession

__all__ = [
    "SessionState",
    "StoreError",
    "StoreSession",
    "create_store_engine",
    "init_schema",
    "metadata",
    "posts",
]
