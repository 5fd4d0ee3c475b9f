"""SQLAlchemy Core table definitions for the roomctl store.

A single table. Code uniqueness is enforced by the Directory layer, not
by the store, so no primary key is declared.
"""

from __future__ import annotations

from sqlalchemy import Column, Index, MetaData, Table, Text

metadata = MetaData()

posts = Table(
    "posts",
    metadata,
    Column("post_code", Text, nullable=False),
    Column("machine_id", Text, nullable=False),
    Column("first_name", Text, nullable=False),
    Column("surname", Text, nullable=False),
)

Index("ix_posts_post_code", posts.c.post_code)
