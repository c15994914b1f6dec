"""SQLAlchemy mapping metadata for the Lens domain model."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    Dialect,
    ForeignKey,
    String,
    Table,
    TypeDecorator,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from lensindex.domain.model import Comment, Post, Profile

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

profile_table = Table(
    "profile",
    mapper_registry.metadata,
    Column("id", String, primary_key=True),
    Column("profile_id", BigInteger, nullable=False),
    Column("address", String, nullable=True),
    Column("handle", String, nullable=True),
    Column("image_uri", String, nullable=True),
    Column("timestamp", UTCDateTime(), nullable=False),
)

post_table = Table(
    "post",
    mapper_registry.metadata,
    Column("id", String, primary_key=True),
    Column("content_uri", String, nullable=True),
    Column("post_id", BigInteger, nullable=False),
    Column("profile_id", BigInteger, nullable=False),
    Column(
        "creator_profile_id",
        String,
        ForeignKey("profile.id"),
        nullable=False,
        index=True,
    ),
    Column("timestamp", UTCDateTime(), nullable=False),
)

comment_table = Table(
    "comment",
    mapper_registry.metadata,
    Column("id", String, primary_key=True),
    Column("content_uri", String, nullable=True),
    Column("comment_id", BigInteger, nullable=False),
    Column("profile_id", BigInteger, nullable=False),
    Column("profile_ref_id", String, ForeignKey("profile.id"), nullable=False, index=True),
    Column("original_post_id", BigInteger, nullable=False),
    Column("original_post_ref_id", String, ForeignKey("post.id"), nullable=False, index=True),
    Column("original_profile_id", BigInteger, nullable=False),
    Column(
        "original_profile_ref_id",
        String,
        ForeignKey("profile.id"),
        nullable=False,
        index=True,
    ),
    Column("timestamp", UTCDateTime(), nullable=False),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Profile, profile_table)

    mapper_registry.map_imperatively(
        Post,
        post_table,
        properties={
            "creator_profile": relationship(Profile, lazy="joined"),
        },
    )

    mapper_registry.map_imperatively(
        Comment,
        comment_table,
        properties={
            "profile": relationship(
                Profile,
                foreign_keys=[comment_table.c.profile_ref_id],
                lazy="joined",
            ),
            "original_post": relationship(
                Post,
                foreign_keys=[comment_table.c.original_post_ref_id],
                lazy="joined",
            ),
            "original_profile": relationship(
                Profile,
                foreign_keys=[comment_table.c.original_profile_ref_id],
                lazy="joined",
            ),
        },
    )

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
