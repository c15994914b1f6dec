"""SQLAlchemy adapter package for lensindex."""

from __future__ import annotations

from .mappings import (
    comment_table,
    create_all_tables,
    mapper_registry,
    post_table,
    profile_table,
    start_mappers,
)
from .repositories import (
    SqlAlchemyCommentRepository,
    SqlAlchemyEntityRepository,
    SqlAlchemyPostRepository,
    SqlAlchemyProfileRepository,
)

__all__ = [
    "SqlAlchemyCommentRepository",
    "SqlAlchemyEntityRepository",
    "SqlAlchemyPostRepository",
    "SqlAlchemyProfileRepository",
    "comment_table",
    "create_all_tables",
    "mapper_registry",
    "post_table",
    "profile_table",
    "start_mappers",
]
