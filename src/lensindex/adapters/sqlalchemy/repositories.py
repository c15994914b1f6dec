"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from itertools import batched
from typing import TYPE_CHECKING, cast

from sqlalchemy import func, select

from lensindex.adapters.sqlalchemy.mappings import comment_table, post_table, profile_table
from lensindex.domain.model import Comment, Post, Profile

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from sqlalchemy import Table
    from sqlalchemy.orm import Session

# stays below SQLite's bound-parameter limit
LOOKUP_CHUNK_SIZE = 500


class SqlAlchemyEntityRepository[TEntity]:
    """Key-set lookup and ORM upsert for one mapped entity class.

    ``upsert_all`` adds new instances and leaves already persistent ones to the
    session's change tracking, then flushes so rows land in dependency order.
    """

    def __init__(self, session: Session, entity_cls: type[TEntity], table: Table) -> None:
        self.session = session
        self._entity_cls = entity_cls
        self._table = table

    def find_by_keys(self, keys: Collection[str]) -> list[TEntity]:
        found: list[TEntity] = []
        for chunk in batched(sorted(keys), LOOKUP_CHUNK_SIZE):
            stmt = select(self._entity_cls).where(self._table.c.id.in_(chunk))
            found.extend(self.session.scalars(stmt).all())
        return found

    def upsert_all(self, entities: Iterable[TEntity]) -> None:
        self.session.add_all(list(entities))
        self.session.flush()

    def get(self, key: str) -> TEntity | None:
        return self.session.get(self._entity_cls, key)

    def count(self) -> int:
        stmt = select(func.count()).select_from(self._table)
        return self.session.execute(stmt).scalar_one()


class SqlAlchemyProfileRepository(SqlAlchemyEntityRepository[Profile]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Profile, profile_table)


class SqlAlchemyPostRepository(SqlAlchemyEntityRepository[Post]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Post, post_table)


class SqlAlchemyCommentRepository(SqlAlchemyEntityRepository[Comment]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Comment, comment_table)


if TYPE_CHECKING:
    from lensindex.domain.ports.persistence import (
        CommentRepository,
        PostRepository,
        ProfileRepository,
    )

    _session_stub = cast("Session", object())
    _profile_repo: ProfileRepository = SqlAlchemyProfileRepository(_session_stub)
    _post_repo: PostRepository = SqlAlchemyPostRepository(_session_stub)
    _comment_repo: CommentRepository = SqlAlchemyCommentRepository(_session_stub)
