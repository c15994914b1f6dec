"""SQLAlchemy-backed unit of work for reconciliation batches.

The adapter keeps one engine and session factory per process. ``startup()``
must run first: it maps the domain classes and upgrades the schema.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from lensindex.adapters.sqlalchemy.mappings import start_mappers
from lensindex.adapters.sqlalchemy.migrations import upgrade_head
from lensindex.adapters.sqlalchemy.repositories import (
    SqlAlchemyCommentRepository,
    SqlAlchemyPostRepository,
    SqlAlchemyProfileRepository,
)
from lensindex.config.storage import get_database_config
from lensindex.domain.ports.unit_of_work import LensRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the SQLAlchemy adapter is used before (or twice during) initialisation."""


_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the adapter to ``engine`` (or a new one for ``database_uri``) and migrate it."""

    global _engine, _session_factory  # noqa: PLW0603

    if _engine is not None and not force:
        raise StartupError("SQLAlchemy adapter already initialised. Pass force=True to rebind.")

    bound = engine or create_engine(database_uri or get_database_config().uri, future=True)
    start_mappers()
    upgrade_head(engine=bound)
    log.info(f"Database ready at {bound.url.render_as_string(hide_password=True)}")

    _engine = bound
    # entities are read after commit for metadata indexing
    _session_factory = sessionmaker(bind=bound, expire_on_commit=False)


def configured_engine() -> Engine | None:
    return _engine


def is_started() -> bool:
    return _engine is not None


def shutdown() -> None:
    """Dispose the engine and forget it (primarily for tests)."""

    global _engine, _session_factory  # noqa: PLW0603

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


class SqlAlchemyLensUnitOfWork:
    """One session per reconciliation batch; rolled back when the block raises."""

    def __init__(self) -> None:
        if _session_factory is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call lensindex.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        self._session_factory = _session_factory
        self._session: Session | None = None
        self._repositories: LensRepositories | None = None

    def __enter__(self) -> SqlAlchemyLensUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work session already open")
        self._session = self._session_factory()
        self._repositories = LensRepositories(
            profiles=SqlAlchemyProfileRepository(self._session),
            posts=SqlAlchemyPostRepository(self._session),
            comments=SqlAlchemyCommentRepository(self._session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        self.session.close()
        self._session = None
        self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not open")
        return self._session

    @property
    def repositories(self) -> LensRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work session not open")
        return self._repositories

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from lensindex.domain.ports.unit_of_work import LensUnitOfWork

    _uow_check: LensUnitOfWork = SqlAlchemyLensUnitOfWork()
