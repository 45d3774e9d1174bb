"""Engine lifecycle and unit of work for the SQLAlchemy tracking store.

``startup`` must run once per process (or per test) before a unit of work is
created. Each unit of work owns one session; callers commit explicitly and the
session rolls back when the ``with`` block raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from shiptrack.adapters.sqlalchemy.mappings import create_all_tables, start_mappers
from shiptrack.adapters.sqlalchemy.repositories import SqlAlchemyShipmentRepository
from shiptrack.config.storage import get_database_config
from shiptrack.domain.ports.unit_of_work import ShipmentRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the tracking store is used before ``startup`` or configured twice."""


@dataclass(slots=True)
class _StoreState:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None

    def bind(self, engine: Engine) -> None:
        self.engine = engine
        self.sessions = sessionmaker(bind=engine, expire_on_commit=False)

    def clear(self) -> None:
        self.engine = None
        self.sessions = None

    def session_factory(self) -> sessionmaker[Session]:
        if self.sessions is None:
            raise StartupError(
                "Tracking store not started; call "
                "shiptrack.adapters.sqlalchemy.unit_of_work.startup() first."
            )
        return self.sessions


_STATE = _StoreState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the tracking store to ``engine`` (or a new engine for the configured URI).

    Mappers are configured and missing tables are created. Pass ``force=True`` to
    rebind an already started store.
    """

    if _STATE.engine is not None and not force:
        raise StartupError("Tracking store already started; pass force=True to rebind it.")

    if engine is None:
        config = get_database_config()
        engine = create_engine(database_uri or config.uri, echo=config.echo, future=True)
    if _STATE.engine is not None and _STATE.engine is not engine:
        _STATE.engine.dispose()

    start_mappers()
    create_all_tables(engine)
    _STATE.bind(engine)
    log.info("Tracking store bound to %s", engine.url.render_as_string(hide_password=True))


def configured_engine() -> Engine | None:
    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the bound engine; mostly useful between tests."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.clear()


class SqlAlchemyShipmentUnitOfWork:
    """One session, with the shipment repository bound to it."""

    def __init__(self) -> None:
        self.session_factory = _STATE.session_factory()
        self._session: Session | None = None
        self._repositories: ShipmentRepositories | None = None

    def __enter__(self) -> SqlAlchemyShipmentUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work already entered")
        self._session = self.session_factory()
        self._repositories = ShipmentRepositories(
            shipments=SqlAlchemyShipmentRepository(self._session)
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work used outside its with block")
        return self._session

    @property
    def repositories(self) -> ShipmentRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work used outside its with block")
        return self._repositories

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from shiptrack.domain.ports.unit_of_work import ShipmentUnitOfWork

    _uow_check: ShipmentUnitOfWork = SqlAlchemyShipmentUnitOfWork()
