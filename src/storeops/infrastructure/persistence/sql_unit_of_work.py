"""SQLAlchemy-backed unit of work.

Each ``transaction()`` gets a fresh Session. Product and sale reads inside
it are ``SELECT ... FOR UPDATE`` on server databases, and the engine runs
at the configured isolation level. SQLite has no row locks, so every
SQLite transaction starts with ``BEGIN IMMEDIATE`` and holds the database
write lock from its first statement; two stock transactions can therefore
never interleave their check and their decrement.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from storeops.domain.exceptions import PersistenceError
from storeops.domain.repository.unit_of_work import UnitOfWork
from storeops.infrastructure.persistence.sql_models import Base
from storeops.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)
from storeops.infrastructure.persistence.sql_sale_repository import SqlSaleRepository

logger = logging.getLogger(__name__)


def build_engine(database_url: str, isolation_level: str = "SERIALIZABLE") -> Engine:
    """Create the engine and make sure the schema exists."""
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(url)
        _use_immediate_transactions(engine)
    else:
        engine = create_engine(url, isolation_level=isolation_level)

    try:
        Base.metadata.create_all(engine)
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Cannot initialise database schema: {exc}") from exc
    return engine


def _use_immediate_transactions(engine: Engine) -> None:
    # pysqlite's own transaction handling defers BEGIN; take it over.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


class SqlUnitOfWork(UnitOfWork):
    """Not shared between threads: give each worker its own instance."""

    def __init__(self, engine: Engine) -> None:
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)
        self._session: Session | None = None

    @contextmanager
    def transaction(self) -> Iterator[UnitOfWork]:
        try:
            with super().transaction() as tx:
                yield tx
        except SQLAlchemyError as exc:
            logger.error("Database transaction failed and was rolled back: %s", exc)
            raise PersistenceError(str(exc)) from exc

    def _begin(self) -> None:
        if self._session is not None:
            raise PersistenceError("A transaction is already open on this unit of work")
        self._session = self._session_factory()
        self._session.begin()
        self.products = SqlProductRepository(self._session)
        self.sales = SqlSaleRepository(self._session)

    def _commit(self) -> None:
        session = self._require_session()
        try:
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            raise
        finally:
            self._close()

    def _rollback(self) -> None:
        session = self._require_session()
        try:
            session.rollback()
        finally:
            self._close()
        logger.debug("Transaction rolled back")

    def _require_session(self) -> Session:
        if self._session is None:
            raise PersistenceError("No transaction is open")
        return self._session

    def _close(self) -> None:
        if self._session is not None:
            self._session.close()
        self._session = None
