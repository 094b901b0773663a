"""Database handle, session management and reference data seeding."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from filmshelf.models import Base, Classification, GenreName

logger = logging.getLogger(__name__)

DEFAULT_CLASSIFICATIONS = ("G", "PG", "PG-13", "R", "NC-17")
DEFAULT_GENRES = ("Comedy", "Drama", "Animation", "Thriller", "Documentary", "Action")


def _configure_sqlite_connection(dbapi_connection, _connection_record) -> None:
    # let SQLAlchemy emit BEGIN itself so SAVEPOINTs nest inside the transaction
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _begin_sqlite_transaction(connection) -> None:
    connection.exec_driver_sql("BEGIN")


class Database:
    """Process-wide engine + session factory, opened at startup and disposed at shutdown."""

    def __init__(self, url: str) -> None:
        self.url = url
        is_sqlite = url.startswith("sqlite")
        # sync FastAPI dependencies may finish the session on another worker thread
        connect_args = {"check_same_thread": False} if is_sqlite else {}
        self.engine: Engine = create_engine(url, future=True, connect_args=connect_args)
        if is_sqlite:
            event.listen(self.engine, "connect", _configure_sqlite_connection)
            event.listen(self.engine, "begin", _begin_sqlite_transaction)
        self.session_factory = sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
            future=True,
        )

    def init_models(self, *, seed: bool = True) -> None:
        """Create tables if they do not exist and seed lookup tables."""

        Base.metadata.create_all(bind=self.engine)
        if seed:
            with self.session_scope() as session:
                seed_reference_data(session)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Transactional scope: commit on success, roll back on any failure."""

        session = self.session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        logger.info("Disposing database engine for %s", self.engine.url)
        self.engine.dispose()


def seed_reference_data(session: Session) -> None:
    """Insert the default classifications and genres into empty lookup tables."""

    if not session.execute(select(func.count()).select_from(Classification)).scalar_one():
        session.add_all(
            Classification(id=index, name=name)
            for index, name in enumerate(DEFAULT_CLASSIFICATIONS, start=1)
        )
        logger.info("Seeded %d classifications", len(DEFAULT_CLASSIFICATIONS))
    if not session.execute(select(func.count()).select_from(GenreName)).scalar_one():
        session.add_all(
            GenreName(id=index, name=name)
            for index, name in enumerate(DEFAULT_GENRES, start=1)
        )
        logger.info("Seeded %d genres", len(DEFAULT_GENRES))
    session.flush()


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_session(request: Request) -> Iterator[Session]:
    """FastAPI-friendly dependency that manages commits/rollbacks."""

    with get_database(request).session_scope() as session:
        yield session
