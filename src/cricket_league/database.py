"""Database connection, session management and schema creation."""

import logging
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, event, Engine
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import sessionmaker, Session
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .config import DatabaseSettings, get_settings
from .errors import LeagueError, StoreUnavailableError, translate_store_error


logger = logging.getLogger(__name__)


def _configure_sqlite(engine: Engine) -> None:
    """Enforce foreign keys and let SQLAlchemy own BEGIN so savepoints work.

    Transactions take the write lock up front so concurrent writers wait on
    the busy timeout instead of failing when a read lock is upgraded.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


class Store:
    """Handle on the relational store: one pooled engine and its session factory.

    Constructed explicitly and passed to every repository and service.
    """

    def __init__(self, settings: DatabaseSettings):
        self.settings = settings
        if settings.is_sqlite:
            connect_args = {"check_same_thread": False, "timeout": settings.connect_timeout}
        else:
            connect_args = {"connect_timeout": settings.connect_timeout}

        self.engine = create_engine(
            settings.url,
            pool_size=settings.pool_size,
            pool_pre_ping=settings.pool_pre_ping,
            pool_recycle=settings.pool_recycle,
            echo=settings.echo,
            connect_args=connect_args,
        )
        if settings.is_sqlite:
            _configure_sqlite(self.engine)

        self._session_factory = sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Optional[DatabaseSettings] = None) -> "Store":
        return cls(settings or get_settings().database)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Yield a session scoped to one unit of work.

        Commits when the block exits normally, rolls back on any exception and
        always returns the connection to the pool. Store errors are re-raised
        as ``LeagueError`` subclasses.
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except LeagueError:
            session.rollback()
            raise
        except DBAPIError as exc:
            session.rollback()
            logger.error("Store error: %s", exc.orig)
            raise translate_store_error(exc) from exc
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def retrying(self) -> Retrying:
        """Retry policy for work that fails because the store is unreachable."""
        return Retrying(
            reraise=True,
            stop=stop_after_attempt(self.settings.retry_attempts),
            wait=wait_exponential(multiplier=0.1, max=self.settings.retry_wait_max),
            retry=retry_if_exception_type(StoreUnavailableError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
        )

    def ensure_schema(self) -> None:
        """Create all tables and constraints that do not exist yet, atomically.

        Connection failures are retried with backoff before giving up.
        """
        from .models import Base

        def create() -> None:
            try:
                with self.engine.begin() as conn:
                    Base.metadata.create_all(bind=conn)
            except DBAPIError as exc:
                logger.error("Schema initialization failed: %s", exc.orig)
                raise StoreUnavailableError("Schema initialization failed") from exc

        self.retrying()(create)
        logger.info("Database schema checked/initialized")

    def drop_schema(self) -> None:
        """Drop all tables."""
        from .models import Base

        with self.engine.begin() as conn:
            Base.metadata.drop_all(bind=conn)

    def dispose(self) -> None:
        """Close every pooled connection."""
        self.engine.dispose()
