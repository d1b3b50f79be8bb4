"""Database connection manager for the registration registry."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from eventreg.logging import get_logger
from eventreg.registry.exceptions import StoreError
from eventreg.registry.models import Base

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Engine

logger = get_logger("registry")

MEMORY_PATH = ":memory:"


def _enable_sqlite_pragmas(dbapi_connection: object, _connection_record: object) -> None:
    # WAL for concurrent readers; SQLite leaves foreign keys off by default
    cursor = dbapi_connection.cursor()  # type: ignore[attr-defined]
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """SQLite connection manager.

    Owns the engine and session factory and hands out sessions through
    ``session_scope``, which converts driver failures into StoreError.
    """

    def __init__(self, db_path: str = "eventreg.db") -> None:
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. Use ":memory:" for in-memory DB.
        """
        self.db_path = db_path
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    def _build_engine(self) -> Engine:
        if self.db_path == MEMORY_PATH:
            # One shared connection so every session sees the same in-memory DB,
            # including sessions opened from TestClient worker threads
            engine = create_engine(
                "sqlite:///:memory:",
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        else:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            engine = create_engine(
                f"sqlite:///{self.db_path}",
                connect_args={"check_same_thread": False},
            )
        event.listen(engine, "connect", _enable_sqlite_pragmas)
        logger.debug("Created engine for %s", self.db_path)
        return engine

    @property
    def engine(self) -> Engine:
        """Get or create the database engine."""
        if self._engine is None:
            self._engine = self._build_engine()
        return self._engine

    @property
    def session_factory(self) -> sessionmaker[Session]:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)
        return self._session_factory

    def create_tables(self) -> None:
        """Create all tables if they don't exist.

        Raises:
            StoreError: If the schema cannot be created.
        """
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to create tables in '{self.db_path}': {e}") from e

    def drop_tables(self) -> None:
        """Drop all tables. Use with caution!"""
        Base.metadata.drop_all(self.engine)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a session, rolling back and wrapping database failures.

        Commits are left to the caller. Errors other than SQLAlchemyError and
        OverflowError (e.g. NotFoundError raised by the caller) propagate unchanged.

        Raises:
            StoreError: If any database operation inside the block fails, or a
                value does not fit a SQLite INTEGER column.
        """
        session = self.session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Database operation failed: %s", e)
            raise StoreError(f"Database operation failed: {e}") from e
        except OverflowError as e:
            # sqlite3 refuses ints outside 64-bit range before SQLAlchemy sees them
            session.rollback()
            logger.error("Value out of range for SQLite INTEGER: %s", e)
            raise StoreError(f"Value out of range for database column: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def is_wal_mode(self) -> bool:
        """Check if WAL mode is enabled.

        In-memory databases always report "memory" and return False.
        """
        with self.engine.connect() as conn:
            mode = conn.execute(text("PRAGMA journal_mode")).scalar()
            return mode == "wal"

    def close(self) -> None:
        """Dispose the engine and forget the session factory."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None
