import logging
from contextlib import contextmanager
from pathlib import Path
from sqlalchemy import create_engine, text, inspect
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.engine import Engine

from .models import Base

logger = logging.getLogger(__name__)

# Global state for current ledger
_current_engine: Engine | None = None
_current_session_factory: sessionmaker | None = None


def open_ledger(db_path: Path) -> None:
    """
    Open a ledger (SQLite database file).

    Creates the file and tables if it doesn't exist.
    """
    global _current_engine, _current_session_factory

    if _current_engine is not None:
        close_ledger()

    db_path.parent.mkdir(parents=True, exist_ok=True)
    db_url = f"sqlite:///{db_path}"
    _current_engine = create_engine(db_url, echo=False)
    _current_session_factory = sessionmaker(bind=_current_engine, expire_on_commit=False)

    # Create tables if they don't exist
    Base.metadata.create_all(_current_engine)

    # Migrate existing tables: add missing columns
    _migrate_schema(_current_engine)

    logger.info("Opened ledger %s", db_path)


def _migrate_schema(engine: Engine) -> None:
    """Add any missing columns to existing tables."""
    inspector = inspect(engine)

    # Columns added after the first release of the ledger
    # Format: (table_name, column_name, column_type_sql)
    migrations = [
        ("period_meta", "savings_goal", "FLOAT NOT NULL DEFAULT 0"),
        ("period_meta", "savings_extra", "FLOAT NOT NULL DEFAULT 0"),
    ]

    with engine.connect() as conn:
        for table, column, col_type in migrations:
            if not inspector.has_table(table):
                continue
            existing = [c["name"] for c in inspector.get_columns(table)]
            if column not in existing:
                logger.info("Adding missing column %s.%s", table, column)
                conn.execute(text(
                    f"ALTER TABLE {table} ADD COLUMN {column} {col_type}"
                ))
                conn.commit()


def close_ledger() -> None:
    """Close the current ledger."""
    global _current_engine, _current_session_factory

    if _current_engine is not None:
        _current_engine.dispose()
        _current_engine = None
        _current_session_factory = None
        logger.info("Closed ledger")


def get_session() -> Session:
    """Get a database session for the current ledger."""
    if _current_session_factory is None:
        raise RuntimeError("No ledger is currently open")
    return _current_session_factory()


@contextmanager
def session_scope(immediate: bool = False):
    """
    One unit of work: commit on success, roll back and re-raise on error.

    With immediate=True the SQLite write lock is taken before the first read,
    so a read-modify-write cannot interleave with another writer.
    """
    session = get_session()
    try:
        if immediate:
            session.execute(text("BEGIN IMMEDIATE"))
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def is_ledger_open() -> bool:
    """Check if a ledger is currently open."""
    return _current_engine is not None


def get_current_ledger_path() -> Path | None:
    """Get the path of the currently open ledger."""
    if _current_engine is None:
        return None
    # Extract path from SQLite URL
    url = str(_current_engine.url)
    if url.startswith("sqlite:///"):
        return Path(url[10:])
    return None
