"""Database setup and session management."""

import logging
from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from config import settings
from services.exceptions import ConstraintViolation, WriteConflict

logger = logging.getLogger(__name__)

SERIALIZATION_FAILURE = "40001"


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """Register a ``connect`` event listener that turns on FK enforcement.

    SQLite ships with foreign key checks disabled per connection, so the
    catalog/holdings references would otherwise go unchecked.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_foreign_keys(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


@lru_cache
def get_engine() -> Engine:
    """Get or create the database engine (cached)."""
    connect_args = {}
    database_url = settings.DATABASE_URL

    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    engine = create_engine(
        database_url,
        connect_args=connect_args,
    )
    enable_sqlite_foreign_keys(engine)
    return engine


def get_session_local():
    """Get a sessionmaker bound to the engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def get_db():
    """Provide a database session, rolling back on error.

    Transaction conventions:
    - Write procedures in ``services`` own their transaction and commit
      through :func:`write_transaction`.
    - ``HoldingsService.add_holding`` additionally takes the write lock
      up front via :func:`acquire_write_lock`.
    - Reporting reads never commit.
    """
    SessionLocal = get_session_local()
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(engine: Engine | None = None) -> None:
    """Create every table that does not exist yet."""
    import models  # noqa: F401  registers the mappers on Base.metadata

    engine = engine or get_engine()
    Base.metadata.create_all(bind=engine)
    logger.info("Schema created (%d tables)", len(Base.metadata.tables))


def drop_db(engine: Engine | None = None) -> None:
    """Drop every table, dependents first."""
    import models  # noqa: F401

    engine = engine or get_engine()
    Base.metadata.drop_all(bind=engine)
    logger.info("Schema dropped")


def acquire_write_lock(db: Session) -> None:
    """Serialize the current transaction against other writers.

    Must be called before the first read of a check-then-act sequence.
    On SQLite this issues ``BEGIN IMMEDIATE`` (unless the connection is
    already inside a write transaction, which holds the lock anyway).

    Other backends get SERIALIZABLE isolation. The level can only be set
    when a transaction begins, so a transaction the session already has
    open (e.g. from an earlier read) is committed first.
    """
    bind = db.get_bind()
    if bind.dialect.name == "sqlite":
        dbapi_conn = db.connection().connection.dbapi_connection
        if not dbapi_conn.in_transaction:
            db.execute(text("BEGIN IMMEDIATE"))
    else:
        if db.in_transaction():
            db.commit()
        db.connection(execution_options={"isolation_level": "SERIALIZABLE"})


def is_serialization_failure(exc: OperationalError) -> bool:
    """True if the driver reported SQLSTATE 40001 (could not serialize)."""
    orig = exc.orig
    # psycopg2 exposes ``pgcode``, psycopg 3 ``sqlstate``
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    return code == SERIALIZATION_FAILURE


@contextmanager
def write_transaction(db: Session) -> Iterator[Session]:
    """Run a block as one all-or-nothing unit of work.

    Commits when the block completes. Any exception rolls the whole
    transaction back (including change-log rows written by flush hooks)
    before propagating. Integrity errors are re-raised as
    :class:`ConstraintViolation` and serialization failures under
    SERIALIZABLE isolation as :class:`WriteConflict`.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Write rejected by constraint: %s", exc.orig)
        raise ConstraintViolation(str(exc.orig)) from exc
    except OperationalError as exc:
        db.rollback()
        if not is_serialization_failure(exc):
            raise
        logger.warning("Write lost a serialization conflict: %s", exc.orig)
        raise WriteConflict(str(exc.orig)) from exc
    except Exception:
        db.rollback()
        raise
