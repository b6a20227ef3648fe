"""
SQLAlchemy engine, session factory and unit-of-work helpers.

PostgreSQL is the production store; SQLite (file or in-memory) is accepted
for local runs and tests.
"""
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session, DeclarativeBase
from sqlalchemy.pool import StaticPool

from travel_cms.lib.settings import settings


class Base(DeclarativeBase):
    """Declarative base for every travel_cms model."""
    pass


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # One shared connection so an in-memory database survives across sessions
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
    }


engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    **_engine_options(settings.database_url),
)


if engine.dialect.name == "sqlite":
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # Review cascades and SET NULL links depend on enforced foreign keys
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Objects stay readable after commit so routes can serialize what services return
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request, always closed."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    Session for scripts: commits on exit, rolls back on error.

    Usage:
        with get_db_context() as db:
            db.add(User(email="admin@example.com", name="Admin", role=UserRole.ADMIN))
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Generator[Session, None, None]:
    """
    Unit of work on a request's session: commit on success, roll back and
    re-raise on any error. A review change and the aggregate recompute it
    triggers share one of these.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def init_db():
    """Create every table that does not exist yet."""
    import travel_cms.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def drop_db():
    """Drop all tables (create_admin.py --reset)."""
    import travel_cms.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
