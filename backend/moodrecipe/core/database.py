"""
database.py — Database Engine, Session Factory & Per-Request Session

Purpose:
- Build the SQLAlchemy Engine and Session factory from the configured URL.
- Expose a FastAPI dependency `get_db()` that yields a session per-request.
- Hold the shared declarative `Base` all ORM models register on.

Key Characteristics:
- Synchronous SQLAlchemy engine. Routes that use it are plain `def` handlers,
  so FastAPI runs them in its worker threadpool and the event loop never blocks.
- No Alembic migrations; init_db() creates missing tables at startup.
- Engine and factory live on the AppContext, not at module level.

This module does NOT:
- Define ORM models (see moodrecipe/models/*).
- Perform any queries or business logic.
"""

from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()

# -----------------------------------------------------------------------------
# Engine / Session Factory
# -----------------------------------------------------------------------------

def normalize_url(db_url: str) -> str:
    """
    Use the psycopg (v3) driver for bare postgresql:// URLs.
    """
    db_url = db_url.strip()
    if db_url.startswith("postgresql://") and "+" not in db_url.split("://")[0]:
        db_url = db_url.replace("postgresql://", "postgresql+psycopg://", 1)
    return db_url


def build_engine(db_url: str) -> Engine:
    """
    Create the engine for `db_url`.

    SQLite connections are shared across the threadpool, so the same-thread
    check is disabled; in-memory SQLite additionally needs a single static
    connection or every session would see an empty database.
    """
    if not db_url or not db_url.strip():
        raise RuntimeError("Database is not configured. Please set DATABASE_URL.")

    db_url = normalize_url(db_url)

    if db_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(db_url, **kwargs)

    return create_engine(
        db_url,
        pool_pre_ping=True  # Ensures connections are valid before use
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine
    )


def init_db(engine: Engine) -> None:
    """
    Create all tables registered on Base that do not exist yet.
    """
    # Importing the package registers every model on Base.metadata
    import moodrecipe.models  # noqa: F401

    Base.metadata.create_all(bind=engine)

# -----------------------------------------------------------------------------
# FastAPI Dependency
# -----------------------------------------------------------------------------

def get_db(request: Request) -> Iterator[Session]:
    """
    FastAPI dependency: yields a database session for the duration of the request.

    Usage in API endpoint:
        def endpoint(db: Session = Depends(get_db)):
            db.query(...)
    """
    db = request.app.state.context.session_factory()
    try:
        yield db
    finally:
        db.close()
