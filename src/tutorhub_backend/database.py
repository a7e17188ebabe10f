import os
from typing import Generator, Callable
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool
import sqlalchemy.exc as sa_exc

from tutorhub_backend.settings import settings

POSTGRES_HOST = os.environ.get("POSTGRES_HOST", "localhost")
POSTGRES_PORT = os.environ.get("POSTGRES_PORT", "5432")
POSTGRES_USER = os.environ.get("POSTGRES_USER")
POSTGRES_PASSWORD = os.environ.get("POSTGRES_PASSWORD")
POSTGRES_DB = os.environ.get("POSTGRES_DB")

DATABASE_URL = settings.DATABASE_URL or (
    f"postgresql+psycopg2://{POSTGRES_USER}:{POSTGRES_PASSWORD}@{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}"
)


def build_engine(url: str):
    """Create the engine; SQLite gets the default pool, everything else a tuned QueuePool."""
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False}, future=True)

    return create_engine(
        url,
        poolclass=QueuePool,
        pool_size=10,
        max_overflow=20,
        pool_timeout=30,
        pool_recycle=1800,     # 30 min - protects against idle disconnects
        pool_pre_ping=True,
        pool_use_lifo=True,
        future=True
    )


_engine = build_engine(DATABASE_URL)

SessionLocal: Callable[[], Session] = sessionmaker(
    bind=_engine,
    autocommit=False,
    expire_on_commit=False,
    autoflush=False,
    class_=Session
)


def _get_db() -> Generator[Session, None, None]:
    """
    Internal database session generator with transaction management.

    Commits on success, rolls back on any exception and always closes
    the session.
    """
    db = SessionLocal()
    try:
        yield db

        if db.in_transaction():
            db.commit()
    except Exception:
        if db.in_transaction():
            db.rollback()
        raise
    finally:
        db.close()


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency: provides one database session per request.

    Usage:
        @router.get("/teams")
        async def list_teams(db: Session = Depends(get_db)):
            ...
    """
    try:
        yield from _get_db()
    except sa_exc.TimeoutError as e:  # QueuePool acquisition timed out
        from tutorhub_backend.exceptions import ServiceUnavailableException
        raise ServiceUnavailableException(
            detail="Database is busy. Please retry shortly.",
            headers={"Retry-After": "2"}
        ) from e
