"""
Database connection management.

The engine is built once from DATABASE_URL. Route handlers receive a
request-scoped session through the get_db() dependency; tests replace that
dependency with a session bound to an in-memory database.

Environment variables:
    - DATABASE_URL: SQLAlchemy URL (default: sqlite:///./kams_pos.db)
"""

import logging
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from . import config
from .models import Base

logger = logging.getLogger(__name__)

DATABASE_URL = config.DATABASE_URL

# SQLite connections are shared across the threadpool FastAPI runs sync routes in
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    DATABASE_URL,
    connect_args=_connect_args,
    pool_pre_ping=True,
    echo=False,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a SQLAlchemy Session.

    The session is always closed when the request finishes; uncommitted work
    is rolled back by close().
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create any missing tables. Managed databases use Alembic instead."""
    logger.info("Creating database tables (if missing)")
    Base.metadata.create_all(bind=engine)
