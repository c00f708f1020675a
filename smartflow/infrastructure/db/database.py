"""
Database configuration and session management.
"""

from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from smartflow.config import settings


def build_engine(database_url: str, echo: bool = False, **kwargs) -> Engine:
    """Create an engine; SQLite connections are shared across threads."""
    if database_url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(database_url, echo=echo, **kwargs)


# Create SQLAlchemy engine
engine = build_engine(settings.database_url, echo=settings.debug)

# Create SessionLocal class
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Create declarative base
Base = declarative_base()


def create_tables(bind: Engine = engine) -> None:
    """Create every table that does not exist yet."""
    # Models register themselves on Base when imported.
    from smartflow.infrastructure.db import models  # noqa: F401
    Base.metadata.create_all(bind=bind)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get database session.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
