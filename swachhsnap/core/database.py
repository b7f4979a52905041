"""Database engine, session factory and declarative base."""
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base, Session

from swachhsnap.core.config import settings

engine_kwargs = {"pool_pre_ping": True}

# SQLite connections are shared with the threadpool FastAPI runs sync handlers on
if settings.DATABASE_URL.startswith("sqlite"):
    engine_kwargs["connect_args"] = {"check_same_thread": False}

engine = create_engine(settings.DATABASE_URL, **engine_kwargs)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_session_factory() -> sessionmaker:
    """Session factory dependency for work that outlives a single request."""
    return SessionLocal


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a session and always closes it once the request is done.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
