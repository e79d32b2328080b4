# core/db.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from core.config import DATABASE_URL, SQL_ECHO

Base = declarative_base()


def make_engine(url: str = DATABASE_URL, echo: bool = SQL_ECHO):
    """Create a future-mode engine; SQLite gets check_same_thread disabled."""
    kwargs = {"future": True, "echo": echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # An in-memory database lives on one connection, so every session must share it
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


def make_session_factory(bind):
    # expire_on_commit=False keeps attributes readable after the session closes
    return sessionmaker(bind=bind, autoflush=False, autocommit=False, expire_on_commit=False, future=True)


engine = make_engine()
SessionLocal = make_session_factory(engine)
