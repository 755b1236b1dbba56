"""Database engine, declarative base and session helpers."""
from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from core.config_loader import settings


class Base(DeclarativeBase):
    pass


def build_engine(url: str, *, echo: bool = False) -> Engine:
    """Create an engine; SQLite gets FK enforcement and, in memory, a shared connection."""
    kwargs: dict = {"echo": echo, "future": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url:
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
        kwargs["pool_recycle"] = 3600

    eng = create_engine(url, **kwargs)

    if eng.dialect.name == "sqlite":
        @event.listens_for(eng, "connect")
        def _sqlite_pragmas(dbapi_conn, _record):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON")
            cur.close()

    return eng


engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)


def init_db(bind: Optional[Engine] = None) -> None:
    import models_bootstrap  # noqa: F401  registers every mapped table
    Base.metadata.create_all(bind=bind or engine)


def dialect_insert(session: Session, table):
    """Return an INSERT construct that supports ON CONFLICT for the session's backend."""
    name = session.get_bind().dialect.name
    if name == "postgresql":
        return postgresql.insert(table)
    if name == "sqlite":
        return sqlite.insert(table)
    raise NotImplementedError(f"upsert is not supported on dialect {name!r}")


def aware(dt: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops tzinfo; stored instants are always UTC."""
    if dt is None:
        return None
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)
