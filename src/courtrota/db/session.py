"""SQLite connection handling for the session store.

Sessions live in ``data/sessions.db`` unless a path is given. Pass
``":memory:"`` for a throwaway database (tests, dry runs).
"""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from courtrota.db.models import Base

DEFAULT_DB_PATH = Path("data") / "sessions.db"
IN_MEMORY = ":memory:"


def database_url(db_path: str | Path | None = None) -> str:
    """SQLAlchemy URL for a session database, creating its folder if needed."""
    if db_path is not None and str(db_path) == IN_MEMORY:
        return "sqlite://"
    path = Path(db_path) if db_path else DEFAULT_DB_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{path}"


def get_engine(db_path: str | Path | None = None, echo: bool = False) -> Engine:
    """Engine for the session database at ``db_path`` (``echo`` logs SQL)."""
    return create_engine(database_url(db_path), echo=echo)


def get_session(engine: Engine | None = None) -> Session:
    """Open an ORM session, on the default database when no engine is given."""
    return sessionmaker(bind=engine or get_engine())()


def init_db(engine: Engine | None = None) -> Engine:
    """Create the session tables if they are missing and return the engine."""
    engine = engine or get_engine()
    Base.metadata.create_all(engine)
    return engine
