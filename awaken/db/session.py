"""Database engine and session management."""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from awaken.core.config import settings
from awaken.db.base import Base
from awaken.db.migrations import ensure_sqlite_schema

connect_args: dict[str, bool] = {"check_same_thread": False}
engine = create_engine(settings.database_url, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine = engine) -> None:
    """Create missing tables and upgrade legacy store layouts."""
    Base.metadata.create_all(bind=bind)
    ensure_sqlite_schema(bind)
