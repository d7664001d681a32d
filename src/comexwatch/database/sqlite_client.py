from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .schema import Base


def get_engine(sqlite_path: str) -> Engine:
    """Create an engine for a SQLite file (``:memory:`` for an in-memory database)."""
    return create_engine(f"sqlite:///{sqlite_path}")


def init_db(engine: Engine) -> None:
    Base.metadata.create_all(engine)


@contextmanager
def session_context(sqlite_path: str) -> Iterator[Session]:
    """Session that commits on success and rolls back on error."""
    engine = get_engine(sqlite_path)
    init_db(engine)
    session = sessionmaker(bind=engine)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
        engine.dispose()
