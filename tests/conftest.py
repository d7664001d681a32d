from datetime import date
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from comexwatch.database.schema import Base
from comexwatch.ingestion.snapshot_loader import load_snapshot_file

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def session():
    """In-memory SQLite session with the comexwatch tables."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def today():
    return date(2024, 6, 15)


@pytest.fixture
def snapshot_path():
    return FIXTURES / "snapshot_sample.json"


@pytest.fixture
def snapshot(snapshot_path):
    return load_snapshot_file(snapshot_path)
