"""
Shared fixtures for the persistence tests.
Board surfaces are stored in an in-memory SQLite database that only lives for the duration of one test.
"""

from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from chessboard.db.schema import Base

# In-memory SQLite behind a single shared connection (StaticPool): every session sees the same boards table
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def board_db_session() -> Generator[Session, None, None]:
    """Session on a fresh `boards` table. The table is dropped at teardown, so no stored board leaks into the next test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()

