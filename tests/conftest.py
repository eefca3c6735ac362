"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from datetime import datetime, timedelta, timezone
from itertools import count
from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from gameroom.db.memory_repository import InMemoryRecordRepository
from gameroom.db.schema import Base
from gameroom.services.room_service import RoomService

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

START_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def testing_session_factory() -> Generator[sessionmaker[Session], None, None]:
    """Session factory bound to the test database, for wiring into the app."""
    Base.metadata.create_all(bind=engine)
    try:
        yield TestingSessionLocal
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def memory_repository() -> Generator[InMemoryRecordRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = InMemoryRecordRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def fake_clock() -> Callable[[], datetime]:
    """Clock advancing one minute per call, so timestamps are predictable."""
    ticks = count()
    return lambda: START_TIME + timedelta(minutes=next(ticks))


@pytest.fixture
def sequential_ids() -> Callable[[], str]:
    """Readable IDs (id-1, id-2, ...) instead of UUIDs."""
    ticks = count(1)
    return lambda: f"id-{next(ticks)}"


@pytest.fixture
def service(
    memory_repository: InMemoryRecordRepository,
    fake_clock: Callable[[], datetime],
    sequential_ids: Callable[[], str],
) -> RoomService:
    return RoomService(memory_repository, clock=fake_clock, id_factory=sequential_ids)
