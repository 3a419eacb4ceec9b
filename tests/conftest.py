"""Shared test fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from datetime import date, datetime

from subwatch.database import Base
from subwatch.dependencies import get_db
from subwatch.main import app
from subwatch.models.override import SubscriptionOverride
from tests.helpers import add_transactions


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test using in-memory SQLite."""
    # Use StaticPool to ensure all connections use the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Create session
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def gym_transactions(db_session):
    """Three monthly gym charges."""
    add_transactions(db_session, [
        ("GYM", "-40.00", date(2023, 1, 1)),
        ("GYM", "-40.00", date(2023, 2, 1)),
        ("GYM", "-40.00", date(2023, 3, 3)),
    ])


@pytest.fixture
def streaming_transactions(db_session):
    """A cheaper monthly streaming charge plus noise that never qualifies."""
    add_transactions(db_session, [
        ("NETFLIX", "-15.00", date(2024, 1, 5)),
        ("NETFLIX", "-15.00", date(2024, 2, 4)),
        ("NETFLIX", "-15.00", date(2024, 3, 5)),
        ("COFFEE SHOP", "-4.50", date(2024, 1, 2)),
        ("COFFEE SHOP", "-4.50", date(2024, 1, 30)),
        ("PAYROLL", "2000.00", date(2024, 1, 15)),
        ("PAYROLL", "2000.00", date(2024, 2, 15)),
        ("PAYROLL", "2000.00", date(2024, 3, 15)),
    ])


@pytest.fixture
def hidden_gym(db_session):
    """An override hiding the gym."""
    override = SubscriptionOverride(merchant_key="gym", hidden_at=datetime(2023, 3, 10, 12, 0))
    db_session.add(override)
    db_session.commit()
    db_session.refresh(override)
    return override
