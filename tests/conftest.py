"""
Shared pytest fixtures for all tests.

Provides an in-memory SQLite database, a mocked mail client and a TestClient
wired to both through FastAPI dependency overrides.
"""

import os
from typing import Generator
from unittest.mock import AsyncMock, MagicMock

# Must be set before the application modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from angelina.database import Base, get_db
from angelina.email_service import EmailSender, get_email_sender
from angelina.main import app
from angelina.rate_limiter import rate_limit_public_forms


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


# ============================================================================
# EMAIL FIXTURES
# ============================================================================


@pytest.fixture
def email_sender() -> MagicMock:
    """Mail client whose sends all succeed; swap in side_effect to simulate failures"""
    sender = MagicMock(spec=EmailSender)
    sender.send_client_confirmation = AsyncMock(return_value={"id": "client"})
    sender.send_admin_notification = AsyncMock(return_value={"id": "admin"})
    sender.send_status_update = AsyncMock(return_value={"id": "status"})
    sender.send_contact_message = AsyncMock(return_value={"id": "contact"})
    sender.send_newsletter_welcome = AsyncMock(return_value={"id": "welcome"})
    return sender


# ============================================================================
# APPLICATION FIXTURES
# ============================================================================


@pytest.fixture
def client(db_session, email_sender) -> Generator[TestClient, None, None]:
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    app.dependency_overrides[rate_limit_public_forms] = lambda: None

    yield TestClient(app)

    app.dependency_overrides.clear()


# ============================================================================
# TEST DATA
# ============================================================================


@pytest.fixture
def appointment_payload() -> dict:
    return {
        "firstName": "Ada",
        "surname": "Lovelace",
        "email": "ada@example.com",
        "whatsapp": "+2348012345678",
        "phone": "+2348012345678",
        "location": "Lagos",
        "work": "landing",
        "ranking": "basic",
        "description": "Need a one-page site",
    }
