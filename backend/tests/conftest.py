"""Shared test fixtures for authentication tests."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.constants import NotificationKind, UserRole
from app.database import get_db
from app.main import app
from app.models.email_verification_token import EmailVerificationToken
from app.models.password_reset_token import PasswordResetToken
from app.models.security_audit_log import SecurityAuditLog
from app.models.session import Session
from app.models.user import User
from app.services.password_service import PasswordService

AUTH_TABLES = [
    User.__table__,
    Session.__table__,
    EmailVerificationToken.__table__,
    PasswordResetToken.__table__,
    SecurityAuditLog.__table__,
]


class RecordingNotifier:
    """Notification sink that keeps every call for assertions."""

    def __init__(self):
        self.sent: list[tuple[str, str, str | None]] = []

    def notify(self, recipient_email: str, kind: str, token: str | None = None) -> None:
        self.sent.append((recipient_email, kind, token))

    def last_token(self, kind: str) -> str | None:
        for _, sent_kind, token in reversed(self.sent):
            if sent_kind == kind:
                return token
        return None

    def kinds(self) -> list[str]:
        return [kind for _, kind, _ in self.sent]


def _create_engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    for table in AUTH_TABLES:
        table.create(engine, checkfirst=True)
    return engine


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Use the minimum bcrypt cost so tests stay fast."""
    monkeypatch.setattr(settings, "bcrypt_rounds", 4)


@pytest.fixture
def db_session():
    """In-memory SQLite session with the auth tables created."""
    engine = _create_engine()
    testing_session_local = sessionmaker(
        autocommit=False, autoflush=False, bind=engine, expire_on_commit=False
    )
    session = testing_session_local()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def make_user(db_session):
    """Factory inserting a user directly, bypassing registration."""

    def _make_user(
        email: str = "user@example.com",
        password: str = "pw123456",
        name: str = "Test User",
        role: str = UserRole.USER,
        email_verified: bool = True,
    ) -> User:
        user = User(
            email=email,
            password_hash=PasswordService.hash_password(password),
            name=name,
            role=role,
            email_verified=email_verified,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture
def sent_emails():
    """Capture notifications handed to the background email sender.

    Yields the mock; each call is (recipient_email, kind, token).
    """
    with patch("app.services.notifications.EmailService.send_notification") as mock_send:
        mock_send.return_value = True
        yield mock_send


def last_token(mock_send, kind: str) -> str | None:
    """Most recent token delivered for a notification kind."""
    for call in reversed(mock_send.call_args_list):
        email, sent_kind, token = call.args
        if sent_kind == kind:
            return token
    return None


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register_and_verify_user(
    test_client: TestClient,
    sent_emails,
    email: str,
    password: str = "pw123456",
    name: str = "Test User",
) -> str:
    """Register, follow the verification link, log in, and return the session token."""
    response = test_client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "name": name},
    )
    assert response.status_code == 201

    token = last_token(sent_emails, NotificationKind.VERIFICATION)
    assert test_client.get("/api/auth/verify", params={"token": token}).status_code == 200

    response = test_client.post(
        "/api/auth/login",
        json={"email": email, "password": password},
    )
    assert response.status_code == 200
    return response.json()["token"]


def make_admin(db_session_maker, email: str) -> None:
    """Promote an existing user to ADMIN directly in the database."""
    db = db_session_maker()
    user = db.query(User).filter(User.email == email).first()
    user.role = UserRole.ADMIN
    db.commit()
    db.close()


@pytest.fixture
def auth_client():
    """Create test client with in-memory database for auth tests.

    Yields a tuple of (TestClient, SessionMaker) for use in tests.
    """
    engine = _create_engine()
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = testing_session_local()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client, testing_session_local

    app.dependency_overrides.clear()
    engine.dispose()
