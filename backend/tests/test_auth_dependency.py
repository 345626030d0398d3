"""Tests for the security context dependency."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.constants import UserRole
from app.database import get_db
from app.dependencies.admin import get_admin_context
from app.dependencies.auth import get_security_context
from app.error_handlers import register_exception_handlers
from app.models.session import Session
from app.models.user import User
from app.services.repositories import SessionRepository
from app.services.security_context import SecurityContext
from app.services.token_service import generate_token


@pytest.fixture
def test_app():
    """Create test app with protected routes."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    User.__table__.create(engine, checkfirst=True)
    Session.__table__.create(engine, checkfirst=True)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    app = FastAPI()
    register_exception_handlers(app)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    @app.get("/protected")
    def protected(request: Request, context: SecurityContext = Depends(get_security_context)):
        return {
            "user_id": context.user_id,
            "role": context.role,
            "same_as_state": request.state.security_context is context,
        }

    @app.get("/admin-only")
    def admin_only(context: SecurityContext = Depends(get_admin_context)):
        return {"user_id": context.user_id}

    return app, TestingSessionLocal


def _user_with_session(
    session_maker, role: str = UserRole.USER, ttl: timedelta = timedelta(hours=24)
) -> tuple[str, str]:
    db = session_maker()
    user = User(email=f"{role.lower()}@example.com", password_hash="hash", name="U", role=role)
    db.add(user)
    db.flush()
    token = generate_token()
    SessionRepository(db).create(user.id, token, ttl)
    db.commit()
    user_id = user.id
    db.close()
    return user_id, token


def test_valid_token_resolves_context(test_app):
    app, session_maker = test_app
    user_id, token = _user_with_session(session_maker)

    with TestClient(app) as client:
        response = client.get("/protected", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json() == {"user_id": user_id, "role": "USER", "same_as_state": True}


def test_missing_header_is_unauthorized(test_app):
    app, _ = test_app

    with TestClient(app) as client:
        response = client.get("/protected")

    assert response.status_code == 401
    assert response.json()["error"] == "Unauthorized"
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_wrong_scheme_is_unauthorized(test_app):
    app, session_maker = test_app
    _, token = _user_with_session(session_maker)

    with TestClient(app) as client:
        response = client.get("/protected", headers={"Authorization": f"Basic {token}"})

    assert response.status_code == 401


def test_unknown_token_is_unauthorized(test_app):
    app, _ = test_app

    with TestClient(app) as client:
        response = client.get(
            "/protected", headers={"Authorization": f"Bearer {generate_token()}"}
        )

    assert response.status_code == 401


def test_expired_session_is_unauthorized(test_app):
    app, session_maker = test_app
    _, token = _user_with_session(session_maker, ttl=timedelta(seconds=-1))

    with TestClient(app) as client:
        response = client.get("/protected", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_session_expiring_later_still_valid(test_app):
    app, session_maker = test_app
    _, token = _user_with_session(session_maker, ttl=timedelta(minutes=1))

    db = session_maker()
    session = db.query(Session).one()
    assert session.is_expired(datetime.now(UTC)) is False
    db.close()

    with TestClient(app) as client:
        response = client.get("/protected", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200


def test_session_of_deleted_user_is_unauthorized(test_app):
    app, session_maker = test_app
    user_id, token = _user_with_session(session_maker)

    db = session_maker()
    db.query(User).filter(User.id == user_id).delete()
    db.commit()
    db.close()

    with TestClient(app) as client:
        response = client.get("/protected", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_admin_route_forbidden_for_user(test_app):
    app, session_maker = test_app
    _, token = _user_with_session(session_maker)

    with TestClient(app) as client:
        response = client.get("/admin-only", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403
    assert response.json()["error"] == "Forbidden"


def test_admin_route_allowed_for_admin(test_app):
    app, session_maker = test_app
    user_id, token = _user_with_session(session_maker, role=UserRole.ADMIN)

    with TestClient(app) as client:
        response = client.get("/admin-only", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json() == {"user_id": user_id}


def test_role_change_applies_to_existing_session(test_app):
    app, session_maker = test_app
    user_id, token = _user_with_session(session_maker)

    db = session_maker()
    db.query(User).filter(User.id == user_id).update({User.role: UserRole.ADMIN})
    db.commit()
    db.close()

    with TestClient(app) as client:
        response = client.get("/admin-only", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
