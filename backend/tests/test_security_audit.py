"""Tests for security audit logging."""

from unittest.mock import MagicMock

from app.models.security_audit_log import SecurityAuditLog
from app.services.security_audit_service import (
    RequestInfo,
    SecurityAuditService,
    SecurityEventType,
)
from tests.conftest import register_and_verify_user


def test_log_event_records_request_info(db_session, make_user):
    user = make_user()
    audit = SecurityAuditService(db_session, RequestInfo("10.0.0.1", "pytest"))

    audit.log_event(SecurityEventType.LOGOUT, user_id=user.id, details={"k": "v"})
    db_session.commit()

    event = db_session.query(SecurityAuditLog).one()
    assert event.event_type == SecurityEventType.LOGOUT
    assert event.user_id == user.id
    assert event.ip_address == "10.0.0.1"
    assert event.user_agent == "pytest"
    assert event.details == {"k": "v"}


def test_log_event_is_not_committed_by_itself(db_session):
    SecurityAuditService(db_session).log_event(SecurityEventType.LOGIN_FAILED)
    db_session.rollback()

    assert db_session.query(SecurityAuditLog).count() == 0


def test_request_info_prefers_forwarded_for():
    request = MagicMock()
    request.headers = {"X-Forwarded-For": "203.0.113.5, 10.0.0.1", "User-Agent": "ua"}

    info = RequestInfo.from_request(request)

    assert info.ip_address == "203.0.113.5"
    assert info.user_agent == "ua"


def test_request_info_falls_back_to_client_host():
    request = MagicMock()
    request.headers = {}
    request.client.host = "127.0.0.1"

    info = RequestInfo.from_request(request)

    assert info.ip_address == "127.0.0.1"


def test_auth_flow_writes_audit_trail(auth_client, sent_emails):
    test_client, db_session_maker = auth_client
    register_and_verify_user(test_client, sent_emails, "a@x.com")
    test_client.post("/api/auth/login", json={"email": "a@x.com", "password": "wrong-pass"})

    db = db_session_maker()
    events = [e.event_type for e in db.query(SecurityAuditLog).order_by(SecurityAuditLog.id)]
    db.close()

    for expected in (
        SecurityEventType.REGISTERED,
        SecurityEventType.EMAIL_VERIFIED,
        SecurityEventType.LOGIN_SUCCESS,
        SecurityEventType.LOGIN_FAILED,
    ):
        assert expected in events
