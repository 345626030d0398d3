"""Tests for SessionRepository (session store)."""

from datetime import UTC, datetime, timedelta

from app.models.session import Session
from app.services.repositories import SessionRepository
from app.services.token_service import generate_token, hash_token


class TestSessionRepository:
    """Test cases for SessionRepository."""

    def test_create_stores_only_digest(self, db_session, make_user):
        user = make_user()
        token = generate_token()

        SessionRepository(db_session).create(user.id, token, timedelta(hours=24))
        db_session.commit()

        stored = db_session.query(Session).one()
        assert stored.token_hash == hash_token(token)
        assert stored.token_hash != token

    def test_find_by_token_returns_live_session(self, db_session, make_user):
        user = make_user()
        repo = SessionRepository(db_session)
        token = generate_token()
        repo.create(user.id, token, timedelta(hours=24))
        db_session.commit()

        session = repo.find_by_token(token)
        assert session is not None
        assert session.user_id == user.id

    def test_find_by_token_unknown_returns_none(self, db_session):
        assert SessionRepository(db_session).find_by_token(generate_token()) is None

    def test_find_by_token_ignores_expired_rows(self, db_session, make_user):
        """Expired rows are invisible even before the sweep removes them."""
        user = make_user()
        repo = SessionRepository(db_session)
        token = generate_token()
        repo.create(user.id, token, timedelta(hours=24))
        db_session.commit()

        later = datetime.now(UTC) + timedelta(hours=25)
        assert repo.find_by_token(token, now=later) is None
        assert db_session.query(Session).count() == 1

    def test_delete_by_token(self, db_session, make_user):
        user = make_user()
        repo = SessionRepository(db_session)
        token = generate_token()
        repo.create(user.id, token, timedelta(hours=24))
        db_session.commit()

        assert repo.delete_by_token(token) == 1
        assert repo.delete_by_token(token) == 0
        assert repo.find_by_token(token) is None

    def test_delete_all_for_user_leaves_other_users(self, db_session, make_user):
        alice = make_user(email="alice@example.com")
        bob = make_user(email="bob@example.com")
        repo = SessionRepository(db_session)
        for _ in range(3):
            repo.create(alice.id, generate_token(), timedelta(hours=24))
        bob_token = generate_token()
        repo.create(bob.id, bob_token, timedelta(hours=24))
        db_session.commit()

        assert repo.delete_all_for_user(alice.id) == 3
        assert repo.count_for_user(alice.id) == 0
        assert repo.find_by_token(bob_token) is not None

    def test_delete_all_for_user_except_keeps_current(self, db_session, make_user):
        user = make_user()
        repo = SessionRepository(db_session)
        keep = generate_token()
        drop = [generate_token(), generate_token()]
        repo.create(user.id, keep, timedelta(hours=24))
        for token in drop:
            repo.create(user.id, token, timedelta(hours=24))
        db_session.commit()

        assert repo.delete_all_for_user_except(user.id, keep) == 2
        assert repo.find_by_token(keep) is not None
        assert all(repo.find_by_token(token) is None for token in drop)

    def test_delete_expired(self, db_session, make_user):
        user = make_user()
        repo = SessionRepository(db_session)
        live = generate_token()
        repo.create(user.id, live, timedelta(hours=24))
        repo.create(user.id, generate_token(), timedelta(hours=-1))
        db_session.commit()

        assert repo.delete_expired() == 1
        assert repo.find_by_token(live) is not None
