"""Tests for customer sessions and session tokens"""

from datetime import datetime, timedelta
from types import SimpleNamespace

from storefront.core.session import SessionManager, issue_session_token, decode_session_token


def _age(manager: SessionManager, user_id: str, hours: int) -> None:
    manager.sessions[user_id].updated_at = datetime.utcnow() - timedelta(hours=hours)


class TestSessionManager:

    def test_get_or_create_reuses_session(self):
        manager = SessionManager()
        first = manager.get_or_create_session("u1")
        assert manager.get_or_create_session("u1") is first

    def test_cleanup_drops_idle_sessions(self):
        manager = SessionManager()
        manager.get_or_create_session("idle")
        manager.get_or_create_session("active")
        _age(manager, "idle", 30)

        assert manager.cleanup_old_sessions(max_age_hours=24) == 1
        assert list(manager.sessions) == ["active"]

    def test_cleanup_keeps_session_mid_checkout(self):
        manager = SessionManager()
        session = manager.get_or_create_session("paying")
        session.checkout = SimpleNamespace(busy=True)
        _age(manager, "paying", 30)

        assert manager.cleanup_old_sessions(max_age_hours=24) == 0
        assert "paying" in manager.sessions


class TestSessionTokens:

    def test_round_trip(self):
        assert decode_session_token(issue_session_token("u1")) == "u1"

    def test_expired_token(self):
        assert decode_session_token(issue_session_token("u1", expires_in_seconds=-10)) is None

    def test_garbage_token(self):
        assert decode_session_token("not-a-token") is None
