"""Session management for storefront customers"""

import time
from datetime import datetime
from typing import TYPE_CHECKING, Optional
from dataclasses import dataclass, field

import jwt

from .cart_store import CartStore
from .config import settings

if TYPE_CHECKING:
    from ..services.checkout import CheckoutOrchestrator


@dataclass
class CustomerSession:
    """State the storefront keeps for one signed-in customer"""
    user_id: str
    created_at: datetime
    updated_at: datetime
    cart: CartStore = field(default_factory=CartStore)
    checkout: Optional["CheckoutOrchestrator"] = None  # created on first use

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()


class SessionManager:
    """Manages customer sessions"""

    def __init__(self):
        self.sessions: dict[str, CustomerSession] = {}

    def get_or_create_session(self, user_id: str) -> CustomerSession:
        """Get existing session or create new one"""
        session = self.sessions.get(user_id)
        if session is None:
            now = datetime.utcnow()
            session = CustomerSession(user_id=user_id, created_at=now, updated_at=now)
            self.sessions[user_id] = session
        session.touch()
        return session

    def cleanup_old_sessions(self, max_age_hours: int = 24) -> int:
        """Remove sessions idle for longer than max_age_hours, except mid-checkout"""
        now = datetime.utcnow()
        old_sessions = [
            uid for uid, session in self.sessions.items()
            if (now - session.updated_at).total_seconds() > max_age_hours * 3600
            and not (session.checkout and session.checkout.busy)
        ]
        for uid in old_sessions:
            del self.sessions[uid]
        return len(old_sessions)


def issue_session_token(user_id: str, expires_in_seconds: int = 86400) -> str:
    """Sign a session token for a customer"""
    now = int(time.time())
    payload = {
        "sub": user_id,
        "iat": now,
        "exp": now + expires_in_seconds,
    }
    return jwt.encode(payload, settings.session_secret, algorithm=settings.session_algorithm)


def decode_session_token(token: str) -> Optional[str]:
    """Return the user ID carried by a session token, or None if it is invalid"""
    try:
        payload = jwt.decode(
            token,
            settings.session_secret,
            algorithms=[settings.session_algorithm],
        )
    except jwt.InvalidTokenError:
        return None
    return payload.get("sub") or None


# Singleton instance
session_manager = SessionManager()
