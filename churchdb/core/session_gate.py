"""Session Gate — issues, validates and destroys login sessions; decides admission.

Invariants:
    - Tokens are never reissued: a destroyed or expired token is never valid again
    - Health-check and login/logout paths are admitted regardless of session state
    - Every other protected path requires a present, non-expired session
    - Failed logins never create a session

Design Decisions:
    - SessionStore is an in-process dict touched only from the event loop — no locks
      (ADR: single-process uvicorn, sessions lost on restart, acceptable for an admin tool)
    - Expired sessions evicted on read and swept on every create: no background task
    - Re-login retires the session the caller already held
    - Clock injectable so expiry is testable without sleeping
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable

from churchdb.core.domain_types import (
    Admission, DenyReason, Role, Session, SessionToken,
)
from churchdb.core.errors import InvalidCredentialsError, UnauthorizedError
from churchdb.core.repository_protocols import CredentialProvider

logger = logging.getLogger(__name__)

HEALTH_PREFIX = "/ping"
AUTH_PATHS = frozenset({"/login", "/logout", "/api/login", "/api/logout"})

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def is_always_admitted(path: str) -> bool:
    """Health-check and login/logout paths bypass the session check."""
    if path == HEALTH_PREFIX or path.startswith(HEALTH_PREFIX + "/"):
        return True
    return path in AUTH_PATHS


class StaticCredentialProvider:
    """Single fixed credential pair. Swap for a user store without touching the gate."""

    def __init__(self, username: str, password: str, role: Role = Role.ADMIN):
        self._username = username
        self._password = password
        self._role = role

    def verify(self, username: str, password: str) -> Role | None:
        user_ok = secrets.compare_digest(
            username.encode("utf-8"), self._username.encode("utf-8"),
        )
        pass_ok = secrets.compare_digest(
            password.encode("utf-8"), self._password.encode("utf-8"),
        )
        return self._role if user_ok and pass_ok else None


class SessionStore:
    """Token -> Session mapping with bounded lifetime."""

    def __init__(self, max_age: timedelta, clock: Clock = _utcnow):
        self._sessions: dict[SessionToken, Session] = {}
        self._max_age = max_age
        self._clock = clock

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, token: object) -> bool:
        return token in self._sessions

    def create(self, username: str, role: Role) -> Session:
        now = self._clock()
        self._purge_expired(now)
        token = SessionToken(secrets.token_urlsafe(32))
        while token in self._sessions:
            token = SessionToken(secrets.token_urlsafe(32))
        session = Session(
            token=token, username=username, role=role,
            created_at=now, expires_at=now + self._max_age,
        )
        self._sessions[token] = session
        return session

    def _purge_expired(self, now: datetime) -> None:
        expired = [t for t, s in self._sessions.items() if s.is_expired(now)]
        for token in expired:
            del self._sessions[token]
        if expired:
            logger.debug(f"Evicted {len(expired)} expired session(s)")

    def lookup(self, token: SessionToken) -> tuple[Session | None, DenyReason | None]:
        """Return (session, None) when valid, else (None, reason)."""
        session = self._sessions.get(token)
        if session is None:
            return None, DenyReason.NO_SESSION
        if session.is_expired(self._clock()):
            del self._sessions[token]
            return None, DenyReason.EXPIRED
        return session, None

    def destroy(self, token: SessionToken) -> bool:
        """Remove a session. Returns False when it was already absent."""
        return self._sessions.pop(token, None) is not None


class SessionGate:
    """login / logout / authorize over a SessionStore and a CredentialProvider."""

    def __init__(self, store: SessionStore, credentials: CredentialProvider):
        self.store = store
        self._credentials = credentials

    def login(
        self, username: str | None, password: str | None,
        previous: SessionToken | None = None,
    ) -> Session:
        """Issue a session; a successful login retires the caller's previous one."""
        if not username or not password:
            raise InvalidCredentialsError()
        role = self._credentials.verify(username, password)
        if role is None:
            logger.warning("Login rejected", extra={"username": username})
            raise UnauthorizedError()
        if previous is not None:
            self.store.destroy(previous)
        session = self.store.create(username, role)
        logger.info("Login accepted", extra={"username": username})
        return session

    def logout(self, token: SessionToken | None) -> None:
        if token is not None and self.store.destroy(token):
            logger.info("Session destroyed")

    def current_session(self, token: SessionToken | None) -> Session | None:
        if token is None:
            return None
        session, _ = self.store.lookup(token)
        return session

    def authorize(self, token: SessionToken | None, path: str) -> Admission:
        if is_always_admitted(path):
            return Admission.allow(self.current_session(token))
        if token is None:
            return Admission.deny(DenyReason.NO_SESSION)
        session, reason = self.store.lookup(token)
        if session is None:
            return Admission.deny(reason)
        return Admission.allow(session)
