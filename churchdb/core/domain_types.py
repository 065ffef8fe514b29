"""Domain Types — rich types that replace bare primitives in the session gate.

Invariants:
    - SessionToken wraps the opaque server-side session key — never a bare str in gate logic
    - Admission outcomes encoded as Enums — no raw string matching
    - Session records are immutable once issued

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

SessionToken = NewType("SessionToken", str)


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Caller roles. A single administrative role exists today."""
    ADMIN = "admin"


class DenyReason(str, Enum):
    """Why the session gate refused a request."""
    NO_SESSION = "no_session"
    EXPIRED = "expired"


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class Session:
    """Server-side proof of a successful login."""
    token: SessionToken
    username: str
    role: Role
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


@dataclass(frozen=True)
class Admission:
    """Outcome of authorize(): admitted, or denied with a reason."""
    admitted: bool
    reason: DenyReason | None = None
    session: Session | None = None

    @classmethod
    def allow(cls, session: Session | None = None) -> "Admission":
        return cls(admitted=True, session=session)

    @classmethod
    def deny(cls, reason: DenyReason) -> "Admission":
        return cls(admitted=False, reason=reason)
