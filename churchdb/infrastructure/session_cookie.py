"""Session Cookie — signs the server-side session token into the `church.sid` cookie.

Invariants:
    - Cookie value is an HS256 JWT carrying {"sid", "exp"}; the secret never leaves the process
    - A bad signature or malformed value decodes to None (treated as no session)
    - An expired JWT still yields its sid, so the gate can report Expired
      rather than NoSession while the server-side record exists

Design Decisions:
    - PyJWT over a hand-rolled HMAC: same signing scheme as the access tokens
      elsewhere in the stack, exp claim handled natively
    - Cookie attributes centralised here so login and logout agree on them
"""

import logging

import jwt
from fastapi import Request, Response

from churchdb.core.domain_types import Session, SessionToken

logger = logging.getLogger(__name__)

COOKIE_NAME = "church.sid"
ALGORITHM = "HS256"


def encode_session_cookie(session: Session, secret: str) -> str:
    payload = {"sid": session.token, "exp": session.expires_at}
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_session_cookie(value: str | None, secret: str) -> SessionToken | None:
    if not value:
        return None
    try:
        payload = jwt.decode(value, secret, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        payload = jwt.decode(
            value, secret, algorithms=[ALGORITHM],
            options={"verify_exp": False},
        )
    except jwt.InvalidTokenError:
        logger.info("Rejected session cookie with invalid signature")
        return None
    sid = payload.get("sid")
    return SessionToken(sid) if isinstance(sid, str) and sid else None


def read_session_token(request: Request) -> SessionToken | None:
    secret = request.app.state.settings.session_secret
    return decode_session_cookie(request.cookies.get(COOKIE_NAME), secret)


def set_session_cookie(
    response: Response, session: Session, secret: str,
    max_age: int, secure: bool,
) -> None:
    response.set_cookie(
        COOKIE_NAME,
        encode_session_cookie(session, secret),
        max_age=max_age,
        httponly=True,
        secure=secure,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response, secure: bool) -> None:
    response.delete_cookie(
        COOKIE_NAME, path="/", httponly=True, secure=secure, samesite="lax",
    )
