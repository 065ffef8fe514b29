"""Login / Logout — session issue and teardown over the `church.sid` cookie.

Invariants:
    - Only the configured credential pair creates a session
    - Login accepts a JSON body or an HTML form post
    - A bad login body answers in the login envelope, never the generic validation error
    - Re-login replaces the caller's current session instead of adding a second one
    - Logout is idempotent: absent session still answers {ok: true}
    - Session destroyed before the response is sent
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, Response

from churchdb.api.deps import get_gate, get_settings_dep
from churchdb.config import Settings
from churchdb.core.session_gate import SessionGate
from churchdb.infrastructure.session_cookie import (
    clear_session_cookie, read_session_token, set_session_cookie,
)
from churchdb.schemas.auth import LoginRequest, LoginResponse, LogoutResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["auth"])

DASHBOARD = "/dashboard"
FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def _login_payload(request: Request) -> dict[str, Any]:
    """Credentials from a form or JSON body; {} when absent or unreadable."""
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_TYPES):
        form = await request.form()
        return dict(form)
    if not await request.body():
        return {}
    try:
        payload = await request.json()
    except ValueError:
        logger.warning("Login body is not valid JSON")
        return {}
    return payload if isinstance(payload, dict) else {}


@router.post("/login", response_model=LoginResponse)
async def login(
    request: Request,
    response: Response,
    gate: SessionGate = Depends(get_gate),
    settings: Settings = Depends(get_settings_dep),
):
    body = LoginRequest.model_validate(await _login_payload(request))
    session = gate.login(
        body.username, body.password, previous=read_session_token(request),
    )
    set_session_cookie(
        response, session, settings.session_secret,
        max_age=settings.session_max_age_seconds,
        secure=settings.is_production,
    )
    return LoginResponse(redirect=DASHBOARD)


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    request: Request,
    response: Response,
    gate: SessionGate = Depends(get_gate),
    settings: Settings = Depends(get_settings_dep),
):
    gate.logout(read_session_token(request))
    clear_session_cookie(response, secure=settings.is_production)
    return LogoutResponse(redirect="/")
