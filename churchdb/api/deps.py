"""Route Dependencies — session gate access and the API/page denial policy.

Invariants:
    - /api/* denial → 401 {"error": ...}, never a redirect
    - Page denial → redirect to the login page, unless the caller asked for JSON
    - Gate and settings read from app.state (set once by create_app)
"""

from fastapi import Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response

from churchdb.config import Settings
from churchdb.core.domain_types import Admission, DenyReason, Session
from churchdb.core.errors import NotAuthenticatedError
from churchdb.core.session_gate import SessionGate
from churchdb.infrastructure.session_cookie import read_session_token

LOGIN_PAGE = "/"


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_gate(request: Request) -> SessionGate:
    return request.app.state.gate


def admission_for(request: Request, path: str | None = None) -> Admission:
    """Gate decision for this request, or for the page it is about to serve."""
    gate: SessionGate = request.app.state.gate
    return gate.authorize(read_session_token(request), path or request.url.path)


def require_api_session(
    request: Request, gate: SessionGate = Depends(get_gate),
) -> Session | None:
    """Dependency for /api/* data routes."""
    admission = gate.authorize(read_session_token(request), request.url.path)
    if not admission.admitted:
        raise NotAuthenticatedError(expired=admission.reason == DenyReason.EXPIRED)
    return admission.session


def wants_json(request: Request) -> bool:
    """True when the Accept header prefers JSON over HTML."""
    accept = request.headers.get("accept", "").lower()
    return "application/json" in accept and "text/html" not in accept


def deny_page(request: Request, admission: Admission) -> Response:
    if wants_json(request):
        exc = NotAuthenticatedError(expired=admission.reason == DenyReason.EXPIRED)
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())
    return RedirectResponse(LOGIN_PAGE, status_code=status.HTTP_302_FOUND)
