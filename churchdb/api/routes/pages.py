"""Pages & Fallback — login page, dashboard, client assets, and the catch-all.

Invariants:
    - Unmatched /api/* or /ping* (any method) → 404 JSON, never HTML
    - Existing client asset under the public dir served verbatim (GET/HEAD)
    - Otherwise: landing page with a valid session, login redirect without
    - GET/HEAD / serves the login page, or redirects to /dashboard when logged in

Design Decisions:
    - Catch-all route instead of mounting StaticFiles at "/": a mount would swallow
      the session-aware fallback. StaticFiles is still used for path resolution
      (traversal-safe lookup, ETag/Last-Modified handling)
    - Registered last in create_app so every explicit route takes precedence
"""

import logging
import os

from fastapi import APIRouter, Request, status
from fastapi.responses import FileResponse, JSONResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from churchdb.api.deps import admission_for, deny_page
from churchdb.core.errors import EndpointNotFoundError
from churchdb.core.session_gate import SessionGate
from churchdb.infrastructure.session_cookie import read_session_token

logger = logging.getLogger(__name__)
router = APIRouter(tags=["pages"])

LOGIN_HTML = "login.html"
INDEX_HTML = "index.html"
DASHBOARD = "/dashboard"
PAGE_METHODS = ["GET", "HEAD"]
ALL_METHODS = [
    "GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT",
]


def _page(request: Request, name: str) -> Response:
    path = os.path.join(request.app.state.settings.public_dir, name)
    if not os.path.isfile(path):
        logger.error(f"Client page missing: {path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "server error"},
        )
    return FileResponse(path)


def _is_api_path(path: str) -> bool:
    return path.startswith("/api/") or path.startswith("/ping")


async def _serve_asset(request: Request, full_path: str) -> Response | None:
    """Static asset response, or None when no file exists at that path."""
    if request.method not in ("GET", "HEAD") or not full_path:
        return None
    assets: StaticFiles = request.app.state.assets
    rel_path = os.path.normpath(os.path.join(*full_path.split("/")))
    try:
        return await assets.get_response(rel_path, request.scope)
    except StarletteHTTPException as exc:
        if exc.status_code != status.HTTP_404_NOT_FOUND:
            raise
        return None


@router.api_route("/", methods=PAGE_METHODS)
async def login_page(request: Request):
    gate: SessionGate = request.app.state.gate
    if gate.current_session(read_session_token(request)):
        return RedirectResponse(DASHBOARD, status_code=status.HTTP_302_FOUND)
    return _page(request, LOGIN_HTML)


@router.api_route("/dashboard", methods=PAGE_METHODS)
async def dashboard(request: Request):
    admission = admission_for(request)
    if not admission.admitted:
        return deny_page(request, admission)
    return _page(request, INDEX_HTML)


@router.api_route("/{full_path:path}", methods=ALL_METHODS, include_in_schema=False)
async def fallback(request: Request, full_path: str):
    if _is_api_path(request.url.path):
        raise EndpointNotFoundError()
    asset = await _serve_asset(request, full_path)
    if asset is not None:
        return asset
    # client-side routing: the landing page is served under any other path
    admission = admission_for(request, path=DASHBOARD)
    if not admission.admitted:
        return deny_page(request, admission)
    return _page(request, INDEX_HTML)
