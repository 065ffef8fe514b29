"""Basic Auth Middleware — optional process-wide HTTP basic auth in front of everything.

Invariants:
    - Inactive (pass-through) unless BASIC_USER is configured
    - Runs before the session gate and covers static assets too
    - Health-check paths exempt so liveness probes never need credentials
    - Denial → 401 "Auth required" with a Basic challenge
"""

import logging

from fastapi import Request
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

from churchdb.core.basic_auth import basic_auth_admits
from churchdb.core.session_gate import HEALTH_PREFIX

logger = logging.getLogger(__name__)

CHALLENGE = 'Basic realm="Admin"'


class BasicAuthMiddleware(BaseHTTPMiddleware):

    def __init__(self, app, username: str | None, password: str | None):
        super().__init__(app)
        self.username = username
        self.password = password

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path == HEALTH_PREFIX or path.startswith(HEALTH_PREFIX + "/"):
            return await call_next(request)
        header = request.headers.get("authorization")
        if basic_auth_admits(header, self.username, self.password):
            return await call_next(request)
        logger.info("Basic auth rejected", extra={"path": path})
        return PlainTextResponse(
            "Auth required", status_code=401,
            headers={"WWW-Authenticate": CHALLENGE},
        )
