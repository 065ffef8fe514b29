"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /ping always returns 200 if the process is up, regardless of
      session, basic-auth configuration, or store availability
    - GET /ping/ready returns 503 if the database is unreachable

Design Decisions:
    - Separate liveness/readiness: Railway restarts on liveness, routes on readiness
"""

import logging
import time

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/ping", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def ping():
    """Liveness probe."""
    return {"ok": True, "ts": int(time.time() * 1000)}


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe — includes database connectivity."""
    store = getattr(request.app.state, "store", None)
    db_ok = await store.health_check() if store else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"ok": False, "database": "unavailable"},
        )
    return {"ok": True, "database": "connected"}
