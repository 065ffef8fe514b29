"""Directory Lookups — read-only family/member endpoints under /api.

Invariants:
    - Every route requires a valid session (401 JSON otherwise)
    - Missing/blank required parameter → 400 before the store is touched
    - Store absent → 500 "DB not connected"; query failure → 500 "server error"
    - Routes never contain SQL (delegate to services/directory_queries.py)
"""

import logging

from fastapi import APIRouter, Depends, Query, Request

from churchdb.api.deps import require_api_session
from churchdb.core.errors import MissingParameterError
from churchdb.infrastructure.database import get_store
from churchdb.services.directory_queries import DirectoryQueries

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api", tags=["directory"],
    dependencies=[Depends(require_api_session)],
)


def _required(value: str | None, name: str) -> str:
    value = (value or "").strip()
    if not value:
        raise MissingParameterError(name)
    return value


def _queries(request: Request) -> DirectoryQueries:
    return DirectoryQueries(get_store(request))


@router.get("/allFamilies")
async def all_families(request: Request):
    return {"results": await _queries(request).all_families()}


@router.get("/allMembers")
async def all_members(request: Request):
    return {"results": await _queries(request).all_members()}


@router.get("/familyBySr")
async def family_by_sr(request: Request, sr: str | None = Query(None)):
    """Family plus its members, or {"found": false}."""
    sr = _required(sr, "sr")
    return await _queries(request).family_by_sr(sr)


@router.get("/memberByName")
async def member_by_name(request: Request, q: str | None = Query(None)):
    q = _required(q, "q")
    return {"results": await _queries(request).members_by_name(q)}


@router.get("/familiesByHead")
async def families_by_head(request: Request, q: str | None = Query(None)):
    q = _required(q, "q")
    return {"results": await _queries(request).families_by_head(q)}
