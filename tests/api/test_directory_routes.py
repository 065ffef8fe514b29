"""Directory Lookups — verifies the five read endpoints end to end over SQLite.

Invariants:
    - Results ordered by (family_id, sr_no_in_family), independent of insert order
    - Name/head searches are case-insensitive substring matches
    - Missing parameter → 400 before the store is consulted
    - No store → 500 "DB not connected"; query failure → 500 "server error"
    - All endpoints require a session
"""

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from churchdb.infrastructure.database import StoreGateway
from churchdb.models import FamilyMember
from churchdb.services.directory_queries import MEMBER_SEARCH_LIMIT


def _names(rows):
    return [r["full_name"] for r in rows]


# ─── allFamilies / allMembers ───────────────────────────────────

async def test_all_families_ordered_by_family_id(auth_client, seed_directory):
    res = await auth_client.get("/api/allFamilies")
    assert res.status_code == 200
    results = res.json()["results"]
    assert [f["family_id"] for f in results] == [1, 2, 3]
    assert set(results[0]) == {
        "family_id", "family_sr_no", "family_name", "head_of_family",
        "community_name", "zone_no", "contact_phone",
    }


async def test_all_families_empty_store_is_not_an_error(auth_client):
    res = await auth_client.get("/api/allFamilies")
    assert res.status_code == 200
    assert res.json() == {"results": []}


async def test_all_members_ordered_by_family_then_serial(auth_client, seed_directory):
    res = await auth_client.get("/api/allMembers")
    assert res.status_code == 200
    results = res.json()["results"]
    assert [(r["family_id"], r["sr_no_in_family"]) for r in results] == [
        (1, 1), (1, 2), (1, 3), (2, 1), (2, 2), (3, 1), (3, 2),
    ]


async def test_all_members_carries_parent_family_fields(auth_client, seed_directory):
    res = await auth_client.get("/api/allMembers")
    first = res.json()["results"][0]
    assert first["family_sr_no"] == "001"
    assert first["head_of_family"] == "Joseph Thomas"
    assert first["full_name"] == "Joseph Thomas"


# ─── familyBySr ─────────────────────────────────────────────────

async def test_family_by_sr_found_with_ordered_members(auth_client, seed_directory):
    res = await auth_client.get("/api/familyBySr", params={"sr": "001"})
    assert res.status_code == 200
    body = res.json()
    assert body["found"] is True
    assert body["family"]["family_name"] == "Thomas"
    assert _names(body["members"]) == ["Joseph Thomas", "Mary Joseph", "Anna Joseph"]
    assert all(m["family_id"] == 1 for m in body["members"])


async def test_family_by_sr_trims_input(auth_client, seed_directory):
    res = await auth_client.get("/api/familyBySr", params={"sr": "  010 "})
    assert res.json()["family"]["head_of_family"] == "Annamma Kurian"


async def test_family_by_sr_not_found_is_http_200(auth_client, seed_directory):
    res = await auth_client.get("/api/familyBySr", params={"sr": "007"})
    assert res.status_code == 200
    assert res.json() == {"found": False}


@pytest.mark.parametrize("params", [{}, {"sr": ""}, {"sr": "   "}])
async def test_family_by_sr_missing_param_returns_400(auth_client, params):
    res = await auth_client.get("/api/familyBySr", params=params)
    assert res.status_code == 400
    assert res.json() == {"error": "missing sr"}


# ─── memberByName ───────────────────────────────────────────────

async def test_member_by_name_case_insensitive_substring(auth_client, seed_directory):
    res = await auth_client.get("/api/memberByName", params={"q": "THOMAS"})
    assert res.status_code == 200
    results = res.json()["results"]
    assert _names(results) == ["Joseph Thomas", "Thomas Kurian"]
    assert results[1]["community_name"] == "St. Mary"
    assert results[1]["zone_no"] == "1"
    assert results[1]["family_sr_no"] == "010"


async def test_member_by_name_is_subset_of_all_members(auth_client, seed_directory):
    all_rows = (await auth_client.get("/api/allMembers")).json()["results"]
    hits = (await auth_client.get("/api/memberByName", params={"q": "ann"})).json()["results"]
    expected = [r["full_name"] for r in all_rows if "ann" in r["full_name"].lower()]
    assert _names(hits) == expected == ["Anna Joseph", "Annamma Kurian"]


async def test_member_by_name_no_match_returns_empty(auth_client, seed_directory):
    res = await auth_client.get("/api/memberByName", params={"q": "zzz"})
    assert res.json() == {"results": []}


async def test_member_by_name_missing_q_returns_400(auth_client):
    res = await auth_client.get("/api/memberByName")
    assert res.status_code == 400
    assert res.json() == {"error": "missing q"}


async def test_member_by_name_caps_results(auth_client, seed_directory, test_session_factory):
    async with test_session_factory() as db:
        db.add_all([
            FamilyMember(family_id=2, sr_no_in_family=10 + i, full_name=f"Guest {i}")
            for i in range(MEMBER_SEARCH_LIMIT + 10)
        ])
        await db.commit()
    res = await auth_client.get("/api/memberByName", params={"q": "guest"})
    results = res.json()["results"]
    assert len(results) == MEMBER_SEARCH_LIMIT
    serials = [r["sr_no_in_family"] for r in results]
    assert serials == sorted(serials)


# ─── familiesByHead ─────────────────────────────────────────────

async def test_families_by_head_case_insensitive(auth_client, seed_directory):
    res = await auth_client.get("/api/familiesByHead", params={"q": "mathew"})
    results = res.json()["results"]
    assert [f["family_sr_no"] for f in results] == ["002"]


async def test_families_by_head_ordered_by_family_id(auth_client, seed_directory):
    res = await auth_client.get("/api/familiesByHead", params={"q": "a"})
    assert [f["family_id"] for f in res.json()["results"]] == [1, 2, 3]


async def test_families_by_head_missing_q_returns_400(auth_client):
    res = await auth_client.get("/api/familiesByHead", params={"q": " "})
    assert res.status_code == 400
    assert res.json() == {"error": "missing q"}


# ─── store failures ─────────────────────────────────────────────

@pytest.mark.parametrize("path", [
    "/api/allFamilies",
    "/api/allMembers",
    "/api/familyBySr?sr=001",
    "/api/memberByName?q=a",
    "/api/familiesByHead?q=a",
])
async def test_no_store_returns_db_not_connected(make_client, path):
    async with make_client(with_store=False) as c:
        await c.post("/login", json={"username": "admin", "password": "ian.rdr4"})
        res = await c.get(path)
    assert res.status_code == 500
    assert res.json() == {"error": "DB not connected"}


async def test_missing_param_checked_before_store(make_client):
    async with make_client(with_store=False) as c:
        await c.post("/login", json={"username": "admin", "password": "ian.rdr4"})
        res = await c.get("/api/memberByName")
    assert res.status_code == 400


async def test_query_failure_returns_generic_error(make_client):
    """Schema-less database: the driver error is hidden behind "server error"."""
    empty = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    try:
        async with make_client() as c:
            c.app_under_test.state.store = StoreGateway(empty)
            await c.post("/login", json={"username": "admin", "password": "ian.rdr4"})
            res = await c.get("/api/allFamilies")
    finally:
        await empty.dispose()
    assert res.status_code == 500
    assert res.json() == {"error": "server error"}
    assert "family_groups" not in res.text


# ─── session requirement ────────────────────────────────────────

async def test_lookup_without_session_returns_401(client, seed_directory):
    res = await client.get("/api/allFamilies")
    assert res.status_code == 401
    assert res.json() == {"error": "not authenticated"}
