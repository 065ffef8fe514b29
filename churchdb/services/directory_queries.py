"""Directory Queries — the five read operations and their SQL shapes.

Invariants:
    - Every query is parameterized; user input never reaches the SQL text
    - Merged member results ordered by (family_id, sr_no_in_family) ascending
    - Name/head searches are case-insensitive substring matches, capped
      (MEMBER_SEARCH_LIMIT, HEAD_SEARCH_LIMIT)
    - Zero matches is a normal result: [] or {"found": False}

Design Decisions:
    - LOWER(..) LIKE LOWER(..): case-insensitive on any collation, including SQLite in tests
    - LIKE wildcards in user input pass through unescaped; `%` and `_` keep their SQL meaning
"""

from churchdb.infrastructure.database import Row, StoreGateway

MEMBER_SEARCH_LIMIT = 500
HEAD_SEARCH_LIMIT = 200

FAMILY_COLUMNS = (
    "family_id, family_sr_no, family_name, head_of_family, "
    "community_name, zone_no, contact_phone"
)

ALL_FAMILIES_SQL = f"""
    SELECT {FAMILY_COLUMNS}
    FROM family_groups
    ORDER BY family_id
"""

ALL_MEMBERS_SQL = """
    SELECT fm.*, fg.family_sr_no, fg.head_of_family
    FROM family_members fm
    JOIN family_groups fg USING (family_id)
    ORDER BY fg.family_id, fm.sr_no_in_family
"""

FAMILY_BY_SR_SQL = """
    SELECT * FROM family_groups WHERE family_sr_no = :sr LIMIT 1
"""

MEMBERS_OF_FAMILY_SQL = """
    SELECT * FROM family_members
    WHERE family_id = :family_id
    ORDER BY sr_no_in_family
"""

MEMBERS_BY_NAME_SQL = """
    SELECT fm.*, fg.family_sr_no, fg.head_of_family, fg.community_name, fg.zone_no
    FROM family_members fm
    JOIN family_groups fg USING (family_id)
    WHERE LOWER(fm.full_name) LIKE LOWER(:pattern)
    ORDER BY fg.family_id, fm.sr_no_in_family
    LIMIT :limit
"""

FAMILIES_BY_HEAD_SQL = f"""
    SELECT {FAMILY_COLUMNS}
    FROM family_groups
    WHERE LOWER(head_of_family) LIKE LOWER(:pattern)
    ORDER BY family_id
    LIMIT :limit
"""


def _contains(q: str) -> str:
    return f"%{q}%"


class DirectoryQueries:
    """Read-only lookups over family_groups / family_members."""

    def __init__(self, store: StoreGateway):
        self._store = store

    async def all_families(self) -> list[Row]:
        return await self._store.fetch_all(
            ALL_FAMILIES_SQL, operation="all_families",
        )

    async def all_members(self) -> list[Row]:
        return await self._store.fetch_all(
            ALL_MEMBERS_SQL, operation="all_members",
        )

    async def family_by_sr(self, sr: str) -> dict:
        """{"found": False} or {"found": True, "family": ..., "members": [...]}."""
        family = await self._store.fetch_one(
            FAMILY_BY_SR_SQL, {"sr": sr}, operation="family_by_sr",
        )
        if family is None:
            return {"found": False}
        members = await self._store.fetch_all(
            MEMBERS_OF_FAMILY_SQL, {"family_id": family["family_id"]},
            operation="family_by_sr",
        )
        return {"found": True, "family": family, "members": members}

    async def members_by_name(self, q: str) -> list[Row]:
        return await self._store.fetch_all(
            MEMBERS_BY_NAME_SQL,
            {"pattern": _contains(q), "limit": MEMBER_SEARCH_LIMIT},
            operation="members_by_name",
        )

    async def families_by_head(self, q: str) -> list[Row]:
        return await self._store.fetch_all(
            FAMILIES_BY_HEAD_SQL,
            {"pattern": _contains(q), "limit": HEAD_SEARCH_LIMIT},
            operation="families_by_head",
        )
