"""API test fixtures — in-memory directory DB + per-test FastAPI app and client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with the ORM schema
    - Every test gets a fresh app (fresh session store, no shared cookies)
    - app.state.store set directly: ASGITransport does not run the lifespan

Design Decisions:
    - StaticPool: one shared connection so the :memory: schema survives across checkouts
    - Temp public dir with known page contents so page assertions are exact
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

from churchdb.config import Settings
from churchdb.db.base import Base
from churchdb.infrastructure.database import StoreGateway
from churchdb.main import create_app
from churchdb.models import Family, FamilyMember

LOGIN_HTML = "<html><body>login page</body></html>"
INDEX_HTML = "<html><body>dashboard</body></html>"
APP_CSS = "body { color: black; }"
TEST_SECRET = "test-session-secret-0123456789abcdef"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool, echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def seed_directory(test_session_factory):
    """Three families; members inserted out of order to exercise ORDER BY."""
    async with test_session_factory() as db:
        thomas = Family(
            family_id=1, family_sr_no="001", family_name="Thomas",
            head_of_family="Joseph Thomas", community_name="St. Mary",
            zone_no="1", contact_phone="555-0101",
        )
        varghese = Family(
            family_id=2, family_sr_no="002", family_name="Varghese",
            head_of_family="Mathew Varghese", community_name="St. George",
            zone_no="2", contact_phone="555-0102",
        )
        kurian = Family(
            family_id=3, family_sr_no="010", family_name="Kurian",
            head_of_family="Annamma Kurian", community_name="St. Mary",
            zone_no="1", contact_phone=None,
        )
        db.add_all([kurian, varghese, thomas])
        await db.flush()
        db.add_all([
            FamilyMember(family_id=3, sr_no_in_family=2, full_name="Thomas Kurian"),
            FamilyMember(family_id=2, sr_no_in_family=2, full_name="Susan Mathew"),
            FamilyMember(family_id=1, sr_no_in_family=3, full_name="Anna Joseph"),
            FamilyMember(family_id=2, sr_no_in_family=1, full_name="Mathew Varghese"),
            FamilyMember(family_id=1, sr_no_in_family=1, full_name="Joseph Thomas"),
            FamilyMember(family_id=3, sr_no_in_family=1, full_name="Annamma Kurian"),
            FamilyMember(family_id=1, sr_no_in_family=2, full_name="Mary Joseph"),
        ])
        await db.commit()


@pytest.fixture
def public_dir(tmp_path):
    public = tmp_path / "public"
    (public / "css").mkdir(parents=True)
    (public / "login.html").write_text(LOGIN_HTML)
    (public / "index.html").write_text(INDEX_HTML)
    (public / "css" / "app.css").write_text(APP_CSS)
    return public


@pytest.fixture
def make_settings(public_dir):
    def _make(**overrides) -> Settings:
        values = {
            "database_url": "sqlite+aiosqlite:///:memory:",
            "public_dir": str(public_dir),
            "session_secret": TEST_SECRET,
            "log_format": "text",
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make


@pytest.fixture
def make_client(make_settings, test_engine):
    """Factory: AsyncClient over a fresh app. with_store=False simulates DB down."""
    def _make(with_store: bool = True, **overrides) -> AsyncClient:
        app = create_app(make_settings(**overrides))
        app.state.store = StoreGateway(test_engine) if with_store else None
        c = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        c.app_under_test = app
        return c

    return _make


@pytest.fixture
async def client(make_client):
    c = make_client()
    async with c:
        yield c


@pytest.fixture
async def auth_client(client):
    """Client holding a valid session cookie."""
    res = await client.post(
        "/login", json={"username": "admin", "password": "ian.rdr4"},
    )
    assert res.status_code == 200
    return client
