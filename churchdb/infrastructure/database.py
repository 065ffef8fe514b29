"""Store Gateway — async connection pool over the directory database, non-fatal on failure.

Invariants:
    - Read-only: no commit path exists; every connection is returned to the pool
    - Connection pool bounded (pool_size, max_overflow=0); excess demand queues
      until pool_timeout
    - All SQLAlchemy exceptions mapped to StoreQueryError (core/errors.py);
      driver detail is logged, never surfaced
    - Startup failure leaves the gateway as None; the process keeps serving

Design Decisions:
    - Gateway instance held on app.state and injected via get_store
      (ADR: no ambient module globals reached from handlers)
    - Raw text() SQL over ORM selects: `fm.*` must return whatever columns the
      deployed schema carries, not only the ones mapped in models/
    - pool_pre_ping for stale connection detection on long-idle Railway instances
"""

import logging
from typing import Any, Mapping

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from churchdb.core.errors import StoreQueryError, StoreUnavailableError

logger = logging.getLogger(__name__)

Row = dict[str, Any]


class StoreGateway:
    """Executes parameterized read queries against a pooled async engine."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    @classmethod
    def from_url(
        cls, database_url: str, pool_size: int = 10, pool_timeout: int = 30,
    ) -> "StoreGateway":
        engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=0,
            pool_timeout=pool_timeout,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        return cls(engine)

    async def fetch_all(
        self, sql: str, params: Mapping[str, Any] | None = None,
        operation: str = "query",
    ) -> list[Row]:
        """Run a SELECT and return rows as plain dicts."""
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(text(sql), dict(params or {}))
                return [dict(row._mapping) for row in result]
        except OperationalError as e:
            logger.error(
                f"DB operational error: {e}", extra={"operation": operation},
            )
            raise StoreQueryError(operation)
        except DBAPIError as e:
            logger.error(
                f"DB driver error: {e}", extra={"operation": operation},
            )
            raise StoreQueryError(operation)
        except SQLAlchemyError as e:
            logger.error(
                f"SQLAlchemy error: {e}", extra={"operation": operation},
            )
            raise StoreQueryError(operation)

    async def fetch_one(
        self, sql: str, params: Mapping[str, Any] | None = None,
        operation: str = "query",
    ) -> Row | None:
        rows = await self.fetch_all(sql, params, operation)
        return rows[0] if rows else None

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            await self.fetch_all("SELECT 1 AS ok", operation="health_check")
            return True
        except StoreQueryError:
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


async def init_store(
    database_url: str, pool_size: int = 10, pool_timeout: int = 30,
) -> StoreGateway | None:
    """Create the pool and smoke-test it. Returns None on any failure."""
    try:
        gateway = StoreGateway.from_url(
            database_url, pool_size=pool_size, pool_timeout=pool_timeout,
        )
    except Exception as e:
        logger.error(f"Store init error: {e}")
        return None
    if not await gateway.health_check():
        logger.error("Store init error: smoke test failed, continuing without DB")
        await gateway.dispose()
        return None
    logger.info("Store pool created and tested OK")
    return gateway


def get_store(request: Request) -> StoreGateway:
    """FastAPI dependency for the Store Gateway."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise StoreUnavailableError()
    return store
