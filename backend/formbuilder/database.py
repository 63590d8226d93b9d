"""
FormBuilder Backend - Database Session Management
==================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine (pooled for PostgreSQL, a single shared
       connection for in-memory SQLite), provides a session dependency that
       commits on success and rolls back on error.
Who:   Used by route handlers and the authentication gate via Depends().
When:  Engine is created at module import; sessions are created per-request.

Transaction scope:
    One session (one transaction) per request. The gate and the handler of a
    request share it, since FastAPI caches a dependency within a request.
    Every write a handler performs is therefore committed or discarded as a
    unit.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from formbuilder.config import settings


def _engine_options(url: str) -> Dict[str, Any]:
    """Pool arguments suited to the backend named by `url`."""
    if url.startswith("sqlite"):
        if ":memory:" in url or url.rstrip("/") == "sqlite+aiosqlite:":
            # Every session must see the same in-memory database.
            return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
        return {}
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": settings.db_pool_pre_ping,
        "pool_recycle": 3600,
    }


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(
    settings.database_url,
    echo=settings.log_level == "DEBUG",
    **_engine_options(settings.database_url),
)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after the commit that
# happens when the request dependency exits.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """Base class for all ORM models; shares one metadata object with Alembic."""
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the gate / route handler
        3. On success: commits the transaction
        4. On error: rolls back the transaction and re-raises
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/getForms")
        async def get_forms(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_all() -> None:
    """
    Create every table known to `Base.metadata` if it does not exist yet.

    Used for SQLite development databases and tests. PostgreSQL deployments
    run `alembic upgrade head` instead.
    """
    # Models register themselves on Base when imported.
    from formbuilder.models import account, form, response  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Close every pooled connection. Called during application shutdown."""
    await engine.dispose()
