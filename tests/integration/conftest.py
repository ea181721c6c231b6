"""Fixtures for gateway tests against a live Postgres database."""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel

from player_stats.services.player_gateway import PlayerGateway
from player_stats.utils.db_async import prepare_connection


def _load_database_url() -> str:
    """Resolve the database URL for tests, enforcing an explicit opt-in."""
    test_db_url = os.getenv("TEST_DATABASE_URL")
    pytest_allow_db = int(os.getenv("PYTEST_ALLOW_DB", "0"))
    if not test_db_url:
        pytest.skip("No TEST_DATABASE_URL is configured for tests.")
    if pytest_allow_db != 1:
        raise RuntimeError(
            "Running integration tests requires setting PYTEST_ALLOW_DB=1 to"
            " confirm the configured database is safe to mutate."
        )
    return test_db_url  # type: ignore[return-value]


@pytest.fixture(scope="session")
def database_url() -> str:
    """Return the Postgres URL the integration tests should target."""
    return _load_database_url()


@pytest_asyncio.fixture()
async def async_engine(database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """Yield an engine with a freshly created players table."""
    from player_stats.schemas import players  # noqa: F401

    url, connect_args = prepare_connection(database_url)
    engine = create_async_engine(url, connect_args=connect_args, pool_pre_ping=True)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    try:
        yield engine
    finally:
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)
        await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Session inside an outer transaction that is rolled back after the test.

    The gateway commits after every statement; a savepoint is restarted after
    each commit so those commits never escape the outer transaction.
    """
    async with async_engine.connect() as connection:
        trans = await connection.begin()
        session = async_sessionmaker(
            bind=connection, expire_on_commit=False, class_=AsyncSession
        )()
        await session.begin_nested()

        @event.listens_for(session.sync_session, "after_transaction_end")
        def restart_savepoint(sess, transaction):  # type: ignore[unused-argument]
            if transaction.nested and not transaction._parent.nested:
                sess.begin_nested()

        try:
            yield session
        finally:
            await session.close()
            await trans.rollback()
            event.remove(
                session.sync_session, "after_transaction_end", restart_savepoint
            )


@pytest.fixture()
def pg_gateway(db_session: AsyncSession) -> PlayerGateway:
    return PlayerGateway(db_session)
