"""Unit tests for database URL handling and the store handle lifecycle."""

import ssl

import pytest

from player_stats.config import Settings
from player_stats.utils.db_async import (
    Database,
    describe_database_url,
    normalize_db_url,
    prepare_connection,
)


class TestNormalizeDbUrl:
    def test_bare_postgresql_uses_asyncpg(self):
        assert normalize_db_url("postgresql://u:p@db:5432/players") == (
            "postgresql+asyncpg://u:p@db:5432/players"
        )

    def test_postgres_alias_uses_asyncpg(self):
        assert normalize_db_url("postgres://u:p@db/players").startswith(
            "postgresql+asyncpg://"
        )

    def test_explicit_driver_kept(self):
        url = "postgresql+psycopg://u:p@db/players"
        assert normalize_db_url(url) == url


class TestPrepareConnection:
    def test_strips_libpq_args(self):
        url, connect_args = prepare_connection(
            "postgresql://u:p@db/players?sslmode=disable&channel_binding=require&application_name=api"
        )
        assert url == "postgresql+asyncpg://u:p@db/players?application_name=api"
        assert connect_args == {"ssl": False}

    def test_no_query(self):
        url, connect_args = prepare_connection("postgresql://u:p@db/players")
        assert url == "postgresql+asyncpg://u:p@db/players"
        assert connect_args == {}

    def test_require_skips_verification(self):
        _, connect_args = prepare_connection("postgresql://u:p@db/players?sslmode=require")
        ctx = connect_args["ssl"]
        assert isinstance(ctx, ssl.SSLContext)
        assert ctx.verify_mode == ssl.CERT_NONE

    def test_prefer_lets_driver_negotiate(self):
        _, connect_args = prepare_connection("postgresql://u:p@db/players?sslmode=prefer")
        assert connect_args == {}


class TestDescribeDatabaseUrl:
    def test_hides_password(self):
        described = describe_database_url("postgresql+asyncpg://user:hunter2@db:5432/players")
        assert described == "postgresql+asyncpg://user@db:5432/players"
        assert "hunter2" not in described

    def test_unparseable(self):
        assert describe_database_url("not a url") == "<unparseable database URL>"


class TestDatabaseHandle:
    def test_from_settings(self):
        settings = Settings(
            database_url="postgresql://u:p@db/players",
            db_pool_size=4,
            db_max_overflow=2,
            db_pool_timeout=5.0,
        )
        database = Database.from_settings(settings)
        assert database.url == "postgresql+asyncpg://u:p@db/players"
        assert (database.pool_size, database.max_overflow, database.pool_timeout) == (4, 2, 5.0)
        assert database.description == "postgresql+asyncpg://u@db/players"

    def test_session_requires_connect(self):
        database = Database("postgresql://u:p@db/players")
        with pytest.raises(RuntimeError):
            database.session()
        with pytest.raises(RuntimeError):
            database.engine

    @pytest.mark.asyncio
    async def test_dispose_without_connect_is_noop(self):
        await Database("postgresql://u:p@db/players").dispose()


def test_cors_origin_list():
    settings = Settings(cors_origins="http://localhost:5173, https://roster.example.com,")
    assert settings.cors_origin_list == ["http://localhost:5173", "https://roster.example.com"]
