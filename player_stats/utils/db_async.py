"""Async SQLAlchemy store handle: engine, bounded pool and session helpers."""

import logging
import ssl
from typing import Any, AsyncGenerator, Dict, Optional, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel

from player_stats.config import Settings

logger = logging.getLogger(__name__)


def normalize_db_url(url: str) -> str:
    """Select the asyncpg driver for bare ``postgres://``/``postgresql://`` URLs.

    An explicit driver (``postgresql+psycopg``, ``sqlite+aiosqlite``...) is kept.
    """
    u = make_url(url)
    driver = (u.drivername or "").lower()
    if "+" not in driver and driver in ("postgres", "postgresql"):
        u = u.set(drivername="postgresql+asyncpg")
    return u.render_as_string(hide_password=False)


def _ssl_connect_args(sslmode: str) -> Dict[str, Any]:
    mode = sslmode.lower()
    if mode == "disable":
        return {"ssl": False}
    if mode in {"allow", "prefer"}:
        # asyncpg negotiates TLS on its own when the server asks for it
        return {}
    if mode == "require":
        ctx = ssl.create_default_context()
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
        return {"ssl": ctx}
    if mode == "verify-ca":
        ctx = ssl.create_default_context()
        ctx.check_hostname = False
        return {"ssl": ctx}
    return {"ssl": ssl.create_default_context()}


def prepare_connection(url: str) -> Tuple[str, Dict[str, Any]]:
    """Return the driver URL and connect kwargs for ``url``.

    libpq-only query args (``sslmode``, ``channel_binding``) are stripped because
    asyncpg rejects them; ``sslmode`` is translated into an ``ssl`` connect arg.
    """
    split = urlsplit(normalize_db_url(url))
    kept = []
    sslmode: Optional[str] = None
    for key, value in parse_qsl(split.query, keep_blank_values=True):
        if key == "sslmode":
            sslmode = value
        elif key != "channel_binding":
            kept.append((key, value))

    cleaned = urlunsplit(split._replace(query=urlencode(kept, doseq=True))).rstrip("?")
    connect_args = _ssl_connect_args(sslmode) if sslmode else {}
    return cleaned, connect_args


def describe_database_url(url: str) -> str:
    """Return a sanitized description of the DB URL for logging.

    Example: "postgresql+asyncpg://user@host:5432/dbname". Passwords are never included.
    """
    try:
        u = make_url(url)
    except Exception:
        return "<unparseable database URL>"
    port = f":{u.port}" if u.port else ""
    return f"{u.drivername}://{u.username or '?'}@{u.host or '?'}{port}/{u.database or '?'}"


class Database:
    """Process-scoped store handle.

    Lifecycle: ``connect()`` builds the engine and its bounded pool, ``ping()``
    verifies connectivity, ``create_schema()`` creates missing tables and
    ``dispose()`` closes every pooled connection.
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 10,
        max_overflow: int = 0,
        pool_timeout: float = 30.0,
        echo: bool = False,
    ):
        self.url, self.connect_args = prepare_connection(url)
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            echo=settings.sql_echo,
        )

    @property
    def description(self) -> str:
        return describe_database_url(self.url)

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database.connect() has not been called")
        return self._engine

    def connect(self) -> None:
        if self._engine is not None:
            return
        self._engine = create_async_engine(
            self.url,
            echo=self.echo,
            pool_pre_ping=True,
            pool_size=self.pool_size,
            max_overflow=self.max_overflow,
            pool_timeout=self.pool_timeout,
            connect_args=self.connect_args,
        )
        self._sessionmaker = async_sessionmaker(
            bind=self._engine, expire_on_commit=False, class_=AsyncSession
        )
        logger.info(
            f"DB engine created for {self.description} "
            f"(pool_size={self.pool_size}, max_overflow={self.max_overflow}, "
            f"pool_timeout={self.pool_timeout}s)"
        )

    async def ping(self) -> None:
        """Check out a pooled connection and run ``SELECT 1``; raises on failure."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_schema(self) -> None:
        """Create missing tables. Existing tables are left untouched."""
        # Populate SQLModel metadata before create_all
        from player_stats.schemas import players  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    def session(self) -> AsyncSession:
        if self._sessionmaker is None:
            raise RuntimeError("Database.connect() has not been called")
        return self._sessionmaker()

    async def dispose(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session from the application's store handle."""
    database: Database = request.app.state.db
    async with database.session() as session:
        yield session
