"""Persistence gateway for the players table.

Every method executes exactly one parameterized statement and commits it.
Store failures are rolled back, logged and re-raised as PersistenceError;
nothing is retried.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from player_stats.models.players import PlayerRead
from player_stats.schemas.players import PLAYER_ID_MAX, PlayerTable
from player_stats.services.errors import PersistenceError

logger = logging.getLogger(__name__)


def _storable_id(player_id: int) -> bool:
    # Out-of-range parameters make the driver raise instead of matching no row
    return 1 <= player_id <= PLAYER_ID_MAX


@dataclass(frozen=True)
class PlayerData:
    """Validated player fields ready for a write."""

    name: str
    position: str
    rating: int
    club: str
    nation: str


class PlayerGateway:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _fail(self, operation: str, exc: Exception) -> PersistenceError:
        await self.db.rollback()
        if isinstance(exc, PoolTimeoutError):
            logger.error(f"{operation}: connection pool exhausted: {exc}")
        else:
            logger.error(f"{operation} failed: {exc}", exc_info=True)
        return PersistenceError(f"{operation} failed")

    async def list_all(self) -> list[PlayerRead]:
        """All players, rating descending; ties ordered by id ascending."""
        stmt = select(PlayerTable).order_by(
            PlayerTable.rating.desc(),  # type: ignore[attr-defined]
            PlayerTable.id.asc(),  # type: ignore[union-attr]
        )
        try:
            result = await self.db.execute(stmt)
        except (SQLAlchemyError, OSError) as exc:
            raise await self._fail("list_all", exc) from exc
        return [PlayerRead.model_validate(row) for row in result.scalars().all()]

    async def get_by_id(self, player_id: int) -> PlayerRead | None:
        if not _storable_id(player_id):
            return None
        stmt = select(PlayerTable).where(PlayerTable.id == player_id)  # type: ignore[arg-type]
        try:
            result = await self.db.execute(stmt)
        except (SQLAlchemyError, OSError) as exc:
            raise await self._fail("get_by_id", exc) from exc
        row = result.scalar_one_or_none()
        return PlayerRead.model_validate(row) if row is not None else None

    async def insert(self, data: PlayerData) -> int:
        """Insert a player and return the store-assigned id."""
        player = PlayerTable(**asdict(data))
        self.db.add(player)
        try:
            await self.db.commit()
        except (SQLAlchemyError, OSError) as exc:
            raise await self._fail("insert", exc) from exc
        assert player.id is not None
        return player.id

    async def update(self, player_id: int, data: PlayerData) -> int:
        """Replace all five fields of a player. Returns the affected row count."""
        if not _storable_id(player_id):
            return 0
        stmt = (
            update(PlayerTable)
            .where(PlayerTable.id == player_id)  # type: ignore[arg-type]
            .values(**asdict(data))
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except (SQLAlchemyError, OSError) as exc:
            raise await self._fail("update", exc) from exc
        return result.rowcount  # type: ignore[attr-defined]

    async def delete_by_id(self, player_id: int) -> int:
        """Delete a player. Returns the affected row count."""
        if not _storable_id(player_id):
            return 0
        stmt = (
            delete(PlayerTable)
            .where(PlayerTable.id == player_id)  # type: ignore[arg-type]
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except (SQLAlchemyError, OSError) as exc:
            raise await self._fail("delete_by_id", exc) from exc
        return result.rowcount  # type: ignore[attr-defined]
