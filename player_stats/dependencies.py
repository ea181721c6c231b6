"""FastAPI dependencies shared by the API and UI routers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from player_stats.services.player_gateway import PlayerGateway
from player_stats.services.player_service import PlayerService
from player_stats.utils.db_async import get_session


async def get_player_service(
    db: AsyncSession = Depends(get_session),
) -> PlayerService:
    """Player service bound to the request's session."""
    return PlayerService(PlayerGateway(db))
