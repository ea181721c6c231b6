"""Player CRUD API routes.

Routes are thin wrappers around PlayerService. Errors are raised as
HTTPException and rendered as ``{"error": detail}`` by the handlers in main.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException

from player_stats.dependencies import get_player_service
from player_stats.models.players import (
    ErrorResponse,
    MessageResponse,
    PlayerMutationResponse,
    PlayerRead,
)
from player_stats.services.errors import (
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from player_stats.services.player_service import PlayerFields, PlayerService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/players",
    tags=["players"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        500: {"model": ErrorResponse, "description": "Store failure"},
    },
)

NOT_FOUND_MESSAGE = "Player not found"
NOT_FOUND_RESPONSE = {404: {"model": ErrorResponse, "description": NOT_FOUND_MESSAGE}}


@router.get("", response_model=List[PlayerRead])
@router.get("/", response_model=List[PlayerRead], include_in_schema=False)
async def list_players(
    service: PlayerService = Depends(get_player_service),
) -> List[PlayerRead]:
    """List all players, highest rating first."""
    try:
        return await service.list()
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail="Failed to fetch players") from exc


@router.get("/{player_id}", response_model=PlayerRead, responses=NOT_FOUND_RESPONSE)
async def get_player(
    player_id: int,
    service: PlayerService = Depends(get_player_service),
) -> PlayerRead:
    try:
        return await service.get(player_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail="Failed to fetch player") from exc


@router.post("", response_model=PlayerMutationResponse, status_code=201)
@router.post(
    "/",
    response_model=PlayerMutationResponse,
    status_code=201,
    include_in_schema=False,
)
async def create_player(
    payload: Dict[str, Any] = Body(...),
    service: PlayerService = Depends(get_player_service),
) -> PlayerMutationResponse:
    """Create a player; the response echoes the stored fields and the new id."""
    try:
        player = await service.create(PlayerFields.from_mapping(payload))
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail="Failed to create player") from exc

    return PlayerMutationResponse(
        **player.model_dump(), message="Player created successfully"
    )


@router.put(
    "/{player_id}", response_model=PlayerMutationResponse, responses=NOT_FOUND_RESPONSE
)
async def update_player(
    player_id: int,
    payload: Dict[str, Any] = Body(...),
    service: PlayerService = Depends(get_player_service),
) -> PlayerMutationResponse:
    """Replace all fields of an existing player."""
    try:
        player = await service.update(player_id, PlayerFields.from_mapping(payload))
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail="Failed to update player") from exc

    return PlayerMutationResponse(
        **player.model_dump(), message="Player updated successfully"
    )


@router.delete("/{player_id}", response_model=MessageResponse, responses=NOT_FOUND_RESPONSE)
async def delete_player(
    player_id: int,
    service: PlayerService = Depends(get_player_service),
) -> MessageResponse:
    try:
        await service.remove(player_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=500, detail="Failed to delete player") from exc

    return MessageResponse(message="Player deleted successfully")
