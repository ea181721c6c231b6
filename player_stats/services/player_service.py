"""Player service: validation and outcome mapping for roster CRUD.

Validation runs once, here, before any write reaches the gateway. Routes are
thin wrappers that translate the errors in services.errors to responses.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Mapping

from player_stats.models.fields import RATING_MAX, RATING_MIN
from player_stats.models.players import PlayerRead
from player_stats.services.errors import NotFoundError, ValidationError
from player_stats.services.player_gateway import PlayerData, PlayerGateway

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("name", "position", "club", "nation")

REQUIRED_MESSAGE = "All fields are required"
RATING_TYPE_MESSAGE = "Rating must be a whole number"
RATING_RANGE_MESSAGE = f"Rating must be between {RATING_MIN} and {RATING_MAX}"
TEXT_TYPE_MESSAGE = "Name, position, club and nation must be text"


@dataclass
class PlayerFields:
    """Raw fields from a request body or form; nothing is validated yet."""

    name: Any = None
    position: Any = None
    rating: Any = None
    club: Any = None
    nation: Any = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PlayerFields":
        return cls(
            name=data.get("name"),
            position=data.get("position"),
            rating=data.get("rating"),
            club=data.get("club"),
            nation=data.get("nation"),
        )


def _is_blank(val: Any) -> bool:
    return val is None or (isinstance(val, str) and not val.strip())


def _clean_text(val: Any) -> str:
    """Stripped text; bare numbers (a JSON club name like 1860) become text."""
    if isinstance(val, str):
        return val.strip()
    if isinstance(val, (int, float)) and not isinstance(val, bool):
        return str(val)
    raise ValidationError(TEXT_TYPE_MESSAGE)


def _parse_rating(val: Any) -> int:
    # bool is an int subclass; a JSON true is not a rating
    if isinstance(val, bool):
        raise ValidationError(RATING_TYPE_MESSAGE)
    if isinstance(val, int):
        return val
    if isinstance(val, float):
        if not val.is_integer():
            raise ValidationError(RATING_TYPE_MESSAGE)
        return int(val)
    if isinstance(val, str):
        try:
            return int(val.strip())
        except ValueError:
            raise ValidationError(RATING_TYPE_MESSAGE) from None
    raise ValidationError(RATING_TYPE_MESSAGE)


def validate_player_fields(fields: PlayerFields) -> PlayerData:
    """Check presence and rating range, returning the cleaned data.

    Raises:
        ValidationError: any text field is missing or blank, or the rating is
            missing, not a whole number, or outside [RATING_MIN, RATING_MAX]
    """
    raw = {name: getattr(fields, name) for name in TEXT_FIELDS}
    if any(_is_blank(v) for v in raw.values()) or _is_blank(fields.rating):
        raise ValidationError(REQUIRED_MESSAGE)
    cleaned = {name: _clean_text(v) for name, v in raw.items()}

    parsed_rating = _parse_rating(fields.rating)
    if not RATING_MIN <= parsed_rating <= RATING_MAX:
        raise ValidationError(RATING_RANGE_MESSAGE)

    return PlayerData(rating=parsed_rating, **cleaned)  # type: ignore[arg-type]


class PlayerService:
    """CRUD operations over an injected PlayerGateway.

    Raises ValidationError, NotFoundError or PersistenceError (from the gateway).
    """

    def __init__(self, gateway: PlayerGateway):
        self.gateway = gateway

    async def list(self) -> list[PlayerRead]:
        return await self.gateway.list_all()

    async def get(self, player_id: int) -> PlayerRead:
        player = await self.gateway.get_by_id(player_id)
        if player is None:
            raise NotFoundError(player_id)
        return player

    async def create(self, fields: PlayerFields) -> PlayerRead:
        data = validate_player_fields(fields)
        player_id = await self.gateway.insert(data)
        logger.info(f"Created player {player_id} ({data.name})")
        return PlayerRead(id=player_id, **asdict(data))

    async def update(self, player_id: int, fields: PlayerFields) -> PlayerRead:
        data = validate_player_fields(fields)
        affected = await self.gateway.update(player_id, data)
        if affected == 0:
            raise NotFoundError(player_id)
        logger.info(f"Updated player {player_id}")
        return PlayerRead(id=player_id, **asdict(data))

    async def remove(self, player_id: int) -> None:
        affected = await self.gateway.delete_by_id(player_id)
        if affected == 0:
            raise NotFoundError(player_id)
        logger.info(f"Deleted player {player_id}")
