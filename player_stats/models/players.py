from sqlmodel import SQLModel

from player_stats.models.fields import RATING


class PlayerBase(SQLModel):
    name: str
    # Role code; the UI offers models.fields.Position, the service only requires non-empty text
    position: str
    rating: int
    club: str
    nation: str


class PlayerRead(PlayerBase):
    id: int
    rating: RATING


class PlayerMutationResponse(PlayerRead):
    """Response body for create/update: the stored record plus a confirmation."""

    message: str


class MessageResponse(SQLModel):
    message: str


class ErrorResponse(SQLModel):
    error: str


class HealthResponse(SQLModel):
    status: str
    message: str
    timestamp: str


class ApiIndexResponse(SQLModel):
    message: str
    endpoints: dict[str, str]
