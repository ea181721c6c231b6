"""Outcome errors raised by the player service layer."""


class PlayerServiceError(Exception):
    """Base class for errors the routers translate into HTTP responses."""


class ValidationError(PlayerServiceError):
    """Client-supplied fields violate presence or rating-range rules.

    The message is safe to return to the caller.
    """


class NotFoundError(PlayerServiceError):
    """The referenced player id does not exist."""

    def __init__(self, player_id: int):
        super().__init__(f"Player {player_id} not found")
        self.player_id = player_id


class PersistenceError(PlayerServiceError):
    """The store was unreachable or a statement failed.

    Details are logged server-side and never returned to the caller.
    """
