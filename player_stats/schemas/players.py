"""
SQLModel table for players, to be stored in the database.
"""
from typing import Optional

from sqlalchemy import CheckConstraint
from sqlmodel import Field as SQLField

from player_stats.models.fields import RATING_MAX, RATING_MIN
from player_stats.models.players import PlayerBase

# players.id is an INTEGER column; ids outside this range cannot exist
PLAYER_ID_MAX = 2**31 - 1


class PlayerTable(PlayerBase, table=True):
    __tablename__ = "players"
    __table_args__ = (
        CheckConstraint(
            f"rating BETWEEN {RATING_MIN} AND {RATING_MAX}",
            name="ck_players_rating_range",
        ),
    )

    id: Optional[int] = SQLField(default=None, primary_key=True)
