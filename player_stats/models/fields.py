"""
Field constants shared by the API models and the roster UI.
"""
from enum import Enum
from typing import Annotated

from pydantic import Field as PydField

RATING_MIN = 1
RATING_MAX = 99


class Position(str, Enum):
    GK = "GK"
    CB = "CB"
    LB = "LB"
    RB = "RB"
    CDM = "CDM"
    CM = "CM"
    CAM = "CAM"
    LM = "LM"
    RM = "RM"
    LW = "LW"
    RW = "RW"
    ST = "ST"
    CF = "CF"

    @property
    def label(self) -> str:
        return {
            "GK": "Goalkeeper",
            "CB": "Centre-back",
            "LB": "Left-back",
            "RB": "Right-back",
            "CDM": "Defensive midfielder",
            "CM": "Central midfielder",
            "CAM": "Attacking midfielder",
            "LM": "Left midfielder",
            "RM": "Right midfielder",
            "LW": "Left winger",
            "RW": "Right winger",
            "ST": "Striker",
            "CF": "Centre-forward",
        }[self.value]


RATING = Annotated[int, PydField(..., ge=RATING_MIN, le=RATING_MAX)]
