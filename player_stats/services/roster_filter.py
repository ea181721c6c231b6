"""Roster filtering and search over an already-fetched list of players.

Pure functions: nothing here keeps state between calls or mutates the roster
it is given, so the UI simply calls them again whenever the roster or the
filter inputs change.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, TypeVar

from player_stats.models.players import PlayerRead

ALL = "all"

P = TypeVar("P", bound=PlayerRead)


@dataclass(frozen=True)
class FilterSpec:
    search_text: str = ""
    position: str = ALL
    min_rating: int = 0
    nation: str = ALL

    @classmethod
    def from_params(
        cls,
        q: Optional[str] = None,
        position: Optional[str] = None,
        min_rating: Any = None,
        nation: Optional[str] = None,
    ) -> "FilterSpec":
        """Build a spec from raw UI inputs; blanks mean "inactive"."""
        return cls(
            search_text=(q or "").strip(),
            position=position or ALL,
            min_rating=_parse_min_rating(min_rating),
            nation=nation or ALL,
        )

    @property
    def is_active(self) -> bool:
        return (
            bool(self.search_text)
            or self.position != ALL
            or self.min_rating > 0
            or self.nation != ALL
        )


def _parse_min_rating(value: Any) -> int:
    # Non-numeric input counts as no minimum
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return 0
    return max(parsed, 0)


def matches(player: PlayerRead, spec: FilterSpec) -> bool:
    """True when ``player`` satisfies every active predicate of ``spec``."""
    if spec.position != ALL and player.position != spec.position:
        return False
    if spec.min_rating > 0 and player.rating < spec.min_rating:
        return False
    if spec.nation != ALL and player.nation != spec.nation:
        return False
    if spec.search_text:
        needle = spec.search_text.lower()
        if needle not in player.name.lower() and needle not in player.club.lower():
            return False
    return True


def filter_roster(roster: Sequence[P], spec: FilterSpec) -> list[P]:
    """Return the players of ``roster`` matching ``spec``, in roster order."""
    return [player for player in roster if matches(player, spec)]


def _distinct(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


def position_options(roster: Sequence[PlayerRead]) -> list[str]:
    """Distinct positions present in the roster, in first-seen order."""
    return _distinct(p.position for p in roster)


def nation_options(roster: Sequence[PlayerRead]) -> list[str]:
    """Distinct nations present in the roster, in first-seen order."""
    return _distinct(p.nation for p in roster)


@dataclass(frozen=True)
class RosterSummary:
    total: int
    average_rating: float
    top_rating: int
    filtered: int


def summarize_roster(
    roster: Sequence[PlayerRead], visible: Sequence[PlayerRead]
) -> RosterSummary:
    ratings = [p.rating for p in roster]
    average = round(sum(ratings) / len(ratings), 1) if ratings else 0.0
    return RosterSummary(
        total=len(roster),
        average_rating=average,
        top_rating=max(ratings, default=0),
        filtered=len(visible),
    )


def rating_tier(rating: int) -> str:
    """Badge tier for a rating: elite, gold, silver or standard."""
    if rating >= 90:
        return "elite"
    if rating >= 85:
        return "gold"
    if rating >= 80:
        return "silver"
    return "standard"
