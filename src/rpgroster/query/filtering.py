"""Predicate filtering over in-memory player collections."""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Iterable

from rpgroster.models import PlayerRecord, Profession, Race, as_utc


@dataclass(frozen=True)
class FilterCriteria:
    """Optional predicates combined with AND. ``None`` means unconstrained."""

    name: str | None = None
    title: str | None = None
    race: Race | None = None
    profession: Profession | None = None
    after: datetime | None = None
    before: datetime | None = None
    banned: bool | None = None
    min_experience: int | None = None
    max_experience: int | None = None
    min_level: int | None = None
    max_level: int | None = None

    def __post_init__(self) -> None:
        # Stored birthdays are aware UTC; naive bounds are read as UTC too.
        for name in ("after", "before"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, as_utc(value))

    def is_empty(self) -> bool:
        return all(getattr(self, field.name) is None for field in fields(self))


def _passes_criteria(player: PlayerRecord, criteria: FilterCriteria) -> bool:
    if criteria.name is not None and criteria.name not in player.name:
        return False
    if criteria.title is not None and criteria.title not in player.title:
        return False
    if criteria.race is not None and player.race != criteria.race:
        return False
    if criteria.profession is not None and player.profession != criteria.profession:
        return False
    # Query bounds include the boundary instant itself.
    if criteria.after is not None and player.birthday < criteria.after:
        return False
    if criteria.before is not None and player.birthday > criteria.before:
        return False
    if criteria.banned is not None and player.banned != criteria.banned:
        return False
    if criteria.min_experience is not None and player.experience < criteria.min_experience:
        return False
    if criteria.max_experience is not None and player.experience > criteria.max_experience:
        return False
    if criteria.min_level is not None and player.level < criteria.min_level:
        return False
    if criteria.max_level is not None and player.level > criteria.max_level:
        return False
    return True


def filter_players(
    players: Iterable[PlayerRecord],
    criteria: FilterCriteria,
) -> list[PlayerRecord]:
    """Return the players matching every predicate, in input order."""

    return [player for player in players if _passes_criteria(player, criteria)]


__all__ = [
    "FilterCriteria",
    "filter_players",
]
