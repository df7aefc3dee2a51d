"""Domain bounds applied to every player write."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class PlayerRules:
    name_max_length: int = 12
    title_max_length: int = 30
    experience_min: int = 0
    experience_max: int = 10_000_000
    # Exclusive on both ends.
    birthday_after: datetime = datetime(2000, 1, 1, tzinfo=timezone.utc)
    birthday_before: datetime = datetime(3000, 1, 1, tzinfo=timezone.utc)


DEFAULT_RULES = PlayerRules()
