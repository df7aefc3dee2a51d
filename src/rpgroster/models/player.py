"""Canonical player models shared across the query, validation and API layers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import Enum

from pydantic import BaseModel, field_validator
from pydantic.config import ConfigDict


class _NamedEnum(str, Enum):
    """String enum that also resolves member names case-insensitively."""

    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str):
            token = value.strip().upper()
            for member in cls:
                if member.name == token:
                    return member
        return None


class Race(_NamedEnum):
    HUMAN = "HUMAN"
    ELF = "ELF"
    DWARF = "DWARF"
    GIANT = "GIANT"
    ORC = "ORC"
    TROLL = "TROLL"
    HOBBIT = "HOBBIT"


class Profession(_NamedEnum):
    WARRIOR = "WARRIOR"
    ROGUE = "ROGUE"
    SORCERER = "SORCERER"
    CLERK = "CLERK"
    PALADIN = "PALADIN"
    NATURALIST = "NATURALIST"


class PlayerOrder(_NamedEnum):
    """Sort keys accepted by list queries."""

    ID = "ID"
    NAME = "NAME"
    LEVEL = "LEVEL"
    BIRTHDAY = "BIRTHDAY"
    EXPERIENCE = "EXPERIENCE"


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)


def epoch_millis_to_datetime(value: int) -> datetime:
    """Convert epoch milliseconds into an aware UTC datetime."""

    return _EPOCH + value * _MILLISECOND


def datetime_to_epoch_millis(value: datetime) -> int:
    return (as_utc(value) - _EPOCH) // _MILLISECOND


def as_utc(value: datetime) -> datetime:
    # Naive values are read as UTC so they compare against the aware bounds.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class _PlayerFields(BaseModel):
    model_config = ConfigDict(frozen=True)

    @field_validator("race", "profession", mode="before", check_fields=False)
    @classmethod
    def _normalize_enum_name(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("birthday", check_fields=False)
    @classmethod
    def _normalize_birthday(cls, value: datetime | None) -> datetime | None:
        return None if value is None else as_utc(value)


class PlayerRecord(_PlayerFields):
    """Stored player. ``id`` stays ``None`` until the store assigns one."""

    id: int | None = None
    name: str
    title: str
    race: Race
    profession: Profession
    birthday: datetime
    banned: bool = False
    experience: int
    level: int = 0


class PlayerCandidate(_PlayerFields):
    """Unchecked create payload; business rules live in ``rpgroster.validation``."""

    name: str | None = None
    title: str | None = None
    race: Race | None = None
    profession: Profession | None = None
    birthday: datetime | None = None
    banned: bool | None = None
    experience: int | None = None
    level: int | None = None


class PlayerUpdate(_PlayerFields):
    """Partial update payload. Fields left as ``None`` are not touched."""

    name: str | None = None
    title: str | None = None
    race: Race | None = None
    profession: Profession | None = None
    birthday: datetime | None = None
    banned: bool | None = None
    experience: int | None = None

    def present_fields(self) -> dict[str, object]:
        return {key: value for key, value in self if value is not None}
