from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_validator

from rpgroster.exceptions import ValidationFailed
from rpgroster.models import (
    PlayerCandidate,
    PlayerRecord,
    PlayerUpdate,
    Profession,
    Race,
    datetime_to_epoch_millis,
    epoch_millis_to_datetime,
)


def _birthday_from_millis(value: int) -> datetime:
    try:
        return epoch_millis_to_datetime(value)
    except OverflowError:
        raise ValidationFailed([f"birthday {value} is out of range"]) from None


class PlayerResponse(BaseModel):
    id: int
    name: str
    title: str
    race: Race
    profession: Profession
    birthday: int
    banned: bool
    experience: int
    level: int

    @classmethod
    def from_record(cls, record: PlayerRecord) -> "PlayerResponse":
        return cls(
            id=record.id,
            name=record.name,
            title=record.title,
            race=record.race,
            profession=record.profession,
            birthday=datetime_to_epoch_millis(record.birthday),
            banned=record.banned,
            experience=record.experience,
            level=record.level,
        )


class _PlayerPayload(BaseModel):
    name: str | None = None
    title: str | None = None
    race: Race | None = None
    profession: Profession | None = None
    birthday: int | None = None
    banned: bool | None = None
    experience: int | None = None

    @field_validator("race", "profession", mode="before")
    @classmethod
    def _enum_name(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    def _fields(self) -> dict:
        data = self.model_dump()
        if self.birthday is not None:
            data["birthday"] = _birthday_from_millis(self.birthday)
        return data


class PlayerCreateRequest(_PlayerPayload):
    """Create payload; ``birthday`` is epoch milliseconds."""

    level: int | None = None

    def to_candidate(self) -> PlayerCandidate:
        return PlayerCandidate(**self._fields())


class PlayerUpdateRequest(_PlayerPayload):
    """Partial update payload; omitted or null fields keep their stored value."""

    def to_update(self) -> PlayerUpdate:
        return PlayerUpdate(**self._fields())
