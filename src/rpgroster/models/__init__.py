"""Player entities and enumerations."""

from .player import (
    PlayerCandidate,
    PlayerOrder,
    PlayerRecord,
    PlayerUpdate,
    Profession,
    Race,
    as_utc,
    datetime_to_epoch_millis,
    epoch_millis_to_datetime,
)

__all__ = [
    "PlayerCandidate",
    "PlayerOrder",
    "PlayerRecord",
    "PlayerUpdate",
    "Profession",
    "Race",
    "as_utc",
    "datetime_to_epoch_millis",
    "epoch_millis_to_datetime",
]
