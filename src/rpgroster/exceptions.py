"""Errors raised by the player service and its helpers."""

from __future__ import annotations

from typing import Iterable


class RosterError(Exception):
    """Base class for recoverable player operation failures."""


class InvalidArgument(RosterError, ValueError):
    """Raised for a malformed identifier or negative paging values."""


class ValidationFailed(RosterError, ValueError):
    """Raised when a candidate or update violates a field rule."""

    def __init__(self, errors: Iterable[str]):
        self.errors = tuple(errors)
        super().__init__("; ".join(self.errors) or "validation failed")


class NotFound(RosterError, LookupError):
    """Raised when a player id does not designate a stored record."""

    def __init__(self, player_id: int):
        self.player_id = player_id
        super().__init__(f"Player {player_id} not found")


__all__ = [
    "InvalidArgument",
    "NotFound",
    "RosterError",
    "ValidationFailed",
]
