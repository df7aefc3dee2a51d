"""Pydantic models for API I/O."""

from .player import PlayerCreateRequest, PlayerResponse, PlayerUpdateRequest

__all__ = [
    "PlayerCreateRequest",
    "PlayerResponse",
    "PlayerUpdateRequest",
]
