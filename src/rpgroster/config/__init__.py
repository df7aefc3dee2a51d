"""Configuration helpers for player rules and runtime settings."""

from .rules import DEFAULT_RULES, PlayerRules
from .settings import Settings, load_settings

__all__ = [
    "DEFAULT_RULES",
    "PlayerRules",
    "Settings",
    "load_settings",
]
