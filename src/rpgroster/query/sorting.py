"""Single-key ordering for player lists."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping

from rpgroster.models import PlayerOrder, PlayerRecord


_SORT_KEYS: Mapping[PlayerOrder, Callable[[PlayerRecord], Any]] = {
    # Unsaved records (no id yet) sort after every stored one.
    PlayerOrder.ID: lambda player: (player.id is None, player.id or 0),
    PlayerOrder.NAME: lambda player: player.name,
    PlayerOrder.LEVEL: lambda player: player.level,
    PlayerOrder.BIRTHDAY: lambda player: player.birthday,
    PlayerOrder.EXPERIENCE: lambda player: player.experience,
}

_missing = set(PlayerOrder) - set(_SORT_KEYS)
if _missing:
    raise RuntimeError(f"No sort key configured for {sorted(m.name for m in _missing)}")


def sort_players(
    players: Iterable[PlayerRecord],
    order: PlayerOrder | None = None,
) -> list[PlayerRecord]:
    """Return players ascending by ``order``; ties keep their input order.

    ``None`` leaves the input order unchanged.
    """

    ordered = list(players)
    if order is None:
        return ordered
    ordered.sort(key=_SORT_KEYS[order])
    return ordered


__all__ = ["sort_players"]
