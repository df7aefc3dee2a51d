"""Player operations composed from the store and the query/validation core."""

from __future__ import annotations

import logging
from typing import List

from rpgroster.config import DEFAULT_RULES, PlayerRules
from rpgroster.exceptions import InvalidArgument, NotFound, ValidationFailed
from rpgroster.models import PlayerCandidate, PlayerOrder, PlayerRecord, PlayerUpdate
from rpgroster.persistence import PlayerRepository
from rpgroster.query import DEFAULT_PAGE_SIZE, FilterCriteria, filter_players, paginate, sort_players
from rpgroster.validation import apply_update, validate_candidate


logger = logging.getLogger(__name__)


def validate_player_id(player_id: int) -> int:
    if player_id <= 0:
        raise InvalidArgument(f"Player id must be a positive integer, got {player_id}")
    return player_id


def check_page_bounds(page_number: int | None, page_size: int | None) -> None:
    if page_number is not None and page_number < 0:
        raise InvalidArgument(f"pageNumber must not be negative, got {page_number}")
    if page_size is not None and page_size < 0:
        raise InvalidArgument(f"pageSize must not be negative, got {page_size}")


class PlayerService:
    """Entry point for every player read and write.

    Writes validate completely before issuing exactly one store call.
    """

    def __init__(
        self,
        store: PlayerRepository,
        *,
        rules: PlayerRules = DEFAULT_RULES,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.store = store
        self.rules = rules
        self.default_page_size = default_page_size

    def list_players(
        self,
        criteria: FilterCriteria,
        order: PlayerOrder | None = None,
        page_number: int | None = None,
        page_size: int | None = None,
    ) -> List[PlayerRecord]:
        check_page_bounds(page_number, page_size)
        matches = filter_players(self.store.load_all(), criteria)
        ordered = sort_players(matches, order)
        size = self.default_page_size if page_size is None else page_size
        return paginate(ordered, page_number, size)

    def count_players(self, criteria: FilterCriteria) -> int:
        return len(filter_players(self.store.load_all(), criteria))

    def get_player(self, player_id: int) -> PlayerRecord:
        validate_player_id(player_id)
        player = self.store.find_by_id(player_id)
        if player is None:
            raise NotFound(player_id)
        return player

    def create_player(self, candidate: PlayerCandidate) -> PlayerRecord:
        try:
            record = validate_candidate(candidate, self.rules)
        except ValidationFailed as exc:
            logger.warning("Rejected new player: %s", exc)
            raise
        saved = self.store.save(record)
        logger.info("Created player %s (%s)", saved.id, saved.name)
        return saved

    def update_player(self, player_id: int, update: PlayerUpdate) -> PlayerRecord:
        current = self.get_player(player_id)
        try:
            updated = apply_update(current, update, self.rules)
        except ValidationFailed as exc:
            logger.warning("Rejected update for player %s: %s", player_id, exc)
            raise
        if updated is current:
            return current
        try:
            saved = self.store.save(updated)
        except KeyError as exc:
            # Deleted between the lookup and the write.
            raise NotFound(player_id) from exc
        logger.info("Updated player %s fields %s", player_id, sorted(update.present_fields()))
        return saved

    def delete_player(self, player_id: int) -> None:
        validate_player_id(player_id)
        if self.store.find_by_id(player_id) is None or not self.store.delete_by_id(player_id):
            raise NotFound(player_id)
        logger.info("Deleted player %s", player_id)


__all__ = [
    "PlayerService",
    "check_page_bounds",
    "validate_player_id",
]
