"""Player query helpers (filtering, ordering, paging)."""

from .filtering import FilterCriteria, filter_players
from .pagination import DEFAULT_PAGE_NUMBER, DEFAULT_PAGE_SIZE, paginate
from .sorting import sort_players

__all__ = [
    "DEFAULT_PAGE_NUMBER",
    "DEFAULT_PAGE_SIZE",
    "FilterCriteria",
    "filter_players",
    "paginate",
    "sort_players",
]
