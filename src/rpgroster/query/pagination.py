"""Page slicing for ordered player lists."""

from __future__ import annotations

from typing import Sequence, TypeVar


T = TypeVar("T")

DEFAULT_PAGE_NUMBER = 0
DEFAULT_PAGE_SIZE = 3


def paginate(
    items: Sequence[T],
    page_number: int | None = None,
    page_size: int | None = None,
) -> list[T]:
    """Return page ``page_number`` of ``page_size`` items (empty past the end).

    Both values must already be non-negative.
    """

    page = DEFAULT_PAGE_NUMBER if page_number is None else page_number
    size = DEFAULT_PAGE_SIZE if page_size is None else page_size
    start = page * size
    return list(items[start:start + size])


__all__ = [
    "DEFAULT_PAGE_NUMBER",
    "DEFAULT_PAGE_SIZE",
    "paginate",
]
