"""Fixed-size page windowing for listings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Generic, TypeVar

from townhall.schemas.common import SQL_INT_MAX

PER_PAGE: Final[int] = 20

# Highest page whose row offset still fits a signed 64-bit SQL integer.
MAX_PAGE: Final[int] = SQL_INT_MAX // PER_PAGE

ItemT = TypeVar("ItemT")


def clamp_page(page: int | None) -> int:
    """Return ``page`` as a valid 1-based page number no larger than ``MAX_PAGE``."""
    if page is None or page < 1:
        return 1
    return min(page, MAX_PAGE)


def page_offset(page: int, per_page: int = PER_PAGE) -> int:
    """Return the row offset of an already clamped ``page``."""
    return (page - 1) * per_page


@dataclass(frozen=True)
class Page(Generic[ItemT]):
    """Items of one page plus the size of the full listing.

    A page past the end simply has no items; ``total`` still reports the
    full count.
    """

    items: list[ItemT]
    total: int
    page: int
    per_page: int = PER_PAGE
