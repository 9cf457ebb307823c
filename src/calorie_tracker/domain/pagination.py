"""Pagination helpers for list endpoints."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """A slice of results with paging metadata."""

    items: list[T]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0


def paginate(items: Sequence[T], page: int, limit: int) -> Page[T]:
    """Return the 1-based ``page`` of ``items``."""
    offset = (page - 1) * limit
    return Page(
        items=list(items[offset : offset + limit]),
        page=page,
        limit=limit,
        total=len(items),
    )
