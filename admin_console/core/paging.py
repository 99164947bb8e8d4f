"""Paged Result — one page of listing rows plus total-count metadata.

Invariants:
    - len(items) <= page_size
    - total counts predicate matches, independent of the page window
    - A page past the end has no items and an unchanged total
"""

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PagedResult(Generic[T]):
    items: list[T]
    page: int
    page_size: int
    total: int

    def __post_init__(self):
        if len(self.items) > self.page_size:
            raise ValueError(
                f"page holds {len(self.items)} items, page_size is {self.page_size}",
            )
        if self.total < 0:
            raise ValueError("total must be >= 0")

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size)

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.page > 1

    def pagination(self) -> dict:
        return {
            "page": self.page,
            "pageSize": self.page_size,
            "total": self.total,
            "totalPages": self.total_pages,
            "hasNextPage": self.has_next_page,
            "hasPrevPage": self.has_prev_page,
        }
