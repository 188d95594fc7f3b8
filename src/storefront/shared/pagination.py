"""Page envelope shared by catalogue browsing, review listing and order history."""

import math
from dataclasses import dataclass, field
from typing import Any

from storefront import config


@dataclass
class Page:
    items: list[Any] = field(default_factory=list)
    page: int = 1
    limit: int = 12
    total: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def pagination(self) -> dict:
        return {
            "current_page": self.page,
            "total_pages": self.total_pages,
            "total": self.total,
            "limit": self.limit,
            "has_next_page": self.has_next,
            "has_prev_page": self.has_prev,
        }


def normalize_paging(page, limit, default_limit: int | None = None) -> tuple[int, int]:
    """Clamp page to >= 1 and limit to [1, max_page_size]."""
    default_limit = default_limit or config.default_page_size()
    try:
        page = int(page) if page else 1
    except (TypeError, ValueError):
        page = 1
    try:
        limit = int(limit) if limit else default_limit
    except (TypeError, ValueError):
        limit = default_limit

    return max(page, 1), min(max(limit, 1), config.max_page_size())
