"""Offset pagination arithmetic."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Pagination:
    """A 1-based page window of ``limit`` rows."""

    page: int = 1
    limit: int = 20

    def __post_init__(self):
        if self.page < 1:
            raise ValueError("page must be a positive integer")
        if self.limit < 1:
            raise ValueError("limit must be a positive integer")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        """Number of pages needed for ``total`` rows (0 when there are none)."""
        return math.ceil(total / self.limit) if total > 0 else 0
