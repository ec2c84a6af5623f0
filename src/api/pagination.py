# This file handles pagination parsing and metadata for list endpoints.
# Every router uses the same 1-indexed page rules and offset/limit arithmetic.
# The metadata block carries the totals and neighbour flags that list clients navigate by.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PaginationSpec:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def normalize_pagination(
    *,
    page: int | None,
    limit: int | None,
    default_limit: int,
    max_limit: int,
) -> PaginationSpec:
    """Validate and normalize page/limit values."""

    resolved_page = 1 if page is None else page
    resolved_limit = default_limit if limit is None else limit
    if resolved_page < 1:
        raise ValueError("page must be >= 1")
    if resolved_limit < 1:
        raise ValueError("limit must be >= 1")
    if resolved_limit > max_limit:
        raise ValueError(f"limit must be <= {max_limit}")
    return PaginationSpec(page=resolved_page, limit=resolved_limit)


def compute_total_pages(*, total_count: int, limit: int) -> int:
    """Compute deterministic total page count."""

    if total_count <= 0:
        return 0
    return ((total_count - 1) // limit) + 1


def build_pagination_meta(
    *, pagination: PaginationSpec, total_count: int, total_key: str = "totalItems"
) -> dict[str, Any]:
    total_pages = compute_total_pages(total_count=total_count, limit=pagination.limit)
    return {
        "currentPage": pagination.page,
        "totalPages": total_pages,
        total_key: total_count,
        "itemsPerPage": pagination.limit,
        "hasNext": pagination.page < total_pages,
        "hasPrev": pagination.page > 1,
    }
