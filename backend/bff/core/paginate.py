"""Pagination — pure slicing of an in-memory result list."""

import math
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def paginate(items: Sequence[T], page: int = 1, page_size: int = 10) -> tuple[list[T], dict]:
    """Return (page slice, pagination metadata). page is 1-based."""
    total = len(items)
    total_pages = math.ceil(total / page_size) if page_size else 0
    start = (page - 1) * page_size
    return list(items[start:start + page_size]), {
        "page": page,
        "pageSize": page_size,
        "total": total,
        "totalPages": total_pages,
    }
