"""
Pagination Utilities

Page/limit pagination used by the history endpoints. The four numbers a
page reports (items, total, pages, current page) are all derived here so
they stay mutually consistent.
"""

import math
from dataclasses import dataclass

from fastapi import Query

from vidshare.config import settings


@dataclass(frozen=True)
class PageRequest:
    """A validated page request."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def total_pages(total_items: int, limit: int) -> int:
    """ceil(total_items / limit); an empty collection has zero pages."""
    if total_items <= 0:
        return 0
    return math.ceil(total_items / limit)


class PaginationParams:
    """
    FastAPI dependency for page/limit pagination parameters.

    Usage:
        @router.get("/items")
        async def list_items(pagination: PaginationParams = Depends()):
            ...
    """

    def __init__(
        self,
        page: int = Query(default=1, ge=1, description="1-based page number"),
        limit: int = Query(
            default=settings.history_page_default,
            ge=1,
            le=settings.history_page_max,
            description="Number of items per page",
        ),
    ):
        self.page = page
        self.limit = limit

    def to_request(self) -> PageRequest:
        return PageRequest(page=self.page, limit=self.limit)
