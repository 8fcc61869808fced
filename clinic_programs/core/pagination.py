"""
Core pagination utilities for API endpoints.
"""
from fastapi import Query
import math

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

class PageParams:
    """
    Page parameters for pagination.

    Attributes:
        page: Page number (1-indexed)
        page_size: Number of items per page
        offset: Number of rows to skip
    """
    def __init__(
        self,
        page: int = Query(1, ge=1, description="Page number"),
        page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Items per page")
    ):
        self.page = page
        self.page_size = page_size
        self.offset = (page - 1) * page_size


def total_pages(total: int, page_size: int) -> int:
    """
    Number of pages needed to show ``total`` rows.

    Args:
        total: Total number of rows
        page_size: Rows per page

    Returns:
        int: Page count, 0 when there are no rows
    """
    return math.ceil(total / page_size) if total > 0 else 0
