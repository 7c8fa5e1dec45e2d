"""Pagination — slices template data into pages and builds page URLs."""

from sitecontext.pagination.models import DEFAULT_PAGE_URL_SEGMENT, PaginationState
from sitecontext.pagination.paginator import Paginator

__all__ = [
    "DEFAULT_PAGE_URL_SEGMENT",
    "PaginationState",
    "Paginator",
]
