"""Page slicing and page-URL bookkeeping for paginated templates."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from sitecontext.errors import InvalidPageSizeError, PaginationConflictError
from sitecontext.pagination.models import DEFAULT_PAGE_URL_SEGMENT, PaginationState

logger = logging.getLogger(__name__)


def _is_first_page(page_num: Any) -> bool:
    try:
        return float(page_num) == 1
    except (TypeError, ValueError):
        return False


def _as_list(data: Iterable[Any] | Mapping[str, Any] | None) -> list[Any]:
    if data is None:
        return []
    if isinstance(data, Mapping):
        return list(data.values())
    if isinstance(data, list):
        return data
    return list(data)


class Paginator:
    """Tracks one template's pagination across its page renders.

    The page driver calls ``reset()`` before the first page and
    ``increase_page()`` between pages; the template calls ``paginate()``.
    """

    def __init__(self, page_url_segment: str = DEFAULT_PAGE_URL_SEGMENT) -> None:
        self.default_segment = page_url_segment
        self.state = PaginationState(page_url_segment=page_url_segment)

    def reset(self) -> None:
        self.state = PaginationState(page_url_segment=self.default_segment)

    def paginate(
        self,
        data: Iterable[Any] | Mapping[str, Any] | None,
        per_page: int | str,
        page_name: str | None = None,
        current_url: str = "/",
    ) -> list[Any]:
        """Return the slice of ``data`` for the page being rendered.

        Raises:
            PaginationConflictError: The template already paginated while
                rendering its first page.
            InvalidPageSizeError: ``per_page`` is not a positive integer.
        """
        state = self.state
        if state.current_page == 1 and state.active:
            raise PaginationConflictError()
        if state.active:
            # Later pages re-run the same paginate() call; only page 1 is guarded.
            logger.debug("Repeated paginate() on page %d", state.current_page)

        try:
            size = int(per_page)
        except (TypeError, ValueError) as exc:
            raise InvalidPageSizeError(f"Invalid page size: {per_page!r}") from exc
        if size < 1:
            raise InvalidPageSizeError(f"Page size must be at least 1, got {size}")

        items = _as_list(data)
        offset = size * (state.current_page - 1)
        page_items = items[offset : offset + size]

        state.active = True
        if state.base_url is None:
            state.base_url = current_url
        if page_name:
            state.page_url_segment = page_name
        state.max_page = math.ceil(len(items) / size)

        logger.debug(
            "Paginated %d items: page %d of %d", len(items), state.current_page, state.max_page
        )
        return page_items

    def should_paginate(self) -> bool:
        return self.state.current_page <= self.state.max_page

    def increase_page(self) -> None:
        self.state.current_page += 1

    def get_cur_page(self) -> int:
        return self.state.current_page

    def get_max_page(self) -> int:
        return self.state.max_page

    def get_page_url(self, page_num: int | str, current_url: str = "/") -> str:
        """URL of page ``page_num``; page 1 is the base URL itself."""
        base_url = self.state.base_url if self.state.base_url is not None else current_url
        if _is_first_page(page_num):
            return base_url
        return f"{base_url}{self.state.page_url_segment}{page_num}/"
