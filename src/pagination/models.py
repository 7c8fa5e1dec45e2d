"""Pagination state for one page render."""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_PAGE_URL_SEGMENT = "page-"


class PaginationState(BaseModel):
    """Where the current template is in its paginated sequence.

    ``active`` flips on the first ``paginate()`` call of a render;
    ``max_page`` stays -1 until then.
    """

    active: bool = False
    current_page: int = Field(default=1, ge=1)
    max_page: int = -1
    page_url_segment: str = DEFAULT_PAGE_URL_SEGMENT
    base_url: str | None = None
