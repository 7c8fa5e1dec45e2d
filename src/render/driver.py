"""Page driver — renders a template once per page of its pagination."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel
from sitecontext.render.context import PageParams, RenderContext

logger = logging.getLogger(__name__)

RenderFn = Callable[[Mapping[str, Any]], str]


class RenderedPage(BaseModel):
    """Output of one page of a template."""

    url: str
    page: int
    output: str


def render_template_pages(
    context: RenderContext,
    url: str,
    render: RenderFn,
) -> list[RenderedPage]:
    """Render a template at ``url`` and every extra page it paginates into.

    ``render`` receives the function table and returns the rendered text.
    It is called once for templates that never paginate, and once per
    page otherwise; page N is rendered with ``getCurrentUrl()`` pointing
    at ``getPageUrl(N)``.

    Raises:
        PaginationConflictError: The template paginated twice on page 1.
        ConcurrentRenderError: ``context`` is already rendering a page.
    """
    pages: list[RenderedPage] = []
    with context.page(url) as functions:
        pages.append(RenderedPage(url=url, page=1, output=render(functions)))

        context.increase_page()
        while context.should_paginate():
            page_num = context.get_cur_page()
            page_url = context.get_page_url(page_num)
            context.set_params(PageParams(current_url=page_url))
            pages.append(RenderedPage(url=page_url, page=page_num, output=render(functions)))
            context.increase_page()

    logger.debug("Rendered %s into %d page(s)", url, len(pages))
    return pages
