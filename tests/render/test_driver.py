"""Tests for the page driver."""

import pytest
from sitecontext.errors import PaginationConflictError
from sitecontext.render.context import RenderContext
from sitecontext.render.driver import RenderedPage, render_template_pages


def _listing(per_page: int):
    def render(fns) -> str:
        items = fns["paginate"](list(range(1, 13)), per_page)
        return f"{fns['getCurrentUrl']()}|{fns['getCurPage']()}/{fns['getMaxPage']()}|{items}"

    return render


class TestRenderTemplatePages:
    def test_unpaginated_template_renders_once(self):
        pages = render_template_pages(RenderContext(), "/about/", lambda fns: "static")
        assert pages == [RenderedPage(url="/about/", page=1, output="static")]

    def test_paginated_template_renders_every_page(self):
        pages = render_template_pages(RenderContext(), "/blog/", _listing(5))

        assert [(p.url, p.page) for p in pages] == [
            ("/blog/", 1),
            ("/blog/page-2/", 2),
            ("/blog/page-3/", 3),
        ]
        assert pages[0].output == "/blog/|1/3|[1, 2, 3, 4, 5]"
        assert pages[2].output == "/blog/page-3/|3/3|[11, 12]"

    def test_custom_page_name(self):
        def render(fns) -> str:
            fns["paginate"]([1, 2, 3], 2, "p")
            return ""

        pages = render_template_pages(RenderContext(), "/news/", render)
        assert [p.url for p in pages] == ["/news/", "/news/p2/"]

    def test_context_reset_between_templates(self):
        context = RenderContext()
        render_template_pages(context, "/blog/", _listing(5))
        pages = render_template_pages(context, "/archive/", _listing(12))
        assert [p.url for p in pages] == ["/archive/"]

    def test_double_pagination_aborts_template(self):
        def render(fns) -> str:
            fns["paginate"]([1, 2, 3], 1)
            fns["paginate"]([4, 5, 6], 1)
            return ""

        context = RenderContext()
        with pytest.raises(PaginationConflictError):
            render_template_pages(context, "/blog/", render)
        assert render_template_pages(context, "/ok/", lambda fns: "ok")[0].output == "ok"
