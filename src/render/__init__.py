"""Render layer — the per-build context templates query, and the page loop."""

from sitecontext.render.context import PageParams, RenderContext
from sitecontext.render.driver import RenderedPage, render_template_pages
from sitecontext.render.jinja import bind_environment, create_environment

__all__ = [
    "PageParams",
    "RenderContext",
    "RenderedPage",
    "bind_environment",
    "create_environment",
    "render_template_pages",
]
