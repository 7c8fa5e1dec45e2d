"""Expose a RenderContext's function table to Jinja2 templates."""

from __future__ import annotations

from typing import Any

from jinja2 import BaseLoader, Environment
from sitecontext.render.context import RenderContext


def bind_environment(env: Environment, context: RenderContext) -> Environment:
    """Register every template function of ``context`` as a Jinja2 global."""
    env.globals.update(context.get_functions())
    return env


def create_environment(
    context: RenderContext,
    loader: BaseLoader | None = None,
    **options: Any,
) -> Environment:
    """Build a Jinja2 environment with ``context`` bound into it."""
    options.setdefault("trim_blocks", True)
    options.setdefault("lstrip_blocks", True)
    return bind_environment(Environment(loader=loader, **options), context)
