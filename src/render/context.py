"""Render context — the function table templates call while rendering.

One RenderContext serves a whole build. The build sets the content
store, type table, and settings once; each page render then runs inside
``page()``, which resets pagination, records the page URL, and refuses
to overlap with another page render on the same context. Callers that
render in parallel give each worker its own ``fork()``.
"""

from __future__ import annotations

import logging
import random as _random
import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from datetime import timedelta
from typing import Any

from pydantic import BaseModel, field_validator
from sitecontext import CMS_VERSION
from sitecontext.config import SiteContextConfig
from sitecontext.content.models import (
    ContentItem,
    Settings,
    SiteSnapshot,
    coerce_settings,
    coerce_type_info,
)
from sitecontext.content.query import Clock, CombinedResult, QueryEngine, utc_now
from sitecontext.content.store import load_snapshot
from sitecontext.errors import ConcurrentRenderError
from sitecontext.pagination import Paginator
from sitecontext.urls import url_for

logger = logging.getLogger(__name__)


class PageParams(BaseModel):
    """Per-page values injected before each render."""

    current_url: str = "/"

    @field_validator("current_url")
    @classmethod
    def _absolute_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"current_url must start with '/': {value!r}")
        return value


class RenderContext:
    """Owns the data, cache, and pagination state behind template functions."""

    def __init__(
        self,
        config: SiteContextConfig | None = None,
        clock: Clock = utc_now,
        rng: _random.Random | None = None,
    ) -> None:
        self.config = config or SiteContextConfig()
        self.engine = QueryEngine(
            clock=clock,
            grace=timedelta(seconds=self.config.visibility.grace_seconds),
        )
        self.paginator = Paginator(self.config.pagination.page_url_segment)
        self.settings = Settings()
        self.params = PageParams()
        self._rng = rng or _random.Random()
        self._render_lock = threading.Lock()

    # ── Build-level setters ──────────────────────────────────────

    def set_data(self, data: Mapping[str, Any] | None) -> None:
        """Replace the content store and drop every cached query."""
        logger.debug("Content store replaced (%d types), query cache cleared", len(data or {}))
        self.engine.store = data or {}
        self.engine.clear_cache()

    def set_type_info(self, type_info: Mapping[str, Any] | None) -> None:
        self.engine.type_info = coerce_type_info(type_info)

    def set_settings(self, settings: Settings | Mapping[str, Any] | None) -> None:
        self.settings = coerce_settings(settings)

    def load_snapshot(self, snapshot: SiteSnapshot) -> None:
        self.set_data(snapshot.data)
        self.set_type_info(snapshot.type_info)
        self.set_settings(snapshot.settings)

    @classmethod
    def from_config(cls, config: SiteContextConfig, clock: Clock = utc_now) -> RenderContext:
        """Build a context populated from the snapshot at ``config.snapshot_path``."""
        context = cls(config, clock=clock)
        context.load_snapshot(load_snapshot(config.snapshot_path))
        return context

    def fork(self) -> RenderContext:
        """Return a context sharing this one's data but not its cache or pages."""
        other = RenderContext(self.config, clock=self.engine.clock)
        other.engine.store = self.engine.store
        other.engine.type_info = self.engine.type_info
        other.settings = self.settings
        return other

    # ── Page-level state ─────────────────────────────────────────

    def init(self) -> None:
        """Reset pagination before rendering a new template."""
        self.paginator.reset()

    def set_params(self, params: PageParams | Mapping[str, Any]) -> None:
        if not isinstance(params, PageParams):
            params = PageParams.model_validate(dict(params))
        self.params = params

    def increase_page(self) -> None:
        self.paginator.increase_page()

    def should_paginate(self) -> bool:
        return self.paginator.should_paginate()

    @contextmanager
    def page(self, url: str) -> Iterator[dict[str, Any]]:
        """Render one template starting at ``url``.

        Raises:
            ConcurrentRenderError: Another page render holds this context.
        """
        if not self._render_lock.acquire(blocking=False):
            raise ConcurrentRenderError(
                f"Cannot render {url}: context is busy; use fork() for parallel renders"
            )
        try:
            self.init()
            self.set_params(PageParams(current_url=url))
            yield self.get_functions()
        finally:
            self._render_lock.release()

    # ── Template functions ───────────────────────────────────────

    def get(self, *type_slugs: str) -> CombinedResult:
        return self.engine.get_combined(*type_slugs)

    def get_item(self, type_or_relation: Any, key: Any = None) -> ContentItem | None:
        return self.engine.get_item(type_or_relation, key)

    def get_items(self, relations: Any) -> list[ContentItem]:
        return self.engine.get_items(relations)

    def get_types(self) -> list[dict[str, str]]:
        return self.engine.get_types()

    def paginate(self, data: Any, per_page: int | str, page_name: str | None = None) -> list[Any]:
        return self.paginator.paginate(
            data, per_page, page_name, current_url=self.params.current_url
        )

    def get_cur_page(self) -> int:
        return self.paginator.get_cur_page()

    def get_max_page(self) -> int:
        return self.paginator.get_max_page()

    def get_page_url(self, page_num: int | str) -> str:
        return self.paginator.get_page_url(page_num, current_url=self.params.current_url)

    def url(self, item: Mapping[str, Any]) -> str:
        return url_for(item)

    def get_current_url(self) -> str:
        return self.params.current_url

    def get_setting(self, key: str) -> Any:
        if self.settings.general is None:
            return None
        return self.settings.general.get(key)

    def random(self, array: Any) -> Any:
        """Pick a random element; None for missing, non-list, or empty input."""
        if not array or not isinstance(array, (list, tuple)):
            return None
        return self._rng.choice(array)

    def get_functions(self) -> dict[str, Callable[..., Any] | str]:
        """Return the function table bound into every template."""
        return {
            "get": self.get,
            "getItem": self.get_item,
            "getItems": self.get_items,
            "getTypes": self.get_types,
            "paginate": self.paginate,
            "getCurPage": self.get_cur_page,
            "getMaxPage": self.get_max_page,
            "getPageUrl": self.get_page_url,
            "url": self.url,
            "getCurrentUrl": self.get_current_url,
            "getSetting": self.get_setting,
            "random": self.random,
            "cmsVersion": CMS_VERSION,
        }
