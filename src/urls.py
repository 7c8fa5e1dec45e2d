"""Canonical URLs for content items."""

from __future__ import annotations

import logging
import re
import unicodedata
from collections.abc import Mapping
from typing import Any

from sitecontext.content.models import ContentItem

logger = logging.getLogger(__name__)

_STRIP_RE = re.compile(r"[^\w\s-]")
_DASH_RE = re.compile(r"[\s-]+")

# Rendered in place of a slug for items with neither ``slug`` nor ``name``.
MISSING_SLUG = "null"


def slugify(text: str) -> str:
    """Lower-case, URL-safe slug that keeps non-ASCII letters."""
    normalized = unicodedata.normalize("NFKC", text)
    cleaned = _STRIP_RE.sub("", normalized)
    return _DASH_RE.sub("-", cleaned.strip()).lower()


def url_for(item: Mapping[str, Any]) -> str:
    """Return the standard scaffolding URL for an item.

    ``/<type>/<slug>/`` when the item carries ``_type``, else ``/<slug>/``.
    """
    if not isinstance(item, ContentItem):
        item = ContentItem(item)
    slug = item.slug or None
    if slug is None and item.name:
        slug = slugify(str(item.name)) or None
    if slug is None:
        logger.warning("Item has no slug or name, url will not resolve: %r", dict(item))
        slug = MISSING_SLUG

    prefix = item.type_slug or ""
    if prefix:
        return f"/{prefix}/{slug}/"
    return f"/{slug}/"
