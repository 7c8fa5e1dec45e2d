"""Content queries used by templates during a render pass.

Every lookup degrades to ``None`` or an empty result for missing,
malformed, or unpublished content; templates check the result rather
than catching exceptions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from sitecontext.content.models import ContentItem, ContentStoreData, TypeInfo
from sitecontext.content.visibility import PUBLISH_GRACE, is_visible

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

CombinedResult = list[ContentItem] | ContentItem


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


def parse_relation(relation: Any) -> tuple[str, str] | None:
    """Split a ``"type key"`` relation string into its two parts.

    A list or tuple stands for its first relation. Only the first two
    space-separated tokens are used, so ``"a b c"`` resolves to
    ``("a", "b")``.
    """
    if isinstance(relation, (list, tuple)):
        if not relation:
            return None
        relation = relation[0]
    if not isinstance(relation, str):
        return None
    parts = relation.split(" ")[:2]
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


class QueryEngine:
    """Resolves items, relations, and combined collections from a content store.

    The engine never mutates the store: every item it returns is a
    ``ContentItem`` copy. Combined queries are cached per argument list
    until ``clear_cache()`` is called.
    """

    def __init__(
        self,
        store: ContentStoreData | None = None,
        type_info: Mapping[str, TypeInfo] | None = None,
        clock: Clock = utc_now,
        grace: timedelta = PUBLISH_GRACE,
    ) -> None:
        self.store: ContentStoreData = store or {}
        self.type_info: Mapping[str, TypeInfo] = type_info or {}
        self.clock = clock
        self.grace = grace
        self._cache: dict[str, CombinedResult] = {}

    # ── Cache ────────────────────────────────────────────────────

    def clear_cache(self) -> None:
        self._cache = {}

    @property
    def cache_keys(self) -> list[str]:
        return list(self._cache)

    # ── Single items ─────────────────────────────────────────────

    def _visible(self, item: Mapping[str, Any], info: TypeInfo) -> bool:
        return is_visible(item, info, now=self.clock(), grace=self.grace)

    def get_item(self, type_or_relation: Any, key: Any = None) -> ContentItem | None:
        """Return a published item by type and key, or by relation string.

        Args:
            type_or_relation: A type slug, a ``"type key"`` relation
                string, or a list whose first element is a relation string.
            key: Item key within the type. When omitted the first
                argument is parsed as a relation.

        Returns:
            A copy of the item with ``_type`` attached, or None if the
            item is missing or not yet published.
        """
        if not type_or_relation:
            return None

        if key is None or key == "":
            parsed = parse_relation(type_or_relation)
            if parsed is None:
                return None
            type_slug, key = parsed
        else:
            type_slug = type_or_relation
            key = str(key)

        if not isinstance(type_slug, str):
            return None

        info = self.type_info.get(type_slug)
        if info is None:
            return None

        collection = self.store.get(type_slug)
        if not isinstance(collection, Mapping):
            return None

        raw = collection.get(key)
        if not isinstance(raw, Mapping):
            return None

        item = ContentItem(raw)
        if not self._visible(item, info):
            return None

        item["_type"] = type_slug
        return item

    def get_items(self, relations: Iterable[Any] | None) -> list[ContentItem]:
        """Resolve a list of relation strings, dropping unresolved ones."""
        if not relations:
            return []
        items = []
        for relation in relations:
            item = self.get_item(relation)
            if item is not None:
                items.append(item)
        return items

    # ── Collections ──────────────────────────────────────────────

    def get_combined(self, *type_slugs: str) -> CombinedResult:
        """Return all visible items of the given types, in argument order.

        A one-off type replaces everything accumulated so far with its
        own data, unfiltered. Results are cached under the exact
        argument order until the store is replaced.
        """
        if not type_slugs:
            return []

        cache_key = ",".join(type_slugs)
        if cache_key in self._cache:
            logger.debug("Combined query cache hit: %s", cache_key)
            return self._cache[cache_key]

        result: CombinedResult = []
        saw_one_off = False
        saw_collection = False
        for type_slug in type_slugs:
            raw = self.store.get(type_slug) or {}
            info = self.type_info.get(type_slug)

            if info is not None and info.one_off:
                saw_one_off = True
                result = ContentItem(raw) if isinstance(raw, Mapping) else ContentItem()
                continue

            saw_collection = True
            if not isinstance(result, list):
                result = []
            result.extend(self._collection_items(type_slug, raw, info or TypeInfo()))

        if saw_one_off and saw_collection:
            logger.warning(
                "Combined query %r mixes one-off and collection types; "
                "results are replaced, not concatenated",
                cache_key,
            )

        logger.debug("Combined query cache miss: %s", cache_key)
        self._cache[cache_key] = result
        return result

    def _collection_items(
        self, type_slug: str, raw: Any, info: TypeInfo
    ) -> list[ContentItem]:
        if not isinstance(raw, Mapping):
            return []
        items = []
        for key, value in raw.items():
            if str(key).startswith("_") or not isinstance(value, Mapping):
                continue
            item = ContentItem(value)
            if not self._visible(item, info):
                continue
            item["_id"] = key
            item["_type"] = type_slug
            items.append(item)
        return items

    def get_types(self) -> list[dict[str, str]]:
        """Return ``{slug, name}`` for every non-one-off type."""
        return [
            {"slug": slug, "name": info.name}
            for slug, info in self.type_info.items()
            if not info.one_off
        ]
