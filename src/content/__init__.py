"""Content domain — item models, visibility rules, and template queries.

Templates never see the raw store: they go through QueryEngine, which
filters unpublished items and hands out annotated copies.
"""

from sitecontext.content.models import (
    ContentItem,
    Settings,
    SiteSnapshot,
    TypeInfo,
    coerce_settings,
    coerce_type_info,
)
from sitecontext.content.query import QueryEngine, parse_relation
from sitecontext.content.store import SNAPSHOT_FILENAME, load_snapshot, save_snapshot
from sitecontext.content.visibility import PUBLISH_GRACE, is_visible, parse_publish_date

__all__ = [
    "PUBLISH_GRACE",
    "SNAPSHOT_FILENAME",
    "ContentItem",
    "QueryEngine",
    "Settings",
    "SiteSnapshot",
    "TypeInfo",
    "coerce_settings",
    "coerce_type_info",
    "is_visible",
    "load_snapshot",
    "parse_publish_date",
    "parse_relation",
    "save_snapshot",
]
