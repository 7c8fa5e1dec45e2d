"""Publication visibility rules for content items."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from email.utils import parsedate_to_datetime
from typing import Any

from sitecontext.content.models import ContentItem, TypeInfo

logger = logging.getLogger(__name__)

PUBLISH_GRACE = timedelta(minutes=1)


def parse_publish_date(value: str) -> datetime | None:
    """Parse a publish date into an aware datetime.

    Accepts ISO 8601 and RFC 2822 strings. Naive values are read as UTC.
    Returns None when neither format matches.
    """
    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError):
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def is_visible(
    item: Mapping[str, Any],
    type_info: TypeInfo,
    now: datetime | None = None,
    grace: timedelta = PUBLISH_GRACE,
) -> bool:
    """Return True if ``item`` may be rendered publicly at ``now``.

    One-off types are always visible. Everything else needs a
    ``publish_date`` no later than ``now + grace``.
    """
    if type_info.one_off:
        return True

    if not isinstance(item, ContentItem):
        item = ContentItem(item)
    publish_date = item.publish_date
    if not publish_date:
        return False

    published = parse_publish_date(str(publish_date))
    if published is None:
        # An unparseable date never compares as "in the future".
        logger.warning("Unparseable publish_date %r, treating as published", publish_date)
        return True

    if now is None:
        now = datetime.now(tz=UTC)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return published <= now + grace
