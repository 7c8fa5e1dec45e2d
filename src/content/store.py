"""JSON snapshot of the content a build renders from.

The build pipeline dumps its content store, type table, and settings
into one document: ``{"data": ..., "typeInfo": ..., "settings": ...}``.
Loading is forgiving: a missing or corrupt snapshot yields an empty one
so the build can still render static pages.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError
from sitecontext.content.models import SiteSnapshot

logger = logging.getLogger(__name__)

SNAPSHOT_FILENAME = "data.json"


def load_snapshot(path: str | Path) -> SiteSnapshot:
    """Load a site snapshot from ``path``.

    A directory is resolved to ``SNAPSHOT_FILENAME`` inside it.
    """
    snapshot_path = Path(path)
    if snapshot_path.is_dir():
        snapshot_path = snapshot_path / SNAPSHOT_FILENAME

    if not snapshot_path.exists():
        logger.warning("No content snapshot at %s, rendering without data", snapshot_path)
        return SiteSnapshot()

    try:
        raw = json.loads(snapshot_path.read_text(encoding="utf-8"))
        return SiteSnapshot.model_validate(raw)
    except (json.JSONDecodeError, ValidationError, OSError) as exc:
        logger.warning("Corrupt content snapshot at %s, starting fresh: %s", snapshot_path, exc)
        return SiteSnapshot()


def save_snapshot(snapshot: SiteSnapshot, path: str | Path) -> Path:
    """Write ``snapshot`` to ``path`` (or ``SNAPSHOT_FILENAME`` inside a directory)."""
    snapshot_path = Path(path)
    if snapshot_path.is_dir():
        snapshot_path = snapshot_path / SNAPSHOT_FILENAME
    snapshot_path.parent.mkdir(parents=True, exist_ok=True)
    snapshot_path.write_text(
        snapshot.model_dump_json(by_alias=True, indent=2),
        encoding="utf-8",
    )
    return snapshot_path
