"""Configuration loaded from .sitecontext.toml, env vars, and explicit overrides.

Loading order: defaults → TOML file → env vars → overrides.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from sitecontext.pagination.models import DEFAULT_PAGE_URL_SEGMENT

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".sitecontext.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "sitecontext" / "config.toml"


class VisibilityConfig(BaseModel):
    """[visibility] section."""

    grace_seconds: int = 60

    @field_validator("grace_seconds")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("grace_seconds must be >= 0")
        return value


class PaginationConfig(BaseModel):
    """[pagination] section."""

    page_url_segment: str = DEFAULT_PAGE_URL_SEGMENT


class ContentConfig(BaseModel):
    """[content] section."""

    snapshot: str = "data.json"


class SiteContextConfig(BaseModel):
    """Top-level configuration for a render context."""

    visibility: VisibilityConfig = Field(default_factory=VisibilityConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    content: ContentConfig = Field(default_factory=ContentConfig)

    @property
    def snapshot_path(self) -> Path:
        return Path(self.content.snapshot)


def load_config(path: str | Path | None = None) -> SiteContextConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .sitecontext.toml in CWD
    3. ~/.config/sitecontext/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged SiteContextConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    config = SiteContextConfig.model_validate(data) if data else SiteContextConfig()

    return _apply_env_vars(config)


def merge_overrides(config: SiteContextConfig, **overrides: object) -> SiteContextConfig:
    """Overlay explicitly-set values onto the config.

    Only overrides values that are not None.

    Args:
        config: Base config.
        **overrides: Keys are section and field flattened with an
            underscore (``grace_seconds``, ``page_url_segment``, ``snapshot``).

    Returns:
        Updated config with overrides applied.
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "grace_seconds": ("visibility", "grace_seconds"),
        "page_url_segment": ("pagination", "page_url_segment"),
        "snapshot": ("content", "snapshot"),
    }

    for key, value in overrides.items():
        if value is None:
            continue
        if key not in mapping:
            logger.warning("Ignoring unknown config override: %s", key)
            continue
        section, field = mapping[key]
        data[section][field] = value

    return SiteContextConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: SiteContextConfig) -> SiteContextConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "SITECONTEXT_PAGE_SEGMENT": ("pagination", "page_url_segment"),
        "SITECONTEXT_SNAPSHOT": ("content", "snapshot"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    # Non-string types
    grace_raw = os.environ.get("SITECONTEXT_GRACE_SECONDS")
    if grace_raw is not None:
        try:
            data["visibility"]["grace_seconds"] = int(grace_raw)
        except ValueError:
            logger.warning("Invalid SITECONTEXT_GRACE_SECONDS: %s", grace_raw)

    return SiteContextConfig.model_validate(data)
