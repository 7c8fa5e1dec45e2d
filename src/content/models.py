"""Content domain models.

The content store itself belongs to the build pipeline: a mapping of
type slug to either a collection of items keyed by id, or (for one-off
types) the single instance. These models give the query layer typed
access to the handful of fields it inspects while leaving every
author-defined field available to templates.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ContentStoreData = Mapping[str, Any]


class ContentItem(dict[str, Any]):
    """A single content record as seen by templates.

    Behaves as a plain ``dict`` so templates can read arbitrary fields;
    the properties below cover the fields the query layer relies on.
    Instances handed out by the query engine are copies, so annotating
    them (``_type``, ``_id``) never touches the underlying store.
    """

    @property
    def publish_date(self) -> str | None:
        return self.get("publish_date")

    @property
    def slug(self) -> str | None:
        return self.get("slug")

    @property
    def name(self) -> str | None:
        return self.get("name")

    @property
    def type_slug(self) -> str | None:
        return self.get("_type")

    @property
    def item_id(self) -> str | None:
        return self.get("_id")


class TypeInfo(BaseModel):
    """Metadata for one content type."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = ""
    one_off: bool = Field(default=False, alias="oneOff")


class Settings(BaseModel):
    """Site settings; templates read the ``general`` section."""

    model_config = ConfigDict(extra="allow")

    general: dict[str, Any] | None = None


class SiteSnapshot(BaseModel):
    """Everything a build hands to the render context in one document."""

    model_config = ConfigDict(populate_by_name=True)

    data: dict[str, Any] = Field(default_factory=dict)
    type_info: dict[str, TypeInfo] = Field(default_factory=dict, alias="typeInfo")
    settings: Settings = Field(default_factory=Settings)


def coerce_type_info(type_info: Mapping[str, Any] | None) -> dict[str, TypeInfo]:
    """Validate a raw ``{slug: {name, oneOff}}`` table into TypeInfo models."""
    if not type_info:
        return {}
    return {
        slug: info if isinstance(info, TypeInfo) else TypeInfo.model_validate(info)
        for slug, info in type_info.items()
    }


def coerce_settings(settings: Settings | Mapping[str, Any] | None) -> Settings:
    """Validate a raw settings mapping into a Settings model."""
    if settings is None:
        return Settings()
    if isinstance(settings, Settings):
        return settings
    return Settings.model_validate(dict(settings))
