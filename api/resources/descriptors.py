"""
Resource type descriptors.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

from . import schemas


@dataclass(frozen=True)
class ResourceType:
    """
    Everything the generic CRUD layer needs to know about one collection.

    `table` and `fields` are interpolated into SQL as identifiers, so they
    must only ever come from the constants below.
    """

    name: str
    label: str
    table: str
    fields: tuple[str, ...]
    fields_model: type[BaseModel]
    response_model: type[BaseModel]

    @property
    def columns(self) -> tuple[str, ...]:
        return ("id",) + self.fields

    def not_found_message(self) -> str:
        return f"{self.label} not found"

    def deleted_message(self) -> str:
        return f"{self.label} deleted"


SONGS = ResourceType(
    name="songs",
    label="Song",
    table="songs",
    fields=("title", "artist", "category", "file"),
    fields_model=schemas.SongFields,
    response_model=schemas.SongResponse,
)

BANNERS = ResourceType(
    name="banners",
    label="Banner",
    table="banners",
    fields=("title", "image"),
    fields_model=schemas.BannerFields,
    response_model=schemas.BannerResponse,
)

ALL_RESOURCE_TYPES: tuple[ResourceType, ...] = (SONGS, BANNERS)
