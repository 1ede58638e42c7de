"""
Pydantic schemas for the resource endpoints.

Fields are free-text and optional: the API coerces types but does not
validate content. `file` and `image` are unchecked references to uploads.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SongFields(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    title: str | None = None
    artist: str | None = None
    category: str | None = None
    file: str | None = None


class SongResponse(SongFields):
    id: str


class BannerFields(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    title: str | None = None
    image: str | None = None


class BannerResponse(BannerFields):
    id: str


class DeletedResponse(BaseModel):
    message: str
