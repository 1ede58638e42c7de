"""
FastAPI router for upload endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile

from auth import dependencies as auth_dependencies

from . import service

router = APIRouter(dependencies=[Depends(auth_dependencies.get_current_user)])


@router.post("/uploadSong")
async def upload_song(song: UploadFile | str | None = File(default=None)) -> dict:
    """
    Store an audio file sent as multipart field `song`.
    """
    stored = await service.store_upload("song", song)
    return stored.to_dict()


@router.post("/uploadBanner")
async def upload_banner(image: UploadFile | str | None = File(default=None)) -> dict:
    """
    Store a banner image sent as multipart field `image`.
    """
    stored = await service.store_upload("image", image)
    return stored.to_dict()
