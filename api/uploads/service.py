"""
Upload "service layer".

Stores a single uploaded file on local disk and describes it:
- storage name is `<epoch-ms>-<original filename>`
- no extension, size or content-type checks
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import asdict, dataclass
from pathlib import Path, PurePosixPath, PureWindowsPath

from fastapi import HTTPException, status
from starlette.datastructures import UploadFile

DEFAULT_UPLOAD_DIR = "uploads"
CHUNK_SIZE = 1024 * 1024  # 1 MiB

logger = logging.getLogger(__name__)


class UploadError(RuntimeError):
    pass


@dataclass(frozen=True)
class StoredFile:
    fieldname: str
    originalname: str
    mimetype: str | None
    destination: str
    filename: str
    path: str
    size: int

    def to_dict(self) -> dict:
        return asdict(self)


def upload_dir() -> Path:
    return Path(os.environ.get("UPLOAD_DIR", DEFAULT_UPLOAD_DIR).strip() or DEFAULT_UPLOAD_DIR)


def now_epoch_ms() -> int:
    return int(time.time() * 1000)


def original_basename(filename: str) -> str:
    """
    Strip any client-supplied directory part, whichever separator it uses.
    """
    name = PureWindowsPath(PurePosixPath(filename).name).name
    name = name.strip()
    if not name or name in {".", ".."}:
        raise UploadError("Uploaded file has no usable filename.")
    return name


def storage_name(originalname: str, *, arrived_ms: int) -> str:
    return f"{arrived_ms}-{originalname}"


async def _write_stream(file: UploadFile, target: Path) -> int:
    size = 0
    # "x" mode: a same-millisecond name collision fails here, before the file is ours.
    out = target.open("xb")
    try:
        with out:
            while True:
                chunk = await file.read(CHUNK_SIZE)
                if not chunk:
                    break
                out.write(chunk)
                size += len(chunk)
    except BaseException:
        target.unlink(missing_ok=True)
        raise
    return size


async def store_upload(fieldname: str, file: UploadFile | str | None) -> StoredFile:
    """
    Persist the upload under a generated name and return its metadata.

    A plain form value under the file field counts as no file. A partially
    written file is removed if the read or write fails.
    """
    if not isinstance(file, UploadFile) or not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please upload a file",
        )

    try:
        originalname = original_basename(file.filename)
    except UploadError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    destination = upload_dir()
    destination.mkdir(parents=True, exist_ok=True)

    filename = storage_name(originalname, arrived_ms=now_epoch_ms())
    target = destination / filename
    size = await _write_stream(file, target)

    stored = StoredFile(
        fieldname=fieldname,
        originalname=originalname,
        mimetype=file.content_type,
        destination=str(destination),
        filename=filename,
        path=str(target),
        size=size,
    )
    logger.info("upload_stored field=%s filename=%s size=%s", fieldname, filename, size)
    return stored
