"""
Product image storage on the local filesystem under settings.images_root.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from fastapi import UploadFile

from market.config import get_settings
from market.core.errors import EmptyFileError, FileSaveError

logger = logging.getLogger(__name__)

PRODUCT_PATH = "product"


@dataclass(frozen=True)
class StoredFile:
    upload_name: str
    path: str  # relative to images_root, e.g. "product/3f2c....png"


def image_src(path: Optional[str]) -> Optional[str]:
    if path is None:
        return None
    return f"{get_settings().images_url.rstrip('/')}/{path}"


def check_not_empty(files: Optional[Sequence[UploadFile]]) -> None:
    if not files:
        raise EmptyFileError("At least one image file is required")


def _store_name(upload_name: str) -> str:
    return f"{uuid.uuid4().hex}{Path(upload_name).suffix.lower()}"


async def store_file(upload: UploadFile, sub_path: str = PRODUCT_PATH) -> StoredFile:
    upload_name = upload.filename or "unnamed"
    relative = f"{sub_path}/{_store_name(upload_name)}"
    target = Path(get_settings().images_root) / relative
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(await upload.read())
    except OSError as e:
        logger.exception("image_store_failed", extra={"path": relative})
        raise FileSaveError("Failed to save the file. Please try again") from e
    return StoredFile(upload_name=upload_name, path=relative)


async def store_files(uploads: Sequence[UploadFile], sub_path: str = PRODUCT_PATH) -> list[StoredFile]:
    """All or nothing: files already written are removed when a later one fails."""
    stored: list[StoredFile] = []
    try:
        for upload in uploads:
            stored.append(await store_file(upload, sub_path))
    except FileSaveError:
        delete_files([f.path for f in stored])
        raise
    return stored


def delete_files(paths: Sequence[str]) -> None:
    root = Path(get_settings().images_root)
    for path in paths:
        try:
            (root / path).unlink(missing_ok=True)
        except OSError:
            logger.warning("image_delete_failed", extra={"path": path})
