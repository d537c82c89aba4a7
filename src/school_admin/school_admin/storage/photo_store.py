from __future__ import annotations

import io
import logging
import uuid
from dataclasses import dataclass
from typing import Optional, Protocol

from PIL import Image, UnidentifiedImageError

from ..core.constants import PHOTO_BUCKET, PHOTO_CONTENT_TYPES, PHOTO_MAX_BYTES
from ..core.exceptions import ValidationError
from ..database.supabase_base import backend_call

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhotoUpload:
    filename: str
    content_type: str
    data: bytes


def validate_photo(upload: PhotoUpload) -> str:
    """Check type, size and that the bytes really decode as an image.

    Returns the file extension to store the photo under.
    """

    ext = PHOTO_CONTENT_TYPES.get((upload.content_type or "").lower())
    if not ext:
        raise ValidationError("Please select a valid image file (JPEG, JPG, or PNG)")
    if len(upload.data) > PHOTO_MAX_BYTES:
        raise ValidationError("File size must be less than 2MB")

    try:
        with Image.open(io.BytesIO(upload.data)) as img:
            img.verify()
            fmt = (img.format or "").upper()
    except (UnidentifiedImageError, OSError, SyntaxError):
        raise ValidationError("Please select a valid image file (JPEG, JPG, or PNG)")

    if fmt not in {"JPEG", "PNG"}:
        raise ValidationError("Please select a valid image file (JPEG, JPG, or PNG)")
    return ext


class PhotoStorage(Protocol):
    def save(self, upload: PhotoUpload, *, folder: str) -> str:
        raise NotImplementedError


class SupabasePhotoStore(PhotoStorage):
    """Uploads photos to a storage bucket and returns their public URL."""

    def __init__(self, conn_factory, *, bucket: Optional[str] = None):
        self._conn_factory = conn_factory
        self._bucket = bucket or PHOTO_BUCKET

    def save(self, upload: PhotoUpload, *, folder: str) -> str:
        ext = validate_photo(upload)
        path = f"{folder}/{uuid.uuid4()}.{ext}"

        bucket = self._conn_factory.connect().storage.from_(self._bucket)
        with backend_call(f"upload {path}"):
            bucket.upload(path, upload.data, {"content-type": upload.content_type})
            url = bucket.get_public_url(path)

        logger.info("photo stored bucket=%s path=%s", self._bucket, path)
        return url
