"""
ProfileDesk Backend — Image Upload Service
===========================================

What:  Validates an uploaded image and buffers it in memory.
How:   The declared MIME type must start with "image/"; the body is read
       with a cap of max_size + 1 bytes so an oversized upload is detected
       without buffering all of it.
Who:   Called by ProfileService.create_profile before anything is persisted.

Check order:
    0. One file part, named "image" → ValidationError (400)
    1. MIME type  → UnsupportedMediaTypeError (415)
    2. Size       → PayloadTooLargeError (413)
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import UploadFile
from starlette.datastructures import FormData
from starlette.datastructures import UploadFile as StarletteUploadFile

from profiledesk.exceptions import (
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
    ValidationError,
)

logger = logging.getLogger(__name__)

IMAGE_MIME_PREFIX = "image/"
IMAGE_FIELD = "image"


@dataclass(frozen=True)
class ImagePayload:
    data: bytes
    content_type: str
    filename: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.data)


class ImageService:
    """Stateless upload checks; the size ceiling is passed per call."""

    def single_file_part(self, form: FormData, field: str = IMAGE_FIELD) -> Optional[StarletteUploadFile]:
        """
        Return the one file part of a form, or None when it has none.

        At most one file part is allowed, and only under `field`.

        A file input left empty still arrives as a part with no filename;
        those are not counted.
        """
        parts = [
            (name, value) for name, value in form.multi_items()
            if isinstance(value, StarletteUploadFile) and not is_missing_upload(value)
        ]

        unexpected = sorted({name for name, _ in parts if name != field})
        if unexpected:
            raise ValidationError(
                f"Unexpected file field: {unexpected[0]}",
                field=unexpected[0],
                context={"unexpected": unexpected},
            )
        if len(parts) > 1:
            raise ValidationError(
                "Only one image file is allowed",
                field=field,
                context={"parts": len(parts)},
            )
        return parts[0][1] if parts else None

    def validate_content_type(self, content_type: Optional[str]) -> str:
        """
        Accept any declared image/* type; the file extension is ignored.

        Returns:
            The declared content type, lower-cased.
        """
        declared = (content_type or "").strip().lower()
        if not declared.startswith(IMAGE_MIME_PREFIX):
            raise UnsupportedMediaTypeError(content_type=content_type)
        return declared

    def validate_size(self, size: int, max_size: int) -> None:
        if size > max_size:
            raise PayloadTooLargeError(max_size=max_size, context={"actual_size": size})

    async def read_image(self, upload: UploadFile, max_size: int) -> ImagePayload:
        content_type = self.validate_content_type(upload.content_type)

        # Starlette records the spooled size; reject early when it is known
        if upload.size is not None:
            self.validate_size(upload.size, max_size)

        data = await upload.read(max_size + 1)
        self.validate_size(len(data), max_size)

        logger.info(
            "Buffered upload: filename=%s, type=%s, size=%d bytes",
            upload.filename or "unknown",
            content_type,
            len(data),
        )
        return ImagePayload(data=data, content_type=content_type, filename=upload.filename)


def is_missing_upload(upload: Optional[UploadFile]) -> bool:
    """A file field sent with no file selected arrives with an empty filename."""
    return upload is None or (not upload.filename and not upload.size)


image_service = ImageService()
