"""
Image attachments for travel posts.

Images are kept in memory as base64 data URLs, with a small JPEG preview
generated through Pillow.
"""
from __future__ import annotations

import base64
import logging
from io import BytesIO
from typing import Optional

from PIL import Image, ImageOps, UnidentifiedImageError

from domain.errors import AttachmentRejected
from domain.models import ImageAttachment
from settings import settings

logger = logging.getLogger(__name__)

TOO_LARGE_MESSAGE = "Image size should be less than 5MB"
NOT_AN_IMAGE_MESSAGE = "Attachment is not a readable image"
PREVIEW_MAX_SIZE = 512

_FORMAT_CONTENT_TYPES = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "GIF": "image/gif",
    "WEBP": "image/webp",
    "BMP": "image/bmp",
}


def _data_url(content_type: str, data: bytes) -> str:
    return f"data:{content_type};base64,{base64.b64encode(data).decode('ascii')}"


def _generate_preview(image_bytes: bytes, max_size: int = PREVIEW_MAX_SIZE) -> bytes:
    """JPEG preview of at most `max_size` pixels on the long edge."""
    with Image.open(BytesIO(image_bytes)) as img:
        img = ImageOps.exif_transpose(img)
        img = img.convert("RGB")
        img.thumbnail((max_size, max_size))
        output = BytesIO()
        img.save(output, format="JPEG", quality=85, optimize=True)
        return output.getvalue()


def load_attachment(
    data: bytes,
    filename: str = "image",
    content_type: Optional[str] = None,
    max_bytes: Optional[int] = None,
) -> ImageAttachment:
    """Validate raw upload bytes and turn them into an ImageAttachment."""
    limit = max_bytes if max_bytes is not None else settings.MAX_IMAGE_BYTES
    if len(data) > limit:
        raise AttachmentRejected(TOO_LARGE_MESSAGE)

    try:
        with Image.open(BytesIO(data)) as img:
            img.verify()
        # verify() leaves the image unusable, so reopen for the metadata.
        with Image.open(BytesIO(data)) as img:
            fmt = img.format or ""
            width, height = img.size
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as exc:
        logger.warning("Rejected attachment %s: %s", filename, exc)
        raise AttachmentRejected(NOT_AN_IMAGE_MESSAGE) from exc

    resolved_type = _FORMAT_CONTENT_TYPES.get(fmt) or content_type or "application/octet-stream"

    preview_url = None
    try:
        preview_url = _data_url("image/jpeg", _generate_preview(data))
    except OSError as exc:
        logger.warning("Failed to generate preview for %s: %s", filename, exc)

    return ImageAttachment(
        filename=filename,
        content_type=resolved_type,
        size_bytes=len(data),
        width=width,
        height=height,
        data_url=_data_url(resolved_type, data),
        preview_data_url=preview_url,
    )
