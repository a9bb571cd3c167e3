"""Shared handling for multipart image uploads."""
import logging

from fastapi import UploadFile

from cms.errors import ValidationError
from cms.services.media_upload_service import MediaUploadService

logger = logging.getLogger(__name__)


def read_image_upload(file: UploadFile) -> bytes:
    """Reject non-image uploads and return the file's bytes."""
    content_type = (file.content_type or "").lower()
    if not content_type.startswith("image/") and not MediaUploadService.is_valid_image_format(file.filename):
        raise ValidationError(
            "Only image files are allowed",
            detail={"filename": file.filename, "content_type": file.content_type},
        )
    payload = file.file.read()
    logger.debug("Received upload %s (%d bytes)", file.filename, len(payload))
    return payload
