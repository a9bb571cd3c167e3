"""
Media Upload Service

Wraps the Cloudinary SDK to store CMS images (homepage slots, team photos)
and build delivery URLs for them.

Size and emptiness checks run locally before the SDK is called; anything the
SDK raises is reported as ``cms.errors.UploadError`` carrying the SDK's
message. No retries.
"""

import io
import os
import logging
from typing import Optional, Dict, List

import cloudinary
import cloudinary.uploader
import cloudinary.utils
from cloudinary.exceptions import Error as CloudinaryError

from cms.db import schemas
from cms.db.schemas.media import DEFAULT_IMAGE_FORMATS
from cms.errors import UploadError, ValidationError
from cms.utils.categories import HomepageImageType

logger = logging.getLogger(__name__)

MB = 1024 * 1024
PHOTO_FORMATS = ["jpg", "jpeg", "png", "webp"]

# Folder suffix and target size per homepage slot
HOMEPAGE_IMAGE_SIZES: Dict[str, Dict[str, int]] = {
    HomepageImageType.hero.value: {"width": 1920, "height": 1080},
    HomepageImageType.leadership.value: {"width": 600, "height": 600},
    HomepageImageType.gallery.value: {"width": 800, "height": 600},
    HomepageImageType.about.value: {"width": 1200, "height": 800},
}

RESPONSIVE_SIZES: Dict[str, Dict[str, int]] = {
    "thumbnail": {"width": 200, "height": 200},
    "small": {"width": 400, "height": 300},
    "medium": {"width": 800, "height": 600},
    "large": {"width": 1200, "height": 900},
}


class MediaUploadConfig:
    """Configuration for the media host from environment variables."""

    def __init__(self):
        self.cloud_name = os.getenv('CLOUDINARY_CLOUD_NAME', '')
        self.api_key = os.getenv('CLOUDINARY_API_KEY', '')
        self.api_secret = os.getenv('CLOUDINARY_API_SECRET', '')
        self.root_folder = os.getenv('MEDIA_ROOT_FOLDER', 'napps')
        self.max_upload_mb = int(os.getenv('MEDIA_MAX_UPLOAD_MB', '10'))

    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def validate(self) -> List[str]:
        errors = []
        if not self.cloud_name:
            errors.append("CLOUDINARY_CLOUD_NAME is required")
        if not self.api_key:
            errors.append("CLOUDINARY_API_KEY is required")
        if not self.api_secret:
            errors.append("CLOUDINARY_API_SECRET is required")
        if self.max_upload_mb <= 0:
            errors.append("MEDIA_MAX_UPLOAD_MB must be a positive integer")
        return errors

    @property
    def max_bytes(self) -> int:
        return self.max_upload_mb * MB


class MediaUploadService:
    """Uploads, deletes and addresses images on Cloudinary."""

    def __init__(self, config: Optional[MediaUploadConfig] = None):
        self.config = config or MediaUploadConfig()
        self._setup_client()

    def _setup_client(self):
        if not self.config.is_configured():
            logger.warning("Media upload service not configured")
            return
        cloudinary.config(
            cloud_name=self.config.cloud_name,
            api_key=self.config.api_key,
            api_secret=self.config.api_secret,
            secure=True,
        )
        logger.info(f"Initialized Cloudinary media service for cloud '{self.config.cloud_name}'")

    def _folder(self, *parts: str) -> str:
        return "/".join((self.config.root_folder,) + parts)

    def _build_upload_params(self, options: schemas.UploadOptions) -> dict:
        params = {
            "folder": options.folder,
            "resource_type": options.resource_type,
            "allowed_formats": options.allowed_formats,
        }
        if options.width or options.height:
            resize = {"crop": options.crop, "quality": options.quality}
            if options.width:
                resize["width"] = options.width
            if options.height:
                resize["height"] = options.height
            params["transformation"] = [resize]
        if options.public_id:
            params["public_id"] = options.public_id
            params["overwrite"] = True
        return params

    def upload(self, payload: bytes, options: Optional[schemas.UploadOptions] = None) -> schemas.StoredResource:
        """
        Upload an image payload.

        Args:
            payload: Raw file bytes
            options: Folder, naming, resize and limit settings

        Returns:
            StoredResource describing the stored asset

        Raises:
            ValidationError: payload is empty or larger than ``options.max_bytes``
            UploadError: the service is unconfigured or the SDK call failed
        """
        options = options or schemas.UploadOptions(folder=self.config.root_folder, max_bytes=self.config.max_bytes)
        if not payload:
            raise ValidationError("Upload payload is empty")
        if len(payload) > options.max_bytes:
            raise ValidationError(
                f"File size exceeds {options.max_bytes / MB:g}MB limit",
                detail={"bytes": len(payload), "max_bytes": options.max_bytes},
            )
        if not self.config.is_configured():
            raise UploadError("Media upload service not configured")

        params = self._build_upload_params(options)
        try:
            result = cloudinary.uploader.upload(io.BytesIO(payload), **params)
        except (CloudinaryError, OSError) as e:
            logger.error(f"Image upload failed: {e}")
            raise UploadError(f"Image upload failed: {e}", detail=str(e)) from e

        logger.info(f"Image uploaded successfully: {result['public_id']}")
        return schemas.StoredResource(
            url=result["secure_url"],
            public_id=result["public_id"],
            format=result.get("format"),
            resource_type=result.get("resource_type", options.resource_type),
            bytes=result.get("bytes", len(payload)),
            width=result.get("width"),
            height=result.get("height"),
            created_at=str(result.get("created_at", "")),
        )

    def upload_team_photo(self, payload: bytes, member_id) -> schemas.StoredResource:
        return self.upload(payload, schemas.UploadOptions(
            folder=self._folder("team"),
            public_id=f"team_{member_id}",
            width=400,
            height=400,
            crop="fill",
            quality="auto:good",
            allowed_formats=PHOTO_FORMATS,
            max_bytes=8 * MB,
        ))

    def upload_homepage_image(self, payload: bytes, image_type: str, identifier: Optional[str] = None) -> schemas.StoredResource:
        image_type = getattr(image_type, "value", image_type)
        if image_type not in HOMEPAGE_IMAGE_SIZES:
            raise ValidationError(
                f"Unknown homepage image type: {image_type}",
                detail={"allowed": sorted(HOMEPAGE_IMAGE_SIZES)},
            )
        return self.upload(payload, schemas.UploadOptions(
            folder=self._folder("homepage", image_type),
            public_id=f"{image_type}_{identifier}" if identifier else None,
            crop="fill",
            quality="auto:good",
            allowed_formats=PHOTO_FORMATS,
            max_bytes=10 * MB,
            **HOMEPAGE_IMAGE_SIZES[image_type],
        ))

    def delete_file(self, public_id: str, resource_type: str = "image") -> bool:
        """Delete an asset; returns False when the host reports anything but ``ok``."""
        if not self.config.is_configured():
            raise UploadError("Media upload service not configured")
        try:
            result = cloudinary.uploader.destroy(public_id, resource_type=resource_type)
        except (CloudinaryError, OSError) as e:
            logger.error(f"File deletion error: {e}")
            raise UploadError(f"File deletion failed: {e}", detail=str(e)) from e

        if result.get("result") == "ok":
            logger.info(f"File deleted successfully: {public_id}")
            return True
        logger.warning(f"File deletion failed: {public_id} - {result.get('result')}")
        return False

    def responsive_urls(self, public_id: str) -> Dict[str, str]:
        """Delivery URLs for each standard display size."""
        if not self.config.is_configured():
            raise UploadError("Media upload service not configured")
        urls = {}
        for size, dimensions in RESPONSIVE_SIZES.items():
            url, _ = cloudinary.utils.cloudinary_url(
                public_id,
                crop="fill",
                quality="auto:good",
                format="webp",
                secure=True,
                **dimensions,
            )
            urls[size] = url
        return urls

    @staticmethod
    def is_valid_image_format(filename: Optional[str]) -> bool:
        if not filename or "." not in filename:
            return False
        return filename.rsplit(".", 1)[-1].lower() in DEFAULT_IMAGE_FORMATS


# Global media service instance
_media_service = None


def get_media_upload_service() -> MediaUploadService:
    """Get singleton media upload service instance."""
    global _media_service
    if _media_service is None:
        _media_service = MediaUploadService()
    return _media_service


def reset_media_upload_service_for_tests():
    global _media_service
    _media_service = None
