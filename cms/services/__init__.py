"""Business logic services package with public service helpers."""

from .media_upload_service import (
    MediaUploadConfig,
    MediaUploadService,
    get_media_upload_service,
    reset_media_upload_service_for_tests,
)
from .transactional_email_service import (
    TransactionalEmailConfig,
    TransactionalEmailService,
    get_transactional_email_service,
    reset_transactional_email_service_for_tests,
)
from .cms_service import CmsService

__all__ = [
    "MediaUploadConfig",
    "MediaUploadService",
    "get_media_upload_service",
    "reset_media_upload_service_for_tests",
    "TransactionalEmailConfig",
    "TransactionalEmailService",
    "get_transactional_email_service",
    "reset_transactional_email_service_for_tests",
    "CmsService",
]
