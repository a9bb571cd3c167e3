"""
API dependency helpers.

Resolves the shared adapters and the request-scoped CMS service so tests can
swap them through ``app.dependency_overrides``.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from cms.db.database import get_db
from cms.services.cms_service import CmsService
from cms.services.media_upload_service import MediaUploadService, get_media_upload_service
from cms.services.transactional_email_service import (
    TransactionalEmailService,
    get_transactional_email_service,
)


def get_media_service() -> MediaUploadService:
    return get_media_upload_service()


def get_email_service() -> TransactionalEmailService:
    return get_transactional_email_service()


def get_cms_service(
    db: Session = Depends(get_db),
    media: MediaUploadService = Depends(get_media_service),
    email: TransactionalEmailService = Depends(get_email_service),
) -> CmsService:
    return CmsService(db, media=media, email=email)
