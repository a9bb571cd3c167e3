"""
Homepage, health, analytics and admin communication endpoints.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from cms.api.deps import get_cms_service, get_email_service, get_media_service
from cms.db import schemas
from cms.db.database import get_db
from cms.services.cms_service import CmsService
from cms.services.media_upload_service import MediaUploadService
from cms.services.transactional_email_service import TransactionalEmailService

router = APIRouter(prefix="/cms", tags=["cms"])


@router.get("/homepage", response_model=schemas.HomepageData)
def get_homepage_endpoint(service: CmsService = Depends(get_cms_service)):
    return service.get_homepage_data()


@router.get("/health")
def health_endpoint(
    db: Session = Depends(get_db),
    media: MediaUploadService = Depends(get_media_service),
    email: TransactionalEmailService = Depends(get_email_service),
):
    db.execute(text("SELECT 1"))
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": {
            "database": True,
            "media": media.config.is_configured(),
            "email": email.status(),
        },
    }


@router.get("/admin/analytics", response_model=schemas.CmsAnalytics)
def get_analytics_endpoint(service: CmsService = Depends(get_cms_service)):
    return service.get_analytics()


@router.get("/media/{public_id:path}/responsive")
def get_responsive_urls_endpoint(public_id: str, media: MediaUploadService = Depends(get_media_service)):
    return media.responsive_urls(public_id)


@router.post("/admin/send-email", response_model=schemas.DeliveryReceipt)
async def send_email_endpoint(message: schemas.EmailMessage, service: CmsService = Depends(get_cms_service)):
    return await service.send_email(message)


@router.post("/admin/send-newsletter", response_model=schemas.DeliveryReceipt)
async def send_newsletter_endpoint(
    request: schemas.NewsletterRequest,
    service: CmsService = Depends(get_cms_service),
):
    return await service.send_newsletter(request)


@router.post("/admin/send-event-notification", response_model=schemas.DeliveryReceipt)
async def send_event_notification_endpoint(
    request: schemas.EventNotificationRequest,
    service: CmsService = Depends(get_cms_service),
):
    return await service.send_event_notification(request)
