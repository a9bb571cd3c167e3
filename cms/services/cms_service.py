"""
CMS workflows that span the repositories and the external adapters.

Homepage assembly, image upload-and-attach, deletes that clean up hosted
media, analytics and the admin communications.
"""
import logging
import uuid
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from cms.db import models, schemas
from cms.db.repositories import content_blocks, team_members
from cms.utils.categories import ContentType
from .media_upload_service import MediaUploadService, get_media_upload_service
from .transactional_email_service import TransactionalEmailService, get_transactional_email_service

logger = logging.getLogger(__name__)

HERO_SECTION_KEY = "hero_section"
ABOUT_SECTION_KEY = "about_section"
HOMEPAGE_GALLERY_LIMIT = 10


class CmsService:
    """Request-scoped facade over one database session and the shared adapters."""

    def __init__(
        self,
        db: Session,
        media: Optional[MediaUploadService] = None,
        email: Optional[TransactionalEmailService] = None,
    ):
        self.db = db
        self._media = media
        self._email = email

    @property
    def media(self) -> MediaUploadService:
        if self._media is None:
            self._media = get_media_upload_service()
        return self._media

    @property
    def email(self) -> TransactionalEmailService:
        if self._email is None:
            self._email = get_transactional_email_service()
        return self._email

    # Homepage

    def _active_block(self, content_key: str) -> Optional[models.ContentBlock]:
        block = content_blocks.find_content_block_by_key(self.db, content_key)
        return block if block is not None and block.is_active else None

    def get_homepage_data(self) -> schemas.HomepageData:
        gallery = content_blocks.get_active_content_blocks(self.db, ContentType.gallery.value)
        return schemas.HomepageData.model_validate({
            "hero_section": self._active_block(HERO_SECTION_KEY),
            "elder": team_members.get_elder(self.db),
            "featured_team_members": team_members.get_featured_team_members(self.db),
            "about_section": self._active_block(ABOUT_SECTION_KEY),
            "gallery": gallery[:HOMEPAGE_GALLERY_LIMIT],
        }, from_attributes=True)

    # Media

    def _cleanup_media(self, public_ids: List[str]):
        if not public_ids:
            return
        if not self.media.config.is_configured():
            logger.warning(f"Skipping media cleanup for {len(public_ids)} asset(s): media service not configured")
            return
        for public_id in public_ids:
            self.media.delete_file(public_id, "image")

    def upload_homepage_image(self, payload: bytes, content_key: str, image_type: str) -> schemas.StoredResource:
        """Upload an image for a content block and point the block at it."""
        block = content_blocks.get_content_block_by_key(self.db, content_key)
        previous_public_id = block.image_public_id

        result = self.media.upload_homepage_image(payload, image_type, content_key)
        content_blocks.update_content_block(self.db, block.id, {
            "image_url": result.url,
            "image_public_id": result.public_id,
        })
        if previous_public_id and previous_public_id != result.public_id:
            self._cleanup_media([previous_public_id])

        logger.info(f"Homepage image uploaded for {content_key}: {result.public_id}")
        return result

    def upload_team_photo(self, payload: bytes, member_id: uuid.UUID) -> schemas.StoredResource:
        """Upload a profile photo, replacing any previous one."""
        member = team_members.get_team_member(self.db, member_id)
        previous_public_id = member.profile_image_public_id

        result = self.media.upload_team_photo(payload, member_id)
        team_members.update_team_member(self.db, member_id, {
            "profile_image_url": result.url,
            "profile_image_public_id": result.public_id,
        })
        if previous_public_id and previous_public_id != result.public_id:
            self._cleanup_media([previous_public_id])

        logger.info(f"Team member photo uploaded: {result.public_id}")
        return result

    def delete_content_block(self, block_id: uuid.UUID) -> bool:
        block = content_blocks.get_content_block(self.db, block_id)
        self._cleanup_media(block.media_public_ids)
        content_blocks.delete_content_block(self.db, block_id)
        return True

    def delete_team_member(self, member_id: uuid.UUID) -> bool:
        member = team_members.get_team_member(self.db, member_id)
        if member.profile_image_public_id:
            self._cleanup_media([member.profile_image_public_id])
        team_members.delete_team_member(self.db, member_id)
        return True

    # Analytics

    def get_analytics(self) -> schemas.CmsAnalytics:
        db = self.db
        return schemas.CmsAnalytics(
            total_content=db.query(func.count(models.ContentBlock.id)).scalar(),
            active_content=db.query(func.count(models.ContentBlock.id))
            .filter(models.ContentBlock.is_active.is_(True)).scalar(),
            total_team_members=db.query(func.count(models.TeamMember.id)).scalar(),
            featured_members=db.query(func.count(models.TeamMember.id))
            .filter(models.TeamMember.is_featured.is_(True)).scalar(),
            content_by_type=content_blocks.count_by_type(db),
            members_by_category=team_members.count_by_category(db),
        )

    # Communications

    async def send_email(self, message) -> schemas.DeliveryReceipt:
        return await self.email.send(message)

    async def send_newsletter(self, request: schemas.NewsletterRequest) -> schemas.DeliveryReceipt:
        return await self.email.send_newsletter(
            recipients=request.recipients,
            title=request.title,
            content=request.content,
            featured_image=request.featured_image,
        )

    async def send_event_notification(self, request: schemas.EventNotificationRequest) -> schemas.DeliveryReceipt:
        return await self.email.send_event_notification(
            recipients=request.recipients,
            event_name=request.event_name,
            event_date=request.event_date,
            event_location=request.event_location,
            description=request.description,
            registration_link=request.registration_link,
        )
