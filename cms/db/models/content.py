import uuid
from sqlalchemy import Column, String, Text, DateTime, Integer, Boolean, Index, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID, JSONB
from .base import Base, now_utc
from cms.utils.categories import CONTENT_TYPES, check_constraint_sql


class ContentBlock(Base):
    __tablename__ = 'content_blocks'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    content_key = Column(String(100), nullable=False, unique=True)  # e.g. 'hero_section'
    content_type = Column(String(20), nullable=False)
    title = Column(String(255), nullable=False)
    subtitle = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    content = Column(JSONB, nullable=False, default=dict)
    # Media host references
    image_url = Column(String(1024), nullable=True)
    image_public_id = Column(String(255), nullable=True)
    gallery_urls = Column(JSONB, nullable=True)
    gallery_public_ids = Column(JSONB, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)
    metadata_col = Column('metadata', JSONB, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    @property
    def media_public_ids(self):
        """Every media host id referenced by this block."""
        ids = [self.image_public_id] if self.image_public_id else []
        ids.extend(self.gallery_public_ids or [])
        return ids

    __table_args__ = (
        Index('idx_content_blocks_content_type', 'content_type'),
        Index('idx_content_blocks_active_sort', 'is_active', 'sort_order'),
        CheckConstraint(check_constraint_sql('content_type', CONTENT_TYPES), name='ck_content_blocks_content_type'),
    )
