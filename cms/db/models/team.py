import uuid
from sqlalchemy import Column, String, Text, DateTime, Date, Integer, Boolean, Index, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID, JSONB
from .base import Base, now_utc
from cms.utils.categories import TEAM_CATEGORIES, TEAM_ROLES, check_constraint_sql


class TeamMember(Base):
    __tablename__ = 'team_members'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    position = Column(String(255), nullable=False)
    department = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    linkedin_url = Column(String(1024), nullable=True)
    twitter_url = Column(String(1024), nullable=True)
    profile_image_url = Column(String(1024), nullable=True)
    profile_image_public_id = Column(String(255), nullable=True)
    category = Column(String(20), nullable=False, default='staff')
    role = Column(String(30), nullable=False, default='member')
    is_active = Column(Boolean, nullable=False, default=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    sort_order = Column(Integer, nullable=False, default=0)
    joined_date = Column(Date, nullable=True)
    achievements = Column(JSONB, nullable=True)
    qualifications = Column(JSONB, nullable=True)
    years_of_experience = Column(Integer, nullable=True)
    specialization = Column(String(255), nullable=True)
    metadata_col = Column('metadata', JSONB, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    __table_args__ = (
        Index('idx_team_members_category', 'category'),
        Index('idx_team_members_role', 'role'),
        Index('idx_team_members_active_sort', 'is_active', 'sort_order'),
        Index('idx_team_members_is_featured', 'is_featured'),
        CheckConstraint(check_constraint_sql('category', TEAM_CATEGORIES), name='ck_team_members_category'),
        CheckConstraint(check_constraint_sql('role', TEAM_ROLES), name='ck_team_members_role'),
    )
