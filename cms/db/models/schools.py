import uuid
from sqlalchemy import Column, String, DateTime, Boolean, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class School(Base):
    __tablename__ = 'schools'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    school_name = Column(String(255), nullable=False)
    address = Column(String(500), nullable=False)
    lga = Column(String(100), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    enrollments = relationship("SchoolEnrollment", back_populates="school", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_schools_school_name', 'school_name'),
    )
