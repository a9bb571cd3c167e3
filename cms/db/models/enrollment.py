import uuid
from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, Index, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc
from cms.utils.enrollment import DEFAULT_ACADEMIC_YEAR, total_enrollment


class SchoolEnrollment(Base):
    __tablename__ = 'school_enrollments'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    school_id = Column(UUID(as_uuid=True), ForeignKey('schools.id', ondelete='CASCADE'), nullable=False)
    academic_year = Column(String(20), nullable=False, default=DEFAULT_ACADEMIC_YEAR)

    # Nursery
    nursery1_male = Column(Integer, nullable=False, default=0)
    nursery1_female = Column(Integer, nullable=False, default=0)
    nursery2_male = Column(Integer, nullable=False, default=0)
    nursery2_female = Column(Integer, nullable=False, default=0)
    nursery3_male = Column(Integer, nullable=False, default=0)
    nursery3_female = Column(Integer, nullable=False, default=0)
    # Kindergarten
    kg1_male = Column(Integer, nullable=False, default=0)
    kg1_female = Column(Integer, nullable=False, default=0)
    kg2_male = Column(Integer, nullable=False, default=0)
    kg2_female = Column(Integer, nullable=False, default=0)
    # Primary
    primary1_male = Column(Integer, nullable=False, default=0)
    primary1_female = Column(Integer, nullable=False, default=0)
    primary2_male = Column(Integer, nullable=False, default=0)
    primary2_female = Column(Integer, nullable=False, default=0)
    primary3_male = Column(Integer, nullable=False, default=0)
    primary3_female = Column(Integer, nullable=False, default=0)
    primary4_male = Column(Integer, nullable=False, default=0)
    primary4_female = Column(Integer, nullable=False, default=0)
    primary5_male = Column(Integer, nullable=False, default=0)
    primary5_female = Column(Integer, nullable=False, default=0)
    primary6_male = Column(Integer, nullable=False, default=0)
    primary6_female = Column(Integer, nullable=False, default=0)
    # Junior secondary
    jss1_male = Column(Integer, nullable=False, default=0)
    jss1_female = Column(Integer, nullable=False, default=0)
    jss2_male = Column(Integer, nullable=False, default=0)
    jss2_female = Column(Integer, nullable=False, default=0)
    jss3_male = Column(Integer, nullable=False, default=0)
    jss3_female = Column(Integer, nullable=False, default=0)
    # Senior secondary
    ss1_male = Column(Integer, nullable=False, default=0)
    ss1_female = Column(Integer, nullable=False, default=0)
    ss2_male = Column(Integer, nullable=False, default=0)
    ss2_female = Column(Integer, nullable=False, default=0)
    ss3_male = Column(Integer, nullable=False, default=0)
    ss3_female = Column(Integer, nullable=False, default=0)

    pupils_presented_2023 = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    school = relationship("School", back_populates="enrollments")

    @property
    def total_enrollment(self) -> int:
        return total_enrollment(self)

    __table_args__ = (
        UniqueConstraint('school_id', 'academic_year', name='uq_school_enrollments_school_year'),
        Index('idx_school_enrollments_academic_year', 'academic_year'),
    )
