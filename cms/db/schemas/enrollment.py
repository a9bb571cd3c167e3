"""
Enrollment schemas.

The per-grade counters are generated from ``cms.utils.enrollment`` so the
schema, the ORM model and the aggregate always agree on the field set.
"""
import uuid
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, computed_field, create_model
from cms.utils import enrollment as counters
from cms.utils.enrollment import ALL_COUNTER_FIELDS, DEFAULT_ACADEMIC_YEAR
from .common import PatchModel

# Counters default to zero on create...
EnrollmentCounts = create_model(
    "EnrollmentCounts",
    **{name: (int, Field(default=0, ge=0)) for name in ALL_COUNTER_FIELDS},
)

# ...and are individually optional, but never null, on patch/upsert.
_EnrollmentCountsPatchFields = create_model(
    "EnrollmentCountsPatchFields",
    __base__=PatchModel,
    **{name: (Optional[int], Field(default=None, ge=0)) for name in ALL_COUNTER_FIELDS},
)


class EnrollmentCountsPatch(_EnrollmentCountsPatchFields):
    non_nullable = frozenset(ALL_COUNTER_FIELDS)


class SchoolEnrollmentCreate(EnrollmentCounts):
    school_id: uuid.UUID
    academic_year: str = Field(default=DEFAULT_ACADEMIC_YEAR, min_length=1, max_length=20)


class SchoolEnrollmentUpdate(EnrollmentCountsPatch):
    non_nullable = EnrollmentCountsPatch.non_nullable | {"school_id", "academic_year"}

    school_id: Optional[uuid.UUID] = None
    academic_year: Optional[str] = Field(default=None, min_length=1, max_length=20)


class SchoolEnrollment(EnrollmentCounts):
    id: uuid.UUID
    school_id: uuid.UUID
    academic_year: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def total_enrollment(self) -> int:
        return counters.total_enrollment(self)

    @computed_field
    @property
    def enrollment_by_level(self) -> dict:
        return counters.enrollment_by_level(self)


class PaginatedSchoolEnrollments(BaseModel):
    items: List[SchoolEnrollment]
    page: int
    limit: int
    total: int
    pages: int
    model_config = ConfigDict(from_attributes=True)
