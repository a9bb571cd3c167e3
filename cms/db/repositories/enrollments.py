"""
School enrollment repository functions.

One record per (school, academic year). Counters default to zero; the total
is computed by ``cms.utils.enrollment.total_enrollment`` and never stored.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from cms.db import models, schemas, query_utils
from cms.db.repositories.schools import get_school
from cms.errors import NotFoundError

logger = logging.getLogger(__name__)

FILTERABLE_FIELDS = ("school_id", "academic_year")


def _conflict_message(school_id, academic_year) -> str:
    return f"Enrollment for school {school_id} and academic year {academic_year} already exists"


def _ordered(q):
    return q.order_by(
        models.SchoolEnrollment.academic_year.asc(),
        models.SchoolEnrollment.created_at.asc(),
        models.SchoolEnrollment.id.asc(),
    )


def create_enrollment(db: Session, enrollment) -> models.SchoolEnrollment:
    enrollment = query_utils.coerce_payload(schemas.SchoolEnrollmentCreate, enrollment)
    get_school(db, enrollment.school_id)
    db_enrollment = models.SchoolEnrollment(**enrollment.model_dump())
    db.add(db_enrollment)
    query_utils.commit_or_conflict(db, _conflict_message(enrollment.school_id, enrollment.academic_year))
    db.refresh(db_enrollment)
    logger.info(
        "Created enrollment %s for school %s (%s)",
        db_enrollment.id, db_enrollment.school_id, db_enrollment.academic_year,
    )
    return db_enrollment


def get_enrollment(db: Session, enrollment_id: uuid.UUID) -> models.SchoolEnrollment:
    db_enrollment = (
        db.query(models.SchoolEnrollment)
        .filter(models.SchoolEnrollment.id == enrollment_id)
        .first()
    )
    if db_enrollment is None:
        raise NotFoundError(f"Enrollment {enrollment_id} not found")
    return db_enrollment


def find_enrollment(db: Session, school_id: uuid.UUID, academic_year: str) -> Optional[models.SchoolEnrollment]:
    return (
        db.query(models.SchoolEnrollment)
        .filter(
            models.SchoolEnrollment.school_id == school_id,
            models.SchoolEnrollment.academic_year == academic_year,
        )
        .first()
    )


def get_enrollments(
    db: Session,
    filters: Optional[Dict[str, Any]] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    q = db.query(models.SchoolEnrollment)
    q = query_utils.apply_equality_filters(q, models.SchoolEnrollment, filters, FILTERABLE_FIELDS)
    return query_utils.paginate(_ordered(q), page, limit)


def list_for_school(db: Session, school_id: uuid.UUID) -> List[models.SchoolEnrollment]:
    get_school(db, school_id)
    q = db.query(models.SchoolEnrollment).filter(models.SchoolEnrollment.school_id == school_id)
    return _ordered(q).all()


def update_enrollment(db: Session, enrollment_id: uuid.UUID, enrollment) -> models.SchoolEnrollment:
    enrollment = query_utils.coerce_payload(schemas.SchoolEnrollmentUpdate, enrollment)
    db_enrollment = get_enrollment(db, enrollment_id)
    if "school_id" in enrollment.model_fields_set:
        get_school(db, enrollment.school_id)
    query_utils.apply_patch(db_enrollment, enrollment)
    query_utils.commit_or_conflict(db, _conflict_message(db_enrollment.school_id, db_enrollment.academic_year))
    db.refresh(db_enrollment)
    logger.info("Updated enrollment %s", db_enrollment.id)
    return db_enrollment


def upsert_enrollment(db: Session, school_id: uuid.UUID, academic_year: str, counters) -> models.SchoolEnrollment:
    """Create the record for (school, year) or update its counters in place."""
    counters = query_utils.coerce_payload(schemas.EnrollmentCountsPatch, counters)
    existing = find_enrollment(db, school_id, academic_year)
    if existing is None:
        payload = counters.model_dump(exclude_unset=True)
        payload.update(school_id=school_id, academic_year=academic_year)
        return create_enrollment(db, payload)
    query_utils.apply_patch(existing, counters)
    query_utils.commit_or_conflict(db, _conflict_message(school_id, academic_year))
    db.refresh(existing)
    logger.info("Updated enrollment %s for school %s (%s)", existing.id, school_id, academic_year)
    return existing


def delete_enrollment(db: Session, enrollment_id: uuid.UUID) -> bool:
    db_enrollment = get_enrollment(db, enrollment_id)
    db.delete(db_enrollment)
    db.commit()
    logger.info("Deleted enrollment %s", enrollment_id)
    return True
