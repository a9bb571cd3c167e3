"""
School repository functions.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from cms.db import models, schemas, query_utils
from cms.errors import NotFoundError

logger = logging.getLogger(__name__)

FILTERABLE_FIELDS = ("lga", "is_active")


def create_school(db: Session, school) -> models.School:
    school = query_utils.coerce_payload(schemas.SchoolCreate, school)
    db_school = models.School(**school.model_dump())
    db.add(db_school)
    query_utils.commit_or_conflict(db, f"School '{school.school_name}' conflicts with an existing record")
    db.refresh(db_school)
    logger.info("Created school %s (%s)", db_school.school_name, db_school.id)
    return db_school


def get_school(db: Session, school_id: uuid.UUID) -> models.School:
    db_school = db.query(models.School).filter(models.School.id == school_id).first()
    if db_school is None:
        raise NotFoundError(f"School {school_id} not found")
    return db_school


def get_schools(
    db: Session,
    filters: Optional[Dict[str, Any]] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    q = db.query(models.School)
    q = query_utils.apply_equality_filters(q, models.School, filters, FILTERABLE_FIELDS)
    q = q.order_by(models.School.school_name.asc(), models.School.created_at.asc(), models.School.id.asc())
    return query_utils.paginate(q, page, limit)
