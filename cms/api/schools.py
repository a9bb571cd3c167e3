"""
School and enrollment API endpoints.

Enrollment records are keyed by (school, academic year); the upsert route
takes the year as a path segment so values like ``2024/2025`` work unescaped.
"""
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from cms.db import schemas
from cms.db.database import get_db
from cms.db.repositories import enrollments as enrollment_repo
from cms.db.repositories import schools as school_repo

router = APIRouter(tags=["schools"])


@router.post("/schools", response_model=schemas.School, status_code=status.HTTP_201_CREATED)
def create_school_endpoint(school: schemas.SchoolCreate, db: Session = Depends(get_db)):
    return school_repo.create_school(db, school)


@router.get("/schools", response_model=schemas.PaginatedSchools)
def list_schools_endpoint(
    lga: Optional[str] = None,
    is_active: Optional[bool] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    db: Session = Depends(get_db),
):
    return school_repo.get_schools(db, {"lga": lga, "is_active": is_active}, page=page, limit=limit)


@router.get("/schools/{school_id}", response_model=schemas.School)
def get_school_endpoint(school_id: uuid.UUID, db: Session = Depends(get_db)):
    return school_repo.get_school(db, school_id)


@router.get("/schools/{school_id}/enrollments", response_model=List[schemas.SchoolEnrollment])
def list_school_enrollments_endpoint(school_id: uuid.UUID, db: Session = Depends(get_db)):
    return enrollment_repo.list_for_school(db, school_id)


@router.put("/schools/{school_id}/enrollments/{academic_year:path}", response_model=schemas.SchoolEnrollment)
def upsert_enrollment_endpoint(
    school_id: uuid.UUID,
    academic_year: str,
    counters: schemas.EnrollmentCountsPatch,
    db: Session = Depends(get_db),
):
    return enrollment_repo.upsert_enrollment(db, school_id, academic_year, counters)


@router.post("/enrollments", response_model=schemas.SchoolEnrollment, status_code=status.HTTP_201_CREATED)
def create_enrollment_endpoint(enrollment: schemas.SchoolEnrollmentCreate, db: Session = Depends(get_db)):
    return enrollment_repo.create_enrollment(db, enrollment)


@router.get("/enrollments", response_model=schemas.PaginatedSchoolEnrollments)
def list_enrollments_endpoint(
    school_id: Optional[uuid.UUID] = None,
    academic_year: Optional[str] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    db: Session = Depends(get_db),
):
    filters = {"school_id": school_id, "academic_year": academic_year}
    return enrollment_repo.get_enrollments(db, filters, page=page, limit=limit)


@router.get("/enrollments/{enrollment_id}", response_model=schemas.SchoolEnrollment)
def get_enrollment_endpoint(enrollment_id: uuid.UUID, db: Session = Depends(get_db)):
    return enrollment_repo.get_enrollment(db, enrollment_id)


@router.put("/enrollments/{enrollment_id}", response_model=schemas.SchoolEnrollment)
def update_enrollment_endpoint(
    enrollment_id: uuid.UUID,
    enrollment: schemas.SchoolEnrollmentUpdate,
    db: Session = Depends(get_db),
):
    return enrollment_repo.update_enrollment(db, enrollment_id, enrollment)


@router.delete("/enrollments/{enrollment_id}")
def delete_enrollment_endpoint(enrollment_id: uuid.UUID, db: Session = Depends(get_db)):
    return {"success": enrollment_repo.delete_enrollment(db, enrollment_id)}
