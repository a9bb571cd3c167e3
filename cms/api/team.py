"""
Team member API endpoints.

Public listings (featured, leadership, elder, active roster) and the admin
CRUD, reorder and photo upload routes.
"""
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from cms.api.deps import get_cms_service
from cms.api.uploads import read_image_upload
from cms.db import schemas
from cms.db.database import get_db
from cms.db.repositories import team_members as team_repo
from cms.services.cms_service import CmsService
from cms.utils.categories import TeamCategory, TeamRole

router = APIRouter(prefix="/cms", tags=["team"])


@router.get("/team/featured", response_model=List[schemas.TeamMember])
def get_featured_team_endpoint(db: Session = Depends(get_db)):
    return team_repo.get_featured_team_members(db)


@router.get("/team/leadership", response_model=List[schemas.TeamMember])
def get_leadership_endpoint(db: Session = Depends(get_db)):
    return team_repo.get_leadership(db)


@router.get("/team/elder", response_model=Optional[schemas.TeamMember])
def get_elder_endpoint(db: Session = Depends(get_db)):
    return team_repo.get_elder(db)


@router.get("/team/public", response_model=List[schemas.TeamMember])
def get_public_team_endpoint(category: Optional[TeamCategory] = None, db: Session = Depends(get_db)):
    return team_repo.get_active_team_members(db, category.value if category else None)


@router.post("/admin/team", response_model=schemas.TeamMember, status_code=status.HTTP_201_CREATED)
def create_team_member_endpoint(member: schemas.TeamMemberCreate, db: Session = Depends(get_db)):
    return team_repo.create_team_member(db, member)


@router.get("/admin/team", response_model=schemas.PaginatedTeamMembers)
def list_team_members_endpoint(
    category: Optional[TeamCategory] = None,
    role: Optional[TeamRole] = None,
    is_active: Optional[bool] = None,
    is_featured: Optional[bool] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    db: Session = Depends(get_db),
):
    filters = {"category": category, "role": role, "is_active": is_active, "is_featured": is_featured}
    return team_repo.get_team_members(db, filters, page=page, limit=limit)


@router.patch("/admin/team/reorder")
def reorder_team_endpoint(updates: List[schemas.SortOrderUpdate], db: Session = Depends(get_db)):
    updated = team_repo.bulk_update_sort_order(db, updates)
    return {"success": True, "updated": updated}


@router.get("/admin/team/{member_id}", response_model=schemas.TeamMember)
def get_team_member_endpoint(member_id: uuid.UUID, db: Session = Depends(get_db)):
    return team_repo.get_team_member(db, member_id)


@router.put("/admin/team/{member_id}", response_model=schemas.TeamMember)
def update_team_member_endpoint(
    member_id: uuid.UUID,
    member: schemas.TeamMemberUpdate,
    db: Session = Depends(get_db),
):
    return team_repo.update_team_member(db, member_id, member)


@router.delete("/admin/team/{member_id}")
def delete_team_member_endpoint(member_id: uuid.UUID, service: CmsService = Depends(get_cms_service)):
    return {"success": service.delete_team_member(member_id)}


@router.post("/admin/upload/team-photo/{member_id}", response_model=schemas.StoredResource)
def upload_team_photo_endpoint(
    member_id: uuid.UUID,
    file: UploadFile = File(...),
    service: CmsService = Depends(get_cms_service),
):
    payload = read_image_upload(file)
    return service.upload_team_photo(payload, member_id)
