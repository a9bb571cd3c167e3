"""
Content block API endpoints.

Public lookup by content key plus the admin CRUD, reorder and image upload
routes.
"""
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from cms.api.deps import get_cms_service
from cms.api.uploads import read_image_upload
from cms.db import schemas
from cms.db.database import get_db
from cms.db.repositories import content_blocks as content_repo
from cms.services.cms_service import CmsService
from cms.utils.categories import ContentType, HomepageImageType

router = APIRouter(prefix="/cms", tags=["content"])


@router.get("/content/{content_key}", response_model=schemas.ContentBlock)
def get_content_by_key_endpoint(content_key: str, db: Session = Depends(get_db)):
    return content_repo.get_content_block_by_key(db, content_key, active_only=True)


@router.post("/admin/content", response_model=schemas.ContentBlock, status_code=status.HTTP_201_CREATED)
def create_content_endpoint(block: schemas.ContentBlockCreate, db: Session = Depends(get_db)):
    return content_repo.create_content_block(db, block)


@router.get("/admin/content", response_model=schemas.PaginatedContentBlocks)
def list_content_endpoint(
    content_type: Optional[ContentType] = None,
    is_active: Optional[bool] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    db: Session = Depends(get_db),
):
    filters = {"content_type": content_type, "is_active": is_active}
    return content_repo.get_content_blocks(db, filters, page=page, limit=limit)


@router.patch("/admin/content/reorder")
def reorder_content_endpoint(updates: List[schemas.SortOrderUpdate], db: Session = Depends(get_db)):
    updated = content_repo.bulk_update_sort_order(db, updates)
    return {"success": True, "updated": updated}


@router.get("/admin/content/{block_id}", response_model=schemas.ContentBlock)
def get_content_endpoint(block_id: uuid.UUID, db: Session = Depends(get_db)):
    return content_repo.get_content_block(db, block_id)


@router.put("/admin/content/{block_id}", response_model=schemas.ContentBlock)
def update_content_endpoint(
    block_id: uuid.UUID,
    block: schemas.ContentBlockUpdate,
    db: Session = Depends(get_db),
):
    return content_repo.update_content_block(db, block_id, block)


@router.delete("/admin/content/{block_id}")
def delete_content_endpoint(block_id: uuid.UUID, service: CmsService = Depends(get_cms_service)):
    return {"success": service.delete_content_block(block_id)}


@router.post("/admin/upload/homepage-image/{content_key}/{image_type}", response_model=schemas.StoredResource)
def upload_homepage_image_endpoint(
    content_key: str,
    image_type: HomepageImageType,
    file: UploadFile = File(...),
    service: CmsService = Depends(get_cms_service),
):
    payload = read_image_upload(file)
    return service.upload_homepage_image(payload, content_key, image_type.value)
