import uuid
from datetime import datetime
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, ConfigDict, Field, field_validator
from cms.utils.categories import ContentType
from .common import PatchModel, check_url


class ContentBlockBase(BaseModel):
    content_key: str = Field(min_length=1, max_length=100)
    content_type: ContentType
    title: str = Field(min_length=1, max_length=255)
    subtitle: Optional[str] = None
    description: Optional[str] = None
    content: Dict[str, Any]
    image_url: Optional[str] = None
    image_public_id: Optional[str] = None
    gallery_urls: Optional[List[str]] = None
    gallery_public_ids: Optional[List[str]] = None
    is_active: bool = True
    sort_order: int = 0
    metadata_col: Optional[Dict[str, Any]] = None
    model_config = ConfigDict(use_enum_values=True)

    @field_validator("image_url")
    @classmethod
    def _validate_image_url(cls, v):
        return check_url(v)


class ContentBlockCreate(ContentBlockBase):
    pass


class ContentBlockUpdate(PatchModel):
    non_nullable = frozenset({"content_key", "content_type", "title", "content", "is_active", "sort_order"})

    content_key: Optional[str] = Field(default=None, min_length=1, max_length=100)
    content_type: Optional[ContentType] = None
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    subtitle: Optional[str] = None
    description: Optional[str] = None
    content: Optional[Dict[str, Any]] = None
    image_url: Optional[str] = None
    image_public_id: Optional[str] = None
    gallery_urls: Optional[List[str]] = None
    gallery_public_ids: Optional[List[str]] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None
    metadata_col: Optional[Dict[str, Any]] = None
    model_config = ConfigDict(use_enum_values=True)

    @field_validator("image_url")
    @classmethod
    def _validate_image_url(cls, v):
        return check_url(v)


class ContentBlock(ContentBlockBase):
    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)


class PaginatedContentBlocks(BaseModel):
    items: List[ContentBlock]
    page: int
    limit: int
    total: int
    pages: int
    model_config = ConfigDict(from_attributes=True)
