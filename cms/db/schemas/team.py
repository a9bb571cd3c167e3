import uuid
from datetime import date, datetime
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from cms.utils.categories import TeamCategory, TeamRole
from .common import PatchModel, check_url


class TeamMemberBase(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    position: str = Field(min_length=1, max_length=255)
    department: Optional[str] = None
    bio: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None
    twitter_url: Optional[str] = None
    profile_image_url: Optional[str] = None
    profile_image_public_id: Optional[str] = None
    category: TeamCategory = TeamCategory.staff
    role: TeamRole = TeamRole.member
    is_active: bool = True
    is_featured: bool = False
    sort_order: int = 0
    joined_date: Optional[date] = None
    achievements: Optional[List[str]] = None
    qualifications: Optional[List[str]] = None
    years_of_experience: Optional[int] = Field(default=None, ge=0)
    specialization: Optional[str] = None
    metadata_col: Optional[Dict[str, Any]] = None
    model_config = ConfigDict(use_enum_values=True)

    @field_validator("linkedin_url", "twitter_url", "profile_image_url")
    @classmethod
    def _validate_urls(cls, v):
        return check_url(v)


class TeamMemberCreate(TeamMemberBase):
    pass


class TeamMemberUpdate(PatchModel):
    non_nullable = frozenset({
        "first_name", "last_name", "position", "category", "role",
        "is_active", "is_featured", "sort_order",
    })

    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    position: Optional[str] = Field(default=None, min_length=1, max_length=255)
    department: Optional[str] = None
    bio: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None
    twitter_url: Optional[str] = None
    profile_image_url: Optional[str] = None
    profile_image_public_id: Optional[str] = None
    category: Optional[TeamCategory] = None
    role: Optional[TeamRole] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    sort_order: Optional[int] = None
    joined_date: Optional[date] = None
    achievements: Optional[List[str]] = None
    qualifications: Optional[List[str]] = None
    years_of_experience: Optional[int] = Field(default=None, ge=0)
    specialization: Optional[str] = None
    metadata_col: Optional[Dict[str, Any]] = None
    model_config = ConfigDict(use_enum_values=True)

    @field_validator("linkedin_url", "twitter_url", "profile_image_url")
    @classmethod
    def _validate_urls(cls, v):
        return check_url(v)


class TeamMember(TeamMemberBase):
    id: uuid.UUID
    full_name: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)


class PaginatedTeamMembers(BaseModel):
    items: List[TeamMember]
    page: int
    limit: int
    total: int
    pages: int
    model_config = ConfigDict(from_attributes=True)
