import uuid
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field


class SchoolBase(BaseModel):
    school_name: str = Field(min_length=1, max_length=255)
    address: str = Field(min_length=1, max_length=500)
    lga: Optional[str] = None
    is_active: bool = True


class SchoolCreate(SchoolBase):
    pass


class School(SchoolBase):
    id: uuid.UUID
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class PaginatedSchools(BaseModel):
    items: List[School]
    page: int
    limit: int
    total: int
    pages: int
    model_config = ConfigDict(from_attributes=True)
