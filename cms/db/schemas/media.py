from typing import Optional, List, Union
from pydantic import BaseModel, Field

DEFAULT_IMAGE_FORMATS = ["jpg", "jpeg", "png", "gif", "webp"]
DEFAULT_MAX_BYTES = 10 * 1024 * 1024


class UploadOptions(BaseModel):
    folder: str = "napps"
    public_id: Optional[str] = None
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    crop: str = "limit"
    quality: Union[str, int] = "auto"
    resource_type: str = "image"
    allowed_formats: List[str] = Field(default_factory=lambda: list(DEFAULT_IMAGE_FORMATS))
    max_bytes: int = DEFAULT_MAX_BYTES


class StoredResource(BaseModel):
    url: str
    public_id: str
    format: Optional[str] = None
    resource_type: str
    bytes: int
    width: Optional[int] = None
    height: Optional[int] = None
    created_at: str
