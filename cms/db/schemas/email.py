from datetime import datetime
from typing import Optional, List, Union
from pydantic import BaseModel, EmailStr, Field, field_validator
from .common import check_url


class EmailTag(BaseModel):
    name: str
    value: str


class EmailMessage(BaseModel):
    to: Union[EmailStr, List[EmailStr]]
    subject: str = Field(min_length=1)
    html: Optional[str] = None
    text: Optional[str] = None
    from_email: Optional[EmailStr] = None
    reply_to: Optional[EmailStr] = None
    tags: Optional[List[EmailTag]] = None

    @field_validator("to")
    @classmethod
    def _require_recipient(cls, v):
        if not v:
            raise ValueError("At least one recipient is required")
        return v

    @property
    def recipients(self) -> List[str]:
        return [self.to] if isinstance(self.to, str) else list(self.to)


class DeliveryReceipt(BaseModel):
    id: str
    provider: str
    recipients: int
    success: bool = True


class _BulkRequest(BaseModel):
    recipients: List[EmailStr] = Field(min_length=1)


class NewsletterRequest(_BulkRequest):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    featured_image: Optional[str] = None

    @field_validator("featured_image")
    @classmethod
    def _validate_image(cls, v):
        return check_url(v)


class EventNotificationRequest(_BulkRequest):
    event_name: str = Field(min_length=1)
    event_date: datetime
    event_location: str = Field(min_length=1)
    description: str = Field(min_length=1)
    registration_link: Optional[str] = None

    @field_validator("registration_link")
    @classmethod
    def _validate_link(cls, v):
        return check_url(v)
