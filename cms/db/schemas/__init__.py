"""
Domain-split Pydantic schemas.

Request/response models per CMS area, re-exported here so callers can use
``from cms.db import schemas`` and ``schemas.TeamMemberCreate``.
"""

from .common import SortOrderUpdate, PatchModel
from .content import (
    ContentBlockBase,
    ContentBlockCreate,
    ContentBlockUpdate,
    ContentBlock,
    PaginatedContentBlocks,
)
from .team import (
    TeamMemberBase,
    TeamMemberCreate,
    TeamMemberUpdate,
    TeamMember,
    PaginatedTeamMembers,
)
from .schools import SchoolBase, SchoolCreate, School, PaginatedSchools
from .enrollment import (
    EnrollmentCounts,
    EnrollmentCountsPatch,
    SchoolEnrollmentCreate,
    SchoolEnrollmentUpdate,
    SchoolEnrollment,
    PaginatedSchoolEnrollments,
)
from .media import UploadOptions, StoredResource
from .email import (
    EmailTag,
    EmailMessage,
    DeliveryReceipt,
    NewsletterRequest,
    EventNotificationRequest,
)
from .cms import HomepageData, CmsAnalytics

__all__ = [
    "SortOrderUpdate", "PatchModel",
    "ContentBlockBase", "ContentBlockCreate", "ContentBlockUpdate", "ContentBlock", "PaginatedContentBlocks",
    "TeamMemberBase", "TeamMemberCreate", "TeamMemberUpdate", "TeamMember", "PaginatedTeamMembers",
    "SchoolBase", "SchoolCreate", "School", "PaginatedSchools",
    "EnrollmentCounts", "EnrollmentCountsPatch", "SchoolEnrollmentCreate", "SchoolEnrollmentUpdate",
    "SchoolEnrollment", "PaginatedSchoolEnrollments",
    "UploadOptions", "StoredResource",
    "EmailTag", "EmailMessage", "DeliveryReceipt", "NewsletterRequest", "EventNotificationRequest",
    "HomepageData", "CmsAnalytics",
]
