"""
Domain-split SQLAlchemy models.

Exposes ``Base``, ``now_utc`` and every ORM class so callers can use
``from cms.db import models`` and ``models.ContentBlock``.
"""

from .base import Base, now_utc  # re-export

from .content import ContentBlock
from .team import TeamMember
from .schools import School
from .enrollment import SchoolEnrollment

__all__ = [
    "Base",
    "now_utc",
    "ContentBlock",
    "TeamMember",
    "School",
    "SchoolEnrollment",
]
