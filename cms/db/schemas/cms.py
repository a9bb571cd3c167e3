from typing import Optional, Dict, List
from pydantic import BaseModel
from .content import ContentBlock
from .team import TeamMember


class HomepageData(BaseModel):
    hero_section: Optional[ContentBlock] = None
    elder: Optional[TeamMember] = None
    featured_team_members: List[TeamMember] = []
    about_section: Optional[ContentBlock] = None
    gallery: List[ContentBlock] = []


class CmsAnalytics(BaseModel):
    total_content: int
    active_content: int
    total_team_members: int
    featured_members: int
    content_by_type: Dict[str, int]
    members_by_category: Dict[str, int]
