"""
Enumerated values for content types and team member classification.

Centralized definitions so that schemas, models (CHECK constraints) and
query filters agree on the same closed sets.
"""

from enum import Enum
from typing import FrozenSet


class ContentType(str, Enum):
    """Kind of homepage content block."""
    text = "text"
    image = "image"
    gallery = "gallery"
    person = "person"
    section = "section"


class TeamCategory(str, Enum):
    """Top-level grouping of a team member."""
    executive = "executive"
    board = "board"
    leadership = "leadership"
    staff = "staff"
    advisory = "advisory"


class TeamRole(str, Enum):
    """Specific title held by a team member."""
    elder = "elder"
    president = "president"
    vice_president = "vice_president"
    secretary = "secretary"
    treasurer = "treasurer"
    director = "director"
    manager = "manager"
    coordinator = "coordinator"
    member = "member"


class HomepageImageType(str, Enum):
    """Slots on the homepage that accept an uploaded image."""
    hero = "hero"
    leadership = "leadership"
    gallery = "gallery"
    about = "about"


CONTENT_TYPES: FrozenSet[str] = frozenset(c.value for c in ContentType)
TEAM_CATEGORIES: FrozenSet[str] = frozenset(c.value for c in TeamCategory)
TEAM_ROLES: FrozenSet[str] = frozenset(r.value for r in TeamRole)

# Display order for the leadership listing
LEADERSHIP_CATEGORIES = (TeamCategory.executive.value, TeamCategory.board.value, TeamCategory.leadership.value)


def check_constraint_sql(column: str, values) -> str:
    """Build the body of a CHECK constraint restricting ``column`` to ``values``."""
    quoted = ",".join(f"'{v}'" for v in sorted(values))
    return f"{column} in ({quoted})"
