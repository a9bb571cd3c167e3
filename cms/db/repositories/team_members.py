"""
Team member repository functions.

CRUD for team members plus the public listings: featured members, the
leadership roster and the elder.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from cms.db import models, schemas, query_utils
from cms.errors import NotFoundError
from cms.utils.categories import LEADERSHIP_CATEGORIES, TeamRole

logger = logging.getLogger(__name__)

FILTERABLE_FIELDS = ("category", "role", "is_active", "is_featured")
DEFAULT_FEATURED_LIMIT = 6


def _ordered(q):
    return q.order_by(
        models.TeamMember.sort_order.asc(),
        models.TeamMember.created_at.asc(),
        models.TeamMember.id.asc(),
    )


def create_team_member(db: Session, member) -> models.TeamMember:
    member = query_utils.coerce_payload(schemas.TeamMemberCreate, member)
    db_member = models.TeamMember(**member.model_dump())
    db.add(db_member)
    query_utils.commit_or_conflict(db, "Team member conflicts with an existing record")
    db.refresh(db_member)
    logger.info("Created team member %s (%s)", db_member.full_name, db_member.id)
    return db_member


def get_team_member(db: Session, member_id: uuid.UUID) -> models.TeamMember:
    db_member = db.query(models.TeamMember).filter(models.TeamMember.id == member_id).first()
    if db_member is None:
        raise NotFoundError(f"Team member {member_id} not found")
    return db_member


def get_team_members(
    db: Session,
    filters: Optional[Dict[str, Any]] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    q = db.query(models.TeamMember)
    q = query_utils.apply_equality_filters(q, models.TeamMember, filters, FILTERABLE_FIELDS)
    return query_utils.paginate(_ordered(q), page, limit)


def get_featured_team_members(db: Session, limit: int = DEFAULT_FEATURED_LIMIT) -> List[models.TeamMember]:
    q = db.query(models.TeamMember).filter(
        models.TeamMember.is_active.is_(True),
        models.TeamMember.is_featured.is_(True),
    )
    return _ordered(q).limit(limit).all()


def get_leadership(db: Session) -> List[models.TeamMember]:
    """Active executive, board and leadership members, grouped in that order."""
    category_rank = case(
        {category: rank for rank, category in enumerate(LEADERSHIP_CATEGORIES)},
        value=models.TeamMember.category,
    )
    return (
        db.query(models.TeamMember)
        .filter(
            models.TeamMember.is_active.is_(True),
            models.TeamMember.category.in_(LEADERSHIP_CATEGORIES),
        )
        .order_by(
            category_rank,
            models.TeamMember.sort_order.asc(),
            models.TeamMember.last_name.asc(),
            models.TeamMember.id.asc(),
        )
        .all()
    )


def get_elder(db: Session) -> Optional[models.TeamMember]:
    q = db.query(models.TeamMember).filter(
        models.TeamMember.is_active.is_(True),
        models.TeamMember.role == TeamRole.elder.value,
    )
    return _ordered(q).first()


def get_active_team_members(db: Session, category: Optional[str] = None) -> List[models.TeamMember]:
    q = db.query(models.TeamMember).filter(models.TeamMember.is_active.is_(True))
    if category is not None:
        q = q.filter(models.TeamMember.category == category)
    return _ordered(q).all()


def update_team_member(db: Session, member_id: uuid.UUID, member) -> models.TeamMember:
    member = query_utils.coerce_payload(schemas.TeamMemberUpdate, member)
    db_member = get_team_member(db, member_id)
    query_utils.apply_patch(db_member, member)
    query_utils.commit_or_conflict(db, "Team member conflicts with an existing record")
    db.refresh(db_member)
    logger.info("Updated team member %s (%s)", db_member.full_name, db_member.id)
    return db_member


def delete_team_member(db: Session, member_id: uuid.UUID) -> models.TeamMember:
    """Delete a member and return the detached row so callers can clean up its photo."""
    db_member = get_team_member(db, member_id)
    db.delete(db_member)
    db.commit()
    logger.info("Deleted team member %s", member_id)
    return db_member


def bulk_update_sort_order(db: Session, updates: List) -> int:
    """Apply ``[{id, sort_order}, ...]``; nothing changes if any id is missing."""
    updates = [query_utils.coerce_payload(schemas.SortOrderUpdate, u) for u in updates]
    ids = [u.id for u in updates]
    rows = {
        row.id: row
        for row in db.query(models.TeamMember).filter(models.TeamMember.id.in_(ids)).all()
    } if ids else {}
    for u in updates:
        if u.id not in rows:
            raise NotFoundError(f"Team member {u.id} not found")
    for u in updates:
        rows[u.id].sort_order = u.sort_order
    db.commit()
    logger.info("Reordered %d team members", len(updates))
    return len(updates)


def count_by_category(db: Session) -> Dict[str, int]:
    rows = (
        db.query(models.TeamMember.category, func.count(models.TeamMember.id))
        .group_by(models.TeamMember.category)
        .all()
    )
    return {category: count for category, count in rows}
