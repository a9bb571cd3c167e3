"""
Content block repository functions.

Create/read/update/delete for homepage content blocks plus lookup by
content key and bulk reordering.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from cms.db import models, schemas, query_utils
from cms.errors import NotFoundError

logger = logging.getLogger(__name__)

FILTERABLE_FIELDS = ("content_type", "is_active")


def _ordered(q):
    return q.order_by(
        models.ContentBlock.sort_order.asc(),
        models.ContentBlock.created_at.asc(),
        models.ContentBlock.id.asc(),
    )


def create_content_block(db: Session, block) -> models.ContentBlock:
    block = query_utils.coerce_payload(schemas.ContentBlockCreate, block)
    db_block = models.ContentBlock(**block.model_dump())
    db.add(db_block)
    query_utils.commit_or_conflict(db, f"Content block '{block.content_key}' already exists")
    db.refresh(db_block)
    logger.info("Created content block %s (%s)", db_block.content_key, db_block.id)
    return db_block


def get_content_block(db: Session, block_id: uuid.UUID) -> models.ContentBlock:
    db_block = db.query(models.ContentBlock).filter(models.ContentBlock.id == block_id).first()
    if db_block is None:
        raise NotFoundError(f"Content block {block_id} not found")
    return db_block


def get_content_block_by_key(db: Session, content_key: str, *, active_only: bool = False) -> models.ContentBlock:
    q = db.query(models.ContentBlock).filter(models.ContentBlock.content_key == content_key)
    if active_only:
        q = q.filter(models.ContentBlock.is_active.is_(True))
    db_block = q.first()
    if db_block is None:
        raise NotFoundError(f"Content block '{content_key}' not found")
    return db_block


def find_content_block_by_key(db: Session, content_key: str) -> Optional[models.ContentBlock]:
    """Like ``get_content_block_by_key`` but returns ``None`` when absent."""
    return db.query(models.ContentBlock).filter(models.ContentBlock.content_key == content_key).first()


def get_content_blocks(
    db: Session,
    filters: Optional[Dict[str, Any]] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    q = db.query(models.ContentBlock)
    q = query_utils.apply_equality_filters(q, models.ContentBlock, filters, FILTERABLE_FIELDS)
    return query_utils.paginate(_ordered(q), page, limit)


def get_active_content_blocks(db: Session, content_type: Optional[str] = None) -> List[models.ContentBlock]:
    q = db.query(models.ContentBlock).filter(models.ContentBlock.is_active.is_(True))
    if content_type is not None:
        q = q.filter(models.ContentBlock.content_type == content_type)
    return _ordered(q).all()


def update_content_block(db: Session, block_id: uuid.UUID, block) -> models.ContentBlock:
    block = query_utils.coerce_payload(schemas.ContentBlockUpdate, block)
    db_block = get_content_block(db, block_id)
    query_utils.apply_patch(db_block, block)
    query_utils.commit_or_conflict(db, f"Content block '{db_block.content_key}' already exists")
    db.refresh(db_block)
    logger.info("Updated content block %s (%s)", db_block.content_key, db_block.id)
    return db_block


def delete_content_block(db: Session, block_id: uuid.UUID) -> models.ContentBlock:
    """Delete a block and return the detached row so callers can clean up its media."""
    db_block = get_content_block(db, block_id)
    db.delete(db_block)
    db.commit()
    logger.info("Deleted content block %s (%s)", db_block.content_key, block_id)
    return db_block


def bulk_update_sort_order(db: Session, updates: List) -> int:
    """Apply ``[{id, sort_order}, ...]`` in one transaction.

    Every id is checked first; if any is missing nothing is changed.
    """
    updates = [query_utils.coerce_payload(schemas.SortOrderUpdate, u) for u in updates]
    ids = [u.id for u in updates]
    rows = {
        row.id: row
        for row in db.query(models.ContentBlock).filter(models.ContentBlock.id.in_(ids)).all()
    } if ids else {}
    for u in updates:
        if u.id not in rows:
            raise NotFoundError(f"Content block {u.id} not found")
    for u in updates:
        rows[u.id].sort_order = u.sort_order
    db.commit()
    logger.info("Reordered %d content blocks", len(updates))
    return len(updates)


def count_by_type(db: Session) -> Dict[str, int]:
    rows = (
        db.query(models.ContentBlock.content_type, func.count(models.ContentBlock.id))
        .group_by(models.ContentBlock.content_type)
        .all()
    )
    return {content_type: count for content_type, count in rows}
