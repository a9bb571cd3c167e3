"""
Shared query helpers for the repository modules.

Filtering, pagination, payload coercion and commit handling live here so
every entity repository applies the same rules.
"""
import logging
import math
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cms.errors import ConflictError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_PAGE_LIMIT = 100


def normalize_pagination(page: Optional[int], limit: Optional[int]) -> Tuple[int, int]:
    """Apply defaults, reject non-positive values and clamp ``limit``."""
    page = DEFAULT_PAGE if page is None else page
    limit = DEFAULT_LIMIT if limit is None else limit
    if page < 1:
        raise ValidationError(f"page must be >= 1, got {page}")
    if limit < 1:
        raise ValidationError(f"limit must be >= 1, got {limit}")
    return page, min(limit, MAX_PAGE_LIMIT)


def apply_equality_filters(query, model_class, filters: Optional[Mapping[str, Any]], allowed: Iterable[str]):
    """Filter ``query`` by ``column == value`` for each whitelisted key.

    Unknown keys raise ``ValidationError``; ``None`` values are skipped.
    """
    if not filters:
        return query
    allowed = set(allowed)
    unknown = sorted(set(filters) - allowed)
    if unknown:
        raise ValidationError(
            f"Unsupported filter(s): {', '.join(unknown)}",
            detail={"allowed": sorted(allowed)},
        )
    for key, value in filters.items():
        if value is None:
            continue
        if hasattr(value, "value"):  # str Enum
            value = value.value
        query = query.filter(getattr(model_class, key) == value)
    return query


def paginate(query, page: Optional[int] = None, limit: Optional[int] = None) -> Dict[str, Any]:
    """Run ``query`` for one page and return ``{items, page, limit, total, pages}``."""
    page, limit = normalize_pagination(page, limit)
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return {
        "items": items,
        "page": page,
        "limit": limit,
        "total": total,
        "pages": math.ceil(total / limit) if total else 0,
    }


def coerce_payload(schema_cls: Type[BaseModel], data) -> BaseModel:
    """Accept a schema instance or a plain mapping and return a validated schema."""
    if isinstance(data, schema_cls):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    if not isinstance(data, Mapping):
        raise ValidationError(f"Expected {schema_cls.__name__} or a mapping, got {type(data).__name__}")
    try:
        return schema_cls.model_validate(dict(data))
    except PydanticValidationError as e:
        raise ValidationError(
            f"Invalid {schema_cls.__name__}",
            detail=e.errors(include_url=False, include_context=False, include_input=False),
        ) from e


def apply_patch(db_obj, patch: BaseModel):
    """Copy explicitly-set fields of ``patch`` onto ``db_obj``."""
    for key, value in patch.model_dump(exclude_unset=True).items():
        setattr(db_obj, key, value)
    return db_obj


def commit_or_conflict(db: Session, conflict_message: str):
    """Commit the session; unique violations roll back and become ``ConflictError``."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Integrity violation: %s", conflict_message)
        raise ConflictError(conflict_message, detail=str(e.orig)) from e
