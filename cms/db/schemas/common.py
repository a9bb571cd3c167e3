"""Shared validators and base classes for request/response schemas."""
import uuid
from typing import ClassVar, FrozenSet, Optional

from pydantic import BaseModel, model_validator


def check_url(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value.startswith(("http://", "https://")):
        raise ValueError(f"Invalid URL: {value}")
    return value


class PatchModel(BaseModel):
    """Partial update: only fields explicitly sent are applied.

    Fields listed in ``non_nullable`` may be omitted but not sent as null,
    since that would clear a required column.
    """

    non_nullable: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_null_for_required(self):
        cleared = sorted(
            name for name in self.model_fields_set
            if name in self.non_nullable and getattr(self, name) is None
        )
        if cleared:
            raise ValueError(f"Fields cannot be null: {', '.join(cleared)}")
        return self


class SortOrderUpdate(BaseModel):
    id: uuid.UUID
    sort_order: int
