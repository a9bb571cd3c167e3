"""
Enrollment counter layout and the total enrollment aggregate.

A record holds one headcount per grade level and gender. The total is always
recomputed from the counters and never persisted.
"""
from typing import Any, Mapping, Tuple

GRADE_LEVELS: Tuple[str, ...] = (
    "nursery1", "nursery2", "nursery3",
    "kg1", "kg2",
    "primary1", "primary2", "primary3", "primary4", "primary5", "primary6",
    "jss1", "jss2", "jss3",
    "ss1", "ss2", "ss3",
)
GENDERS: Tuple[str, ...] = ("male", "female")

# e.g. "primary3_female"
GRADE_COUNTER_FIELDS: Tuple[str, ...] = tuple(
    f"{level}_{gender}" for level in GRADE_LEVELS for gender in GENDERS
)

# Legacy scalar kept for older reports; not part of the total.
LEGACY_COUNTER_FIELDS: Tuple[str, ...] = ("pupils_presented_2023",)

ALL_COUNTER_FIELDS: Tuple[str, ...] = GRADE_COUNTER_FIELDS + LEGACY_COUNTER_FIELDS

DEFAULT_ACADEMIC_YEAR = "2024/2025"


def _counter(record: Any, field: str) -> int:
    if isinstance(record, Mapping):
        value = record.get(field)
    else:
        value = getattr(record, field, None)
    return int(value or 0)


def total_enrollment(record: Any) -> int:
    """Sum every grade/gender counter of ``record``; unset counters count as zero.

    ``record`` may be an ORM row, a pydantic model or a plain mapping.
    """
    return sum(_counter(record, field) for field in GRADE_COUNTER_FIELDS)


def enrollment_by_level(record: Any) -> dict:
    """Return ``{level: male + female}`` for each grade level."""
    return {
        level: sum(_counter(record, f"{level}_{gender}") for gender in GENDERS)
        for level in GRADE_LEVELS
    }
