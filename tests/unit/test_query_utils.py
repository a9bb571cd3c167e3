import pytest

from cms.db import query_utils, schemas
from cms.errors import ValidationError


def test_pagination_defaults_and_clamp():
    assert query_utils.normalize_pagination(None, None) == (1, 10)
    assert query_utils.normalize_pagination(3, 25) == (3, 25)
    assert query_utils.normalize_pagination(1, 1000) == (1, query_utils.MAX_PAGE_LIMIT)


@pytest.mark.parametrize("page,limit", [(0, 10), (-1, 10), (1, 0), (1, -5)])
def test_pagination_rejects_non_positive_values(page, limit):
    with pytest.raises(ValidationError):
        query_utils.normalize_pagination(page, limit)


def test_coerce_payload_accepts_mappings_and_instances():
    member = schemas.TeamMemberCreate(first_name="A", last_name="B", position="C")
    assert query_utils.coerce_payload(schemas.TeamMemberCreate, member) is member

    coerced = query_utils.coerce_payload(
        schemas.TeamMemberCreate, {"first_name": "A", "last_name": "B", "position": "C"}
    )
    assert isinstance(coerced, schemas.TeamMemberCreate)


def test_coerce_payload_converts_pydantic_errors():
    with pytest.raises(ValidationError) as exc:
        query_utils.coerce_payload(schemas.TeamMemberCreate, {"first_name": "A"})
    assert exc.value.status_code == 422
    missing = {tuple(err["loc"]) for err in exc.value.detail}
    assert ("last_name",) in missing
    assert ("position",) in missing

    with pytest.raises(ValidationError):
        query_utils.coerce_payload(schemas.TeamMemberCreate, ["not", "a", "mapping"])
