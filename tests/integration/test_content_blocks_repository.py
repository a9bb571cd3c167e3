import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import inspect

from cms.db.repositories import content_blocks as repo
from cms.errors import ConflictError, NotFoundError, ValidationError
from helpers import make_content


def _columns(row) -> dict:
    return {attr.key: getattr(row, attr.key) for attr in inspect(row).mapper.column_attrs}


def test_create_then_get_returns_input_plus_defaults(db):
    created = repo.create_content_block(db, make_content(metadata_col={"owner": "comms"}))
    assert isinstance(created.id, uuid.UUID)
    assert created.created_at is not None

    fetched = repo.get_content_block(db, created.id)
    assert fetched.content_key == "hero_section"
    assert fetched.content_type == "section"
    assert fetched.content == {"body": "Hello"}
    assert fetched.metadata_col == {"owner": "comms"}
    assert fetched.is_active is True
    assert fetched.sort_order == 0


def test_create_rejects_out_of_enum_type(db):
    with pytest.raises(ValidationError):
        repo.create_content_block(db, make_content(content_type="video"))


def test_duplicate_content_key_conflicts(db):
    repo.create_content_block(db, make_content("about_section"))
    with pytest.raises(ConflictError):
        repo.create_content_block(db, make_content("about_section"))
    # session is still usable after the rollback
    assert repo.get_content_block_by_key(db, "about_section").title == "Welcome"


def test_empty_update_changes_nothing(db):
    created = repo.create_content_block(db, make_content())
    before = _columns(created)

    updated = repo.update_content_block(db, created.id, {})
    after = _columns(updated)
    before.pop("updated_at")
    after.pop("updated_at")
    assert after == before


def test_partial_update_applies_only_sent_fields(db):
    created = repo.create_content_block(db, make_content(subtitle="Old"))
    updated = repo.update_content_block(db, created.id, {"title": "New", "subtitle": None})
    assert updated.title == "New"
    assert updated.subtitle is None
    assert updated.content == {"body": "Hello"}


def test_update_null_on_required_field_is_rejected(db):
    created = repo.create_content_block(db, make_content())
    with pytest.raises(ValidationError):
        repo.update_content_block(db, created.id, {"title": None})


def test_update_missing_id_raises_not_found(db):
    with pytest.raises(NotFoundError):
        repo.update_content_block(db, uuid.uuid4(), {"title": "x"})


def test_delete_is_not_idempotent(db):
    created = repo.create_content_block(db, make_content())
    repo.delete_content_block(db, created.id)
    with pytest.raises(NotFoundError):
        repo.get_content_block(db, created.id)
    with pytest.raises(NotFoundError):
        repo.delete_content_block(db, created.id)


def test_second_page_of_twenty_five(db):
    for i in range(25):
        repo.create_content_block(db, make_content(f"block_{i:02d}", sort_order=i))

    page = repo.get_content_blocks(db, {}, page=2, limit=10)
    assert page["total"] == 25
    assert page["pages"] == 3
    assert page["page"] == 2
    assert [b.content_key for b in page["items"]] == [f"block_{i:02d}" for i in range(10, 20)]


def test_ties_on_sort_order_fall_back_to_creation_order(db):
    base = datetime(2025, 1, 1, tzinfo=timezone.utc)
    for offset, key in enumerate(("first", "second", "third")):
        block = repo.create_content_block(db, make_content(key, sort_order=1))
        block.created_at = base + timedelta(seconds=offset)
    repo.create_content_block(db, make_content("zero", sort_order=0))
    db.commit()

    keys = [b.content_key for b in repo.get_content_blocks(db)["items"]]
    assert keys == ["zero", "first", "second", "third"]


def test_identical_timestamps_order_by_id(db):
    stamp = datetime(2025, 1, 1, tzinfo=timezone.utc)
    blocks = [repo.create_content_block(db, make_content(f"k{i}")) for i in range(4)]
    for block in blocks:
        block.created_at = stamp
    db.commit()

    expected = [b.content_key for b in sorted(blocks, key=lambda b: b.id)]
    assert [b.content_key for b in repo.get_content_blocks(db)["items"]] == expected


def test_list_filters(db):
    repo.create_content_block(db, make_content("a", content_type="gallery"))
    repo.create_content_block(db, make_content("b", content_type="gallery", is_active=False))
    repo.create_content_block(db, make_content("c", content_type="text"))

    gallery = repo.get_content_blocks(db, {"content_type": "gallery"})
    assert {b.content_key for b in gallery["items"]} == {"a", "b"}

    active_gallery = repo.get_content_blocks(db, {"content_type": "gallery", "is_active": True})
    assert [b.content_key for b in active_gallery["items"]] == ["a"]

    # None values are ignored
    assert repo.get_content_blocks(db, {"content_type": None})["total"] == 3


def test_list_rejects_unknown_filter_and_bad_paging(db):
    with pytest.raises(ValidationError):
        repo.get_content_blocks(db, {"title": "Welcome"})
    with pytest.raises(ValidationError):
        repo.get_content_blocks(db, page=0)
    with pytest.raises(ValidationError):
        repo.get_content_blocks(db, limit=0)


def test_limit_is_clamped(db):
    repo.create_content_block(db, make_content())
    page = repo.get_content_blocks(db, limit=500)
    assert page["limit"] == 100


def test_get_by_key(db):
    repo.create_content_block(db, make_content("hidden", is_active=False))
    assert repo.get_content_block_by_key(db, "hidden").content_key == "hidden"
    with pytest.raises(NotFoundError):
        repo.get_content_block_by_key(db, "hidden", active_only=True)
    with pytest.raises(NotFoundError):
        repo.get_content_block_by_key(db, "nope")


def test_bulk_reorder_is_all_or_nothing(db):
    a = repo.create_content_block(db, make_content("a", sort_order=0))
    b = repo.create_content_block(db, make_content("b", sort_order=1))

    with pytest.raises(NotFoundError):
        repo.bulk_update_sort_order(db, [
            {"id": a.id, "sort_order": 5},
            {"id": uuid.uuid4(), "sort_order": 6},
        ])
    assert repo.get_content_block(db, a.id).sort_order == 0

    assert repo.bulk_update_sort_order(db, [
        {"id": a.id, "sort_order": 2},
        {"id": b.id, "sort_order": 1},
    ]) == 2
    assert [x.content_key for x in repo.get_content_blocks(db)["items"]] == ["b", "a"]
