import uuid
from unittest.mock import AsyncMock

import pytest

from cms.db import schemas
from cms.db.repositories import content_blocks, team_members
from cms.errors import NotFoundError, UploadError
from cms.services.cms_service import CmsService
from helpers import make_content, make_member


def _stored(public_id: str) -> schemas.StoredResource:
    return schemas.StoredResource(
        url=f"https://res.cloudinary.com/demo/image/upload/{public_id}.jpg",
        public_id=public_id,
        format="jpg",
        resource_type="image",
        bytes=3,
        created_at="2025-01-01T00:00:00Z",
    )


def test_homepage_collects_active_sections(db, fake_media, fake_email):
    content_blocks.create_content_block(db, make_content("hero_section"))
    content_blocks.create_content_block(db, make_content("about_section", is_active=False))
    content_blocks.create_content_block(db, make_content("g1", content_type="gallery"))
    team_members.create_team_member(db, make_member("Omaku", "Elder", role="elder"))
    team_members.create_team_member(db, make_member("F", "Star", is_featured=True))

    data = CmsService(db, media=fake_media, email=fake_email).get_homepage_data()
    assert data.hero_section.content_key == "hero_section"
    assert data.about_section is None
    assert data.elder.first_name == "Omaku"
    assert [m.first_name for m in data.featured_team_members] == ["F"]
    assert [g.content_key for g in data.gallery] == ["g1"]


def test_team_photo_upload_attaches_and_replaces_old_photo(db, fake_media, fake_email):
    member = team_members.create_team_member(db, make_member(profile_image_public_id="napps/team/legacy"))
    fake_media.upload_team_photo.return_value = _stored(f"napps/team/team_{member.id}")

    result = CmsService(db, media=fake_media, email=fake_email).upload_team_photo(b"img", member.id)

    refreshed = team_members.get_team_member(db, member.id)
    assert refreshed.profile_image_public_id == result.public_id
    assert refreshed.profile_image_url == result.url
    fake_media.delete_file.assert_called_once_with("napps/team/legacy", "image")


def test_team_photo_for_missing_member_skips_upload(db, fake_media, fake_email):
    with pytest.raises(NotFoundError):
        CmsService(db, media=fake_media, email=fake_email).upload_team_photo(b"img", uuid.uuid4())
    fake_media.upload_team_photo.assert_not_called()


def test_failed_upload_leaves_record_untouched(db, fake_media, fake_email):
    content_blocks.create_content_block(db, make_content("hero_section"))
    fake_media.upload_homepage_image.side_effect = UploadError("Image upload failed: bad file")

    with pytest.raises(UploadError):
        CmsService(db, media=fake_media, email=fake_email).upload_homepage_image(b"img", "hero_section", "hero")
    assert content_blocks.get_content_block_by_key(db, "hero_section").image_url is None


def test_delete_content_block_removes_hosted_media(db, fake_media, fake_email):
    block = content_blocks.create_content_block(db, make_content(
        "g1",
        content_type="gallery",
        image_public_id="napps/homepage/gallery/cover",
        gallery_public_ids=["napps/g/1", "napps/g/2"],
    ))

    assert CmsService(db, media=fake_media, email=fake_email).delete_content_block(block.id) is True
    deleted = [c.args[0] for c in fake_media.delete_file.call_args_list]
    assert deleted == ["napps/homepage/gallery/cover", "napps/g/1", "napps/g/2"]
    with pytest.raises(NotFoundError):
        content_blocks.get_content_block(db, block.id)


def test_analytics_counts(db, fake_media, fake_email):
    content_blocks.create_content_block(db, make_content("a", content_type="text"))
    content_blocks.create_content_block(db, make_content("b", content_type="gallery", is_active=False))
    team_members.create_team_member(db, make_member("A", "B", category="board", is_featured=True))
    team_members.create_team_member(db, make_member("C", "D"))

    stats = CmsService(db, media=fake_media, email=fake_email).get_analytics()
    assert stats.total_content == 2
    assert stats.active_content == 1
    assert stats.total_team_members == 2
    assert stats.featured_members == 1
    assert stats.content_by_type == {"text": 1, "gallery": 1}
    assert stats.members_by_category == {"board": 1, "staff": 1}


@pytest.mark.asyncio
async def test_newsletter_delegates_to_email_service(db, fake_media, fake_email):
    receipt = schemas.DeliveryReceipt(id="n1", provider="resend", recipients=2)
    fake_email.send_newsletter = AsyncMock(return_value=receipt)
    request = schemas.NewsletterRequest(recipients=["a@example.com", "b@example.com"], title="T", content="C")

    out = await CmsService(db, media=fake_media, email=fake_email).send_newsletter(request)
    assert out == receipt
    fake_email.send_newsletter.assert_awaited_once_with(
        recipients=["a@example.com", "b@example.com"], title="T", content="C", featured_image=None
    )
