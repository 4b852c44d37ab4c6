from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from profile_client.models import (
    MediaItem,
    Profile,
    ProfileUpdate,
    UploadDescriptor,
    UploadMetadata,
)


def _media_payload(**overrides) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": "1",
        "url": "/assets/sample1.jpg",
        "thumbnailUrl": "/assets/sample1-thumb.jpg",
        "type": "image",
        "title": "Downtown Reflections",
        "likes": 124,
        "bookmarks": 38,
        "tags": ["urban", "urban"],
        "creator": {"id": "1", "username": "alex", "avatarUrl": "https://i.pravatar.cc/150"},
        "liked": False,
        "bookmarked": False,
    }
    payload.update(overrides)
    return payload


def test_media_item_accepts_camel_case_payload() -> None:
    item = MediaItem.model_validate(_media_payload())

    assert item.thumbnail_url == "/assets/sample1-thumb.jpg"
    assert item.creator.avatar_url == "https://i.pravatar.cc/150"
    assert item.tags == ["urban", "urban"]


def test_media_item_type_is_immutable() -> None:
    item = MediaItem.model_validate(_media_payload())

    with pytest.raises(ValidationError):
        item.type = "video"


@pytest.mark.parametrize(
    "overrides",
    [
        {"likes": -1},
        {"bookmarks": -3},
        {"url": ""},
        {"thumbnailUrl": ""},
        {"type": "document"},
    ],
)
def test_media_item_rejects_invalid_values(overrides: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        MediaItem.model_validate(_media_payload(**overrides))


def test_media_item_counters_cannot_go_negative_on_assignment() -> None:
    item = MediaItem.model_validate(_media_payload(likes=0))

    with pytest.raises(ValidationError):
        item.likes = -1


def test_profile_rejects_following_own_profile() -> None:
    with pytest.raises(ValidationError):
        Profile(username="me", is_own_profile=True, is_following=True)


def test_profile_from_api_unwraps_envelope() -> None:
    profile = Profile.from_api({"profile": {"username": "alex", "displayName": "Alex", "accentColor": "mustard"}})

    assert profile.username == "alex"
    assert profile.display_name == "Alex"
    assert profile.accent_color == "mustard"


def test_placeholder_is_zero_value() -> None:
    profile = Profile.placeholder()

    assert profile.username == ""
    assert profile.followers == 0
    assert profile.media == []


def test_for_viewer_clears_following_on_own_profile() -> None:
    profile = Profile(username="me", is_following=True)

    own = profile.for_viewer("me")
    other = profile.for_viewer("someone")

    assert own.is_own_profile is True
    assert own.is_following is False
    assert other.is_own_profile is False
    assert other.is_following is True


def test_profile_update_only_reports_explicit_fields() -> None:
    update = ProfileUpdate(display_name="X")

    assert update.changes() == {"display_name": "X"}


def test_merged_keeps_existing_values() -> None:
    profile = Profile(username="me", display_name="Old", bio="kept")

    merged = profile.merged(ProfileUpdate(displayName="New"))

    assert merged.display_name == "New"
    assert merged.bio == "kept"


def test_upload_metadata_record_uses_camel_case() -> None:
    descriptor = UploadDescriptor(title="T", media_type="video")
    metadata = UploadMetadata(
        title=descriptor.title,
        description=descriptor.description,
        tags=descriptor.tags,
        media_type=descriptor.media_type,
        file_url="https://cdn/x.mp4",
        user_id="u1",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )

    assert metadata.to_record() == {
        "title": "T",
        "description": "",
        "tags": [],
        "mediaType": "video",
        "fileUrl": "https://cdn/x.mp4",
        "userId": "u1",
        "createdAt": "2024-01-01T00:00:00+00:00",
    }


def test_upload_metadata_is_frozen() -> None:
    metadata = UploadMetadata(
        title="T",
        description="",
        tags=[],
        media_type="image",
        file_url="https://cdn/x.jpg",
        user_id="u1",
        created_at="2024-01-01T00:00:00+00:00",
    )

    with pytest.raises(ValidationError):
        metadata.title = "changed"
