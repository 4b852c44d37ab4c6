"""
Pydantic models for profiles, media items and upload records used by profile_client.

Attributes are snake_case in Python; the wire and persisted form uses camelCase
aliases. Both spellings are accepted on input.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Mapping, get_args

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

MediaType = Literal["image", "video", "audio"]
AccentColor = Literal["coral", "teal", "mustard"]
Theme = Literal["light", "dark"]

MEDIA_TYPES: tuple[str, ...] = get_args(MediaType)
THEMES: tuple[str, ...] = get_args(Theme)

DEFAULT_DISPLAY_NAME = "My Name"
DEFAULT_PROFILE_PICTURE = "https://i.pravatar.cc/300"
DEFAULT_ACCENT_COLOR: AccentColor = "coral"


def _to_mapping(payload: Any) -> Mapping[str, Any]:
    if isinstance(payload, Mapping):
        for envelope in ("data", "profile"):
            inner = payload.get(envelope)
            if isinstance(inner, Mapping):
                return inner
        return payload
    if hasattr(payload, "data"):
        return _to_mapping(payload.data)
    if hasattr(payload, "__dict__"):
        return _to_mapping(vars(payload))
    raise TypeError(f"Cannot convert payload of type {type(payload)!r} to mapping.")


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Creator(_CamelModel):
    """Weak reference to the profile that published a media item."""

    id: str
    username: str
    avatar_url: str = ""


class MediaItem(_CamelModel):
    """A single published asset."""

    id: str
    url: str = Field(..., min_length=1)
    thumbnail_url: str = Field(..., min_length=1)
    type: MediaType = Field(..., frozen=True)
    title: str
    tags: list[str] = Field(default_factory=list)
    likes: NonNegativeInt = 0
    bookmarks: NonNegativeInt = 0
    creator: Creator
    liked: bool = False
    bookmarked: bool = False
    created_at: datetime | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )


class Profile(_CamelModel):
    """Public aggregate of an account as seen by the viewing actor."""

    username: str = ""
    display_name: str = ""
    bio: str = ""
    profile_picture: str = ""
    accent_color: AccentColor = DEFAULT_ACCENT_COLOR
    followers: NonNegativeInt = 0
    following: NonNegativeInt = 0
    is_following: bool = False
    is_own_profile: bool = False
    tags: list[str] = Field(default_factory=list)
    media: list[MediaItem] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @model_validator(mode="after")
    def check_relationship_flags(self) -> "Profile":
        if self.is_own_profile and self.is_following:
            raise ValueError("A profile cannot be both the viewer's own and followed by the viewer.")
        return self

    @classmethod
    def placeholder(cls) -> "Profile":
        """Zero-value profile returned alongside lookup errors."""
        return cls()

    @classmethod
    def from_api(cls, payload: Any) -> "Profile":
        return cls.model_validate(_to_mapping(payload))

    def for_viewer(self, viewer_username: str, *, is_following: bool | None = None) -> "Profile":
        """Return a copy with the relationship flags computed for ``viewer_username``."""
        own = self.username == viewer_username
        following = self.is_following if is_following is None else is_following
        data = self.model_dump()
        data.update(is_own_profile=own, is_following=following and not own)
        return Profile.model_validate(data)

    def merged(self, update: "ProfileUpdate", **overrides: Any) -> "Profile":
        """Return a validated copy with the explicitly set update fields applied."""
        data = self.model_dump()
        data.update(update.changes())
        data.update(overrides)
        return Profile.model_validate(data)

    @classmethod
    def with_defaults(cls, username: str) -> "Profile":
        return cls(
            username=username,
            display_name=DEFAULT_DISPLAY_NAME,
            profile_picture=DEFAULT_PROFILE_PICTURE,
            accent_color=DEFAULT_ACCENT_COLOR,
            is_own_profile=True,
        )


class ProfileUpdate(_CamelModel):
    """Sparse profile update; only explicitly set fields are applied."""

    display_name: str | None = None
    bio: str | None = None
    profile_picture: str | None = None
    accent_color: AccentColor | None = None
    tags: list[str] | None = None

    def changes(self) -> dict[str, Any]:
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class UploadDescriptor(_CamelModel):
    """Caller supplied description of a media item being published."""

    title: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    media_type: MediaType


class UploadMetadata(_CamelModel):
    """Record persisted once the binary object has been stored."""

    title: str
    description: str
    tags: list[str]
    media_type: MediaType
    file_url: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    created_at: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    @field_validator("created_at", mode="before")
    @classmethod
    def coerce_created_at(cls, value: Any) -> str:
        if isinstance(value, datetime):
            return value.isoformat()
        if isinstance(value, str) and value:
            return value
        raise TypeError("created_at must be a datetime or a non-empty ISO-8601 string.")

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class PublishResult(BaseModel):
    """Outcome of a publish attempt."""

    success: bool
    file_url: str | None = None
    path: str | None = None
    orphaned_path: str | None = None
    error: str | None = None
    error_type: str | None = None


class ProfileResult(BaseModel):
    """Profile returned by a service call, with an error message on failure."""

    profile: Profile
    error: str | None = None


class RelationshipResult(BaseModel):
    """Outcome of a follow or unfollow request."""

    success: bool
    error: str | None = None
