"""
In-memory profile service returning canned data after an artificial delay.

Used for development and tests. Follow state and the viewer's own profile are
kept on the instance only and are lost when it is discarded.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Mapping

from profile_client.exceptions import LookupFailure
from profile_client.models import (
    Creator,
    MediaItem,
    Profile,
    ProfileResult,
    ProfileUpdate,
    RelationshipResult,
)
from profile_client.services.profile_service import (
    check_relationship_target,
    coerce_update,
    error_message,
)

logger = logging.getLogger(__name__)

DEFAULT_VIEWER = "myusername"
SAMPLE_DISPLAY_NAME = "Alex Rivera"
SAMPLE_BIO = (
    "Visual storyteller exploring the intersection of urban landscapes and "
    "human emotion. Based in Portland."
)
SAMPLE_FOLLOWERS = 1240
SAMPLE_FOLLOWING = 350
OWN_FOLLOWERS = 450
OWN_FOLLOWING = 120

# (id, url, type, title, likes, bookmarks, tags)
_SAMPLE_MEDIA: tuple[tuple[str, str, str, str, int, int, tuple[str, ...]], ...] = (
    ("1", "/assets/sample1.jpg", "image", "Downtown Reflections", 124, 38, ("urban", "photography")),
    ("2", "/assets/sample2.jpg", "image", "Morning Light", 87, 16, ("lighting", "photography")),
    ("3", "/assets/sample3.mp4", "video", "City in Motion", 210, 52, ("timelapse", "urban")),
    ("4", "/assets/sample4.mp3", "audio", "Street Sounds", 64, 12, ("audio", "urban")),
    ("5", "/assets/sample5.jpg", "image", "People of the City", 152, 41, ("portrait", "documentary")),
    ("6", "/assets/sample6.jpg", "image", "Architectural Details", 93, 27, ("architecture", "details")),
)


def sample_media() -> list[MediaItem]:
    items = []
    for item_id, url, media_type, title, likes, bookmarks, tags in _SAMPLE_MEDIA:
        items.append(
            MediaItem(
                id=item_id,
                url=url,
                thumbnail_url=f"/assets/sample{item_id}-thumb.jpg",
                type=media_type,
                title=title,
                likes=likes,
                bookmarks=bookmarks,
                tags=list(tags),
                creator=Creator(
                    id=item_id,
                    username=SAMPLE_DISPLAY_NAME,
                    avatar_url="https://i.pravatar.cc/150",
                ),
            )
        )
    return items


def sample_profile(username: str) -> Profile:
    return Profile(
        username=username,
        display_name=SAMPLE_DISPLAY_NAME,
        bio=SAMPLE_BIO,
        profile_picture="https://i.pravatar.cc/300",
        accent_color="teal",
        followers=SAMPLE_FOLLOWERS,
        following=SAMPLE_FOLLOWING,
        tags=["photographer", "filmmaker", "urban", "documentary"],
        media=sample_media(),
    )


@dataclass(slots=True)
class SimulatedProfileService:
    """Deterministic stand-in for the remote profile API."""

    viewer_username: str = DEFAULT_VIEWER
    read_latency: float = 0.5
    write_latency: float = 0.3
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep)
    _following: set[str] = field(default_factory=set, init=False, repr=False)
    _own_profile: Profile | None = field(default=None, init=False, repr=False)

    async def get_profile_by_username(self, username: str) -> ProfileResult:
        await self.sleep(self.read_latency)
        try:
            if not username:
                raise LookupFailure("Username must not be empty.")
            if username == self.viewer_username and self._own_profile is not None:
                return ProfileResult(profile=self._own_profile)
            profile = sample_profile(username)
            following = username in self._following
            if following:
                profile.followers += 1
            profile = profile.for_viewer(self.viewer_username, is_following=following)
        except Exception as exc:
            return ProfileResult(
                profile=Profile.placeholder(),
                error=error_message(exc, "Failed to fetch profile"),
            )
        return ProfileResult(profile=profile)

    async def follow_user(self, username: str) -> RelationshipResult:
        await self.sleep(self.write_latency)
        try:
            check_relationship_target(username, self.viewer_username, follow=True)
        except Exception as exc:
            return RelationshipResult(
                success=False, error=error_message(exc, "Failed to follow user")
            )
        self._following.add(username)
        logger.info("Following user %s", username)
        return RelationshipResult(success=True)

    async def unfollow_user(self, username: str) -> RelationshipResult:
        await self.sleep(self.write_latency)
        try:
            check_relationship_target(username, self.viewer_username, follow=False)
        except Exception as exc:
            return RelationshipResult(
                success=False, error=error_message(exc, "Failed to unfollow user")
            )
        self._following.discard(username)
        logger.info("Unfollowing user %s", username)
        return RelationshipResult(success=True)

    async def update_profile(self, update: ProfileUpdate | Mapping[str, Any]) -> ProfileResult:
        await self.sleep(self.read_latency)
        try:
            changes = coerce_update(update)
            current = self._own_profile or Profile.with_defaults(self.viewer_username).merged(
                ProfileUpdate(), followers=OWN_FOLLOWERS, following=OWN_FOLLOWING
            )
            profile = current.merged(changes, updated_at=datetime.now(timezone.utc))
        except Exception as exc:
            return ProfileResult(
                profile=Profile.placeholder(),
                error=error_message(exc, "Failed to update profile"),
            )
        self._own_profile = profile
        return ProfileResult(profile=profile)
