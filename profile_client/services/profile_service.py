"""
Profile workflows: the service contract and its network-backed implementation.

Every operation returns a result model. Failures are reported through the
``error`` field and never raised to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from pydantic import ValidationError

from profile_client.exceptions import (
    ApiResponseError,
    LookupFailure,
    RelationshipOperationFailure,
)
from profile_client.models import (
    Profile,
    ProfileResult,
    ProfileUpdate,
    RelationshipResult,
)

logger = logging.getLogger(__name__)

HTTP_NOT_FOUND = 404


class ProfileService(Protocol):
    """Capability shared by the simulated and the network-backed services."""

    async def get_profile_by_username(self, username: str) -> ProfileResult:
        ...

    async def follow_user(self, username: str) -> RelationshipResult:
        ...

    async def unfollow_user(self, username: str) -> RelationshipResult:
        ...

    async def update_profile(self, update: ProfileUpdate | Mapping[str, Any]) -> ProfileResult:
        ...


class ProfileApi(Protocol):
    """Protocol subset of the profile API client consumed by the service."""

    async def get_profile(self, username: str) -> dict[str, Any]:
        ...

    async def follow(self, username: str) -> None:
        ...

    async def unfollow(self, username: str) -> None:
        ...

    async def put_profile(self, payload: dict[str, Any]) -> dict[str, Any]:
        ...


def error_message(exc: BaseException, default: str) -> str:
    """Human readable message for an error surfaced through a result."""
    if isinstance(exc, ValidationError):
        return f"{default}: {exc.error_count()} validation error(s)"
    return str(exc) or default


def check_relationship_target(username: str, viewer_username: str, *, follow: bool) -> None:
    if not username:
        raise RelationshipOperationFailure("Username must not be empty.")
    if follow and username == viewer_username:
        raise RelationshipOperationFailure("You cannot follow yourself.")


def coerce_update(update: ProfileUpdate | Mapping[str, Any]) -> ProfileUpdate:
    if isinstance(update, ProfileUpdate):
        return update
    return ProfileUpdate.model_validate(update)


@dataclass(slots=True)
class RemoteProfileService:
    """Profile service delegating to the remote profile API."""

    client: ProfileApi
    viewer_username: str

    async def get_profile_by_username(self, username: str) -> ProfileResult:
        try:
            if not username:
                raise LookupFailure("Username must not be empty.")
            payload = await self.client.get_profile(username)
            profile = Profile.from_api(payload).for_viewer(self.viewer_username)
        except Exception as exc:
            logger.error("Fetching profile %s failed: %s", username, exc)
            return ProfileResult(
                profile=Profile.placeholder(),
                error=error_message(exc, "Failed to fetch profile"),
            )
        return ProfileResult(profile=profile)

    async def follow_user(self, username: str) -> RelationshipResult:
        try:
            check_relationship_target(username, self.viewer_username, follow=True)
            await self.client.follow(username)
        except Exception as exc:
            return RelationshipResult(
                success=False, error=error_message(exc, "Failed to follow user")
            )
        logger.info("Following user %s", username)
        return RelationshipResult(success=True)

    async def unfollow_user(self, username: str) -> RelationshipResult:
        try:
            check_relationship_target(username, self.viewer_username, follow=False)
            await self.client.unfollow(username)
        except Exception as exc:
            return RelationshipResult(
                success=False, error=error_message(exc, "Failed to unfollow user")
            )
        logger.info("Unfollowing user %s", username)
        return RelationshipResult(success=True)

    async def update_profile(self, update: ProfileUpdate | Mapping[str, Any]) -> ProfileResult:
        try:
            changes = coerce_update(update)
            current = await self._current_profile()
            merged = current.merged(changes)
            payload = merged.model_dump(
                by_alias=True,
                mode="json",
                exclude={"is_following", "is_own_profile"},
            )
            response = await self.client.put_profile(payload)
            profile = Profile.from_api(response).for_viewer(self.viewer_username)
        except Exception as exc:
            logger.error("Updating profile %s failed: %s", self.viewer_username, exc)
            return ProfileResult(
                profile=Profile.placeholder(),
                error=error_message(exc, "Failed to update profile"),
            )
        return ProfileResult(profile=profile)

    async def _current_profile(self) -> Profile:
        try:
            payload = await self.client.get_profile(self.viewer_username)
        except ApiResponseError as exc:
            if exc.code != HTTP_NOT_FOUND:
                raise
            return Profile.with_defaults(self.viewer_username)
        return Profile.from_api(payload).for_viewer(self.viewer_username)
