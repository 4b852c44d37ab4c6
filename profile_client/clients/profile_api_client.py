"""
Thin wrapper around a requests session to present the remote profile API.
"""

from __future__ import annotations

import asyncio
from typing import Any
from urllib.parse import quote

import requests

from profile_client.exceptions import (
    ApiResponseError,
    LookupFailure,
    RelationshipOperationFailure,
)

HTTP_NOT_FOUND = 404
HTTP_CONFLICT = 409


class ProfileApiClient:
    """Wrapper that converts HTTP failures into domain exceptions.

    Endpoints:
        GET  {base}/{username}           fetch a profile
        POST {base}/{username}/follow    follow
        POST {base}/{username}/unfollow  unfollow
        PUT  {base}                      replace the viewer's profile

    A 409 on follow/unfollow means the relationship is already in the
    requested state and is not an error.
    """

    def __init__(
        self,
        base_url: str,
        *,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    async def get_profile(self, username: str) -> dict[str, Any]:
        response = await self._invoke("GET", self._profile_url(username))
        if response.status_code == HTTP_NOT_FOUND:
            raise LookupFailure(f"Profile '{username}' was not found.", code=HTTP_NOT_FOUND)
        self._raise_for_status(response, "Failed to fetch profile", LookupFailure)
        return self._json(response)

    async def follow(self, username: str) -> None:
        await self._relationship(username, "follow")

    async def unfollow(self, username: str) -> None:
        await self._relationship(username, "unfollow")

    async def put_profile(self, payload: dict[str, Any]) -> dict[str, Any]:
        response = await self._invoke("PUT", self._base_url, json=payload)
        self._raise_for_status(response, "Failed to update profile", ApiResponseError)
        return self._json(response)

    async def _relationship(self, username: str, action: str) -> None:
        response = await self._invoke("POST", f"{self._profile_url(username)}/{action}")
        if response.status_code == HTTP_CONFLICT:
            return
        self._raise_for_status(
            response, f"Failed to {action} user", RelationshipOperationFailure
        )

    async def _invoke(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            return await asyncio.to_thread(
                self._session.request,
                method,
                url,
                headers={"Content-Type": "application/json"},
                timeout=self._timeout,
                **kwargs,
            )
        except requests.RequestException as exc:
            raise ApiResponseError(str(exc) or "Profile API request failed.") from exc

    def _profile_url(self, username: str) -> str:
        return f"{self._base_url}/{quote(username, safe='')}"

    @staticmethod
    def _raise_for_status(
        response: requests.Response,
        message: str,
        error_cls: type[ApiResponseError],
    ) -> None:
        if response.ok:
            return
        detail = ProfileApiClient._error_detail(response)
        raise error_cls(f"{message}: {detail}", code=response.status_code)

    @staticmethod
    def _error_detail(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason or str(response.status_code)
        if isinstance(body, dict):
            for key in ("error", "message", "detail"):
                if body.get(key):
                    return str(body[key])
        return str(body)

    @staticmethod
    def _json(response: requests.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError as exc:
            raise ApiResponseError(
                "Profile API returned a non-JSON body.", code=response.status_code
            ) from exc
        if not isinstance(body, dict):
            raise ApiResponseError(
                "Profile API returned an unexpected payload.", code=response.status_code
            )
        return body
