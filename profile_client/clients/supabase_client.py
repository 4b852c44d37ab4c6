"""
Thin async wrappers around the supabase client for blob storage and metadata rows.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Sequence

from supabase import Client

from profile_client.exceptions import MetadataWriteFailure, StorageFailure

logger = logging.getLogger(__name__)


class SupabaseBlobStorage:
    """Object storage backed by a Supabase storage bucket."""

    def __init__(self, client: Client, *, bucket: str = "media") -> None:
        self._client = client
        self._bucket = bucket

    @property
    def bucket(self) -> str:
        return self._bucket

    async def upload(self, path: str, content: bytes, *, content_type: str) -> None:
        await self._invoke(
            "upload",
            lambda bucket: bucket.upload(
                path=path,
                file=content,
                file_options={"content-type": content_type},
            ),
        )

    async def get_public_url(self, path: str) -> str:
        url = await self._invoke("get_public_url", lambda bucket: bucket.get_public_url(path))
        if not url:
            raise StorageFailure(f"Storage returned no public URL for '{path}'.")
        return url

    async def remove(self, paths: Sequence[str]) -> None:
        await self._invoke("remove", lambda bucket: bucket.remove(list(paths)))

    async def _invoke(self, operation: str, call: Callable[[Any], Any]) -> Any:
        try:
            bucket = self._client.storage.from_(self._bucket)
            return await asyncio.to_thread(call, bucket)
        except Exception as exc:
            logger.error("Storage %s failed in bucket %s: %s", operation, self._bucket, exc)
            raise StorageFailure(f"Storage {operation} failed: {exc}") from exc


class SupabaseMetadataStore:
    """Append-only metadata rows written through the Supabase table API."""

    def __init__(self, client: Client) -> None:
        self._client = client

    async def insert(self, table: str, record: dict[str, Any]) -> None:
        try:
            query = self._client.table(table).insert([record])
            await asyncio.to_thread(query.execute)
        except Exception as exc:
            logger.error("Metadata insert into %s failed: %s", table, exc)
            raise MetadataWriteFailure(f"Failed to save metadata: {exc}") from exc
