"""
Two-phase media publishing: binary storage first, then the metadata record.

The phases are not transactional. When the metadata insert fails the stored
object stays behind unreferenced (an orphan) unless ``cleanup_orphans`` is set.
"""

from __future__ import annotations

import logging
import mimetypes
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Protocol, Sequence

from profile_client.exceptions import (
    MetadataWriteFailure,
    ProfileClientError,
    StorageFailure,
    UploadValidationError,
)
from profile_client.models import PublishResult, UploadDescriptor, UploadMetadata

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class BlobStorage(Protocol):
    """Protocol capturing object storage behaviour from client adapters."""

    async def upload(self, path: str, content: bytes, *, content_type: str) -> None:
        ...

    async def get_public_url(self, path: str) -> str:
        ...

    async def remove(self, paths: Sequence[str]) -> None:
        ...


class MetadataStore(Protocol):
    """Protocol capturing record insertion from client adapters."""

    async def insert(self, table: str, record: dict[str, Any]) -> None:
        ...


@dataclass(slots=True, frozen=True)
class MediaFile:
    """Binary payload together with the filename its extension comes from."""

    content: bytes
    filename: str

    @classmethod
    def from_path(cls, path: Path) -> "MediaFile":
        resolved = path.expanduser()
        if not resolved.is_file():
            raise UploadValidationError(f"Media file '{path}' does not exist or is not a file.")
        try:
            content = resolved.read_bytes()
        except OSError as exc:
            raise UploadValidationError(f"Media file '{path}' could not be read: {exc}") from exc
        return cls(content=content, filename=resolved.name)

    @property
    def extension(self) -> str:
        return Path(self.filename).suffix.lstrip(".").lower()

    @property
    def content_type(self) -> str:
        mime_type, _ = mimetypes.guess_type(self.filename)
        return mime_type or DEFAULT_CONTENT_TYPE


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _random_token() -> str:
    return secrets.token_hex(4)


@dataclass(slots=True)
class UploadPipeline:
    """Publishes a media item by storing the blob and then recording its metadata."""

    storage: BlobStorage
    metadata_store: MetadataStore
    table: str = "content"
    cleanup_orphans: bool = False
    clock: Callable[[], datetime] = field(default=_utc_now)
    token_factory: Callable[[], str] = field(default=_random_token)

    async def publish(
        self,
        file: MediaFile | Path,
        owner_id: str,
        descriptor: UploadDescriptor,
    ) -> PublishResult:
        """
        Store ``file`` for ``owner_id`` and persist its metadata record.

        Returns:
            PublishResult with ``file_url`` on success. Failures are returned,
            never raised; ``orphaned_path`` is set when the blob was stored but
            its URL or metadata record could not be written, and the blob is
            still in storage.
        """
        try:
            media = self._validate(file, owner_id)
        except UploadValidationError as exc:
            return self._failure(exc)

        owner_id = owner_id.strip()
        path = self.build_path(owner_id, descriptor.media_type, media.extension)

        try:
            await self.storage.upload(path, media.content, content_type=media.content_type)
        except Exception as exc:
            logger.exception("Upload of %s failed", path)
            return self._failure(self._as_domain_error(exc, StorageFailure))

        try:
            file_url = await self.storage.get_public_url(path)
            metadata = UploadMetadata(
                title=descriptor.title,
                description=descriptor.description,
                tags=list(descriptor.tags),
                media_type=descriptor.media_type,
                file_url=file_url,
                user_id=owner_id,
                created_at=self.clock(),
            )
            await self.metadata_store.insert(self.table, metadata.to_record())
        except Exception as exc:
            orphaned_path: str | None = path
            if self.cleanup_orphans and await self._remove_orphan(path):
                orphaned_path = None
            else:
                logger.warning("Metadata write failed; stored object %s is orphaned", path)
            return self._failure(
                self._as_domain_error(exc, MetadataWriteFailure), orphaned_path=orphaned_path
            )

        logger.info("Published %s for owner %s", path, owner_id)
        return PublishResult(success=True, file_url=file_url, path=path)

    def build_path(self, owner_id: str, media_type: str, extension: str) -> str:
        timestamp = int(self.clock().timestamp() * 1000)
        return f"{media_type}s/{owner_id}/{timestamp}-{self.token_factory()}.{extension}"

    async def _remove_orphan(self, path: str) -> bool:
        try:
            await self.storage.remove([path])
        except Exception as exc:
            logger.warning("Could not remove orphaned object %s: %s", path, exc)
            return False
        logger.info("Removed orphaned object %s after metadata failure", path)
        return True

    @staticmethod
    def _validate(file: MediaFile | Path, owner_id: str) -> MediaFile:
        media = MediaFile.from_path(file) if isinstance(file, Path) else file
        if not media.content:
            raise UploadValidationError(f"Media file '{media.filename}' is empty.")
        if not media.extension:
            raise UploadValidationError(
                f"Cannot determine the extension of '{media.filename}'."
            )
        if not owner_id or not owner_id.strip():
            raise UploadValidationError("Owner id must not be empty.")
        return media

    @staticmethod
    def _as_domain_error(
        exc: Exception, fallback: type[ProfileClientError]
    ) -> ProfileClientError:
        if isinstance(exc, fallback):
            return exc
        return fallback(str(exc) or fallback.__name__)

    @staticmethod
    def _failure(exc: ProfileClientError, *, orphaned_path: str | None = None) -> PublishResult:
        return PublishResult(
            success=False,
            orphaned_path=orphaned_path,
            error=str(exc),
            error_type=type(exc).__name__,
        )
