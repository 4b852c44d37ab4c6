"""Integration tests for publishing through the Supabase-backed pipeline."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from profile_client.config import ClientSettings
from profile_client.factory import ProfileClientFactory
from profile_client.models import UploadDescriptor
from profile_client.services.upload_pipeline import MediaFile

from .fixtures import PUBLIC_URL_TEMPLATE


class FakeSupabase:
    """In-memory stand-in for supabase.Client storage and table APIs."""

    def __init__(self, *, fail_insert: bool = False, fail_upload: bool = False) -> None:
        self.objects: dict[str, bytes] = {}
        self.rows: dict[str, list[dict[str, object]]] = {}
        self.fail_insert = fail_insert
        self.fail_upload = fail_upload
        self.storage = self

    # storage API
    def from_(self, bucket):
        return self

    def upload(self, *, path, file, file_options=None):
        if self.fail_upload:
            raise RuntimeError("Payload too large")
        self.objects[path] = file
        return {"Key": path}

    def get_public_url(self, path):
        return PUBLIC_URL_TEMPLATE.format(path=path)

    def remove(self, paths):
        for path in paths:
            self.objects.pop(path, None)
        return []

    # table API
    def table(self, name):
        self._table = name
        return self

    def insert(self, rows):
        self._pending = rows
        return self

    def execute(self):
        if self.fail_insert:
            raise RuntimeError("new row violates row-level security policy")
        self.rows.setdefault(self._table, []).extend(self._pending)
        return {"data": self._pending}


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(supabase_url="https://project.supabase.co", supabase_key="anon-key")


@pytest.fixture
def image_file(tmp_path: Path) -> Path:
    file_path = tmp_path / "photo.jpg"
    file_path.write_bytes(b"\xff\xd8\xff\xe0" + b"\0" * (5 * 1024))
    return file_path


def _pipeline(settings: ClientSettings, supabase: FakeSupabase, **kwargs):
    with patch("profile_client.factory.create_client", return_value=supabase):
        return ProfileClientFactory.create_upload_pipeline(settings, **kwargs)


@pytest.mark.asyncio
async def test_publish_image_end_to_end(settings: ClientSettings, image_file: Path) -> None:
    """Integration: blob stored and exactly one content row references its URL."""
    supabase = FakeSupabase()
    pipeline = _pipeline(settings, supabase)

    result = await pipeline.publish(
        image_file,
        "u1",
        UploadDescriptor(title="T", media_type="image", tags=["a"]),
    )

    assert result.success is True
    assert result.path is not None
    assert result.path.startswith("images/u1/")
    assert result.path.endswith(".jpg")
    assert result.file_url == PUBLIC_URL_TEMPLATE.format(path=result.path)
    assert list(supabase.objects) == [result.path]
    rows = supabase.rows["content"]
    assert len(rows) == 1
    assert rows[0]["fileUrl"] == result.file_url
    assert rows[0]["userId"] == "u1"
    assert rows[0]["mediaType"] == "image"
    assert rows[0]["createdAt"]


@pytest.mark.asyncio
async def test_metadata_failure_leaves_orphan_in_bucket(settings: ClientSettings, image_file: Path) -> None:
    """Integration: failed insert is surfaced while the object stays stored."""
    supabase = FakeSupabase(fail_insert=True)
    pipeline = _pipeline(settings, supabase)

    result = await pipeline.publish(
        image_file,
        "u1",
        UploadDescriptor(title="T", media_type="image", tags=["a"]),
    )

    assert result.success is False
    assert result.error_type == "MetadataWriteFailure"
    assert "row-level security" in (result.error or "")
    assert result.orphaned_path in supabase.objects
    assert supabase.rows == {}


@pytest.mark.asyncio
async def test_metadata_failure_with_cleanup_removes_object(settings: ClientSettings, image_file: Path) -> None:
    """Integration: compensating delete removes the orphan when enabled."""
    supabase = FakeSupabase(fail_insert=True)
    pipeline = _pipeline(settings, supabase, cleanup_orphans=True)

    result = await pipeline.publish(
        image_file,
        "u1",
        UploadDescriptor(title="T", media_type="image"),
    )

    assert result.success is False
    assert result.orphaned_path is None
    assert supabase.objects == {}


@pytest.mark.asyncio
async def test_storage_failure_writes_nothing(settings: ClientSettings) -> None:
    """Integration: storage rejection prevents any metadata row."""
    supabase = FakeSupabase(fail_upload=True)
    pipeline = _pipeline(settings, supabase)

    result = await pipeline.publish(
        MediaFile(content=b"\0" * 2048, filename="clip.mp4"),
        "u1",
        UploadDescriptor(title="Clip", media_type="video"),
    )

    assert result.success is False
    assert result.error_type == "StorageFailure"
    assert "Payload too large" in (result.error or "")
    assert supabase.rows == {}
