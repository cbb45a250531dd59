"""Tests for LocalPhotoStore."""

import pytest

from app.adapters.storage.local_photo_store import LocalPhotoStore
from app.domain.entities.complaint import PhotoUpload


@pytest.mark.asyncio
async def test_save_writes_file_with_extension(tmp_path, sample_photo):
    store = LocalPhotoStore(base_dir=tmp_path / "photos")
    ref = await store.save(sample_photo)

    assert ref.endswith(".jpg")
    assert (tmp_path / "photos" / ref).read_bytes() == sample_photo.content


@pytest.mark.asyncio
async def test_each_photo_gets_its_own_file(tmp_path, sample_photo):
    store = LocalPhotoStore(base_dir=tmp_path)
    assert await store.save(sample_photo) != await store.save(sample_photo)


@pytest.mark.asyncio
async def test_unknown_mime_type(tmp_path):
    store = LocalPhotoStore(base_dir=tmp_path)
    ref = await store.save(PhotoUpload(content=b"data", mime_type="application/x-foo"))
    assert ref.endswith(".bin")
