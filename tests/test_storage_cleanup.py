"""Tests for the orphaned storage sweep."""
from datetime import timedelta

import pytest
import pytest_asyncio
from sqlalchemy.exc import SQLAlchemyError

from mastergym.core.exceptions import NotFoundError
from mastergym.core.metrics import registry
from mastergym.db.database import create_engine, create_session_maker
from mastergym.models import DietLog, GalleryItem, SuccessStory, TransformationImage
from mastergym.models.enums import MealType
from mastergym.services.storage_cleanup import MIN_ORPHAN_BLOB_AGE, StorageReferenceCollector
from mastergym.storage import LocalBlobStore


class FlakyBlobStore(LocalBlobStore):
    """Blob store whose deletes fail for chosen ids."""

    def __init__(self, *args, failing: set[str], **kwargs):
        super().__init__(*args, **kwargs)
        self.failing = failing

    async def delete(self, blob_id: str) -> None:
        if blob_id in self.failing:
            raise RuntimeError(f"storage unavailable for {blob_id}")
        await super().delete(blob_id)


@pytest.fixture
def collector(session_maker, blob_store, clock):
    return StorageReferenceCollector(session_maker, blob_store, clock=clock)


@pytest_asyncio.fixture
async def referenced_blobs(session_maker, blob_store, client_user):
    """One blob referenced from each kind of record."""
    ids = [await blob_store.put(b"jpeg", "image/jpeg") for _ in range(4)]
    async with session_maker() as session, session.begin():
        session.add_all([
            DietLog(user_id=client_user.id, meal_type=MealType.POST_WORKOUT, title="Shake", image_id=ids[0]),
            GalleryItem(user_id=client_user.id, img_url="https://cdn.example/g.jpg", storage_id=ids[1]),
            SuccessStory(slug="ana", title="Ana's year", image_storage_id=ids[2]),
            TransformationImage(image_url="https://cdn.example/t.jpg", image_storage_id=ids[3]),
        ])
    return ids


class TestStorageReferenceCollector:

    @pytest.mark.asyncio
    async def test_referenced_blobs_are_never_deleted(self, collector, blob_store, referenced_blobs, clock):
        clock.advance(timedelta(days=30))

        summary = await collector.collect()

        assert summary.deleted_count == 0
        assert summary.referenced_count == 4
        assert summary.total_storage_files == 4
        for blob_id in referenced_blobs:
            assert await blob_store.get(blob_id) == b"jpeg"

    @pytest.mark.asyncio
    async def test_recent_orphans_are_skipped(self, collector, blob_store, clock):
        blob_id = await blob_store.put(b"fresh upload")
        clock.advance(MIN_ORPHAN_BLOB_AGE - timedelta(seconds=1))

        summary = await collector.collect()

        assert summary.skipped_recent_count == 1
        assert summary.deleted_count == 0
        assert await blob_store.get(blob_id) == b"fresh upload"

    @pytest.mark.asyncio
    async def test_aged_orphan_is_deleted_once(self, collector, blob_store, referenced_blobs, clock, tmp_path):
        orphan = await blob_store.put(b"abandoned")
        clock.advance(MIN_ORPHAN_BLOB_AGE)

        first = await collector.collect()
        second = await collector.collect()

        assert first.deleted_count == 1
        assert first.total_storage_files == 5
        assert second.deleted_count == 0
        assert second.total_storage_files == 4
        assert not (tmp_path / "blobs" / orphan).exists()
        with pytest.raises(NotFoundError):
            await blob_store.get(orphan)

    @pytest.mark.asyncio
    async def test_mixed_ages(self, collector, blob_store, clock):
        await blob_store.put(b"old")
        clock.advance(timedelta(hours=23))
        young = await blob_store.put(b"young")
        clock.advance(timedelta(hours=2))

        summary = await collector.collect()

        assert summary.deleted_count == 1
        assert summary.skipped_recent_count == 1
        assert [b.id for b in await blob_store.list()] == [young]

    @pytest.mark.asyncio
    async def test_reference_without_blob_is_counted(self, collector, session_maker, client_user):
        async with session_maker() as session, session.begin():
            session.add(DietLog(user_id=client_user.id, meal_type=MealType.LUNCH, title="Salad", image_id="gone"))

        summary = await collector.collect()

        assert summary.referenced_count == 1
        assert summary.total_storage_files == 0

    @pytest.mark.asyncio
    async def test_failed_delete_is_counted_not_raised(self, session_maker, tmp_path, clock):
        store = FlakyBlobStore(session_maker, tmp_path / "flaky", clock=clock, failing=set())
        stuck = await store.put(b"stuck")
        await store.put(b"removable")
        store.failing.add(stuck)
        clock.advance(timedelta(days=2))

        summary = await StorageReferenceCollector(session_maker, store, clock=clock).collect()

        assert summary.failed_count == 1
        assert summary.deleted_count == 1
        assert [b.id for b in await store.list()] == [stuck]

    @pytest.mark.asyncio
    async def test_sweep_updates_metrics(self, collector, blob_store, clock):
        runs_before = registry.get_sample_value("storage_cleanup_runs_total") or 0
        deleted_before = registry.get_sample_value("storage_cleanup_blobs_total", {"outcome": "deleted"}) or 0
        await blob_store.put(b"orphan")
        clock.advance(timedelta(days=1))

        await collector.collect()

        assert registry.get_sample_value("storage_cleanup_runs_total") == runs_before + 1
        assert registry.get_sample_value("storage_cleanup_blobs_total", {"outcome": "deleted"}) == deleted_before + 1


class TestLocalBlobStore:

    @pytest.mark.asyncio
    async def test_put_get_and_list(self, blob_store, clock):
        blob_id = await blob_store.put(b"\x89PNG", "image/png")

        assert await blob_store.get(blob_id) == b"\x89PNG"
        [info] = await blob_store.list()
        assert info.id == blob_id
        assert info.size == 4
        assert info.content_type == "image/png"
        assert info.created_at == clock.now

    @pytest.mark.asyncio
    async def test_delete_unknown_blob(self, blob_store):
        with pytest.raises(NotFoundError) as exc_info:
            await blob_store.delete("missing")

        assert exc_info.value.code == "NF_STORAGE_BLOB_001"

    @pytest.mark.asyncio
    async def test_failed_metadata_insert_removes_file(self, tmp_path, clock):
        """A put whose metadata row cannot be written leaves no file behind."""
        # No init_db: the storage_blobs table does not exist
        bare_engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
        store = LocalBlobStore(create_session_maker(bare_engine), tmp_path / "unlisted", clock=clock)

        try:
            with pytest.raises(SQLAlchemyError):
                await store.put(b"bytes", "image/jpeg")
        finally:
            await bare_engine.dispose()

        assert list((tmp_path / "unlisted").iterdir()) == []
