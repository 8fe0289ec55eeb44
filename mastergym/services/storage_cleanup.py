"""Orphaned image storage collection.

Mark-and-sweep over blob storage. The roots are the storage reference
columns of diet logs, gallery items, success stories and transformation
images. Blobs nobody references are deleted once they are at least
``MIN_ORPHAN_BLOB_AGE`` old; younger blobs may belong to an upload whose
record has not been written yet, so they are always left alone.
"""
import asyncio
from collections.abc import Callable
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import InstrumentedAttribute

from mastergym.core.clock import utcnow
from mastergym.core.logging import get_logger
from mastergym.core.metrics import track_storage_cleanup
from mastergym.repositories.media_repository import (
    STORAGE_REFERENCE_COLUMNS,
    MediaReferenceRepository,
)
from mastergym.schemas.storage import StorageCleanupSummary
from mastergym.storage.blob_store import BlobStore

logger = get_logger(__name__)

MIN_ORPHAN_BLOB_AGE = timedelta(hours=24)


class StorageReferenceCollector:
    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        blob_store: BlobStore,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._session_maker = session_maker
        self._blob_store = blob_store
        self._clock = clock

    async def _load_references(self, column: InstrumentedAttribute) -> list[str]:
        async with self._session_maker() as session:
            return await MediaReferenceRepository(session).list_storage_references(column)

    async def collect(self) -> StorageCleanupSummary:
        """Run one sweep and report what happened to each unreferenced blob.

        A failed delete is logged and counted; the sweep carries on.
        """
        now = self._clock()

        *reference_lists, blobs = await asyncio.gather(
            *(self._load_references(column) for column in STORAGE_REFERENCE_COLUMNS),
            self._blob_store.list(),
        )

        referenced: set[str] = set()
        for references in reference_lists:
            referenced.update(references)

        summary = StorageCleanupSummary(
            referenced_count=len(referenced),
            total_storage_files=len(blobs),
        )

        for blob in blobs:
            if blob.id in referenced:
                continue

            if now - blob.created_at < MIN_ORPHAN_BLOB_AGE:
                summary.skipped_recent_count += 1
                continue

            try:
                await self._blob_store.delete(blob.id)
            except Exception as e:
                summary.failed_count += 1
                logger.warning("orphaned_blob_delete_failed", blob_id=blob.id, error=str(e))
                continue
            summary.deleted_count += 1

        track_storage_cleanup(
            deleted=summary.deleted_count,
            skipped_recent=summary.skipped_recent_count,
            failed=summary.failed_count,
        )
        logger.info("orphaned_storage_sweep_finished", **summary.model_dump())
        return summary
