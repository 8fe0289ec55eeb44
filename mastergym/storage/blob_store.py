"""Blob storage for uploaded images."""
import asyncio
import uuid
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mastergym.core.clock import utcnow
from mastergym.core.exceptions import NotFoundError
from mastergym.core.logging import get_logger
from mastergym.models.storage_blob import StorageBlob
from mastergym.schemas.storage import BlobInfo

logger = get_logger(__name__)


class BlobStore(ABC):
    """Opaque-id blob storage that can list its contents with creation times."""

    @abstractmethod
    async def put(self, data: bytes, content_type: str | None = None) -> str: ...

    @abstractmethod
    async def get(self, blob_id: str) -> bytes: ...

    @abstractmethod
    async def delete(self, blob_id: str) -> None: ...

    @abstractmethod
    async def list(self) -> list[BlobInfo]: ...


class LocalBlobStore(BlobStore):
    """Blob bytes on the local filesystem, metadata in the ``storage_blobs`` table."""

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        root: str | Path,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._session_maker = session_maker
        self._root = Path(root)
        self._clock = clock

    def _path(self, blob_id: str) -> Path:
        return self._root / blob_id

    async def put(self, data: bytes, content_type: str | None = None) -> str:
        blob_id = uuid.uuid4().hex
        path = self._path(blob_id)
        await asyncio.to_thread(self._root.mkdir, parents=True, exist_ok=True)
        await asyncio.to_thread(path.write_bytes, data)

        try:
            async with self._session_maker() as session:
                async with session.begin():
                    session.add(StorageBlob(
                        id=blob_id,
                        content_type=content_type,
                        size=len(data),
                        created_at=self._clock(),
                    ))
        except Exception:
            # Without a metadata row the file would never be listed or collected
            await asyncio.to_thread(path.unlink, missing_ok=True)
            raise

        logger.info("blob_stored", blob_id=blob_id, size=len(data))
        return blob_id

    async def get(self, blob_id: str) -> bytes:
        async with self._session_maker() as session:
            blob = await session.get(StorageBlob, blob_id)
        if blob is None:
            raise NotFoundError("storage_blob", details={"blob_id": blob_id})
        return await asyncio.to_thread(self._path(blob_id).read_bytes)

    async def delete(self, blob_id: str) -> None:
        async with self._session_maker() as session:
            async with session.begin():
                blob = await session.get(StorageBlob, blob_id)
                if blob is None:
                    raise NotFoundError("storage_blob", details={"blob_id": blob_id})
                await session.delete(blob)

        # Metadata is gone, so the file is unreachable even if unlink fails
        await asyncio.to_thread(self._path(blob_id).unlink, missing_ok=True)
        logger.info("blob_deleted", blob_id=blob_id)

    async def list(self) -> list[BlobInfo]:
        async with self._session_maker() as session:
            result = await session.execute(select(StorageBlob).order_by(StorageBlob.created_at))
            blobs = result.scalars().all()
        return [
            BlobInfo(
                id=blob.id,
                created_at=blob.created_at,
                size=blob.size,
                content_type=blob.content_type,
            )
            for blob in blobs
        ]
