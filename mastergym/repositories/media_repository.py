from __future__ import annotations
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute
from mastergym.models.media import DietLog, GalleryItem, SuccessStory, TransformationImage

# Every column that can keep a stored blob alive
STORAGE_REFERENCE_COLUMNS: tuple[InstrumentedAttribute, ...] = (
    DietLog.image_id,
    GalleryItem.storage_id,
    SuccessStory.image_storage_id,
    TransformationImage.image_storage_id,
)


class MediaReferenceRepository:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_storage_references(self, column: InstrumentedAttribute) -> list[str]:
        """Non-null storage ids held by ``column`` across its whole table."""
        result = await self._session.execute(
            select(column).where(column.is_not(None))
        )
        return list(result.scalars().all())
