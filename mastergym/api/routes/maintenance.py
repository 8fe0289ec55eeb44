"""Maintenance endpoints invoked by an external scheduler."""
from fastapi import APIRouter, Depends

from mastergym.api.routes.dependencies import get_storage_collector
from mastergym.schemas.storage import StorageCleanupSummary
from mastergym.services.storage_cleanup import StorageReferenceCollector

router = APIRouter()


@router.post("/storage-cleanup", response_model=StorageCleanupSummary)
async def cleanup_orphaned_storage(
    collector: StorageReferenceCollector = Depends(get_storage_collector),
):
    """Delete uploaded images that no record references and that are older than a day."""
    return await collector.collect()
