from datetime import datetime

from pydantic import BaseModel


class BlobInfo(BaseModel):
    id: str
    created_at: datetime
    size: int = 0
    content_type: str | None = None


class StorageCleanupSummary(BaseModel):
    deleted_count: int = 0
    skipped_recent_count: int = 0
    failed_count: int = 0
    referenced_count: int = 0
    total_storage_files: int = 0
