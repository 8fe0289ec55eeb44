"""Blob storage package."""
from mastergym.storage.blob_store import BlobStore, LocalBlobStore

__all__ = ["BlobStore", "LocalBlobStore", "get_blob_store"]


def get_blob_store() -> BlobStore:
    """Blob store configured from settings, sharing the application's session factory."""
    from mastergym.config.settings import get_settings
    from mastergym.db.database import async_session_maker

    return LocalBlobStore(async_session_maker, get_settings().blob_storage_dir)
