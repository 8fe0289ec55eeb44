"""
Delete uploaded images that no record references.

Runs one sweep of the orphaned storage collector and prints the summary as
JSON. Intended for cron-style schedulers, e.g. weekly on Sunday at 02:00 UTC:

    0 2 * * 0  python scripts/cleanup_orphaned_storage.py
"""

import asyncio
import os
import sys

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from mastergym.config.settings import get_settings
from mastergym.core.logging import configure_logging
from mastergym.db.database import async_session_maker, close_engine
from mastergym.services.storage_cleanup import StorageReferenceCollector
from mastergym.storage import LocalBlobStore


async def cleanup_orphaned_storage(blob_dir: str | None = None) -> None:
    blob_store = LocalBlobStore(async_session_maker, blob_dir or get_settings().blob_storage_dir)
    try:
        summary = await StorageReferenceCollector(async_session_maker, blob_store).collect()
    finally:
        await close_engine()
    print(summary.model_dump_json(indent=2))


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Delete orphaned image blobs")
    parser.add_argument(
        "--blob-dir",
        default=None,
        help="Blob storage directory (defaults to BLOB_STORAGE_DIR from settings)"
    )
    args = parser.parse_args()

    configure_logging()
    asyncio.run(cleanup_orphaned_storage(blob_dir=args.blob_dir))
