"""
Background cleanup job: delete stored PDFs that no note record references.

A blob becomes orphaned when the process dies between writing it and
finishing the upload, or when the metadata insert fails. Blobs younger than
`max_age` are left alone so in-flight uploads are never touched.
"""

import logging
from datetime import datetime, timedelta, timezone

from notehub.core.storage import BlobStore
from notehub.features.notes.service import normalize_path
from notehub.features.notes.store import NoteStore

logger = logging.getLogger(__name__)


def sweep_orphan_blobs(
    store: NoteStore,
    blobs: BlobStore,
    max_age: timedelta = timedelta(hours=24),
    now: datetime | None = None,
) -> dict:
    """
    Remove unreferenced blobs older than `max_age`.

    Returns:
        dict: { "deleted": int, "skipped": int, "errors": int }
    """
    stats = {"deleted": 0, "skipped": 0, "errors": 0}
    now = now or datetime.now(timezone.utc)

    try:
        referenced = {normalize_path(p) for p in store.list_file_paths()}
        stored = blobs.list_blobs()
    except Exception as e:
        logger.error(f"sweep_orphan_blobs failed: {e}")
        stats["errors"] += 1
        return stats

    for blob in stored:
        if normalize_path(blob.path) in referenced:
            stats["skipped"] += 1
            continue

        age = now - blob.created_at
        if age <= max_age:
            stats["skipped"] += 1
            continue

        try:
            blobs.delete(blob.path)
            logger.info(f"🗑️  Deleted orphaned blob: {blob.path} (age: {int(age.total_seconds()) // 3600}h)")
            stats["deleted"] += 1
        except Exception as e:
            logger.warning(f"Failed to delete orphaned blob {blob.path}: {e}")
            stats["errors"] += 1

    logger.info(
        f"✅ Orphan sweep finished: "
        f"deleted={stats['deleted']}, skipped={stats['skipped']}, errors={stats['errors']}"
    )
    return stats
