"""Orphan blob sweep and its scheduler wiring."""

import io
from datetime import datetime, timedelta, timezone

from notehub.background.orphan_sweep import sweep_orphan_blobs
from notehub.background.scheduler import ORPHAN_SWEEP_JOB_ID, create_scheduler, run_orphan_sweep
from notehub.core.storage import IncomingFile, InMemoryBlobStore
from notehub.features.notes.store import InMemoryNoteStore


def _blobs_with(*names):
    blobs = InMemoryBlobStore(name_strategy=lambda f: f.filename)
    for name in names:
        blobs.save(IncomingFile(name), io.BytesIO(b"%PDF"))
    return blobs


class TestSweepOrphanBlobs:
    def test_deletes_only_old_unreferenced(self):
        blobs = _blobs_with("kept.pdf", "orphan.pdf", "fresh.pdf")
        old = datetime.now(timezone.utc) - timedelta(hours=48)
        blobs.created["kept.pdf"] = old
        blobs.created["orphan.pdf"] = old

        store = InMemoryNoteStore([{
            "branch": "Civil", "subject": "s", "topic": "t",
            "file_path": "uploads/kept.pdf", "original_name": "kept.pdf",
        }])

        stats = sweep_orphan_blobs(store, blobs, max_age=timedelta(hours=24))
        assert stats == {"deleted": 1, "skipped": 2, "errors": 0}
        assert sorted(blobs.blobs) == ["fresh.pdf", "kept.pdf"]

    def test_windows_paths_match_references(self):
        blobs = InMemoryBlobStore(sep="\\", name_strategy=lambda f: f.filename)
        blobs.save(IncomingFile("a.pdf"), io.BytesIO(b"%PDF"))
        store = InMemoryNoteStore([{
            "branch": "Civil", "subject": "s", "topic": "t",
            "file_path": "uploads/a.pdf", "original_name": "a.pdf",
        }])
        later = datetime.now(timezone.utc) + timedelta(days=3)
        stats = sweep_orphan_blobs(store, blobs, now=later)
        assert stats["deleted"] == 0
        assert "a.pdf" in blobs.blobs

    def test_store_failure_is_counted(self):
        store = InMemoryNoteStore()
        store.close()
        stats = sweep_orphan_blobs(store, _blobs_with("a.pdf"))
        assert stats == {"deleted": 0, "skipped": 0, "errors": 1}


class TestScheduler:
    def test_job_registered(self, app):
        scheduler = create_scheduler(app)
        job = scheduler.get_job(ORPHAN_SWEEP_JOB_ID)
        assert job is not None
        assert job.args == (app,)

    def test_run_skips_without_store(self, settings, blob_store):
        from notehub.main import create_app

        app = create_app(settings=settings, note_store=None, blob_store=blob_store)
        assert run_orphan_sweep(app) is None

    def test_run_uses_app_stores(self, app, blob_store):
        blob_store.save(IncomingFile("x.pdf"), io.BytesIO(b"%PDF"))
        stats = run_orphan_sweep(app)
        # Fresh blob is younger than ORPHAN_MAX_AGE_HOURS.
        assert stats == {"deleted": 0, "skipped": 1, "errors": 0}
