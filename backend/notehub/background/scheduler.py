"""
Background scheduler for maintenance jobs.

Uses APScheduler's AsyncIOScheduler; one scheduler per app, created and
started by the lifespan when ORPHAN_SWEEP_ENABLED is set.
"""

import logging
from datetime import timedelta

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from fastapi import FastAPI

from notehub.background.orphan_sweep import sweep_orphan_blobs

logger = logging.getLogger(__name__)

ORPHAN_SWEEP_JOB_ID = "orphan_sweep_job"


def run_orphan_sweep(app: FastAPI) -> dict | None:
    """Job body: sweep with the app's current store handles."""
    store = app.state.note_store
    if store is None:
        logger.warning("Skipping orphan sweep: note store unavailable")
        return None
    max_age = timedelta(hours=app.state.settings.ORPHAN_MAX_AGE_HOURS)
    return sweep_orphan_blobs(store, app.state.blob_store, max_age=max_age)


def create_scheduler(app: FastAPI) -> AsyncIOScheduler:
    """Build a scheduler with the orphan sweep registered (not started)."""
    settings = app.state.settings
    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        run_orphan_sweep,
        IntervalTrigger(hours=settings.ORPHAN_SWEEP_INTERVAL_HOURS),
        args=[app],
        id=ORPHAN_SWEEP_JOB_ID,
        replace_existing=True,
    )
    logger.info(f"Registered {ORPHAN_SWEEP_JOB_ID} every {settings.ORPHAN_SWEEP_INTERVAL_HOURS}h")
    return scheduler
