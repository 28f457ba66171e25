"""
NoteHub - FastAPI Application Entry Point.

Anonymous PDF study notes: upload with moderation, recent listing and
full-text search with a concept-summary fallback.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from notehub.background.scheduler import create_scheduler
from notehub.config import Settings, get_settings
from notehub.core.database import open_blob_store, open_note_store
from notehub.core.exceptions import register_exception_handlers
from notehub.core.storage import BlobStore
from notehub.features.notes.router import router as notes_router
from notehub.features.notes.store import NoteStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: open the note store on startup, close on shutdown."""
    settings: Settings = app.state.settings
    logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)
    print(f"🚀 {settings.APP_NAME} v{settings.APP_VERSION} starting...")

    if app.state.note_store is None:
        try:
            app.state.note_store = open_note_store(settings)
            print(f"🔗 Supabase: {settings.SUPABASE_URL[:40]}...")
        except Exception as e:
            logger.error(f"❌ Note store connection error: {e}")

    scheduler = None
    if settings.ORPHAN_SWEEP_ENABLED:
        scheduler = create_scheduler(app)
        scheduler.start()
        print(f"🧹 Orphan sweep every {settings.ORPHAN_SWEEP_INTERVAL_HOURS}h")

    yield

    if scheduler is not None:
        scheduler.shutdown(wait=False)
    if app.state.note_store is not None:
        app.state.note_store.close()
    print("👋 Shutting down...")


def create_app(
    settings: Settings | None = None,
    note_store: NoteStore | None = None,
    blob_store: BlobStore | None = None,
) -> FastAPI:
    """Application factory.

    Tests pass in-memory stores; in production the note store is opened by
    the lifespan and the blob store follows BLOB_BACKEND.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Anonymous study notes: upload, browse and search PDFs",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.note_store = note_store
    app.state.blob_store = blob_store or open_blob_store(settings)

    # ── CORS ─────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # ── Routers & uploaded files ─────────────────────────
    app.include_router(notes_router, prefix="/api", tags=["Notes"])
    if settings.BLOB_BACKEND == "local":
        app.mount(
            settings.UPLOAD_URL_PREFIX,
            StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
            name="uploads",
        )

    # ── Health Check ─────────────────────────────────────
    @app.get("/", response_class=PlainTextResponse, tags=["System"])
    async def root():
        return f"✅ {settings.APP_NAME} backend is running!"

    @app.get("/health", tags=["System"])
    async def health_check():
        return {
            "status": "healthy",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "note_store": app.state.note_store is not None,
        }

    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("notehub.main:app", host=settings.HOST, port=settings.PORT)


app = create_app()


if __name__ == "__main__":
    run()
