"""
FastAPI dependency injection functions.

Store handles are created in the app lifespan (or passed to create_app by
tests) and read back from `app.state` here.
"""

from fastapi import Depends, Request

from notehub.config import get_settings
from notehub.core.exceptions import StoreError
from notehub.core.storage import BlobStore
from notehub.features.notes.service import NotesService
from notehub.features.notes.store import NoteStore


def get_note_store(request: Request) -> NoteStore:
    """Dependency: the note store opened at startup."""
    store = getattr(request.app.state, "note_store", None)
    if store is None:
        raise StoreError("Note store unavailable", detail="The database connection failed at startup.")
    return store


def get_blob_store(request: Request) -> BlobStore:
    """Dependency: the blob store opened at startup."""
    return request.app.state.blob_store


def get_notes_service(
    request: Request,
    store: NoteStore = Depends(get_note_store),
    blobs: BlobStore = Depends(get_blob_store),
) -> NotesService:
    settings = getattr(request.app.state, "settings", None) or get_settings()
    return NotesService(store, blobs, settings=settings)


def get_optional_note_store(request: Request) -> NoteStore | None:
    """Dependency: the note store, or None when it failed to open."""
    return getattr(request.app.state, "note_store", None)


def get_search_service(
    request: Request,
    store: NoteStore | None = Depends(get_optional_note_store),
    blobs: BlobStore = Depends(get_blob_store),
) -> NotesService:
    """Search only needs the store for a non-empty query; the service checks."""
    settings = getattr(request.app.state, "settings", None) or get_settings()
    return NotesService(store, blobs, settings=settings)
