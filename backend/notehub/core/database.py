"""
Database connections: Supabase client setup.

The blob store is built with the app. The note store handle is opened once in the app lifespan, kept on `app.state`
and closed on shutdown. Nothing here is cached at module level.
"""

import logging

from supabase import create_client, Client

from notehub.config import Settings
from notehub.core.storage import BlobStore, LocalBlobStore, SupabaseBlobStore
from notehub.features.notes.store import SupabaseNoteStore

logger = logging.getLogger(__name__)


def create_supabase_client(settings: Settings) -> Client:
    """Build a Supabase client from settings (anon key)."""
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)


def open_note_store(settings: Settings) -> SupabaseNoteStore:
    """Open the production note store.

    Raises whatever the Supabase client raises for a bad URL or key; the
    lifespan logs it and store-backed routes answer 500 for that process.
    """
    client = create_supabase_client(settings)
    logger.info(f"Connected note store to {settings.SUPABASE_URL} (table={settings.NOTES_TABLE})")
    return SupabaseNoteStore(client, table=settings.NOTES_TABLE, search_rpc=settings.SEARCH_RPC)


def open_blob_store(settings: Settings) -> BlobStore:
    """Blob store selected by BLOB_BACKEND: a local directory or a Supabase bucket."""
    if settings.BLOB_BACKEND == "supabase":
        logger.info(f"Blob store: Supabase bucket '{settings.STORAGE_BUCKET}'")
        return SupabaseBlobStore(create_supabase_client(settings), bucket=settings.STORAGE_BUCKET)
    if settings.BLOB_BACKEND != "local":
        raise ValueError(f"Unknown BLOB_BACKEND '{settings.BLOB_BACKEND}' (expected local or supabase)")
    return LocalBlobStore(settings.UPLOAD_DIR)
