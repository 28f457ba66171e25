"""
Notes feature: upload, search and listing pipelines.

Upload order matters: the blob is written first, then the text fields are
moderated, and a rejected upload deletes its blob again. The metadata row is
only written after both succeed. If the process dies between the blob write
and the rollback (or the metadata insert fails) the blob is orphaned; the
orphan sweep in notehub.background picks those up.
"""

import logging
from typing import BinaryIO

from notehub.config import Settings, get_settings
from notehub.core.exceptions import (
    AppBaseError,
    ContentFlaggedError,
    FileTooLargeError,
    InvalidBranchError,
    MissingFileError,
    StoreError,
    UnsupportedFileTypeError,
)
from notehub.core.moderation import find_banned_term
from notehub.core.storage import BlobStore, IncomingFile
from notehub.features.knowledge.service import KnowledgeService
from notehub.features.notes.schemas import Branch
from notehub.features.notes.store import NoteStore

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
MODERATED_FIELDS = ("topic", "description")


def normalize_path(path: str) -> str:
    """Use forward slashes regardless of the OS that wrote the blob."""
    return path.replace("\\", "/")


class NotesService:
    """Orchestrates the note store, blob store and summary synthesizer."""

    def __init__(
        self,
        store: NoteStore | None,
        blobs: BlobStore,
        settings: Settings | None = None,
        knowledge: KnowledgeService | None = None,
    ):
        self.store = store
        self.blobs = blobs
        self.settings = settings or get_settings()
        self.knowledge = knowledge or KnowledgeService(self.settings.SEARCH_FALLBACK_THRESHOLD)

    # ── Upload ───────────────────────────────────────────

    def upload_note(
        self,
        branch: str,
        subject: str,
        topic: str,
        description: str | None,
        file: IncomingFile | None,
        stream: BinaryIO | None,
    ) -> dict:
        """Store the PDF, moderate the text fields, then persist the note.

        Raises:
            MissingFileError / UnsupportedFileTypeError / InvalidBranchError:
                before anything is written.
            ContentFlaggedError / FileTooLargeError: after the blob was
                written; the blob is deleted first.
            StoreError: blob or metadata write failed (raw message).
        """
        if file is None or stream is None:
            raise MissingFileError()
        if file.content_type != PDF_CONTENT_TYPE:
            raise UnsupportedFileTypeError(file.content_type)
        if branch not in Branch.values():
            raise InvalidBranchError(branch, Branch.values())

        try:
            blob = self.blobs.save(file, stream)
        except Exception as e:
            logger.error(f"Blob write failed for {file.filename}: {e}")
            raise StoreError(str(e))

        try:
            self._check_blob(blob.size, description=description, topic=topic)
        except AppBaseError:
            self.blobs.delete(blob.path)
            raise

        record = {
            "branch": branch,
            "subject": subject,
            "topic": topic,
            "description": description,
            "file_path": normalize_path(blob.path),
            "original_name": file.filename,
        }
        try:
            note = self.store.insert(record)
        except StoreError:
            raise
        except Exception as e:
            logger.error(f"Note insert failed, blob {blob.path} left orphaned: {e}")
            raise StoreError(str(e))

        logger.info(f"📄 Stored note {note.get('id')} ({branch} / {subject} / {topic})")
        return note

    def _check_blob(self, size: int, **fields: str | None) -> None:
        if size > self.settings.MAX_UPLOAD_BYTES:
            raise FileTooLargeError(self.settings.MAX_UPLOAD_BYTES)
        banned = self.settings.banned_keywords
        for name in MODERATED_FIELDS:
            term = find_banned_term(fields.get(name), banned)
            if term is not None:
                logger.warning(f"Upload rejected: '{name}' contains banned term '{term}'")
                raise ContentFlaggedError(name)

    # ── Search ───────────────────────────────────────────

    def search_notes(self, query: str | None, branch: str | None = None) -> dict:
        """Full-text search plus a summary card when fewer than threshold hits.

        An empty query short-circuits without touching the store, so it
        answers even when the store failed to open.
        """
        if not query:
            return {"internal": [], "external": None}
        if self.store is None:
            raise StoreError("Note store unavailable", detail="The database connection failed at startup.")

        try:
            internal = self.store.search(query, self.settings.SEARCH_RESULT_LIMIT)
        except Exception as e:
            logger.error(f"Search for '{query}' failed: {e}")
            raise StoreError("Search failed")

        external = None
        if self.knowledge.needs_summary(len(internal)):
            external = self.knowledge.summarize(query, branch)
        return {"internal": internal, "external": external}

    # ── Listing ──────────────────────────────────────────

    def list_recent(self) -> list[dict]:
        """Most recent notes first, capped at RECENT_NOTES_LIMIT."""
        try:
            return self.store.list_recent(self.settings.RECENT_NOTES_LIMIT)
        except StoreError:
            raise
        except Exception as e:
            logger.error(f"Listing notes failed: {e}")
            raise StoreError(str(e))
