"""Shared fixtures: an app wired to in-memory stores."""

import itertools

import pytest
from fastapi.testclient import TestClient

from notehub.config import Settings
from notehub.core.storage import IncomingFile, InMemoryBlobStore
from notehub.features.notes.store import InMemoryNoteStore
from notehub.main import create_app

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\ntrailer\n<<>>\n%%EOF\n"


def sequential_names():
    """Deterministic naming strategy: 1-<name>, 2-<name>, ..."""
    counter = itertools.count(1)

    def strategy(file: IncomingFile) -> str:
        return f"{next(counter)}-{file.filename.replace(' ', '-')}"

    return strategy


@pytest.fixture
def settings(tmp_path):
    return Settings(UPLOAD_DIR=str(tmp_path / "uploads"), SUPABASE_KEY="test")


@pytest.fixture
def note_store():
    return InMemoryNoteStore()


@pytest.fixture
def blob_store():
    return InMemoryBlobStore(name_strategy=sequential_names())


@pytest.fixture
def app(settings, note_store, blob_store):
    return create_app(settings=settings, note_store=note_store, blob_store=blob_store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def upload(client):
    """POST /api/upload with sensible defaults; override any field."""

    def _upload(
        branch="Civil",
        subject="Fluid Mechanics",
        topic="Bernoulli",
        description="intro",
        filename="notes.pdf",
        content=PDF_BYTES,
        content_type="application/pdf",
        send_file=True,
    ):
        data = {"branch": branch, "subject": subject, "topic": topic}
        if description is not None:
            data["description"] = description
        files = {"file": (filename, content, content_type)} if send_file else None
        return client.post("/api/upload", data=data, files=files)

    return _upload
