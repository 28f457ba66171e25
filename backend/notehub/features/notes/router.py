"""
Notes feature: API routes for uploading, searching and listing notes.
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from notehub.core.dependencies import get_notes_service, get_search_service
from notehub.core.storage import IncomingFile
from notehub.features.notes.schemas import NoteResponse, SearchResponse, UploadResponse
from notehub.features.notes.service import NotesService

router = APIRouter()


@router.post("/upload", status_code=status.HTTP_201_CREATED, response_model=UploadResponse)
async def upload_note(
    branch: str = Form(...),
    subject: str = Form(...),
    topic: str = Form(...),
    description: str | None = Form(None),
    file: UploadFile | None = File(None),
    service: NotesService = Depends(get_notes_service),
):
    """
    Upload a PDF note with its branch/subject/topic tags.
    - Only `application/pdf` is accepted.
    - Topic and description go through keyword moderation; a flagged upload
      has its stored file removed again.
    """
    incoming = None
    stream = None
    if file is not None:
        incoming = IncomingFile(filename=file.filename or "upload.pdf", content_type=file.content_type)
        stream = file.file

    service.upload_note(
        branch=branch,
        subject=subject,
        topic=topic,
        description=description,
        file=incoming,
        stream=stream,
    )
    return {"message": "Upload successful!"}


@router.get("/search", response_model=SearchResponse)
async def search_notes(
    q: str | None = None,
    branch: str | None = None,
    service: NotesService = Depends(get_search_service),
):
    """Full-text search; adds a concept summary when fewer than 3 notes match."""
    return service.search_notes(q, branch)


@router.get("/notes", response_model=list[NoteResponse])
async def list_notes(service: NotesService = Depends(get_notes_service)):
    """The 20 most recent notes, newest first."""
    return service.list_recent()
