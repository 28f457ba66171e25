"""
Notes feature: Schemas for request/response models.

Store rows are snake_case; the API speaks camelCase (filePath, originalName,
uploadDate) through the alias generator.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Branch(str, Enum):
    """Academic disciplines a note can be filed under."""
    COMPUTER_SCIENCE = "Computer Science"
    INFORMATION_TECHNOLOGY = "Information Technology"
    MECHANICAL = "Mechanical"
    CIVIL = "Civil"
    ELECTRICAL = "Electrical"
    ELECTRONICS = "Electronics"
    OTHER = "Other"

    @classmethod
    def values(cls) -> list[str]:
        return [b.value for b in cls]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NoteResponse(CamelModel):
    """Response model for a stored note."""
    id: str
    branch: str
    subject: str
    topic: str
    description: str | None = None
    file_path: str
    original_name: str | None = None
    upload_date: datetime


class ExternalKnowledge(BaseModel):
    """Templated summary card shown when internal results are sparse."""
    source: str
    title: str
    summary: str


class SearchResponse(BaseModel):
    internal: list[NoteResponse] = []
    external: ExternalKnowledge | None = None


class UploadResponse(BaseModel):
    message: str
