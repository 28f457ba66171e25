"""
Blob storage for uploaded PDF files.

The stores only deal with bytes and paths; note metadata lives in the note
store and points at a blob through its `file_path` string. The destination
name of a blob is chosen by a naming strategy (a plain function), so tests can
swap in deterministic names or an in-memory store.
"""

import os
import re
import shutil
import time
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import BinaryIO, Callable

from supabase import Client

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IncomingFile:
    """What we know about a file before it is stored."""
    filename: str
    content_type: str | None = None


@dataclass(frozen=True)
class StoredBlob:
    path: str  # store-native path, as written
    name: str
    size: int


@dataclass(frozen=True)
class BlobInfo:
    path: str
    created_at: datetime


NameStrategy = Callable[[IncomingFile], str]

# Attempts at finding a free name before giving up on a save.
MAX_NAME_ATTEMPTS = 100


def timestamped_name(file: IncomingFile) -> str:
    """`<epoch-ms>-<original name>` with whitespace runs replaced by '-'."""
    base = os.path.basename(file.filename.replace("\\", "/"))
    safe = re.sub(r"\s+", "-", base)
    return f"{int(time.time() * 1000)}-{safe}"


def candidate_names(name: str):
    """`name`, then `stem-1.ext`, `stem-2.ext`, ... for collision retries."""
    yield name
    stem, ext = os.path.splitext(name)
    for attempt in range(1, MAX_NAME_ATTEMPTS):
        yield f"{stem}-{attempt}{ext}"


class BlobStore:
    """Interface shared by the local-disk, Supabase and in-memory stores.

    `save` never replaces an existing blob: two uploads that get the same
    name from the strategy end up as two separate blobs.
    """

    def save(self, file: IncomingFile, stream: BinaryIO) -> StoredBlob:
        raise NotImplementedError

    def delete(self, path: str) -> bool:
        raise NotImplementedError

    def list_blobs(self) -> list[BlobInfo]:
        raise NotImplementedError


class LocalBlobStore(BlobStore):
    """Writes blobs into a directory that is also served as static files."""

    def __init__(self, root: str, name_strategy: NameStrategy = timestamped_name):
        self.root = root
        self.name_strategy = name_strategy
        os.makedirs(self.root, exist_ok=True)

    def save(self, file: IncomingFile, stream: BinaryIO) -> StoredBlob:
        for name in candidate_names(self.name_strategy(file)):
            path = os.path.join(self.root, name)
            try:
                out = open(path, "xb")
            except FileExistsError:
                continue
            with out:
                shutil.copyfileobj(stream, out)
            size = os.path.getsize(path)
            logger.debug(f"Stored blob {path} ({size} bytes)")
            return StoredBlob(path=path, name=name, size=size)
        raise FileExistsError(f"No free blob name for {file.filename}")

    def delete(self, path: str) -> bool:
        try:
            os.remove(self._resolve(path))
        except FileNotFoundError:
            return False
        logger.info(f"🗑️  Deleted blob {path}")
        return True

    def list_blobs(self) -> list[BlobInfo]:
        blobs = []
        with os.scandir(self.root) as entries:
            for entry in entries:
                if not entry.is_file():
                    continue
                mtime = entry.stat().st_mtime
                blobs.append(BlobInfo(
                    path=os.path.join(self.root, entry.name),
                    created_at=datetime.fromtimestamp(mtime, tz=timezone.utc),
                ))
        return blobs

    def _resolve(self, path: str) -> str:
        # Stored paths are forward-slash normalised; map back onto this root.
        name = os.path.basename(path.replace("\\", "/"))
        return os.path.join(self.root, name)


class SupabaseBlobStore(BlobStore):
    """Blobs in a Supabase Storage bucket; paths are `<bucket>/<object name>`.

    Uploads are not upserts, so a name clash makes Supabase reject the second
    upload instead of replacing the first blob.
    """

    LIST_PAGE_SIZE = 100

    def __init__(self, client: Client, bucket: str = "notes", name_strategy: NameStrategy = timestamped_name):
        self.client = client
        self.bucket = bucket
        self.name_strategy = name_strategy

    def save(self, file: IncomingFile, stream: BinaryIO) -> StoredBlob:
        name = self.name_strategy(file)
        data = stream.read()
        self.client.storage.from_(self.bucket).upload(
            path=name,
            file=data,
            file_options={"content-type": file.content_type or "application/octet-stream"},
        )
        logger.debug(f"Stored blob {self.bucket}/{name} ({len(data)} bytes)")
        return StoredBlob(path=f"{self.bucket}/{name}", name=name, size=len(data))

    def delete(self, path: str) -> bool:
        removed = self.client.storage.from_(self.bucket).remove([self._object_name(path)])
        if removed:
            logger.info(f"🗑️  Deleted blob {path}")
        return bool(removed)

    def list_blobs(self) -> list[BlobInfo]:
        blobs = []
        offset = 0
        while True:
            page = self.client.storage.from_(self.bucket).list(
                "", {"limit": self.LIST_PAGE_SIZE, "offset": offset}
            ) or []
            for obj in page:
                created = obj.get("created_at")
                if not obj.get("name") or not created:
                    continue  # folders carry no timestamps
                blobs.append(BlobInfo(
                    path=f"{self.bucket}/{obj['name']}",
                    created_at=datetime.fromisoformat(created.replace("Z", "+00:00")),
                ))
            if len(page) < self.LIST_PAGE_SIZE:
                return blobs
            offset += self.LIST_PAGE_SIZE

    def _object_name(self, path: str) -> str:
        path = path.replace("\\", "/")
        prefix = f"{self.bucket}/"
        return path[len(prefix):] if path.startswith(prefix) else path


class InMemoryBlobStore(BlobStore):
    """Dict-backed store for tests. `sep` lets tests mimic Windows paths."""

    def __init__(
        self,
        root: str = "uploads",
        name_strategy: NameStrategy = timestamped_name,
        sep: str = "/",
    ):
        self.root = root
        self.name_strategy = name_strategy
        self.sep = sep
        self.blobs: dict[str, bytes] = {}
        self.created: dict[str, datetime] = {}

    def save(self, file: IncomingFile, stream: BinaryIO) -> StoredBlob:
        for name in candidate_names(self.name_strategy(file)):
            if name in self.blobs:
                continue
            data = stream.read()
            self.blobs[name] = data
            self.created[name] = datetime.now(timezone.utc)
            return StoredBlob(path=f"{self.root}{self.sep}{name}", name=name, size=len(data))
        raise FileExistsError(f"No free blob name for {file.filename}")

    def delete(self, path: str) -> bool:
        name = path.replace("\\", "/").rsplit("/", 1)[-1]
        self.created.pop(name, None)
        return self.blobs.pop(name, None) is not None

    def list_blobs(self) -> list[BlobInfo]:
        return [
            BlobInfo(path=f"{self.root}{self.sep}{name}", created_at=self.created[name])
            for name in self.blobs
        ]
