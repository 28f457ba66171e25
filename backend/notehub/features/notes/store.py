"""
Notes feature: note metadata stores.

`SupabaseNoteStore` is the production store (Postgres behind Supabase, full-text
search through the `search_notes` RPC, see backend/sql/notes.sql).
`InMemoryNoteStore` keeps records in a list and is used by the tests.

Rows use snake_case columns: id, branch, subject, topic, description,
file_path, original_name, upload_date.
"""

import re
import uuid
import logging
from datetime import datetime, timezone

from supabase import Client

from notehub.core.exceptions import StoreError

logger = logging.getLogger(__name__)


class NoteStore:
    """Interface for note metadata persistence."""

    def insert(self, record: dict) -> dict:
        raise NotImplementedError

    def search(self, query: str, limit: int) -> list[dict]:
        raise NotImplementedError

    def list_recent(self, limit: int) -> list[dict]:
        raise NotImplementedError

    def list_file_paths(self) -> set[str]:
        raise NotImplementedError

    def close(self) -> None:
        pass


class SupabaseNoteStore(NoteStore):
    """Note store backed by a Supabase table + text-search RPC."""

    def __init__(self, client: Client, table: str = "notes", search_rpc: str = "search_notes"):
        self._client: Client | None = client
        self.table = table
        self.search_rpc = search_rpc

    @property
    def db(self) -> Client:
        if self._client is None:
            raise StoreError("Note store is closed")
        return self._client

    def insert(self, record: dict) -> dict:
        """Insert one note; upload_date and id come from column defaults."""
        result = self.db.table(self.table).insert(record).execute()
        return result.data[0]

    def search(self, query: str, limit: int) -> list[dict]:
        """Full-text search over subject/topic/description, ranked by ts_rank."""
        result = self.db.rpc(
            self.search_rpc,
            {"search_query": query, "match_count": limit},
        ).execute()
        return result.data if result.data else []

    def list_recent(self, limit: int) -> list[dict]:
        result = (
            self.db.table(self.table)
            .select("*")
            .order("upload_date", desc=True)
            .limit(limit)
            .execute()
        )
        return result.data

    def list_file_paths(self) -> set[str]:
        result = self.db.table(self.table).select("file_path").execute()
        return {row["file_path"] for row in result.data or [] if row.get("file_path")}

    def close(self) -> None:
        self._client = None
        logger.info("Note store closed")


_WORD_RE = re.compile(r"\w+")


class InMemoryNoteStore(NoteStore):
    """List-backed store. Search ranks by number of query-term hits."""

    SEARCH_FIELDS = ("subject", "topic", "description")

    def __init__(self, records: list[dict] | None = None):
        self.records: list[dict] = []
        self.search_calls = 0
        self.closed = False
        for record in records or []:
            self.insert(record)

    def insert(self, record: dict) -> dict:
        self._check_open()
        row = dict(record)
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("upload_date", datetime.now(timezone.utc))
        row.setdefault("description", None)
        self.records.append(row)
        return dict(row)

    def search(self, query: str, limit: int) -> list[dict]:
        self._check_open()
        self.search_calls += 1
        terms = [t.lower() for t in _WORD_RE.findall(query)]
        if not terms:
            return []

        scored = []
        for position, row in enumerate(self.records):
            text = " ".join((row.get(f) or "") for f in self.SEARCH_FIELDS).lower()
            words = _WORD_RE.findall(text)
            score = sum(words.count(term) for term in terms)
            if score:
                scored.append((-score, position, row))
        scored.sort(key=lambda item: (item[0], item[1]))
        return [dict(row) for _, _, row in scored[:limit]]

    def list_recent(self, limit: int) -> list[dict]:
        self._check_open()
        ordered = sorted(
            enumerate(self.records),
            key=lambda item: (item[1]["upload_date"], item[0]),
            reverse=True,
        )
        return [dict(row) for _, row in ordered[:limit]]

    def list_file_paths(self) -> set[str]:
        self._check_open()
        return {row["file_path"] for row in self.records if row.get("file_path")}

    def close(self) -> None:
        self.closed = True

    def _check_open(self) -> None:
        if self.closed:
            raise StoreError("Note store is closed")
