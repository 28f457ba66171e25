"""
HTTP client for the NoteHub API.

Calls return `Online(data)` or `Offline(reason)` instead of raising for the
"backend is down" class of failures (connection errors and 5xx responses).
Any other HTTP error is logged and raised as ApiError.
"""

import logging
from dataclasses import dataclass
from typing import Any, BinaryIO, Union

import httpx

from notehub.config import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Online:
    data: Any


@dataclass(frozen=True)
class Offline:
    reason: str


ApiResult = Union[Online, Offline]


class ApiError(Exception):
    """Non-5xx HTTP error from the API (validation, moderation, ...)."""
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


class NotesClient:
    """Thin httpx wrapper around /api/notes, /api/search and /api/upload."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=float(timeout if timeout is not None else settings.API_TIMEOUT),
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "NotesClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ── Endpoints ────────────────────────────────────────

    def recent_notes(self) -> ApiResult:
        return self._request("GET", "/notes")

    def search(self, query: str, branch: str | None = None) -> ApiResult:
        params = {"q": query}
        if branch:
            params["branch"] = branch
        return self._request("GET", "/search", params=params)

    def upload(
        self,
        fields: dict[str, str],
        filename: str,
        content: bytes | BinaryIO,
        content_type: str = "application/pdf",
    ) -> ApiResult:
        return self._request(
            "POST",
            "/upload",
            data=fields,
            files={"file": (filename, content, content_type)},
        )

    # ── Internals ────────────────────────────────────────

    def _request(self, method: str, path: str, **kwargs) -> ApiResult:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.TransportError as e:
            logger.warning(f"Backend offline ({type(e).__name__}). Switching to mock data.")
            return Offline(reason=f"network: {e}")

        if response.status_code >= 500:
            logger.warning(f"Backend erroring (HTTP {response.status_code}). Switching to mock data.")
            return Offline(reason=f"HTTP {response.status_code}")

        if response.is_error:
            message = _error_message(response)
            logger.error(f"{method} {path} failed: HTTP {response.status_code} {message}")
            raise ApiError(response.status_code, message)

        return Online(data=response.json())


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.text
