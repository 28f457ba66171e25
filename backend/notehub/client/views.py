"""
Presentation layer: turn API results into view models and plain-text cards.

Each `*_view` function consumes an ApiResult, so the offline path can be
exercised without any network at all.
"""

from dataclasses import dataclass, field

from notehub.client.api import ApiError, ApiResult, Offline, Online
from notehub.client.offline import MOCK_NOTES, is_demo_note, offline_search

OFFLINE_BANNER = "⚠️  Backend offline: showing sample notes."


@dataclass
class HomeView:
    notes: list[dict]
    offline: bool = False


@dataclass
class SearchView:
    query: str
    internal: list[dict] = field(default_factory=list)
    external: dict | None = None
    offline: bool = False


@dataclass
class UploadView:
    status: str  # success | demo | error
    message: str


def home_view(result: ApiResult) -> HomeView:
    if isinstance(result, Online):
        return HomeView(notes=result.data)
    return HomeView(notes=list(MOCK_NOTES), offline=True)


def search_view(query: str, result: ApiResult) -> SearchView:
    if isinstance(result, Online):
        return SearchView(
            query=query,
            internal=result.data.get("internal", []),
            external=result.data.get("external"),
        )
    fallback = offline_search(query)
    return SearchView(query=query, internal=fallback["internal"], external=fallback["external"], offline=True)


def upload_view(send) -> UploadView:
    """Run an upload callable and describe the outcome.

    `send` is a zero-argument callable returning an ApiResult, so ApiError
    (bad file type, moderation) can be shown to the user as an error.
    """
    try:
        result = send()
    except ApiError as e:
        return UploadView(status="error", message=e.message)
    if isinstance(result, Offline):
        return UploadView(status="demo", message="Server disconnected or error. Demo upload simulated.")
    return UploadView(status="success", message=result.data.get("message", "Upload successful!"))


# ── Text rendering ───────────────────────────────────────

def render_note(note: dict) -> str:
    lines = [
        f"[{note.get('branch', '')}] {note.get('subject', '')}: {note.get('topic', '')}",
    ]
    if note.get("description"):
        lines.append(f"    {note['description']}")
    if is_demo_note(note):
        lines.append("    (demo note, start the backend to download real files)")
    else:
        lines.append(f"    {note.get('filePath', '')}")
    return "\n".join(lines)


def render_summary(card: dict) -> str:
    return f"💡 {card['title']}\n    {card['summary']}"


def render_home(view: HomeView) -> str:
    parts = [OFFLINE_BANNER] if view.offline else []
    parts.append("Recent uploads")
    parts.extend(render_note(n) for n in view.notes)
    return "\n".join(parts)


def render_search(view: SearchView) -> str:
    parts = [OFFLINE_BANNER] if view.offline else []
    if view.external:
        parts.append(render_summary(view.external))
    if view.internal:
        parts.append(f"Results for '{view.query}'")
        parts.extend(render_note(n) for n in view.internal)
    else:
        parts.append(f"No notes found for '{view.query}'")
    return "\n".join(parts)
