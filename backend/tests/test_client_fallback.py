"""API client Online/Offline results and the offline presentation views."""

import httpx
import pytest

from notehub.client.api import ApiError, NotesClient, Offline, Online
from notehub.client.offline import MOCK_NOTES, offline_search
from notehub.client.views import (
    OFFLINE_BANNER,
    home_view,
    render_home,
    render_search,
    search_view,
    upload_view,
)


def make_client(handler):
    return NotesClient(base_url="http://testserver/api", transport=httpx.MockTransport(handler))


def refuse(request):
    raise httpx.ConnectError("connection refused", request=request)


class TestNotesClient:
    def test_online_result(self):
        client = make_client(lambda req: httpx.Response(200, json=[{"subject": "Optics"}]))
        assert client.recent_notes() == Online(data=[{"subject": "Optics"}])

    def test_connection_error_is_offline(self):
        result = make_client(refuse).recent_notes()
        assert isinstance(result, Offline)
        assert result.reason.startswith("network")

    @pytest.mark.parametrize("code", [500, 502, 503])
    def test_server_errors_are_offline(self, code):
        result = make_client(lambda req: httpx.Response(code, json={"error": "x"})).search("q")
        assert result == Offline(reason=f"HTTP {code}")

    def test_client_errors_raise(self):
        client = make_client(
            lambda req: httpx.Response(400, json={"error": "Content flagged by moderation system."})
        )
        with pytest.raises(ApiError) as exc_info:
            client.upload({"branch": "Civil"}, "a.pdf", b"%PDF")
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Content flagged by moderation system."

    def test_search_sends_branch(self):
        seen = {}

        def handler(request):
            seen.update(request.url.params)
            return httpx.Response(200, json={"internal": [], "external": None})

        make_client(handler).search("entropy", branch="Mechanical")
        assert seen == {"q": "entropy", "branch": "Mechanical"}


class TestOfflineSearch:
    def test_matches_subject_or_topic_case_insensitive(self):
        result = offline_search("THERMO")
        assert [n["id"] for n in result["internal"]] == ["2"]

    def test_description_is_not_searched(self):
        assert offline_search("hydraulic")["internal"] == []

    def test_summary_always_present(self):
        # Even with several matches there is no threshold offline.
        notes = MOCK_NOTES + [dict(MOCK_NOTES[1], id=str(i)) for i in range(6, 10)]
        result = offline_search("thermodynamics", notes)
        assert len(result["internal"]) == 5
        assert result["external"]["title"] == "Generative Concept Summary"
        assert "(Offline Mode)" in result["external"]["summary"]


class TestViews:
    def test_home_online(self):
        view = home_view(Online(data=[{"subject": "Optics", "topic": "Lenses", "filePath": "uploads/a.pdf"}]))
        assert view.offline is False
        assert len(view.notes) == 1

    def test_home_offline_uses_sample_notes(self):
        view = home_view(Offline(reason="network"))
        assert view.offline is True
        assert view.notes == MOCK_NOTES
        rendered = render_home(view)
        assert rendered.startswith(OFFLINE_BANNER)
        assert "demo note" in rendered

    def test_search_online_passes_server_payload(self):
        payload = {"internal": [], "external": {"title": "Concept Summary: x", "summary": "s"}}
        view = search_view("x", Online(data=payload))
        assert view.offline is False
        assert view.external["title"] == "Concept Summary: x"
        assert "No notes found for 'x'" in render_search(view)

    def test_search_offline(self):
        view = search_view("bernoulli", Offline(reason="HTTP 500"))
        assert view.offline is True
        assert [n["topic"] for n in view.internal] == ["Bernoulli Principle"]
        assert "Generative Concept Summary" in render_search(view)

    def test_upload_outcomes(self):
        assert upload_view(lambda: Online(data={"message": "Upload successful!"})).status == "success"
        assert upload_view(lambda: Offline(reason="network")).status == "demo"

        def rejected():
            raise ApiError(400, "Only PDF files are allowed!")

        view = upload_view(rejected)
        assert view.status == "error"
        assert view.message == "Only PDF files are allowed!"


class TestAgainstApp:
    def test_client_reads_real_app(self, app, upload):
        from fastapi.testclient import TestClient

        upload(topic="Bernoulli")
        client = NotesClient(base_url="http://testserver/api")
        client._client = TestClient(app, base_url="http://testserver/api")
        result = client.recent_notes()
        assert isinstance(result, Online)
        assert result.data[0]["topic"] == "Bernoulli"
