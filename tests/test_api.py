"""
Tests for the HTTP gateway.
"""

import threading
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from conftest import FakeGenerator
from ytsummarizer.api.app import app, rate_limiter
from ytsummarizer.api.routes import get_orchestrator, summarize_video, watch_disconnect
from ytsummarizer.api.schemas import VideoRequest
from ytsummarizer.core.errors import GenerationFailure


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Give every test a fresh rate limit window."""
    rate_limiter.reset()
    yield
    rate_limiter.reset()


@pytest.fixture
def client_for(make_orchestrator):
    """Return a TestClient whose orchestrator uses fake collaborators."""

    def _client(**kwargs):
        orchestrator, _ = make_orchestrator(**kwargs)
        app.dependency_overrides[get_orchestrator] = lambda: orchestrator
        return TestClient(app)

    yield _client
    app.dependency_overrides.clear()


def test_summarize_success(client_for, test_video_url, cats_transcript):
    client = client_for(transcript=cats_transcript)

    response = client.post("/api/v1/summarize", json={"url": test_video_url})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "Success"
    assert body["source"] == "heuristic"
    assert body["summary"] == "Cats are mammals. They sleep a lot. They are popular pets."
    assert body["video_id"] == "V3TUEeB0kW0"
    assert body["request_id"]
    assert "X-Process-Time" in response.headers


def test_summarize_fallback_after_model_failure(client_for, test_video_url, five_sentence_transcript):
    client = client_for(
        transcript=five_sentence_transcript,
        generator=FakeGenerator(error=GenerationFailure("boom")),
    )

    body = client.post("/api/v1/summarize", json={"url": test_video_url}).json()

    assert body["status"] == "Success"
    assert body["source"] == "fallback"


def test_summarize_no_transcript(client_for, test_video_url):
    client = client_for(transcript="")

    response = client.post("/api/v1/summarize", json={"url": test_video_url})

    assert response.status_code == 200
    assert response.json()["status"] == "NoTranscript"


def test_summarize_error_keeps_request_id(client_for, test_video_url):
    client = client_for(source_error=RuntimeError("disk on fire"))

    response = client.post("/api/v1/summarize", json={"url": test_video_url})

    assert response.status_code == 500
    body = response.json()
    assert body["status"] == "Error"
    assert body["request_id"]
    assert "disk on fire" not in body["summary"]


def test_summarize_timeout(client_for, test_video_url, cats_transcript):
    client = client_for(transcript=cats_transcript, delay=10.0, timeout=0.2)

    response = client.post("/api/v1/summarize", json={"url": test_video_url})

    assert response.status_code == 504
    assert response.json()["status"] == "Timeout"


@pytest.mark.parametrize(
    "payload,message",
    [
        ({"url": ""}, "YouTube URL is required"),
        ({"url": "   "}, "YouTube URL is required"),
        ({}, "YouTube URL is required"),
        ({"url": "https://example.com/watch?v=dQw4w9WgXcQ"}, "Invalid YouTube URL"),
    ],
)
def test_summarize_rejects_bad_urls(client_for, payload, message):
    client = client_for(transcript="unused")

    response = client.post("/api/v1/summarize", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == message
    assert body["request_id"]
    assert body["timestamp"]


def test_summarize_before_startup_is_unavailable(test_video_url):
    app.dependency_overrides.clear()
    client = TestClient(app)

    response = client.post("/api/v1/summarize", json={"url": test_video_url})

    assert response.status_code == 503


def test_health_reports_degraded_model(client_for):
    client = client_for(transcript="unused")

    body = client.get("/health").json()

    assert body["status"] == "Healthy"
    checks = {check["name"]: check["status"] for check in body["checks"]}
    assert checks == {"self": "Healthy", "model": "Degraded"}


def test_health_ready_and_live(client_for):
    client = client_for(transcript="unused", generator=FakeGenerator())

    ready = client.get("/health/ready")
    live = client.get("/health/live")

    assert ready.status_code == 200
    assert ready.json()["details"] == {"summarizer": "ai"}
    assert live.status_code == 200


def test_root(client_for):
    client = client_for()

    body = client.get("/").json()

    assert body["name"] == "YouTube Transcript Summarizer"
    assert body["version"]


def test_summarize_rate_limited_per_client(client_for, monkeypatch, test_video_url, cats_transcript):
    monkeypatch.setattr(rate_limiter, "limit", 2)
    client = client_for(transcript=cats_transcript)

    responses = [client.post("/api/v1/summarize", json={"url": test_video_url}) for _ in range(3)]

    assert [response.status_code for response in responses] == [200, 200, 429]
    body = responses[2].json()
    assert body["error"] == "Too many requests"
    assert body["request_id"]
    assert int(responses[2].headers["Retry-After"]) > 0


def test_health_is_not_rate_limited(client_for, monkeypatch):
    monkeypatch.setattr(rate_limiter, "limit", 1)
    client = client_for(transcript="unused")

    statuses = [client.get("/health/live").status_code for _ in range(3)]

    assert statuses == [200, 200, 200]


@pytest.mark.anyio
async def test_client_disconnect_cancels_summary(make_orchestrator, test_video_url, cats_transcript):
    orchestrator, source = make_orchestrator(transcript=cats_transcript, delay=10.0, timeout=5.0)
    http_request = MagicMock()
    http_request.is_disconnected = AsyncMock(return_value=True)

    response = await summarize_video(
        VideoRequest(url=test_video_url),
        http_request=http_request,
        orchestrator=orchestrator,
    )

    assert response.status_code == 499
    assert b'"status":"Cancelled"' in response.body
    assert len(source.calls) == 1


@pytest.mark.anyio
async def test_watch_disconnect_waits_for_client_to_leave():
    http_request = MagicMock()
    http_request.is_disconnected = AsyncMock(side_effect=[False, True])
    cancel_event = threading.Event()

    await watch_disconnect(http_request, cancel_event)

    assert cancel_event.is_set()
    assert http_request.is_disconnected.await_count == 2
