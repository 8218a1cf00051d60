"""
Configuration for pytest tests.
"""

import os
import shutil
import threading
from pathlib import Path

import pytest

# Must be set before ytsummarizer.config is imported by any test module.
TEST_DATA_DIR = Path("test_data")
os.environ["LOG_DIR"] = str(TEST_DATA_DIR / "logs")
os.environ["MODELS_DIR"] = str(TEST_DATA_DIR / "models")
os.environ["ENVIRONMENT"] = "development"

from ytsummarizer.core.orchestrator import SummarizationOrchestrator  # noqa: E402
from ytsummarizer.core.summarizer import TranscriptSummarizer  # noqa: E402


class FakeTranscriptSource:
    """Transcript source returning canned text, optionally after a delay."""

    def __init__(self, transcript="", error=None, delay=0.0):
        self.transcript = transcript
        self.error = error
        self.delay = delay
        self.calls = []

    def fetch(self, ref, cancel_event=None):
        self.calls.append(ref)
        if self.delay:
            # Returns early once the request is abandoned.
            (cancel_event or threading.Event()).wait(self.delay)
        if self.error is not None:
            raise self.error
        return self.transcript


class FakeGenerator:
    """Text generator returning canned text or raising."""

    def __init__(self, text="This video explains how cats spend their day.", error=None, available=True):
        self.text = text
        self.error = error
        self.available = available
        self.calls = []

    def generate(self, prompt, cancel_event=None, max_tokens=150, stop=None):
        self.calls.append({"prompt": prompt, "max_tokens": max_tokens, "stop": stop})
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Create and clean up the test data directory."""
    TEST_DATA_DIR.mkdir(exist_ok=True)
    yield
    shutil.rmtree(TEST_DATA_DIR, ignore_errors=True)


@pytest.fixture(scope="session")
def anyio_backend():
    """Configure anyio to use only asyncio backend."""
    return "asyncio"


@pytest.fixture(scope="session")
def test_video_url():
    """Return a test YouTube video URL."""
    return "https://youtu.be/V3TUEeB0kW0?si=-InVol0JhtWji-6R"


@pytest.fixture
def cats_transcript():
    return "Cats are mammals. They sleep a lot. They are popular pets."


@pytest.fixture
def five_sentence_transcript():
    return (
        "First we unbox the camera. Then we charge the battery! "
        "Next we attach the lens. After that we take a test shot? "
        "Finally we review the photos."
    )


@pytest.fixture
def make_orchestrator():
    """Build an orchestrator around fake collaborators."""

    def _make(transcript="", source_error=None, delay=0.0, generator=None, timeout=5.0, expose_errors=False):
        source = FakeTranscriptSource(transcript, error=source_error, delay=delay)
        summarizer = TranscriptSummarizer(generator=generator)
        orchestrator = SummarizationOrchestrator(
            transcript_source=source,
            summarizer=summarizer,
            timeout_seconds=timeout,
            expose_errors=expose_errors,
        )
        return orchestrator, source

    return _make
