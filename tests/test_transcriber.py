"""
Tests for the caption transcript source.
"""

import threading
from unittest.mock import MagicMock, patch
from urllib.error import URLError

import pytest
from pytubefix.exceptions import VideoUnavailable

from ytsummarizer.core.errors import TranscriptUnavailable
from ytsummarizer.core.transcriber import CaptionTranscriptSource
from ytsummarizer.models.schemas import VideoReference


class FakeCaptions:
    """Minimal stand-in for pytubefix's CaptionQuery."""

    def __init__(self, *tracks):
        self._index = {track.code: track for track in tracks}

    def get(self, code, default=None):
        return self._index.get(code, default)

    def __iter__(self):
        return iter(self._index.values())


def make_track(code, text):
    track = MagicMock()
    track.code = code
    track.generate_txt_captions.return_value = text
    return track


@pytest.fixture
def ref(test_video_url):
    return VideoReference.parse(test_video_url)


@pytest.fixture
def mock_youtube():
    """Fixture to mock the YouTube class."""
    with patch('ytsummarizer.core.transcriber.YouTube') as mock_yt:
        yield mock_yt


def test_prefers_english_captions(mock_youtube, ref):
    english = make_track("en", "Hello and welcome.\nToday we talk about cats.")
    mock_youtube.return_value.captions = FakeCaptions(make_track("de", "Hallo."), english)

    text = CaptionTranscriptSource().fetch(ref)

    assert text == "Hello and welcome. Today we talk about cats."
    mock_youtube.assert_called_once_with(ref.url)


def test_uses_auto_generated_english_before_other_languages(mock_youtube, ref):
    auto = make_track("a.en", "auto captions")
    mock_youtube.return_value.captions = FakeCaptions(make_track("fr", "bonjour"), auto)

    assert CaptionTranscriptSource().fetch(ref) == "auto captions"


def test_regional_english_variant(mock_youtube, ref):
    mock_youtube.return_value.captions = FakeCaptions(
        make_track("es", "hola"), make_track("en-GB", "cheerio")
    )

    assert CaptionTranscriptSource().fetch(ref) == "cheerio"


def test_falls_back_to_any_language(mock_youtube, ref):
    mock_youtube.return_value.captions = FakeCaptions(make_track("fr", "Bonjour à tous."))

    assert CaptionTranscriptSource().fetch(ref) == "Bonjour à tous."


def test_no_captions_returns_empty(mock_youtube, ref):
    mock_youtube.return_value.captions = FakeCaptions()

    assert CaptionTranscriptSource().fetch(ref) == ""


def test_cancelled_before_download(mock_youtube, ref):
    english = make_track("en", "never downloaded")
    mock_youtube.return_value.captions = FakeCaptions(english)
    cancel_event = threading.Event()
    cancel_event.set()

    assert CaptionTranscriptSource().fetch(ref, cancel_event) == ""
    english.generate_txt_captions.assert_not_called()


def test_unavailable_video(mock_youtube, ref):
    mock_youtube.side_effect = VideoUnavailable(ref.video_id)

    with pytest.raises(TranscriptUnavailable):
        CaptionTranscriptSource().fetch(ref)


def test_network_error(mock_youtube, ref):
    mock_youtube.return_value.captions = FakeCaptions(make_track("en", "x"))
    mock_youtube.return_value.captions.get("en").generate_txt_captions.side_effect = URLError("timed out")

    with pytest.raises(TranscriptUnavailable):
        CaptionTranscriptSource().fetch(ref)
