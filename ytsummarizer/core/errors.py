"""
Exception types raised by the summarization core.
"""


class SummarizerError(Exception):
    """Base class for summarizer errors."""


class InvalidVideoReference(SummarizerError, ValueError):
    """The text given as a video reference is not a YouTube video URL."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Not a valid YouTube video URL: {url!r}")


class TranscriptUnavailable(SummarizerError):
    """The caption source could not reach or find the video."""


class ModelUnavailable(SummarizerError):
    """Generation was requested but no model is loaded."""


class GenerationFailure(SummarizerError):
    """The generative model failed while producing a summary."""


class GenerationCancelled(GenerationFailure):
    """Generation stopped because the request was cancelled."""
