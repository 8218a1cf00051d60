"""
Data models for the YouTube transcript summarizer.
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ytsummarizer.core.errors import InvalidVideoReference
from ytsummarizer.utils.helpers import extract_video_id


class SummaryStatus(str, Enum):
    """Final classification of a summarization request."""
    SUCCESS = "Success"
    NO_TRANSCRIPT = "NoTranscript"
    ERROR = "Error"
    TIMEOUT = "Timeout"
    CANCELLED = "Cancelled"


class SummarySource(str, Enum):
    """Which summarizer tier produced the text."""
    AI = "ai"
    HEURISTIC = "heuristic"
    FALLBACK = "fallback"
    NONE = "none"


class VideoReference(BaseModel):
    """A syntactically valid YouTube video URL and its video id."""
    url: str
    video_id: str = Field("", validate_default=True)

    model_config = ConfigDict(frozen=True)

    @field_validator('url')
    def validate_youtube_url(cls, v):
        v = v.strip()
        if extract_video_id(v) is None:
            raise ValueError('URL must be a valid YouTube video URL')
        return v

    @field_validator('video_id')
    def derive_video_id(cls, v, info):
        url = info.data.get("url")
        if url is None:
            return v
        return v or extract_video_id(url)

    @classmethod
    def parse(cls, url: str) -> "VideoReference":
        """Build a reference, raising InvalidVideoReference on malformed input."""
        if not isinstance(url, str) or extract_video_id(url) is None:
            raise InvalidVideoReference(url)
        return cls(url=url)


def is_syntactically_valid_reference(text: str) -> bool:
    """Return True if ``text`` can be turned into a VideoReference."""
    return extract_video_id(text) is not None


class TierOutcome(BaseModel):
    """Result-or-error value returned by each summarizer tier."""
    text: str = ""
    source: SummarySource = SummarySource.NONE
    meaningful: bool = True
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class SummaryResult(BaseModel):
    """Outcome of one summarization request."""
    text: str
    status: SummaryStatus
    request_id: str
    source: SummarySource = SummarySource.NONE
    video_id: Optional[str] = None
    processing_time_ms: float = 0.0

    model_config = ConfigDict(frozen=True)


class ModelInfo(BaseModel):
    """Description of the model handle, as reported by health checks."""
    available: bool
    path: Optional[str] = None
    context_size: int = Field(2048, ge=1)
