from datetime import datetime, timezone
from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from ytsummarizer.models.schemas import ModelInfo, SummaryResult, SummarySource, SummaryStatus


class VideoRequest(BaseModel):
    """Model for requesting video summarization."""
    url: str = ""


class SummaryResponse(BaseModel):
    """Model for summary responses."""
    summary: str
    status: SummaryStatus
    request_id: str
    source: SummarySource = SummarySource.NONE
    video_id: Optional[str] = None
    processing_time_ms: float = 0.0

    @classmethod
    def from_result(cls, result: SummaryResult) -> "SummaryResponse":
        return cls(
            summary=result.text,
            status=result.status,
            request_id=result.request_id,
            source=result.source,
            video_id=result.video_id,
            processing_time_ms=result.processing_time_ms,
        )


class ErrorResponse(BaseModel):
    """Model for request errors."""
    error: str
    request_id: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class HealthCheck(BaseModel):
    """Model for a single health check entry."""
    name: str
    status: str
    description: Optional[str] = None


class HealthResponse(BaseModel):
    """Model for health reports."""
    status: str
    checks: List[HealthCheck] = []
    model: Optional[ModelInfo] = None
    details: Dict[str, str] = {}
