"""
API routes for the YouTube Transcript Summarizer.
"""

import asyncio
import threading
import uuid
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from ytsummarizer.api.schemas import ErrorResponse, SummaryResponse, VideoRequest
from ytsummarizer.core.orchestrator import SummarizationOrchestrator
from ytsummarizer.models.schemas import SummaryStatus, VideoReference, is_syntactically_valid_reference
from ytsummarizer.utils.logger import logging

router = APIRouter(prefix="/api/v1", tags=["youtube"])

_DISCONNECT_POLL_SECONDS = 0.25

# 499: client closed request
STATUS_CODES = {
    SummaryStatus.SUCCESS: 200,
    SummaryStatus.NO_TRANSCRIPT: 200,
    SummaryStatus.ERROR: 500,
    SummaryStatus.TIMEOUT: 504,
    SummaryStatus.CANCELLED: 499,
}


def get_orchestrator(request: Request) -> SummarizationOrchestrator:
    """Return the orchestrator built at startup."""
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        raise HTTPException(status_code=503, detail="Summarizer is not initialized")
    return orchestrator


async def watch_disconnect(request: Request, cancel_event: threading.Event) -> None:
    """Set ``cancel_event`` once the client has gone away."""
    while not cancel_event.is_set():
        if await request.is_disconnected():
            logging.info(f"Client disconnected from {request.url.path}, cancelling")
            cancel_event.set()
            return
        await asyncio.sleep(_DISCONNECT_POLL_SECONDS)


def _bad_request(message: str) -> JSONResponse:
    error = ErrorResponse(error=message, request_id=str(uuid.uuid4()))
    logging.warning(f"Rejected summarize request {error.request_id}: {message}")
    return JSONResponse(status_code=400, content=error.model_dump(mode="json"))


@router.post(
    "/summarize",
    response_model=SummaryResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": SummaryResponse}, 504: {"model": SummaryResponse}},
)
async def summarize_video(
    request: VideoRequest,
    http_request: Request,
    orchestrator: SummarizationOrchestrator = Depends(get_orchestrator),
):
    """
    Summarize a YouTube video by URL.

    - Uses the local model when one is loaded, extractive fallback otherwise
    - Returns 200 for summaries and for videos without captions
    - Returns 504 when the request deadline passes
    - Returns 499 when the client disconnects first
    """
    if not request.url or not request.url.strip():
        return _bad_request("YouTube URL is required")

    if not is_syntactically_valid_reference(request.url):
        return _bad_request("Invalid YouTube URL")

    cancel_event = threading.Event()
    watcher = asyncio.ensure_future(watch_disconnect(http_request, cancel_event))
    try:
        result = await orchestrator.summarize(VideoReference.parse(request.url), cancel_event)
    finally:
        watcher.cancel()
    response = SummaryResponse.from_result(result)

    return JSONResponse(
        status_code=STATUS_CODES[result.status],
        content=response.model_dump(mode="json"),
    )
