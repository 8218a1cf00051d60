"""
Request-level orchestration: transcript, then summary, within a deadline.
"""

import asyncio
import threading
import time
import uuid
from typing import NamedTuple, Optional, Protocol, Union

from ytsummarizer.core.errors import TranscriptUnavailable
from ytsummarizer.core.summarizer import TranscriptSummarizer
from ytsummarizer.models.schemas import (
    SummaryResult,
    SummarySource,
    SummaryStatus,
    VideoReference,
)
from ytsummarizer.utils.logger import logging

NO_TRANSCRIPT_MESSAGE = "No transcription available for this video."
GENERIC_ERROR_MESSAGE = "Failed to summarize video."
TIMEOUT_MESSAGE = "Summarization did not finish within {seconds:g} seconds."
CANCELLED_MESSAGE = "Summarization was cancelled."

_CANCEL_POLL_SECONDS = 0.05


class TranscriptSource(Protocol):
    def fetch(self, ref: VideoReference, cancel_event: Optional[threading.Event] = None) -> str:
        ...


class _Outcome(NamedTuple):
    status: SummaryStatus
    text: str
    source: SummarySource = SummarySource.NONE


async def _wait_for_event(event: threading.Event) -> None:
    while not event.is_set():
        await asyncio.sleep(_CANCEL_POLL_SECONDS)


class SummarizationOrchestrator:
    """Runs one summarization request end to end."""

    def __init__(
        self,
        transcript_source: TranscriptSource,
        summarizer: TranscriptSummarizer,
        timeout_seconds: float = 120.0,
        expose_errors: bool = False,
    ):
        """
        Initialize the orchestrator.

        Args:
            transcript_source: Where captions come from
            summarizer: Tiered summarizer chain
            timeout_seconds: Deadline for a whole request
            expose_errors: Include exception text in error results
        """
        self.transcript_source = transcript_source
        self.summarizer = summarizer
        self.timeout_seconds = timeout_seconds
        self.expose_errors = expose_errors

    @property
    def model_available(self) -> bool:
        return self.summarizer.model_available

    async def summarize(
        self,
        ref: Union[str, VideoReference],
        cancel_event: Optional[threading.Event] = None,
    ) -> SummaryResult:
        """
        Summarize a video.

        Every failure is reported through the result status. The only
        exceptions are InvalidVideoReference, raised for a malformed URL
        before the request starts, and CancelledError when the awaiting task
        is itself cancelled.

        Args:
            ref: Video URL or an already validated VideoReference
            cancel_event: Set by the caller to abandon the request

        Returns:
            SummaryResult carrying the request id
        """
        if not isinstance(ref, VideoReference):
            ref = VideoReference.parse(ref)

        request_id = str(uuid.uuid4())
        cancel_event = cancel_event or threading.Event()
        started = time.perf_counter()

        logging.info(f"Starting video summarization for URL: {ref.url}, RequestId: {request_id}")

        work = asyncio.ensure_future(self._run(ref, request_id, cancel_event))
        watcher = asyncio.ensure_future(_wait_for_event(cancel_event))
        try:
            done, _ = await asyncio.wait(
                {work, watcher},
                timeout=self.timeout_seconds,
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            cancel_event.set()
            work.cancel()
            raise
        finally:
            watcher.cancel()

        if work in done:
            outcome = work.result()
        else:
            # Stops in-flight generation at its next token.
            cancelled = watcher in done
            cancel_event.set()
            work.cancel()
            if cancelled:
                logging.warning(f"Summarization cancelled by caller, RequestId: {request_id}")
                outcome = _Outcome(SummaryStatus.CANCELLED, CANCELLED_MESSAGE)
            else:
                logging.warning(
                    f"Summarization timed out after {self.timeout_seconds}s, RequestId: {request_id}"
                )
                outcome = _Outcome(
                    SummaryStatus.TIMEOUT,
                    TIMEOUT_MESSAGE.format(seconds=self.timeout_seconds),
                )

        return SummaryResult(
            text=outcome.text,
            status=outcome.status,
            request_id=request_id,
            source=outcome.source,
            video_id=ref.video_id,
            processing_time_ms=round((time.perf_counter() - started) * 1000, 2),
        )

    async def _run(
        self, ref: VideoReference, request_id: str, cancel_event: threading.Event
    ) -> _Outcome:
        try:
            try:
                transcript = await asyncio.to_thread(self.transcript_source.fetch, ref, cancel_event)
            except TranscriptUnavailable as e:
                logging.warning(f"Transcript unavailable for URL: {ref.url}, RequestId: {request_id}: {e}")
                transcript = ""

            if not transcript or not transcript.strip():
                logging.warning(f"No transcription available for URL: {ref.url}, RequestId: {request_id}")
                return _Outcome(SummaryStatus.NO_TRANSCRIPT, NO_TRANSCRIPT_MESSAGE)

            logging.info(
                f"Retrieved transcription of {len(transcript)} characters for URL: {ref.url}, "
                f"RequestId: {request_id}"
            )

            tier = await asyncio.to_thread(self.summarizer.summarize, transcript, cancel_event)

            if not tier.meaningful:
                logging.warning(f"Transcript had no extractable content, RequestId: {request_id}")
                return _Outcome(SummaryStatus.NO_TRANSCRIPT, tier.text)

            if tier.failed or not tier.text:
                raise RuntimeError(tier.error or "Summarizer returned no text")

            logging.info(
                f"Successfully generated {tier.source.value} summary for URL: {ref.url}, "
                f"RequestId: {request_id}"
            )
            return _Outcome(SummaryStatus.SUCCESS, tier.text, tier.source)

        except Exception as e:
            logging.exception(f"Failed to summarize video for URL: {ref.url}, RequestId: {request_id}")
            message = GENERIC_ERROR_MESSAGE
            if self.expose_errors:
                message = f"Failed to summarize video: {str(e)}"
            return _Outcome(SummaryStatus.ERROR, message)
