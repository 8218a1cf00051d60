"""
Main entry point for the YouTube Transcript Summarizer.
"""

import argparse
import asyncio
import json
import sys
from typing import Optional

from ytsummarizer.config import config
from ytsummarizer.core.generator import LlamaGenerator
from ytsummarizer.core.model_loader import ModelHandle, load_model_handle
from ytsummarizer.core.orchestrator import SummarizationOrchestrator
from ytsummarizer.core.summarizer import TranscriptSummarizer
from ytsummarizer.core.transcriber import CaptionTranscriptSource
from ytsummarizer.models.schemas import SummaryResult, SummaryStatus, is_syntactically_valid_reference
from ytsummarizer.utils.logger import logging


def load_model(models_dir: Optional[str] = None) -> ModelHandle:
    """Load the local model once, using the configured settings."""
    return load_model_handle(
        models_dir or config.MODELS_DIR,
        context_size=config.MODEL_CONTEXT_SIZE,
        gpu_layers=config.MODEL_GPU_LAYERS,
        threads=config.MODEL_THREADS,
    )


def build_orchestrator(
    handle: ModelHandle,
    timeout_seconds: Optional[float] = None,
    expose_errors: Optional[bool] = None,
) -> SummarizationOrchestrator:
    """
    Wire the transcript source, summarizer chain and orchestrator together.

    Args:
        handle: Model handle shared by every request
        timeout_seconds: Per-request deadline (defaults to config)
        expose_errors: Include exception text in error results (defaults to config.DEBUG)

    Returns:
        Ready-to-use SummarizationOrchestrator
    """
    generator = LlamaGenerator(handle) if handle.available else None
    summarizer = TranscriptSummarizer(
        generator=generator,
        max_tokens=config.MODEL_MAX_TOKENS,
        max_transcript_chars=config.MAX_TRANSCRIPT_CHARS,
    )
    return SummarizationOrchestrator(
        transcript_source=CaptionTranscriptSource(config.CAPTION_LANGUAGES),
        summarizer=summarizer,
        timeout_seconds=timeout_seconds if timeout_seconds is not None else config.REQUEST_TIMEOUT_SECONDS,
        expose_errors=config.DEBUG if expose_errors is None else expose_errors,
    )


def summarize_youtube_video(
    url: str,
    timeout_seconds: Optional[float] = None,
    models_dir: Optional[str] = None,
) -> SummaryResult:
    """
    Summarize a YouTube video from its captions.

    Args:
        url: YouTube video URL
        timeout_seconds: Deadline for the whole request
        models_dir: Directory to look for a .gguf model in

    Returns:
        SummaryResult object
    """
    handle = load_model(models_dir)
    try:
        orchestrator = build_orchestrator(handle, timeout_seconds)
        return asyncio.run(orchestrator.summarize(url))
    finally:
        handle.close()


def main():
    """Main function to run the application from command line."""
    parser = argparse.ArgumentParser(description="YouTube Transcript Summarizer")
    parser.add_argument("url", help="YouTube video URL")
    parser.add_argument("--timeout", type=float, default=None,
                        help="Seconds to wait for the whole request")
    parser.add_argument("--models-dir", default=None,
                        help="Directory containing a .gguf model")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")

    args = parser.parse_args()

    if not is_syntactically_valid_reference(args.url):
        parser.error(f"not a YouTube video URL: {args.url}")

    logging.info(f"Summarizing: {args.url}")
    result = summarize_youtube_video(args.url, args.timeout, args.models_dir)

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        print("\n" + "=" * 80)
        print(f"Summary of video {result.video_id} ({result.status.value}, {result.source.value})")
        print("=" * 80)
        print(result.text)
        print("=" * 80)

    if result.status not in (SummaryStatus.SUCCESS, SummaryStatus.NO_TRANSCRIPT):
        sys.exit(1)


if __name__ == "__main__":
    main()
