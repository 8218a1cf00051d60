"""
Module for summarizing transcripts with a tiered fallback chain.

Tiers, first applicable wins:

1. generative: the local model, when one is loaded
2. heuristic: first, middle and last sentence, when no model is loaded
3. fallback: first three sentences, only after the model has failed
"""

import threading
from typing import List, Optional, Protocol

from ytsummarizer.core import extractive
from ytsummarizer.core.errors import GenerationFailure
from ytsummarizer.core.prompts import (
    DEFAULT_MAX_TRANSCRIPT_CHARS,
    STOP_SEQUENCES,
    build_prompt,
    clean_generated_text,
)
from ytsummarizer.models.schemas import SummarySource, TierOutcome
from ytsummarizer.utils.logger import logging


class TextGenerator(Protocol):
    available: bool

    def generate(
        self,
        prompt: str,
        cancel_event: Optional[threading.Event] = None,
        max_tokens: int = 150,
        stop: Optional[List[str]] = None,
    ) -> str:
        ...


def _no_content() -> TierOutcome:
    return TierOutcome(text=extractive.NO_CONTENT_MESSAGE, source=SummarySource.NONE, meaningful=False)


class TranscriptSummarizer:
    """Class to pick and run the summarizer tier for a transcript."""

    def __init__(
        self,
        generator: Optional[TextGenerator] = None,
        max_tokens: int = 150,
        max_transcript_chars: int = DEFAULT_MAX_TRANSCRIPT_CHARS,
    ):
        """
        Initialize the summarizer.

        Args:
            generator: Text generator backed by the local model, or None
            max_tokens: Token cap for one generation call
            max_transcript_chars: Transcript budget inside the prompt
        """
        self.generator = generator
        self.max_tokens = max_tokens
        self.max_transcript_chars = max_transcript_chars

    @property
    def model_available(self) -> bool:
        return self.generator is not None and bool(self.generator.available)

    def summarize(self, transcript: str, cancel_event: Optional[threading.Event] = None) -> TierOutcome:
        """
        Summarize a transcript.

        A missing model is expected and goes to the heuristic tier. A model
        that fails is not, and goes to the first-sentences fallback instead.
        """
        if not self.model_available:
            outcome = self.heuristic_summarize(transcript)
            logging.info("Generated summary using heuristic extraction")
            return outcome

        outcome = self.generate_summary(transcript, cancel_event)
        if not outcome.failed:
            logging.info("Generated summary using local model")
            return outcome

        logging.warning(f"Model summary failed, using fallback extraction: {outcome.error}")
        return self.fallback_summarize(transcript)

    def generate_summary(self, transcript: str, cancel_event: Optional[threading.Event] = None) -> TierOutcome:
        """Run the generative tier. Failures are returned, not raised."""
        prompt = build_prompt(transcript, self.max_transcript_chars)
        try:
            raw = self.generator.generate(
                prompt,
                cancel_event=cancel_event,
                max_tokens=self.max_tokens,
                stop=STOP_SEQUENCES,
            )
        except GenerationFailure as e:
            return TierOutcome(source=SummarySource.AI, error=str(e) or type(e).__name__)
        except Exception as e:
            logging.exception("Unexpected error during model summary generation")
            return TierOutcome(source=SummarySource.AI, error=f"{type(e).__name__}: {e}")

        summary = clean_generated_text(raw)
        if not summary:
            return TierOutcome(source=SummarySource.AI, error="Model returned an empty summary")
        return TierOutcome(text=summary, source=SummarySource.AI)

    def heuristic_summarize(self, transcript: str) -> TierOutcome:
        """Run the positional-sampling tier."""
        if not extractive.split_sentences(transcript):
            return _no_content()
        return TierOutcome(text=extractive.heuristic_summary(transcript), source=SummarySource.HEURISTIC)

    def fallback_summarize(self, transcript: str) -> TierOutcome:
        """Run the first-sentences tier."""
        if not extractive.split_sentences(transcript):
            return _no_content()
        return TierOutcome(text=extractive.leading_summary(transcript), source=SummarySource.FALLBACK)
