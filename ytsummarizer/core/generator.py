"""
Text generation with the local model.
"""

import threading
from typing import List, Optional

from ytsummarizer.core.errors import GenerationCancelled, GenerationFailure, ModelUnavailable
from ytsummarizer.core.model_loader import ModelHandle
from ytsummarizer.utils.logger import logging


class LlamaGenerator:
    """Generates text from a prompt using the shared model handle."""

    def __init__(self, handle: ModelHandle, temperature: float = 0.2):
        """
        Initialize the generator.

        Args:
            handle: Loaded (or unavailable) model handle
            temperature: Sampling temperature for every call
        """
        self.handle = handle
        self.temperature = temperature

    @property
    def available(self) -> bool:
        return self.handle.available

    def generate(
        self,
        prompt: str,
        cancel_event: Optional[threading.Event] = None,
        max_tokens: int = 150,
        stop: Optional[List[str]] = None,
    ) -> str:
        """
        Generate a completion for ``prompt``.

        The cancel event is checked between streamed tokens, so a cancelled
        request frees the model after at most one more token.

        Raises:
            ModelUnavailable: no model is loaded
            GenerationCancelled: the cancel event was set mid-generation
            GenerationFailure: any fault inside the model
        """
        if not self.handle.available:
            raise ModelUnavailable("No model is loaded")

        pieces = []
        try:
            with self.handle.context(cancel_event) as context:
                for piece in context.stream(prompt, max_tokens, stop, self.temperature):
                    if cancel_event is not None and cancel_event.is_set():
                        raise GenerationCancelled("Generation cancelled")
                    pieces.append(piece)
        except GenerationFailure:
            raise
        except Exception as e:
            raise GenerationFailure(f"Model inference failed: {str(e)}") from e

        text = "".join(pieces)
        logging.debug(f"Generated {len(text)} characters")
        return text
