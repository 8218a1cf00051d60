"""
Discovery and loading of the local GGUF model.

The model is looked up once per process. Whatever happens during loading,
the caller gets a ModelHandle back; an unavailable handle simply routes
summaries to the extractive tiers.
"""

import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Union

from ytsummarizer.core.errors import GenerationCancelled, ModelUnavailable
from ytsummarizer.models.schemas import ModelInfo
from ytsummarizer.utils.logger import logging

MODEL_PATTERN = "*.gguf"
_LOCK_POLL_SECONDS = 0.1


class InferenceContext:
    """Exclusive use of the loaded model for a single generation call."""

    def __init__(self, model):
        self._model = model

    def stream(
        self,
        prompt: str,
        max_tokens: int,
        stop: Optional[List[str]] = None,
        temperature: float = 0.2,
    ) -> Iterator[str]:
        """Yield generated text pieces as the model produces them."""
        chunks = self._model.create_completion(
            prompt,
            max_tokens=max_tokens,
            stop=stop or [],
            temperature=temperature,
            stream=True,
        )
        for chunk in chunks:
            yield chunk["choices"][0]["text"]


class ModelHandle:
    """Process-wide handle on an optionally loaded model."""

    def __init__(self, model=None, path: Optional[Path] = None, context_size: int = 2048):
        self._model = model
        self._lock = threading.Lock()
        self.path = path
        self.context_size = context_size

    @classmethod
    def unavailable(cls) -> "ModelHandle":
        return cls()

    @property
    def available(self) -> bool:
        return self._model is not None

    def info(self) -> ModelInfo:
        return ModelInfo(
            available=self.available,
            path=str(self.path) if self.path else None,
            context_size=self.context_size,
        )

    @contextmanager
    def context(self, cancel_event: Optional[threading.Event] = None) -> Iterator[InferenceContext]:
        """
        Open a fresh inference context.

        llama.cpp keeps its KV cache on the model object, so generations are
        serialised and the cache is reset on entry and on every exit path.
        Waiting for the lock stops early if ``cancel_event`` is set.
        """
        if not self.available:
            raise ModelUnavailable("No model is loaded")

        while not self._lock.acquire(timeout=_LOCK_POLL_SECONDS):
            if cancel_event is not None and cancel_event.is_set():
                raise GenerationCancelled("Cancelled while waiting for the model")

        model = self._model
        if model is None:
            # Closed while this call waited for the lock.
            self._lock.release()
            raise ModelUnavailable("Model was released")

        try:
            model.reset()
            yield InferenceContext(model)
        finally:
            try:
                model.reset()
            finally:
                self._lock.release()

    def close(self) -> None:
        """
        Release the model. The handle is unavailable afterwards.

        Waits for an in-flight generation to leave its context first, so the
        native model is never freed underneath a running thread.
        """
        with self._lock:
            model, self._model = self._model, None
        if model is None:
            return
        close = getattr(model, "close", None)
        if callable(close):
            close()
        logging.info(f"Released model {self.path}")


def discover_model(models_dir: Union[str, Path]) -> Optional[Path]:
    """
    Return the first ``.gguf`` file in ``models_dir`` in lexical order.

    Returns None when the directory is missing or holds no model file.
    """
    directory = Path(models_dir)
    if not directory.is_dir():
        logging.warning(f"Models directory not found at: {directory}")
        return None

    candidates = sorted(path for path in directory.glob(MODEL_PATTERN) if path.is_file())
    if not candidates:
        logging.warning(f"No .gguf files found in models directory: {directory}")
        return None

    logging.info(f"Found model file: {candidates[0].name}")
    return candidates[0]


def load_model_handle(
    models_dir: Union[str, Path],
    context_size: int = 2048,
    gpu_layers: int = 0,
    threads: Optional[int] = None,
    verbose: bool = False,
) -> ModelHandle:
    """
    Discover and load the local model.

    Any failure (no file, missing llama-cpp-python, corrupt or unsupported
    file, out of memory) is logged and yields an unavailable handle.
    """
    model_path = discover_model(models_dir)
    if model_path is None:
        logging.warning("No .gguf model found. Using extractive fallback summarization.")
        return ModelHandle.unavailable()

    try:
        from llama_cpp import Llama

        logging.info(f"Loading model from: {model_path}")
        model = Llama(
            model_path=str(model_path),
            n_ctx=context_size,
            n_gpu_layers=gpu_layers,
            n_threads=threads or max(1, (os.cpu_count() or 2) // 2),
            verbose=verbose,
        )
    except Exception as e:
        logging.error(f"Failed to load model from {model_path}: {str(e)}")
        return ModelHandle.unavailable()

    logging.info(f"Model loaded successfully from {model_path}")
    return ModelHandle(model=model, path=model_path, context_size=context_size)
