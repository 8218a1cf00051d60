"""
Model-free summarization by picking sentences out of the transcript.
"""

import re
from typing import List

NO_CONTENT_MESSAGE = "Unable to extract meaningful content for summarization."
MAX_SENTENCES = 3

_SENTENCE_BOUNDARY = re.compile(r"[.!?]")


def split_sentences(text: str) -> List[str]:
    """Split text on sentence-ending punctuation, dropping empty pieces."""
    pieces = _SENTENCE_BOUNDARY.split(text or "")
    return [piece.strip() for piece in pieces if piece.strip()]


def join_sentences(sentences: List[str]) -> str:
    """Join sentences with '. ' and make sure the result ends with a period."""
    summary = ". ".join(sentences)
    if summary and not summary.endswith("."):
        summary += "."
    return summary


def select_representative(sentences: List[str]) -> List[str]:
    """
    Pick the first, middle and last sentence.

    The middle one is only taken when there are at least three sentences and
    the last one when there are at least two. Duplicates are dropped, keeping
    the first occurrence.
    """
    picked = []
    if len(sentences) >= 1:
        picked.append(sentences[0])
    if len(sentences) >= 3:
        picked.append(sentences[len(sentences) // 2])
    if len(sentences) >= 2:
        picked.append(sentences[-1])

    unique = []
    for sentence in picked:
        if sentence not in unique:
            unique.append(sentence)
    return unique[:MAX_SENTENCES]


def heuristic_summary(transcript: str) -> str:
    """Summarize with positional sampling, or return NO_CONTENT_MESSAGE."""
    sentences = split_sentences(transcript)
    if not sentences:
        return NO_CONTENT_MESSAGE
    return join_sentences(select_representative(sentences))


def leading_summary(transcript: str, count: int = MAX_SENTENCES) -> str:
    """Summarize with the first ``count`` sentences, or return NO_CONTENT_MESSAGE."""
    sentences = split_sentences(transcript)
    if not sentences:
        return NO_CONTENT_MESSAGE
    return join_sentences(sentences[:count])
