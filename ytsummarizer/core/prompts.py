"""
Prompt construction for the local summarization model.
"""

from typing import List

from ytsummarizer.utils.helpers import truncate_text

DEFAULT_MAX_TRANSCRIPT_CHARS = 1500
TRUNCATION_MARKER = "..."

system_template = (
    "You are a helpful AI assistant. Provide concise summaries of YouTube video "
    "transcriptions. Focus on main points and key takeaways. Be clear and "
    "informative. Do not include any prefixes like 'System:', 'Video:', "
    "'Assistant:', or 'AI:' in your response. Start directly with the summary "
    "content."
)

summary_template = """{instructions}

Here is the transcription of a YouTube video:

{transcript}

Provide a concise 2-3 sentence summary of the video. Example output: 'This video covers the origins and development of the internet.'

Summary:"""

# Generation stops as soon as the model starts a new turn or echoes the input.
STOP_SEQUENCES: List[str] = [
    "User:",
    "Transcription:",
    "[INST]",
    "System:",
    "Assistant:",
    "Video:",
]

ROLE_PREFIXES = ("Summary:", "Assistant:", "AI:", "System:", "Video:")


def prompt_overhead() -> int:
    """Characters the template adds around the transcript."""
    return len(summary_template.format(instructions=system_template, transcript=""))


def build_prompt(transcript: str, max_chars: int = DEFAULT_MAX_TRANSCRIPT_CHARS) -> str:
    """
    Build the summarization prompt for a transcript.

    The transcript is cut to ``max_chars`` characters with a trailing
    ``...`` when longer, so the prompt never exceeds
    ``max_chars + len(TRUNCATION_MARKER) + prompt_overhead()``.
    """
    excerpt = truncate_text(transcript.strip(), max_chars, TRUNCATION_MARKER)
    return summary_template.format(instructions=system_template, transcript=excerpt)


def clean_generated_text(text: str) -> str:
    """Trim model output and drop any role marker it led with."""
    cleaned = text.strip()
    stripped = True
    while stripped:
        stripped = False
        for prefix in ROLE_PREFIXES:
            if cleaned.lower().startswith(prefix.lower()):
                cleaned = cleaned[len(prefix):].lstrip()
                stripped = True
    return cleaned.strip().strip("'\"").strip()
