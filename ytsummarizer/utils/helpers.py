"""
Helper utility functions for the YouTube transcript summarizer.
"""

import re
from typing import Optional
from urllib.parse import urlparse, parse_qs


YOUTUBE_HOSTS = frozenset({
    "youtube.com",
    "www.youtube.com",
    "m.youtube.com",
    "music.youtube.com",
    "youtu.be",
    "www.youtube-nocookie.com",
})

_VIDEO_ID_RE = re.compile(r"^[0-9A-Za-z_-]{11}$")
_PATH_PREFIXES = ("embed", "shorts", "live", "v", "e")


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """
    Truncate text to a maximum length and mark the cut.

    The suffix is appended after ``max_length`` characters, so the result is at
    most ``max_length + len(suffix)`` long. Slicing is by code point, which
    never splits a multi-byte character.

    Args:
        text: Text to truncate
        max_length: Number of leading characters to keep
        suffix: Suffix to add if truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text
    return text[:max_length] + suffix


def extract_video_id(url: str) -> Optional[str]:
    """
    Extract the video ID from a YouTube URL.

    Handles ``watch?v=``, ``youtu.be/<id>``, ``/embed/<id>``, ``/shorts/<id>``
    and ``/live/<id>`` forms. Returns None when the URL is not a YouTube URL or
    carries no well-formed id.
    """
    if not url or not isinstance(url, str):
        return None

    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return None

    if parsed.scheme not in ("http", "https"):
        return None

    host = (parsed.hostname or "").lower()
    if host not in YOUTUBE_HOSTS:
        return None

    segments = [segment for segment in parsed.path.split("/") if segment]

    if host == "youtu.be":
        candidate = segments[0] if segments else None
    elif segments and segments[0] == "watch":
        candidate = parse_qs(parsed.query).get("v", [None])[0]
    elif len(segments) >= 2 and segments[0] in _PATH_PREFIXES:
        candidate = segments[1]
    else:
        candidate = None

    if candidate and _VIDEO_ID_RE.match(candidate):
        return candidate
    return None
