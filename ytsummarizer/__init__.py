"""
YouTube Transcript Summarizer.

Fetches the caption track of a YouTube video and condenses it into a short
summary, using a local GGUF model when one is available and extractive
fallbacks when it is not.
"""

from ytsummarizer.config import config

__version__ = config.APP_VERSION
