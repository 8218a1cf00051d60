"""
Module for fetching YouTube caption transcripts.
"""

import threading
from typing import Optional, Sequence

from pytubefix import YouTube
from pytubefix.exceptions import RegexMatchError, VideoUnavailable

from ytsummarizer.core.errors import TranscriptUnavailable
from ytsummarizer.models.schemas import VideoReference
from ytsummarizer.utils.logger import logging


class CaptionTranscriptSource:
    """Class to fetch the caption text of a YouTube video."""

    def __init__(self, languages: Sequence[str] = ("en", "a.en")):
        """
        Initialize the caption source.

        Args:
            languages: Caption codes to try in order before any other track
        """
        self.languages = list(languages)

    def select_track(self, captions):
        """
        Choose a caption track.

        The configured codes are tried first, then any regional variant of
        the first configured language, then whatever track comes first.
        Returns None when the video has no captions.
        """
        for code in self.languages:
            track = captions.get(code)
            if track is not None:
                return track

        tracks = list(captions)
        if self.languages:
            base = self.languages[0].split("-")[0]
            for track in tracks:
                if track.code.split("-")[0] in (base, f"a.{base}"):
                    return track

        return tracks[0] if tracks else None

    def fetch(self, ref: VideoReference, cancel_event: Optional[threading.Event] = None) -> str:
        """
        Fetch the transcript of a video as one string.

        Args:
            ref: Video to fetch captions for
            cancel_event: Set by the caller when the request is abandoned

        Returns:
            Caption text joined with single spaces, or "" if the video has no
            captions

        Raises:
            TranscriptUnavailable: the video could not be found or reached
        """
        try:
            yt = YouTube(ref.url)
            captions = yt.captions
            track = self.select_track(captions)

            if track is None:
                logging.info(f"No captions available for video {ref.video_id}")
                return ""

            if cancel_event is not None and cancel_event.is_set():
                return ""

            logging.info(f"Downloading '{track.code}' captions for video {ref.video_id}")
            text = track.generate_txt_captions()
        except (VideoUnavailable, RegexMatchError) as e:
            raise TranscriptUnavailable(f"Video {ref.video_id} is unavailable: {str(e)}") from e
        except OSError as e:
            raise TranscriptUnavailable(f"Could not reach YouTube for video {ref.video_id}: {str(e)}") from e

        return " ".join(text.split())
