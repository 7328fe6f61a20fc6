"""Enums shared across the RSVP engine."""

from enum import Enum


class SourceType(str, Enum):
    """Enum for text source types."""

    PASTE = "paste"
    MARKDOWN = "md"
    PDF = "pdf"


class Language(str, Enum):
    """Enum for text language."""

    ENGLISH = "en"
    GERMAN = "de"


class ErrorCode(str, Enum):
    """Error kinds produced by the engine.

    Only EMPTY_INPUT, INVALID_WPM and TOKENIZATION_FAILED are ever raised.
    LOOP_FRAME_DROP is logged, INDEX_OUT_OF_BOUNDS is always clamped away.
    """

    EMPTY_INPUT = "EMPTY_INPUT"
    INVALID_WPM = "INVALID_WPM"
    TOKENIZATION_FAILED = "TOKENIZATION_FAILED"
    LOOP_FRAME_DROP = "LOOP_FRAME_DROP"
    INDEX_OUT_OF_BOUNDS = "INDEX_OUT_OF_BOUNDS"


class PlaybackState(str, Enum):
    """States of the playback controller."""

    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"
    COMPLETED = "completed"


class ReaderStatus(str, Enum):
    """Reader session status as seen by a presentation layer."""

    IDLE = "IDLE"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    COMPLETE = "COMPLETE"
