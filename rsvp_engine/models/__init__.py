"""Domain enums for the RSVP engine."""

from rsvp_engine.models.enums import (
    ErrorCode,
    Language,
    PlaybackState,
    ReaderStatus,
    SourceType,
)

__all__ = [
    "ErrorCode",
    "Language",
    "PlaybackState",
    "ReaderStatus",
    "SourceType",
]
