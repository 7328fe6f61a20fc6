"""
Type definitions for the tokenizer package.

This module contains the immutable records shared by the tokenizer and the
playback controller. The controller only depends on the Token shape, never
on how the tokens were produced.
"""

from dataclasses import dataclass, replace
from typing import Optional

from .constants import MAX_CHUNK_LENGTH, ORP_OFFSET_DEFAULT, WPM_DEFAULT


@dataclass(frozen=True)
class ReaderSettings:
    """Settings consumed at tokenization time.

    Attributes:
        base_wpm: Target reading speed in words per minute.
        orp_offset: Fraction of the word length used for the focal point.
        dynamic_pacing: Apply length and punctuation multipliers.
        max_chunk_length: Words longer than this are hyphenated.
    """

    base_wpm: float = WPM_DEFAULT
    orp_offset: float = ORP_OFFSET_DEFAULT
    dynamic_pacing: bool = True
    max_chunk_length: int = MAX_CHUNK_LENGTH

    def with_changes(self, **changes) -> "ReaderSettings":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


@dataclass(frozen=True)
class Token:
    """A single pre-computed RSVP display unit.

    Attributes:
        id: Opaque unique identifier.
        raw: Exact string to display, including punctuation or a
            continuation mark.
        focal_index: Index of the fixation character in ``raw``.
        base_duration_ms: Display duration at the tokenization WPM.
        multiplier: Pacing multiplier applied to the base interval.
        is_punctuation: Whether trailing punctuation triggered a pause.
        is_hyphenated: Whether this token is a fragment of a longer word.
        hyphen_group_id: Shared by all fragments of one source word.
        source_index: Index into the original word sequence.
        sentence_index: Index into ContextMap.sentences.
        paragraph_index: Index into ContextMap.paragraphs.
    """

    id: str
    raw: str
    focal_index: int
    base_duration_ms: int
    multiplier: float
    is_punctuation: bool
    source_index: int
    sentence_index: int
    paragraph_index: int
    is_hyphenated: bool = False
    hyphen_group_id: Optional[str] = None
