"""
Pacing and display duration calculations for RSVP reading.

This module provides the PacingCalculator class for computing how long
each token is displayed. The duration starts from the base interval
implied by the WPM setting and is scaled by a multiplier derived from
word length and trailing punctuation.

All of this runs once at tokenization time; the playback loop only ever
rescales the resulting numbers.
"""

from dataclasses import dataclass

from .constants import (
    CLAUSE_PAUSE_MULTIPLIER,
    CLAUSE_PAUSE_PUNCTUATION,
    LONG_WORD_MULTIPLIER,
    LONG_WORD_THRESHOLD,
    MS_PER_MINUTE,
    NORMAL_WORD_MULTIPLIER,
    SENTENCE_END_MULTIPLIER,
    SENTENCE_END_PUNCTUATION,
    SHORT_WORD_MULTIPLIER,
    SHORT_WORD_THRESHOLD,
)
from .text_utils import get_letter_count


@dataclass(frozen=True)
class DurationResult:
    """Display duration for one token.

    Attributes:
        duration_ms: Rounded display duration in milliseconds.
        multiplier: Final pacing multiplier applied to the base interval.
        is_punctuation: Whether trailing punctuation triggered a pause.
    """

    duration_ms: int
    multiplier: float
    is_punctuation: bool


class PacingCalculator:
    """
    Calculate display durations for RSVP tokens.

    Factors that affect timing when dynamic pacing is enabled:
    - Word length in letters (short words faster, long words slower)
    - Final character punctuation (clause pause: , ; :  sentence end: . ! ?)

    Length and punctuation multipliers compound.

    Example usage:
        >>> calc = PacingCalculator(base_wpm=600)
        >>> calc.calculate("hello").duration_ms
        100
        >>> calc.calculate("world.").duration_ms
        300
        >>> calc.calculate("a,").multiplier
        1.6
    """

    def __init__(self, base_wpm: float, dynamic_pacing: bool = True) -> None:
        """
        Initialize the pacing calculator.

        Args:
            base_wpm: Target reading speed. Callers validate the range.
            dynamic_pacing: Apply length and punctuation multipliers.
        """
        self.base_wpm = base_wpm
        self.dynamic_pacing = dynamic_pacing
        self.base_interval_ms = wpm_to_ms(base_wpm)

    def calculate(self, word: str, *, check_punctuation: bool = True) -> DurationResult:
        """
        Calculate the display duration for a token.

        Args:
            word: The display text of the token.
            check_punctuation: Whether the final character may add a pause.
                Intermediate hyphenated fragments pass False.

        Returns:
            DurationResult with duration, multiplier and punctuation flag.
        """
        multiplier = NORMAL_WORD_MULTIPLIER
        is_punctuation = False

        if self.dynamic_pacing:
            multiplier = get_length_multiplier(word)

            if check_punctuation:
                punctuation_multiplier = get_punctuation_multiplier(word)
                if punctuation_multiplier > 1.0:
                    multiplier *= punctuation_multiplier
                    is_punctuation = True

        return DurationResult(
            duration_ms=round(self.base_interval_ms * multiplier),
            multiplier=multiplier,
            is_punctuation=is_punctuation,
        )


def get_length_multiplier(word: str) -> float:
    """
    Get the length-based multiplier for a word (letters only).

    Examples:
        >>> get_length_multiplier("the")
        0.8
        >>> get_length_multiplier("reading")
        1.0
        >>> get_length_multiplier("extraordinarily")
        1.4
    """
    letters = get_letter_count(word)
    if letters < SHORT_WORD_THRESHOLD:
        return SHORT_WORD_MULTIPLIER
    if letters > LONG_WORD_THRESHOLD:
        return LONG_WORD_MULTIPLIER
    return NORMAL_WORD_MULTIPLIER


def get_punctuation_multiplier(word: str) -> float:
    """
    Get the pause multiplier for the final character of a word.

    Only the very last character counts, so a closing quote after a
    period (``said."``) does not trigger a pause.

    Examples:
        >>> get_punctuation_multiplier("end.")
        3.0
        >>> get_punctuation_multiplier("pause;")
        2.0
        >>> get_punctuation_multiplier("plain")
        1.0
    """
    if not word:
        return 1.0

    last_char = word[-1]
    if last_char in SENTENCE_END_PUNCTUATION:
        return SENTENCE_END_MULTIPLIER
    if last_char in CLAUSE_PAUSE_PUNCTUATION:
        return CLAUSE_PAUSE_MULTIPLIER
    return 1.0


def calculate_duration(
    word: str,
    base_wpm: float,
    dynamic_pacing: bool = True,
    check_punctuation: bool = True,
) -> DurationResult:
    """
    Calculate the display duration for a single word.

    This is a convenience function that creates a PacingCalculator
    and evaluates one word.

    Example:
        >>> calculate_duration("Hello.", 600)
        DurationResult(duration_ms=300, multiplier=3.0, is_punctuation=True)
    """
    calculator = PacingCalculator(base_wpm, dynamic_pacing=dynamic_pacing)
    return calculator.calculate(word, check_punctuation=check_punctuation)


def wpm_to_ms(wpm: float) -> float:
    """
    Convert words per minute to milliseconds per word.

    Raises:
        ValueError: If wpm is not positive.

    Examples:
        >>> wpm_to_ms(300)
        200.0
        >>> wpm_to_ms(600)
        100.0
    """
    if wpm <= 0:
        raise ValueError(f"WPM must be positive, got {wpm}")

    return MS_PER_MINUTE / wpm


def ms_to_wpm(ms: float) -> float:
    """
    Convert milliseconds per word to words per minute.

    Raises:
        ValueError: If ms is not positive.

    Example:
        >>> ms_to_wpm(250)
        240.0
    """
    if ms <= 0:
        raise ValueError(f"Duration must be positive, got {ms}")

    return MS_PER_MINUTE / ms
