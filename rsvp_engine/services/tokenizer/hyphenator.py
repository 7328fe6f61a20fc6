"""
Long-word splitting for RSVP display.

Words longer than the maximum chunk length do not fit the foveal window,
so they are split into fragments of roughly TARGET_CHUNK_SIZE characters
along syllable-like boundaries. The syllable detection is a simple
vowel/consonant heuristic, not a dictionary-based hyphenation.
"""

from typing import List

from .constants import CONTINUATION_MARK, MAX_CHUNK_LENGTH, TARGET_CHUNK_SIZE, VOWELS
from .text_utils import split_trailing_punctuation, strip_trailing_punctuation


class Hyphenator:
    """
    Split over-long words into display-sized fragments.

    Every fragment except the last ends with a continuation mark; the
    word's trailing punctuation is kept on the last fragment only.

    Example usage:
        >>> hyphenator = Hyphenator(max_length=13)
        >>> hyphenator.hyphenate("implementation")
        ['impleme-', 'ntation']
        >>> hyphenator.hyphenate("hello")
        ['hello']
    """

    def __init__(
        self,
        max_length: int = MAX_CHUNK_LENGTH,
        target_chunk_size: int = TARGET_CHUNK_SIZE,
    ) -> None:
        """
        Initialize the hyphenator.

        Args:
            max_length: Words longer than this (punctuation excluded) are split.
            target_chunk_size: Preferred maximum fragment size in characters.
        """
        self.max_length = max_length
        self.target_chunk_size = target_chunk_size

    def needs_hyphenation(self, word: str) -> bool:
        """Return True if the punctuation-stripped word exceeds max_length."""
        return len(strip_trailing_punctuation(word)) > self.max_length

    def hyphenate(self, word: str) -> List[str]:
        """
        Split a word into fragments if it is too long.

        Args:
            word: The word to split (may carry trailing punctuation).

        Returns:
            List of fragments; a single element when no split is needed.
        """
        if len(word) <= self.max_length:
            return [word]

        body, punctuation = split_trailing_punctuation(word)

        # Punctuation alone never forces a split
        if len(body) <= self.max_length:
            return [word]

        syllables = split_into_syllables(body)
        parts = group_syllables_into_chunks(syllables, self.target_chunk_size)

        last = len(parts) - 1
        return [
            part + punctuation if i == last else part + CONTINUATION_MARK
            for i, part in enumerate(parts)
        ]


def split_into_syllables(word: str) -> List[str]:
    """
    Split a word into syllable-like units.

    A unit ends where a vowel is followed by a consonant, provided the
    unit already holds at least two characters.

    Examples:
        >>> split_into_syllables("implementation")
        ['imple', 'me', 'nta', 'tio', 'n']
        >>> split_into_syllables("cat")
        ['cat']
    """
    if len(word) <= 3:
        return [word]

    syllables: List[str] = []
    current = ""
    prev_was_vowel = False

    for char in word:
        is_vowel = char in VOWELS

        if prev_was_vowel and not is_vowel and len(current) >= 2:
            syllables.append(current)
            current = char
        else:
            current += char

        prev_was_vowel = is_vowel

    if current:
        syllables.append(current)

    return syllables or [word]


def group_syllables_into_chunks(syllables: List[str], target_size: int) -> List[str]:
    """
    Greedily group syllables into chunks of at most target_size characters.

    A chunk only exceeds the target when a single syllable is longer
    than the target on its own.

    Example:
        >>> group_syllables_into_chunks(['imple', 'me', 'nta', 'tio', 'n'], 8)
        ['impleme', 'ntation']
    """
    parts: List[str] = []
    current = ""

    for syllable in syllables:
        if current and len(current) + len(syllable) > target_size:
            parts.append(current)
            current = syllable
        else:
            current += syllable

    if current:
        parts.append(current)

    return parts


def hyphenate_word(word: str, max_length: int = MAX_CHUNK_LENGTH) -> List[str]:
    """Split a word into fragments using the default target chunk size."""
    return Hyphenator(max_length=max_length).hyphenate(word)


def needs_hyphenation(word: str, max_length: int = MAX_CHUNK_LENGTH) -> bool:
    """Check whether a word (punctuation stripped) exceeds max_length."""
    return Hyphenator(max_length=max_length).needs_hyphenation(word)
