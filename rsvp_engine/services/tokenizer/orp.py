"""ORP (Optimal Recognition Point) calculator for RSVP reading."""

import math
from typing import Tuple

from .constants import ORP_OFFSET_DEFAULT
from .text_utils import strip_trailing_punctuation


class ORPCalculator:
    """
    Calculate the Optimal Recognition Point for words.

    The ORP is the character position in a word where the eye naturally
    focuses for fastest recognition. It sits roughly 35% into the word,
    biased toward the beginning. Trailing punctuation is ignored when
    measuring, but the returned index always addresses the original word.
    """

    def __init__(self, offset: float = ORP_OFFSET_DEFAULT) -> None:
        """
        Initialize the ORP calculator.

        Args:
            offset: Fraction of the word length at which to fixate.
        """
        self.offset = offset

    def calculate(self, word: str) -> int:
        """
        Calculate the ORP index for a word.

        Args:
            word: The word to calculate ORP for (may carry punctuation).

        Returns:
            The 0-indexed position of the ORP character in ``word``.

        Examples:
            >>> calc = ORPCalculator()
            >>> calc.calculate("hello")
            1
            >>> calc.calculate("recognition")
            3
            >>> calc.calculate("the.")
            0
        """
        length = len(strip_trailing_punctuation(word))

        # Very short words: fixate on the first character
        if length <= 3:
            return 0

        position = math.floor(length * self.offset)
        return max(1, min(position, length - 1))

    def split_for_display(self, word: str, orp_index: int) -> Tuple[str, str, str]:
        """
        Split a word into three parts for ORP display.

        The index is clamped into range so a stale or out-of-range value
        never breaks rendering.

        Returns:
            Tuple of (before_orp, orp_char, after_orp).

        Example:
            >>> ORPCalculator().split_for_display("reading", 2)
            ('re', 'a', 'ding')
        """
        if not word:
            return ("", "", "")

        safe_index = max(0, min(orp_index, len(word) - 1))
        return (word[:safe_index], word[safe_index], word[safe_index + 1:])


def calculate_orp_index(word: str, offset: float = ORP_OFFSET_DEFAULT) -> int:
    """Calculate the ORP index for a word with the given offset ratio."""
    return ORPCalculator(offset=offset).calculate(word)


def split_by_orp(word: str, orp_index: int) -> Tuple[str, str, str]:
    """Split a word around its ORP character, clamping the index."""
    return ORPCalculator().split_for_display(word, orp_index)
