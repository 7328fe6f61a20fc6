"""
Shared text processing utilities for the tokenizer package.

These functions provide common operations used by multiple modules
(ORPCalculator, PacingCalculator, Hyphenator, context map builder).
"""

import re
from typing import List, Optional, Set, Tuple

from .constants import ELLIPSIS_STRINGS, SENTENCE_ENDERS, TRAILING_CLOSERS, TRAILING_PUNCTUATION

_TRAILING_PUNCTUATION_RE = re.compile(rf"[{re.escape(TRAILING_PUNCTUATION)}]+$")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_trailing_punctuation(word: str) -> str:
    """
    Remove the trailing run of punctuation from a word.

    Examples:
        >>> strip_trailing_punctuation("world.")
        'world'
        >>> strip_trailing_punctuation('said!")')
        'said'
        >>> strip_trailing_punctuation("(aside")
        '(aside'
    """
    return _TRAILING_PUNCTUATION_RE.sub("", word)


def split_trailing_punctuation(word: str) -> Tuple[str, str]:
    """
    Split a word into (body, trailing punctuation run).

    Examples:
        >>> split_trailing_punctuation("internationalization,")
        ('internationalization', ',')
        >>> split_trailing_punctuation("hello")
        ('hello', '')
    """
    match = _TRAILING_PUNCTUATION_RE.search(word)
    if not match:
        return word, ""
    return word[:match.start()], match.group(0)


def get_letter_count(word: str) -> int:
    """
    Count the letters in a word, ignoring digits and punctuation.

    Examples:
        >>> get_letter_count("hello,")
        5
        >>> get_letter_count("2024")
        0
    """
    return sum(1 for char in word if char.isalpha())


def split_into_words(text: str) -> List[str]:
    """Split text on whitespace runs, dropping empty strings."""
    return [word for word in _WHITESPACE_RE.split(text) if word]


def get_sentence_terminal(word: str) -> Optional[str]:
    """
    Get the sentence-ending punctuation of a word, ignoring trailing closers.

    Returns:
        The terminal character (or ellipsis string), or None.

    Examples:
        >>> get_sentence_terminal("end.")
        '.'
        >>> get_sentence_terminal('said?"')
        '?'
        >>> get_sentence_terminal("wait...")
        '...'
        >>> get_sentence_terminal("hello,")
    """
    if not word:
        return None

    stripped = word.rstrip("".join(TRAILING_CLOSERS))
    for ellipsis in ELLIPSIS_STRINGS:
        if stripped.endswith(ellipsis):
            return ellipsis

    if stripped and stripped[-1] in SENTENCE_ENDERS:
        return stripped[-1]

    return None


def is_abbreviation(word: str, abbreviations: Set[str]) -> bool:
    """
    Check if a word is a known abbreviation.

    Args:
        word: The word to check.
        abbreviations: Set of known abbreviations (lowercase, without periods).

    Examples:
        >>> abbrevs = {"mr", "dr", "e.g"}
        >>> is_abbreviation("Mr.", abbrevs)
        True
        >>> is_abbreviation("(e.g.", abbrevs)
        True
        >>> is_abbreviation("Hello.", abbrevs)
        False
    """
    clean = word.rstrip("".join(TRAILING_CLOSERS)).rstrip(".")
    clean = clean.lstrip("\"'([{")
    return clean.lower() in abbreviations
