"""
Sentence and paragraph context mapping for RSVP reading.

This module builds the ContextMap: ordered sentence and paragraph ranges
over word indices. The ranges let the reader jump back to the start of a
sentence and reveal the surrounding paragraph while paused.

Segmentation is a punctuation heuristic:
- Paragraphs are separated by blank lines
- A sentence ends at a word whose terminal punctuation (ignoring closing
  quotes and brackets) is . ! ? or an ellipsis
- Known abbreviations (Mr., Dr., e.g.) do not end a sentence
- Words are whitespace-delimited, so decimals like 3.14 never end one

Whatever the heuristic decides, the ranges are contiguous and cover every
word index exactly once.
"""

import re
from dataclasses import dataclass, field
from typing import List, Set, Tuple

from .constants import ABBREVIATIONS, SUPPORTED_LANGUAGES
from .text_utils import get_sentence_terminal, is_abbreviation, split_into_words

_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")


@dataclass(frozen=True)
class SentenceSpan:
    """A sentence as an inclusive range of word indices.

    Attributes:
        start_index: First word index of the sentence.
        end_index: Last word index of the sentence (inclusive).
        text: Sentence text reconstructed from its words.
    """

    start_index: int
    end_index: int
    text: str

    @property
    def word_count(self) -> int:
        return self.end_index - self.start_index + 1


@dataclass(frozen=True)
class ParagraphSpan:
    """A paragraph as an inclusive range of word indices."""

    start_index: int
    end_index: int
    sentences: Tuple[SentenceSpan, ...] = ()

    @property
    def text(self) -> str:
        return " ".join(sentence.text for sentence in self.sentences)


@dataclass(frozen=True)
class ContextMap:
    """Ordered sentence and paragraph ranges for a word sequence."""

    sentences: Tuple[SentenceSpan, ...] = field(default_factory=tuple)
    paragraphs: Tuple[ParagraphSpan, ...] = field(default_factory=tuple)

    @property
    def word_count(self) -> int:
        if not self.sentences:
            return 0
        return self.sentences[-1].end_index + 1

    def sentence_index_for(self, word_index: int) -> int:
        """Return the index of the sentence containing word_index (0 if none)."""
        return _find_span_index(self.sentences, word_index)

    def paragraph_index_for(self, word_index: int) -> int:
        """Return the index of the paragraph containing word_index (0 if none)."""
        return _find_span_index(self.paragraphs, word_index)

    def paragraph_text(self, paragraph_index: int) -> str | None:
        """Return the reconstructed text of a paragraph, or None if out of range."""
        if not 0 <= paragraph_index < len(self.paragraphs):
            return None
        return self.paragraphs[paragraph_index].text


def _find_span_index(spans, word_index: int) -> int:
    # Binary search; spans are sorted and contiguous.
    low, high = 0, len(spans) - 1
    while low <= high:
        mid = (low + high) // 2
        span = spans[mid]
        if word_index < span.start_index:
            high = mid - 1
        elif word_index > span.end_index:
            low = mid + 1
        else:
            return mid
    return 0


class ContextMapBuilder:
    """
    Build ContextMaps from normalized text.

    Example usage:
        >>> builder = ContextMapBuilder(language="en")
        >>> context = builder.build("Hello world. How are you?\\n\\nFine.")
        >>> [(s.start_index, s.end_index) for s in context.sentences]
        [(0, 1), (2, 4), (5, 5)]
        >>> [(p.start_index, p.end_index) for p in context.paragraphs]
        [(0, 4), (5, 5)]
    """

    def __init__(self, language: str = "en") -> None:
        """
        Initialize the builder.

        Args:
            language: Language code for abbreviation detection ('en' or 'de').
                     Defaults to 'en'.

        Raises:
            ValueError: If the language has no abbreviation list.
        """
        if language not in SUPPORTED_LANGUAGES:
            raise ValueError(
                f"Unsupported language {language!r}, expected one of {sorted(SUPPORTED_LANGUAGES)}"
            )
        self.language = language
        self._abbreviations: Set[str] = ABBREVIATIONS[language]

    def build(self, text: str) -> ContextMap:
        """
        Build the sentence and paragraph map for normalized text.

        Args:
            text: Whitespace-normalized text; blank lines separate paragraphs.

        Returns:
            ContextMap whose ranges cover every word of ``text`` in order.
        """
        sentences: List[SentenceSpan] = []
        paragraphs: List[ParagraphSpan] = []
        word_index = 0

        for paragraph_text in _PARAGRAPH_SPLIT_RE.split(text):
            words = split_into_words(paragraph_text)
            if not words:
                continue

            paragraph_start = word_index
            paragraph_sentences: List[SentenceSpan] = []

            for sentence_words in self.split_sentences(words):
                span = SentenceSpan(
                    start_index=word_index,
                    end_index=word_index + len(sentence_words) - 1,
                    text=" ".join(sentence_words),
                )
                sentences.append(span)
                paragraph_sentences.append(span)
                word_index += len(sentence_words)

            paragraphs.append(
                ParagraphSpan(
                    start_index=paragraph_start,
                    end_index=word_index - 1,
                    sentences=tuple(paragraph_sentences),
                )
            )

        return ContextMap(sentences=tuple(sentences), paragraphs=tuple(paragraphs))

    def split_sentences(self, words: List[str]) -> List[List[str]]:
        """
        Split one paragraph's words into sentences.

        Examples:
            >>> builder = ContextMapBuilder()
            >>> builder.split_sentences(["Mr.", "Smith", "left.", "Bye!"])
            [['Mr.', 'Smith', 'left.'], ['Bye!']]
        """
        sentences: List[List[str]] = []
        current: List[str] = []

        for word in words:
            current.append(word)
            if self.is_sentence_end(word):
                sentences.append(current)
                current = []

        if current:
            sentences.append(current)

        return sentences

    def is_sentence_end(self, word: str) -> bool:
        """
        Check if a word ends a sentence.

        Examples:
            >>> builder = ContextMapBuilder()
            >>> builder.is_sentence_end("world.")
            True
            >>> builder.is_sentence_end("Mr.")
            False
            >>> builder.is_sentence_end("3.14")
            False
        """
        terminal = get_sentence_terminal(word)
        if terminal is None:
            return False

        if terminal == "." and is_abbreviation(word, self._abbreviations):
            return False

        return True


def build_context_map(text: str, language: str = "en") -> ContextMap:
    """Build a ContextMap using the default builder configuration."""
    return ContextMapBuilder(language=language).build(text)
