"""
Main tokenization pipeline for RSVP reading.

This module provides the TokenizerPipeline class that turns source text into
a fully pre-computed, immutable token stream. Everything the playback loop
needs per frame (durations, focal points, boundaries) is decided here.

Pipeline stages:
1. Validation (empty input, reading speed, input size)
2. Source preprocessing and whitespace normalization
3. Word splitting and ContextMap construction
4. Hyphenation of over-long words
5. ORP and pacing calculation per display unit

Example usage:
    >>> pipeline = TokenizerPipeline(id_factory=sequential_ids())
    >>> result = pipeline.process("Hello world.", ReaderSettings(base_wpm=600))
    >>> [(t.raw, t.focal_index, t.base_duration_ms) for t in result.tokens]
    [('Hello', 1, 100), ('world.', 1, 300)]
"""

import itertools
import logging
import uuid
from dataclasses import dataclass
from typing import Callable, List, Literal, Optional, Tuple

from rsvp_engine.logging_config import log_performance
from rsvp_engine.models.enums import ErrorCode

from .constants import MAX_INPUT_SIZE, TOKENIZER_VERSION, WPM_MAX, WPM_MIN
from .context import ContextMap, ContextMapBuilder
from .errors import TokenizationError
from .hyphenator import Hyphenator
from .normalizer import normalize_text
from .orp import ORPCalculator
from .pacing import PacingCalculator
from .text_utils import split_into_words
from .types import ReaderSettings, Token

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]


def uuid_ids() -> str:
    """Default identifier generator."""
    return str(uuid.uuid4())


def sequential_ids(prefix: str = "t") -> IdFactory:
    """
    Create a deterministic identifier generator.

    Example:
        >>> next_id = sequential_ids()
        >>> next_id(), next_id()
        ('t0', 't1')
    """
    counter = itertools.count()
    return lambda: f"{prefix}{next(counter)}"


@dataclass(frozen=True)
class TokenizationResult:
    """Result of the tokenization pipeline.

    Attributes:
        tokens: Display units in source order.
        context_map: Sentence and paragraph ranges over word indices.
        total_duration_ms: Sum of all token durations at tokenization_wpm.
        word_count: Number of source words (before hyphenation).
        tokenization_wpm: Speed the durations were computed at.
        normalized_text: The text that was split into words.
        tokenizer_version: Version of the tokenizer used.
    """

    tokens: Tuple[Token, ...]
    context_map: ContextMap
    total_duration_ms: int
    word_count: int
    tokenization_wpm: float
    normalized_text: str
    tokenizer_version: str = TOKENIZER_VERSION


def _validate_token_invariants(token: Token) -> None:
    """
    Validate tokenizer invariants and raise explicit errors on violations.

    Args:
        token: Token to validate.
    """
    if not token.raw:
        raise ValueError(f"empty display text for source word {token.source_index}")

    if not (0 <= token.focal_index < len(token.raw)):
        raise ValueError(
            f"focal_index out of bounds: focal_index={token.focal_index} raw={token.raw!r}"
        )

    if token.base_duration_ms < 0:
        raise ValueError(f"negative duration: {token.base_duration_ms}")

    if token.is_hyphenated and token.hyphen_group_id is None:
        raise ValueError(f"hyphenated token without group id: raw={token.raw!r}")


class TokenizerPipeline:
    """
    Main tokenization pipeline for RSVP text processing.

    The pipeline itself is stateless between calls; every process() call
    builds its calculators from the settings it receives, so the same
    instance can be reused (or shared) across documents.

    Example usage:
        >>> pipeline = TokenizerPipeline(language="en")
        >>> result = pipeline.process("Hello, world!", ReaderSettings())
        >>> result.word_count
        2
    """

    def __init__(
        self,
        language: str = "en",
        id_factory: Optional[IdFactory] = None,
        wpm_min: float = WPM_MIN,
        wpm_max: float = WPM_MAX,
        max_input_size: int = MAX_INPUT_SIZE,
    ) -> None:
        """
        Initialize the tokenizer pipeline.

        Args:
            language: Language code for abbreviation detection.
                     Supported: 'en' (English), 'de' (German).
            id_factory: Callable producing token and hyphen group ids.
                       Defaults to random UUIDs.
            wpm_min: Lowest accepted base WPM.
            wpm_max: Highest accepted base WPM.
            max_input_size: Longest accepted input in characters.

        Raises:
            ValueError: If the language is not supported.
        """
        self.language = language
        self.id_factory = id_factory or uuid_ids
        self.wpm_min = wpm_min
        self.wpm_max = wpm_max
        self.max_input_size = max_input_size
        self._context_builder = ContextMapBuilder(language=language)

    @log_performance("tokenize")
    def process(
        self,
        raw_text: str,
        settings: Optional[ReaderSettings] = None,
        source_type: Literal["paste", "md", "pdf"] = "paste",
    ) -> TokenizationResult:
        """
        Process raw text through the complete tokenization pipeline.

        Args:
            raw_text: The input text to tokenize.
            settings: Reader settings; defaults to ReaderSettings().
            source_type: Type of source document:
                        - "paste": Plain text (default)
                        - "md": Markdown (strips formatting)
                        - "pdf": PDF text (handles extraction artifacts)

        Returns:
            TokenizationResult with tokens, context map and totals.

        Raises:
            TokenizationError: EMPTY_INPUT, INVALID_WPM or TOKENIZATION_FAILED.
                Nothing is produced on failure.
        """
        settings = settings or ReaderSettings()
        self._validate_input(raw_text, settings)

        # Stage 1: Normalize text
        normalized = normalize_text(raw_text, source_type=source_type)

        # Stage 2: Split into words
        words = split_into_words(normalized)
        if not words:
            raise TokenizationError(ErrorCode.EMPTY_INPUT, "Text contains no words")

        # Stage 3: Sentence and paragraph ranges
        context_map = self._context_builder.build(normalized)
        if context_map.word_count != len(words):
            raise TokenizationError(
                ErrorCode.TOKENIZATION_FAILED,
                f"Context map covers {context_map.word_count} words, expected {len(words)}",
            )

        # Stage 4: Build tokens
        tokens = self._build_tokens(words, context_map, settings)
        total_duration_ms = sum(token.base_duration_ms for token in tokens)

        logger.debug(
            "Tokenized %d words into %d tokens (%d sentences, %d paragraphs)",
            len(words),
            len(tokens),
            len(context_map.sentences),
            len(context_map.paragraphs),
        )

        return TokenizationResult(
            tokens=tuple(tokens),
            context_map=context_map,
            total_duration_ms=total_duration_ms,
            word_count=len(words),
            tokenization_wpm=settings.base_wpm,
            normalized_text=normalized,
        )

    def _validate_input(self, raw_text: str, settings: ReaderSettings) -> None:
        if not raw_text or not raw_text.strip():
            raise TokenizationError(ErrorCode.EMPTY_INPUT, "Text is empty")

        # Written as a negated range check so NaN is rejected too
        if not (self.wpm_min <= settings.base_wpm <= self.wpm_max):
            raise TokenizationError(
                ErrorCode.INVALID_WPM,
                f"WPM must be between {self.wpm_min} and {self.wpm_max}, got {settings.base_wpm}",
            )

        if len(raw_text) > self.max_input_size:
            raise TokenizationError(
                ErrorCode.TOKENIZATION_FAILED,
                f"Text exceeds maximum size of {self.max_input_size} characters",
            )

    def _build_tokens(
        self,
        words: List[str],
        context_map: ContextMap,
        settings: ReaderSettings,
    ) -> List[Token]:
        orp_calculator = ORPCalculator(offset=settings.orp_offset)
        pacing_calculator = PacingCalculator(
            settings.base_wpm,
            dynamic_pacing=settings.dynamic_pacing,
        )
        hyphenator = Hyphenator(max_length=settings.max_chunk_length)

        sentences = context_map.sentences
        paragraphs = context_map.paragraphs
        sentence_idx = 0
        paragraph_idx = 0
        tokens: List[Token] = []

        for source_index, word in enumerate(words):
            # Ranges are monotonic, so a pointer walk finds the containing span
            while sentences[sentence_idx].end_index < source_index:
                sentence_idx += 1
            while paragraphs[paragraph_idx].end_index < source_index:
                paragraph_idx += 1

            if hyphenator.needs_hyphenation(word):
                fragments = hyphenator.hyphenate(word)
            else:
                fragments = [word]

            is_hyphenated = len(fragments) > 1
            group_id = self.id_factory() if is_hyphenated else None
            last = len(fragments) - 1

            for i, fragment in enumerate(fragments):
                # Intermediate fragments end in a continuation mark, never punctuation
                duration = pacing_calculator.calculate(fragment, check_punctuation=i == last)
                token = Token(
                    id=self.id_factory(),
                    raw=fragment,
                    focal_index=orp_calculator.calculate(fragment),
                    base_duration_ms=duration.duration_ms,
                    multiplier=duration.multiplier,
                    is_punctuation=duration.is_punctuation,
                    source_index=source_index,
                    sentence_index=sentence_idx,
                    paragraph_index=paragraph_idx,
                    is_hyphenated=is_hyphenated,
                    hyphen_group_id=group_id,
                )
                try:
                    _validate_token_invariants(token)
                except ValueError as e:
                    raise TokenizationError(ErrorCode.TOKENIZATION_FAILED, str(e)) from e
                tokens.append(token)

        return tokens


def tokenize(
    raw_text: str,
    settings: Optional[ReaderSettings] = None,
    *,
    source_type: Literal["paste", "md", "pdf"] = "paste",
    language: str = "en",
    id_factory: Optional[IdFactory] = None,
) -> TokenizationResult:
    """
    Tokenize text using the default pipeline configuration.

    This is a convenience function that creates a TokenizerPipeline
    and processes the text.

    Args:
        raw_text: The input text to tokenize.
        settings: Reader settings; defaults to ReaderSettings().
        source_type: Type of source ("paste", "md", "pdf").
        language: Language code ('en' or 'de').
        id_factory: Identifier generator; defaults to random UUIDs.

    Returns:
        TokenizationResult with tokens and metadata.

    Example:
        >>> result = tokenize("Hello world.")
        >>> result.word_count
        2
    """
    pipeline = TokenizerPipeline(language=language, id_factory=id_factory)
    return pipeline.process(raw_text, settings, source_type=source_type)
