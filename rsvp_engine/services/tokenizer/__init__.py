"""
Tokenizer package for RSVP text processing.

This package turns text into a pre-computed token stream:
- tokenizer: Main TokenizerPipeline class (primary entry point)
- constants: Speed bounds, pacing multipliers, punctuation and abbreviations
- normalizer: Whitespace normalization and Markdown/PDF cleanup
- context: Sentence and paragraph range mapping
- orp: Focal point (ORP) calculation
- pacing: Display duration calculation
- hyphenator: Long-word splitting

Primary usage:
    >>> from rsvp_engine.services.tokenizer import ReaderSettings, tokenize
    >>> result = tokenize("Hello world.", ReaderSettings(base_wpm=600))
    >>> result.total_duration_ms
    400
"""

from .constants import (
    MAX_CHUNK_LENGTH,
    MAX_INPUT_SIZE,
    ORP_OFFSET_DEFAULT,
    SUPPORTED_LANGUAGES,
    TOKENIZER_VERSION,
    WPM_DEFAULT,
    WPM_MAX,
    WPM_MIN,
)
from .context import (
    ContextMap,
    ContextMapBuilder,
    ParagraphSpan,
    SentenceSpan,
    build_context_map,
)
from .errors import TokenizationError
from .hyphenator import Hyphenator, hyphenate_word, needs_hyphenation
from .normalizer import normalize_text, normalize_whitespace
from .orp import ORPCalculator, calculate_orp_index, split_by_orp
from .pacing import (
    DurationResult,
    PacingCalculator,
    calculate_duration,
    ms_to_wpm,
    wpm_to_ms,
)
from .tokenizer import (
    TokenizationResult,
    TokenizerPipeline,
    sequential_ids,
    tokenize,
    uuid_ids,
)
from .types import ReaderSettings, Token


def get_tokenizer_version() -> str:
    """Return the current tokenizer version string."""
    return TOKENIZER_VERSION


__all__ = [
    # Main pipeline (primary API)
    "TokenizerPipeline",
    "TokenizationResult",
    "tokenize",
    "sequential_ids",
    "uuid_ids",
    "get_tokenizer_version",
    # Types and errors
    "ReaderSettings",
    "Token",
    "TokenizationError",
    # Context map
    "ContextMap",
    "ContextMapBuilder",
    "SentenceSpan",
    "ParagraphSpan",
    "build_context_map",
    # Calculators
    "ORPCalculator",
    "calculate_orp_index",
    "split_by_orp",
    "PacingCalculator",
    "DurationResult",
    "calculate_duration",
    "wpm_to_ms",
    "ms_to_wpm",
    "Hyphenator",
    "hyphenate_word",
    "needs_hyphenation",
    # Normalizer
    "normalize_text",
    "normalize_whitespace",
    # Constants
    "TOKENIZER_VERSION",
    "SUPPORTED_LANGUAGES",
    "MAX_INPUT_SIZE",
    "WPM_MIN",
    "WPM_MAX",
    "WPM_DEFAULT",
    "ORP_OFFSET_DEFAULT",
    "MAX_CHUNK_LENGTH",
]
