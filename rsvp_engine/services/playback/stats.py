"""Reading statistics derived from a token stream and the cursor position."""

import math
from typing import Sequence

from rsvp_engine.services.tokenizer.types import Token


def estimate_remaining_ms(
    tokens: Sequence[Token],
    current_index: int,
    tokenization_wpm: float,
    live_wpm: float,
) -> int:
    """
    Estimate the time left to read from current_index to the end.

    Durations are rescaled to the live speed the same way the playback
    loop does it.

    Example:
        >>> from rsvp_engine.services.tokenizer import tokenize, ReaderSettings
        >>> result = tokenize("Hello world.", ReaderSettings(base_wpm=600))
        >>> estimate_remaining_ms(result.tokens, 0, 600, 300)
        800
    """
    if not tokens or current_index >= len(tokens):
        return 0

    remaining = sum(token.base_duration_ms for token in tokens[max(0, current_index):])
    if not live_wpm > 0:
        return remaining
    return round(remaining * (tokenization_wpm / live_wpm))


def format_time_remaining(ms: float) -> str:
    """
    Format a duration the way the reading stats display it.

    Under a minute, seconds are rounded up; above, seconds are dropped
    when they round to zero.

    Examples:
        >>> format_time_remaining(44_100)
        '45s'
        >>> format_time_remaining(150_000)
        '2m 30s'
        >>> format_time_remaining(180_200)
        '3m'
    """
    if ms < 60_000:
        return f"{math.ceil(max(0.0, ms) / 1000)}s"

    minutes, seconds = divmod(round(ms / 1000), 60)
    return f"{minutes}m {seconds}s" if seconds else f"{minutes}m"


def progress_percent(current_index: int, total: int) -> float:
    """Progress through the stream as a percentage (0 for an empty stream)."""
    if total <= 0:
        return 0.0
    return current_index / total * 100
