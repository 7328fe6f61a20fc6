"""
Playback package: the drift-corrected timing loop and its collaborators.

- controller: PlaybackController state machine (tick + accumulator loop)
- tick_source: ManualTickSource and AsyncioTickSource drivers
- session: ReaderSession glue owning settings, tokenizer and controller
- stats: remaining time and progress helpers
"""

from .controller import LoopState, PlaybackController, PlaybackSnapshot
from .session import ReaderSession
from .stats import estimate_remaining_ms, format_time_remaining, progress_percent
from .tick_source import AsyncioTickSource, ManualTickSource, TickSource

__all__ = [
    "PlaybackController",
    "PlaybackSnapshot",
    "LoopState",
    "ReaderSession",
    "TickSource",
    "ManualTickSource",
    "AsyncioTickSource",
    "estimate_remaining_ms",
    "format_time_remaining",
    "progress_percent",
]
