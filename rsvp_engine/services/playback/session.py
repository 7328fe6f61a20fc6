"""
Reader session: glue between settings, the tokenizer and one playback loop.

A ReaderSession owns the current ReaderSettings, loads text through a
TokenizerPipeline and drives a single PlaybackController. Speed changes are
picked up by the running loop on its next tick without re-tokenizing.
"""

import logging
import uuid
from typing import Callable, Literal, Optional, Tuple

from rsvp_engine.models.enums import PlaybackState, ReaderStatus
from rsvp_engine.services.tokenizer import (
    ContextMap,
    ReaderSettings,
    Token,
    TokenizationResult,
    TokenizerPipeline,
)
from rsvp_engine.services.tokenizer.constants import FRAME_DROP_THRESHOLD_MS

from .controller import PlaybackController
from .stats import estimate_remaining_ms, format_time_remaining, progress_percent
from .tick_source import TickSource

logger = logging.getLogger(__name__)

_STATUS_BY_STATE = {
    PlaybackState.STOPPED: ReaderStatus.IDLE,
    PlaybackState.PLAYING: ReaderStatus.PLAYING,
    PlaybackState.PAUSED: ReaderStatus.PAUSED,
    PlaybackState.COMPLETED: ReaderStatus.COMPLETE,
}


class ReaderSession:
    """
    In-memory reading session.

    Example usage:
        >>> from rsvp_engine.services.playback import ManualTickSource
        >>> ticks = ManualTickSource()
        >>> session = ReaderSession(ReaderSettings(base_wpm=600), tick_source=ticks)
        >>> session.load_text("Hello world.")
        >>> session.play()
        >>> ticks.run([0, 100])
        >>> session.current_token.raw
        'world.'
        >>> session.time_remaining_label
        '1s'
    """

    def __init__(
        self,
        settings: Optional[ReaderSettings] = None,
        *,
        tick_source: TickSource,
        pipeline: Optional[TokenizerPipeline] = None,
        frame_drop_threshold_ms: float = FRAME_DROP_THRESHOLD_MS,
        on_index_change: Optional[Callable[[int], None]] = None,
        on_complete: Optional[Callable[[], None]] = None,
    ) -> None:
        self._settings = settings or ReaderSettings()
        self._pipeline = pipeline or TokenizerPipeline()
        self._on_index_change = on_index_change
        self._on_complete = on_complete

        self._result: Optional[TokenizationResult] = None
        self._session_id: Optional[str] = None
        self._words_read = 0

        self._controller = PlaybackController(
            tick_source=tick_source,
            speed_source=lambda: self._settings.base_wpm,
            on_index_change=self._handle_index_change,
            on_complete=self._handle_complete,
            frame_drop_threshold_ms=frame_drop_threshold_ms,
        )

    # ------------------------------------------------------------------
    # Loading and settings
    # ------------------------------------------------------------------

    def load_text(
        self,
        text: str,
        source_type: Literal["paste", "md", "pdf"] = "paste",
    ) -> None:
        """
        Tokenize text and make it the current stream, stopped at index 0.

        Raises:
            TokenizationError: The previous stream and position are kept.
        """
        result = self._pipeline.process(text, self._settings, source_type=source_type)

        self._controller.reset()
        self._controller.update_tokens(result.tokens, result.tokenization_wpm)
        self._result = result
        self._session_id = str(uuid.uuid4())
        self._words_read = 0

        logger.info(
            "Loaded text: %d words, %d tokens, %dms at %s WPM",
            result.word_count,
            len(result.tokens),
            result.total_duration_ms,
            result.tokenization_wpm,
        )

    def set_wpm(self, wpm: float) -> float:
        """Set the live reading speed, clamped to the supported range."""
        clamped = max(self._pipeline.wpm_min, min(wpm, self._pipeline.wpm_max))
        self._settings = self._settings.with_changes(base_wpm=clamped)
        return clamped

    def update_settings(self, **changes) -> ReaderSettings:
        """
        Replace settings fields.

        A new base_wpm applies to the running loop immediately; the other
        fields apply to the next load_text().
        """
        if "base_wpm" in changes:
            self.set_wpm(changes.pop("base_wpm"))
        if changes:
            self._settings = self._settings.with_changes(**changes)
        return self._settings

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    def play(self) -> None:
        """Start or resume playback; a completed stream restarts from the top."""
        if not self.tokens:
            return

        if self._controller.state is PlaybackState.COMPLETED:
            self._controller.reset()
            self._words_read = 0

        self._controller.start()

    def pause(self) -> None:
        self._controller.pause()

    def reset(self) -> None:
        self._controller.reset()
        self._words_read = 0

    def seek_to(self, index: int) -> None:
        self._controller.seek_to(index)

    def seek_to_sentence_start(self) -> None:
        self._controller.seek_to_sentence_start()

    def begin_context_reveal(self) -> Optional[str]:
        """
        Pause and return the current paragraph for the context overlay.

        Returns:
            The paragraph text, or None when nothing is loaded.
        """
        if not self.tokens:
            return None
        self.pause()
        return self.current_paragraph_text

    def end_context_reveal(self) -> None:
        """Rewind to the start of the current sentence; playback stays paused."""
        self.seek_to_sentence_start()

    def close(self) -> None:
        self._controller.close()

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def settings(self) -> ReaderSettings:
        return self._settings

    @property
    def controller(self) -> PlaybackController:
        return self._controller

    @property
    def result(self) -> Optional[TokenizationResult]:
        return self._result

    @property
    def session_id(self) -> Optional[str]:
        return self._session_id

    @property
    def tokens(self) -> Tuple[Token, ...]:
        return self._controller.tokens

    @property
    def context_map(self) -> Optional[ContextMap]:
        return self._result.context_map if self._result else None

    @property
    def status(self) -> ReaderStatus:
        return _STATUS_BY_STATE[self._controller.state]

    @property
    def is_playing(self) -> bool:
        return self._controller.is_playing

    @property
    def current_index(self) -> int:
        return self._controller.current_index

    @property
    def current_token(self) -> Optional[Token]:
        return self._controller.current_token

    @property
    def words_read(self) -> int:
        return self._words_read

    @property
    def progress(self) -> float:
        return progress_percent(self.current_index, len(self.tokens))

    @property
    def time_remaining_ms(self) -> int:
        if self.status is ReaderStatus.COMPLETE:
            return 0
        return estimate_remaining_ms(
            self.tokens,
            self.current_index,
            self._controller.tokenization_speed,
            self._settings.base_wpm,
        )

    @property
    def time_remaining_label(self) -> Optional[str]:
        if not self.tokens:
            return None
        return format_time_remaining(self.time_remaining_ms)

    @property
    def current_paragraph_text(self) -> Optional[str]:
        token = self.current_token
        if token is None or self._result is None:
            return None
        return self._result.context_map.paragraph_text(token.paragraph_index)

    # ------------------------------------------------------------------
    # Controller callbacks
    # ------------------------------------------------------------------

    def _handle_index_change(self, index: int) -> None:
        self._words_read = index + 1
        if self._on_index_change is not None:
            self._on_index_change(index)

    def _handle_complete(self) -> None:
        self._words_read = len(self.tokens)
        logger.info("Reading session %s complete", self._session_id)
        if self._on_complete is not None:
            self._on_complete()
