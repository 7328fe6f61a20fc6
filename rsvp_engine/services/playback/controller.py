"""
Drift-corrected playback loop for RSVP token streams.

The PlaybackController advances a single cursor through a pre-computed token
stream using a tick + accumulator pattern:

- every tick adds the real elapsed time to an accumulator
- while the accumulator covers the current token's effective duration, the
  cursor advances and that duration is subtracted (leftover time carries
  forward, it is never reset to zero)
- the effective duration rescales the token's base duration by
  tokenization_speed / live_speed, with the live speed read on every tick

The per-tick path is arithmetic on pre-computed numbers only.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from rsvp_engine.models.enums import ErrorCode, PlaybackState
from rsvp_engine.services.tokenizer.constants import FRAME_DROP_THRESHOLD_MS, WPM_DEFAULT
from rsvp_engine.services.tokenizer.types import Token

from .tick_source import TickSource, Unsubscribe

logger = logging.getLogger(__name__)

SpeedSource = Callable[[], float]
IndexChangeCallback = Callable[[int], None]
CompleteCallback = Callable[[], None]


@dataclass
class LoopState:
    """Mutable loop state, owned exclusively by one PlaybackController."""

    tokens: Tuple[Token, ...] = ()
    tokenization_speed: float = WPM_DEFAULT
    state: PlaybackState = PlaybackState.STOPPED
    current_index: int = 0
    accumulator_ms: float = 0.0
    last_tick_timestamp: Optional[float] = None

    @property
    def is_playing(self) -> bool:
        return self.state is PlaybackState.PLAYING


@dataclass(frozen=True)
class PlaybackSnapshot:
    """Read-only view returned by PlaybackController.get_state()."""

    is_playing: bool
    current_index: int
    state: PlaybackState


class PlaybackController:
    """
    Finite state machine over STOPPED, PLAYING, PAUSED and COMPLETED.

    All operations are synchronous and never raise for bad indices or empty
    streams; those are clamped or ignored. Each tick subscription is tagged
    with a generation number, so a tick delivered after pause(), reset(),
    seek_to(), update_tokens() or close() is ignored.

    Example usage:
        >>> from rsvp_engine.services.playback.tick_source import ManualTickSource
        >>> from rsvp_engine.services.tokenizer import ReaderSettings, tokenize
        >>> result = tokenize("Hello world.", ReaderSettings(base_wpm=600))
        >>> ticks = ManualTickSource()
        >>> seen = []
        >>> controller = PlaybackController(
        ...     result.tokens, result.tokenization_wpm,
        ...     tick_source=ticks, on_index_change=seen.append,
        ... )
        >>> controller.start()
        >>> ticks.run([0, 50, 50])
        >>> seen
        [0, 1]
    """

    def __init__(
        self,
        tokens: Sequence[Token] = (),
        tokenization_speed: float = WPM_DEFAULT,
        *,
        tick_source: TickSource,
        speed_source: Optional[SpeedSource] = None,
        on_index_change: Optional[IndexChangeCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
        frame_drop_threshold_ms: float = FRAME_DROP_THRESHOLD_MS,
    ) -> None:
        """
        Initialize the controller in the STOPPED state at index 0.

        Args:
            tokens: Initial token stream.
            tokenization_speed: WPM the token durations were computed at.
            tick_source: Driver delivering millisecond timestamps.
            speed_source: Returns the live WPM; read on every tick.
                Defaults to the tokenization speed.
            on_index_change: Called with the new index when the displayed
                token changes.
            on_complete: Called once when the stream is exhausted.
            frame_drop_threshold_ms: Gaps above this are logged as frame drops.
        """
        self._loop_state = LoopState(
            tokens=tuple(tokens),
            tokenization_speed=self._checked_speed(tokenization_speed),
        )
        self._tick_source = tick_source
        self._speed_source = speed_source
        self._on_index_change = on_index_change
        self._on_complete = on_complete
        self.frame_drop_threshold_ms = frame_drop_threshold_ms

        self._unsubscribe: Optional[Unsubscribe] = None
        self._generation = 0
        self._closed = False

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> PlaybackState:
        return self._loop_state.state

    @property
    def is_playing(self) -> bool:
        return self._loop_state.is_playing

    @property
    def current_index(self) -> int:
        return self._loop_state.current_index

    @property
    def accumulator_ms(self) -> float:
        return self._loop_state.accumulator_ms

    @property
    def tokens(self) -> Tuple[Token, ...]:
        return self._loop_state.tokens

    @property
    def tokenization_speed(self) -> float:
        return self._loop_state.tokenization_speed

    @property
    def current_token(self) -> Optional[Token]:
        tokens = self._loop_state.tokens
        if not tokens:
            return None
        return tokens[self._loop_state.current_index]

    @property
    def is_closed(self) -> bool:
        return self._closed

    def get_state(self) -> PlaybackSnapshot:
        return PlaybackSnapshot(
            is_playing=self._loop_state.is_playing,
            current_index=self._loop_state.current_index,
            state=self._loop_state.state,
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def start(self) -> None:
        """STOPPED|PAUSED -> PLAYING. Emits index 0 when starting at the beginning."""
        loop = self._loop_state
        if self._closed or not loop.tokens:
            return
        if loop.state in (PlaybackState.PLAYING, PlaybackState.COMPLETED):
            return

        self._begin_playing(emit_current=loop.current_index == 0)

    def pause(self) -> None:
        """PLAYING -> PAUSED. Index and accumulator are preserved exactly."""
        loop = self._loop_state
        if loop.state is not PlaybackState.PLAYING:
            return

        self._stop_ticking()
        loop.state = PlaybackState.PAUSED
        logger.debug("Paused at index %d (accumulator %.1fms)", loop.current_index, loop.accumulator_ms)

    def reset(self) -> None:
        """Any state -> STOPPED at index 0 with an empty accumulator."""
        self._stop_ticking()
        loop = self._loop_state
        loop.state = PlaybackState.STOPPED
        loop.current_index = 0
        loop.accumulator_ms = 0.0

    def seek_to(self, index: int) -> None:
        """
        Move the cursor to index, clamped into the stream.

        Emits exactly one index-change notification. Playback resumes from
        the new index if it was playing; otherwise the controller is PAUSED
        there.
        """
        loop = self._loop_state
        if self._closed or not loop.tokens:
            return

        was_playing = loop.is_playing
        self._stop_ticking()

        clamped = max(0, min(index, len(loop.tokens) - 1))
        if clamped != index:
            logger.debug("%s: seek to %d clamped to %d", ErrorCode.INDEX_OUT_OF_BOUNDS.value, index, clamped)

        loop.current_index = clamped
        loop.accumulator_ms = 0.0
        loop.state = PlaybackState.PLAYING if was_playing else PlaybackState.PAUSED

        generation = self._generation
        self._emit_index(clamped)

        # The callback may have paused, seeked or closed in the meantime
        if was_playing and generation == self._generation and loop.is_playing:
            self._start_ticking(fallback_state=PlaybackState.PAUSED)

    def seek_to_sentence_start(self) -> None:
        """Seek to the first token of the current token's sentence."""
        loop = self._loop_state
        if self._closed or not loop.tokens:
            return

        tokens = loop.tokens
        index = loop.current_index
        sentence_index = tokens[index].sentence_index
        while index > 0 and tokens[index - 1].sentence_index == sentence_index:
            index -= 1

        self.seek_to(index)

    def update_tokens(self, tokens: Sequence[Token], tokenization_speed: float) -> None:
        """
        Replace the token stream atomically and rewind to index 0.

        If playback was running it continues with the new stream; an empty
        stream cancels playback instead.
        """
        if self._closed:
            return

        loop = self._loop_state
        was_playing = loop.is_playing
        self._stop_ticking()

        loop.tokens = tuple(tokens)
        loop.tokenization_speed = self._checked_speed(tokenization_speed)
        loop.current_index = 0
        loop.accumulator_ms = 0.0
        loop.state = PlaybackState.STOPPED

        logger.debug("Token stream replaced: %d tokens at %s WPM", len(loop.tokens), loop.tokenization_speed)

        if was_playing and loop.tokens:
            self._begin_playing(emit_current=True)

    def close(self) -> None:
        """Stop ticking for good; later operations and ticks are ignored."""
        if self._closed:
            return
        self._stop_ticking()
        self._closed = True
        if self._loop_state.is_playing:
            self._loop_state.state = PlaybackState.PAUSED

    # ------------------------------------------------------------------
    # Tick handling
    # ------------------------------------------------------------------

    def _begin_playing(self, emit_current: bool) -> None:
        loop = self._loop_state
        previous_state = loop.state
        loop.state = PlaybackState.PLAYING
        logger.debug("Playing from index %d", loop.current_index)

        generation = self._generation
        if emit_current:
            self._emit_index(loop.current_index)

        if generation == self._generation and loop.is_playing:
            self._start_ticking(fallback_state=previous_state)

    def _start_ticking(self, fallback_state: PlaybackState) -> None:
        self._generation += 1
        generation = self._generation
        self._loop_state.last_tick_timestamp = None
        try:
            self._unsubscribe = self._tick_source.subscribe(
                lambda timestamp_ms: self._on_tick(generation, timestamp_ms)
            )
        except Exception:
            # Not ticking, so not playing
            self._loop_state.state = fallback_state
            raise

    def _stop_ticking(self) -> None:
        self._generation += 1
        if self._unsubscribe is not None:
            unsubscribe, self._unsubscribe = self._unsubscribe, None
            unsubscribe()

    def _on_tick(self, generation: int, timestamp_ms: float) -> None:
        loop = self._loop_state
        if generation != self._generation or not loop.is_playing:
            return

        # First tick after start only establishes the time origin
        if loop.last_tick_timestamp is None:
            loop.last_tick_timestamp = timestamp_ms
            return

        delta = max(0.0, timestamp_ms - loop.last_tick_timestamp)
        loop.last_tick_timestamp = timestamp_ms

        if delta > self.frame_drop_threshold_ms:
            logger.warning(
                "%s: %.1fms since last tick (threshold %.1fms)",
                ErrorCode.LOOP_FRAME_DROP.value,
                delta,
                self.frame_drop_threshold_ms,
            )

        loop.accumulator_ms += delta

        tokens = loop.tokens
        effective = self._effective_duration(tokens[loop.current_index])
        while loop.accumulator_ms >= effective:
            loop.accumulator_ms -= effective
            next_index = loop.current_index + 1

            if next_index >= len(tokens):
                self._complete()
                return

            loop.current_index = next_index
            self._emit_index(next_index)
            if generation != self._generation:
                return

            effective = self._effective_duration(tokens[next_index])

    def _effective_duration(self, token: Token) -> float:
        tokenization_speed = self._loop_state.tokenization_speed
        live_speed = self._speed_source() if self._speed_source is not None else tokenization_speed
        if not live_speed > 0:
            live_speed = tokenization_speed
        return token.base_duration_ms * (tokenization_speed / live_speed)

    def _complete(self) -> None:
        self._stop_ticking()
        loop = self._loop_state
        loop.state = PlaybackState.COMPLETED
        loop.current_index = len(loop.tokens) - 1
        loop.accumulator_ms = 0.0
        logger.debug("Playback completed after %d tokens", len(loop.tokens))

        if self._on_complete is not None:
            self._on_complete()

    def _emit_index(self, index: int) -> None:
        if self._on_index_change is not None:
            self._on_index_change(index)

    @staticmethod
    def _checked_speed(speed: float) -> float:
        if not speed > 0:
            logger.warning("Invalid tokenization speed %r, using %s WPM", speed, WPM_DEFAULT)
            return WPM_DEFAULT
        return speed
