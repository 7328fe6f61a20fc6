"""Application configuration settings."""

from functools import lru_cache
from typing import Callable, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rsvp_engine.services.playback import AsyncioTickSource, ReaderSession, TickSource
from rsvp_engine.services.tokenizer import TokenizerPipeline
from rsvp_engine.services.tokenizer.constants import (
    DEFAULT_TICK_INTERVAL_MS,
    FRAME_DROP_THRESHOLD_MS,
    MAX_CHUNK_LENGTH,
    MAX_INPUT_SIZE,
    ORP_OFFSET_DEFAULT,
    WPM_DEFAULT,
    WPM_MAX,
    WPM_MIN,
)
from rsvp_engine.services.tokenizer.types import ReaderSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables (prefix RSVP_)."""

    model_config = SettingsConfigDict(
        env_prefix="RSVP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "RSVP Engine"
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Reading speed
    wpm_min: int = Field(default=WPM_MIN, gt=0)
    wpm_max: int = Field(default=WPM_MAX, gt=0)
    default_wpm: int = WPM_DEFAULT

    # Tokenizer defaults
    orp_offset: float = Field(default=ORP_OFFSET_DEFAULT, gt=0, lt=1)
    max_chunk_length: int = Field(default=MAX_CHUNK_LENGTH, ge=4)
    dynamic_pacing: bool = True
    max_input_size: int = Field(default=MAX_INPUT_SIZE, gt=0)

    # Playback loop
    frame_drop_threshold_ms: float = Field(default=FRAME_DROP_THRESHOLD_MS, gt=0)
    tick_interval_ms: float = Field(default=DEFAULT_TICK_INTERVAL_MS, gt=0)

    @model_validator(mode="after")
    def check_wpm_bounds(self) -> "Settings":
        if self.wpm_min >= self.wpm_max:
            raise ValueError(f"wpm_min ({self.wpm_min}) must be below wpm_max ({self.wpm_max})")
        if not self.wpm_min <= self.default_wpm <= self.wpm_max:
            raise ValueError(
                f"default_wpm ({self.default_wpm}) must be within [{self.wpm_min}, {self.wpm_max}]"
            )
        return self

    def reader_defaults(self) -> ReaderSettings:
        """Build the ReaderSettings used when a request supplies none."""
        return ReaderSettings(
            base_wpm=self.default_wpm,
            orp_offset=self.orp_offset,
            dynamic_pacing=self.dynamic_pacing,
            max_chunk_length=self.max_chunk_length,
        )

    def tokenizer_pipeline(self, language: str = "en") -> TokenizerPipeline:
        """Build a TokenizerPipeline enforcing the configured bounds."""
        return TokenizerPipeline(
            language=language,
            wpm_min=self.wpm_min,
            wpm_max=self.wpm_max,
            max_input_size=self.max_input_size,
        )

    def tick_source(self, loop=None) -> AsyncioTickSource:
        """Build a real-time tick source at the configured interval."""
        return AsyncioTickSource(interval_ms=self.tick_interval_ms, loop=loop)

    def reader_session(
        self,
        tick_source: Optional[TickSource] = None,
        *,
        language: str = "en",
        on_index_change: Optional[Callable[[int], None]] = None,
        on_complete: Optional[Callable[[], None]] = None,
    ) -> ReaderSession:
        """
        Build a ReaderSession from the configured defaults.

        Without an explicit tick_source an AsyncioTickSource is created, which
        must then be driven from a running event loop.
        """
        return ReaderSession(
            self.reader_defaults(),
            tick_source=tick_source or self.tick_source(),
            pipeline=self.tokenizer_pipeline(language),
            frame_drop_threshold_ms=self.frame_drop_threshold_ms,
            on_index_change=on_index_change,
            on_complete=on_complete,
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()
