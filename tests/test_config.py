"""Tests for application settings."""

import logging

import pytest
from pydantic import ValidationError

from rsvp_engine.config import Settings, get_settings
from rsvp_engine.services.playback import AsyncioTickSource
from rsvp_engine.services.tokenizer import ReaderSettings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate from any RSVP_ variables or .env file in the working directory."""
    monkeypatch.chdir(tmp_path)
    for name in ("RSVP_DEFAULT_WPM", "RSVP_WPM_MIN", "RSVP_WPM_MAX", "RSVP_DEBUG", "RSVP_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings()
    assert settings.app_name == "RSVP Engine"
    assert settings.debug is False
    assert settings.log_level == "INFO"
    assert (settings.wpm_min, settings.default_wpm, settings.wpm_max) == (200, 400, 1000)
    assert settings.orp_offset == 0.35
    assert settings.max_chunk_length == 13
    assert settings.frame_drop_threshold_ms == 100.0


def test_env_override(monkeypatch):
    monkeypatch.setenv("RSVP_DEFAULT_WPM", "650")
    monkeypatch.setenv("RSVP_DEBUG", "true")
    settings = Settings()
    assert settings.default_wpm == 650
    assert settings.debug is True


def test_env_file(tmp_path):
    (tmp_path / ".env").write_text("RSVP_LOG_LEVEL=DEBUG\nRSVP_DYNAMIC_PACING=false\n")
    settings = Settings()
    assert settings.log_level == "DEBUG"
    assert settings.dynamic_pacing is False


@pytest.mark.parametrize(
    "overrides",
    [
        {"wpm_min": 500, "wpm_max": 500},
        {"wpm_min": 800, "wpm_max": 300, "default_wpm": 400},
        {"default_wpm": 150},
        {"default_wpm": 1_200},
        {"orp_offset": 1.0},
        {"max_chunk_length": 2},
        {"wpm_min": 0},
    ],
)
def test_invalid_settings(overrides):
    with pytest.raises(ValidationError):
        Settings(**overrides)


def test_reader_defaults():
    settings = Settings(default_wpm=500, orp_offset=0.4, dynamic_pacing=False, max_chunk_length=10)
    assert settings.reader_defaults() == ReaderSettings(
        base_wpm=500,
        orp_offset=0.4,
        dynamic_pacing=False,
        max_chunk_length=10,
    )


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_tokenizer_pipeline_uses_bounds():
    settings = Settings(wpm_min=100, wpm_max=500, default_wpm=300, max_input_size=50)
    pipeline = settings.tokenizer_pipeline("de")
    assert (pipeline.wpm_min, pipeline.wpm_max) == (100, 500)
    assert pipeline.max_input_size == 50
    assert pipeline.language == "de"


def test_tick_source_uses_interval():
    source = Settings(tick_interval_ms=33.0).tick_source()
    assert isinstance(source, AsyncioTickSource)
    assert source.interval_ms == 33.0


def test_reader_session_uses_playback_settings(ticks, caplog):
    settings = Settings(default_wpm=600, frame_drop_threshold_ms=40.0)
    session = settings.reader_session(ticks)

    assert session.settings.base_wpm == 600
    assert session.controller.frame_drop_threshold_ms == 40.0

    session.load_text("Hello world.")
    session.play()
    with caplog.at_level(logging.WARNING, logger="rsvp_engine.services.playback"):
        ticks.run([0, 50])
    assert "LOOP_FRAME_DROP" in caplog.text
    assert session.current_index == 0


def test_reader_session_clamps_to_configured_range(ticks):
    session = Settings(wpm_min=100, wpm_max=500, default_wpm=300).reader_session(ticks)
    assert session.set_wpm(900) == 500
    assert session.set_wpm(50) == 100
