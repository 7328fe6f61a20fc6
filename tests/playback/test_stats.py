"""Tests for reading statistics helpers."""

import pytest

from rsvp_engine.services.playback.stats import (
    estimate_remaining_ms,
    format_time_remaining,
    progress_percent,
)
from rsvp_engine.services.tokenizer import ReaderSettings, tokenize


@pytest.fixture
def tokens():
    # 100 + 100 + 300 at 600 WPM
    return tokenize("Hello there world.", ReaderSettings(base_wpm=600)).tokens


class TestEstimateRemaining:
    def test_from_start(self, tokens):
        assert estimate_remaining_ms(tokens, 0, 600, 600) == 500

    def test_from_middle(self, tokens):
        assert estimate_remaining_ms(tokens, 2, 600, 600) == 300

    def test_rescaled_to_live_speed(self, tokens):
        assert estimate_remaining_ms(tokens, 0, 600, 1000) == 300
        assert estimate_remaining_ms(tokens, 0, 600, 300) == 1000

    def test_past_end_and_empty(self, tokens):
        assert estimate_remaining_ms(tokens, 3, 600, 600) == 0
        assert estimate_remaining_ms((), 0, 600, 600) == 0

    def test_invalid_live_speed_uses_base(self, tokens):
        assert estimate_remaining_ms(tokens, 0, 600, 0) == 500


class TestFormatTimeRemaining:
    @pytest.mark.parametrize(
        "ms,expected",
        [
            (0, "0s"),
            (1, "1s"),
            (44_100, "45s"),
            (59_999, "60s"),
            (60_000, "1m"),
            (90_000, "1m 30s"),
            (150_000, "2m 30s"),
            (180_200, "3m"),
            (3_599_600, "60m"),
        ],
    )
    def test_format(self, ms, expected):
        assert format_time_remaining(ms) == expected


class TestProgressPercent:
    @pytest.mark.parametrize(
        "index,total,expected",
        [(0, 10, 0.0), (5, 10, 50.0), (9, 10, 90.0), (0, 0, 0.0)],
    )
    def test_progress(self, index, total, expected):
        assert progress_percent(index, total) == pytest.approx(expected)
