"""Tests for ORP (Optimal Recognition Point) calculator."""

import pytest

from rsvp_engine.services.tokenizer.orp import ORPCalculator, calculate_orp_index, split_by_orp


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def calculator():
    """Create an ORP calculator with the default offset."""
    return ORPCalculator()


# =============================================================================
# ORP Calculation Tests
# =============================================================================


class TestORPCalculation:
    """Tests for basic ORP calculation."""

    @pytest.mark.parametrize(
        "word,expected_orp",
        [
            # Empty and very short words fixate on the first character
            ("", 0),
            ("a", 0),
            ("to", 0),
            ("the", 0),
            # floor(len * 0.35), at least 1
            ("word", 1),
            ("hello", 1),
            ("system", 2),
            ("reading", 2),
            ("computer", 2),
            ("recognition", 3),
            ("extraordinarily", 5),
        ],
    )
    def test_orp_by_length(self, calculator, word, expected_orp):
        assert calculator.calculate(word) == expected_orp

    @pytest.mark.parametrize(
        "word,expected_orp",
        [
            ("the.", 0),
            ("and,", 0),
            ('it!")', 0),
            ("world.", 1),
            ("hello!?", 1),
            ("reading;", 2),
        ],
    )
    def test_trailing_punctuation_not_measured(self, calculator, word, expected_orp):
        """Trailing punctuation is ignored when measuring length."""
        assert calculator.calculate(word) == expected_orp

    def test_leading_punctuation_is_measured(self, calculator):
        """Only trailing punctuation is stripped."""
        assert calculator.calculate("(word") == 1

    def test_custom_offset(self):
        calculator = ORPCalculator(offset=0.5)
        assert calculator.calculate("reading") == 3

    def test_offset_clamped_to_last_character(self):
        calculator = ORPCalculator(offset=0.99)
        assert calculator.calculate("word") == 3

    def test_offset_clamped_to_second_character(self):
        calculator = ORPCalculator(offset=0.0)
        assert calculator.calculate("reading") == 1

    @pytest.mark.parametrize(
        "word",
        ["a", "an", "the", "word", "hello,", "implementation", "x.", "!!!", "...", "it's."],
    )
    def test_index_always_within_raw(self, calculator, word):
        assert 0 <= calculator.calculate(word) < len(word)

    def test_convenience_function(self):
        assert calculate_orp_index("recognition") == 3
        assert calculate_orp_index("reading", offset=0.5) == 3


# =============================================================================
# Display Split Tests
# =============================================================================


class TestSplitForDisplay:
    """Tests for splitting a word around its focal character."""

    def test_basic_split(self, calculator):
        assert calculator.split_for_display("reading", 2) == ("re", "a", "ding")

    def test_first_character(self, calculator):
        assert calculator.split_for_display("the", 0) == ("", "t", "he")

    def test_index_clamped_high(self, calculator):
        assert calculator.split_for_display("word", 10) == ("wor", "d", "")

    def test_index_clamped_low(self, calculator):
        assert calculator.split_for_display("word", -3) == ("", "w", "ord")

    def test_empty_word(self, calculator):
        assert calculator.split_for_display("", 0) == ("", "", "")

    def test_split_by_orp(self):
        before, focal, after = split_by_orp("hello", 1)
        assert before + focal + after == "hello"
        assert focal == "e"
