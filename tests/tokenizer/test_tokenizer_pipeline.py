"""Tests for the main tokenizer pipeline module."""

import dataclasses
import math

import pytest

from rsvp_engine.models.enums import ErrorCode
from rsvp_engine.services.tokenizer import (
    TOKENIZER_VERSION,
    ReaderSettings,
    Token,
    TokenizationError,
    TokenizationResult,
    TokenizerPipeline,
    sequential_ids,
    tokenize,
)
from rsvp_engine.services.tokenizer.text_utils import split_into_words
from rsvp_engine.services.tokenizer.tokenizer import _validate_token_invariants


def _make_token(**overrides) -> Token:
    fields = dict(
        id="t0",
        raw="word",
        focal_index=1,
        base_duration_ms=100,
        multiplier=1.0,
        is_punctuation=False,
        source_index=0,
        sentence_index=0,
        paragraph_index=0,
    )
    fields.update(overrides)
    return Token(**fields)


def _without_ids(token: Token) -> Token:
    return dataclasses.replace(token, id="", hyphen_group_id=None)


# =============================================================================
# Basic Tokenization Tests
# =============================================================================


class TestTokenizerPipelineBasic:
    """Test basic tokenization functionality."""

    def test_single_word(self, pipeline, settings_600):
        result = pipeline.process("Hello", settings_600)
        assert len(result.tokens) == 1
        assert result.tokens[0].raw == "Hello"
        assert result.word_count == 1

    def test_preserves_punctuation(self, pipeline, settings_600):
        result = pipeline.process("Hello, world!", settings_600)
        assert [t.raw for t in result.tokens] == ["Hello,", "world!"]

    def test_result_metadata(self, pipeline, settings_600):
        result = pipeline.process("Hello   world.\t", settings_600)
        assert isinstance(result, TokenizationResult)
        assert result.normalized_text == "Hello world."
        assert result.tokenization_wpm == 600
        assert result.tokenizer_version == TOKENIZER_VERSION
        assert result.total_duration_ms == 400

    def test_sequential_ids(self, pipeline, settings_600):
        result = pipeline.process("one two three", settings_600)
        assert [t.id for t in result.tokens] == ["t0", "t1", "t2"]

    def test_default_ids_are_unique(self, settings_600):
        result = TokenizerPipeline().process("a a a a", settings_600)
        assert len({t.id for t in result.tokens}) == 4

    def test_default_settings(self):
        result = tokenize("Hello world.")
        assert result.tokenization_wpm == 400
        # 60000 / 400 = 150ms base interval
        assert [t.base_duration_ms for t in result.tokens] == [150, 450]

    def test_tokens_are_immutable(self, pipeline, settings_600):
        token = pipeline.process("Hello", settings_600).tokens[0]
        with pytest.raises(dataclasses.FrozenInstanceError):
            token.raw = "changed"

    def test_total_is_sum_of_durations(self, pipeline, settings_600):
        result = pipeline.process("A longer sentence, with pauses; and an ending!", settings_600)
        assert result.total_duration_ms == sum(t.base_duration_ms for t in result.tokens)


# =============================================================================
# Boundary Assignment Tests
# =============================================================================


class TestBoundaries:
    """Sentence and paragraph indices on tokens."""

    def test_sentence_and_paragraph_indices(self, pipeline, settings_600):
        result = pipeline.process("One two. Three.\n\nFour.", settings_600)
        assert [t.sentence_index for t in result.tokens] == [0, 0, 1, 2]
        assert [t.paragraph_index for t in result.tokens] == [0, 0, 0, 1]

    def test_indices_match_context_map(self, pipeline, settings_600):
        text = "Dr. Who arrived. It was late!\n\nThe end... or not?"
        result = pipeline.process(text, settings_600)
        for token in result.tokens:
            sentence = result.context_map.sentences[token.sentence_index]
            paragraph = result.context_map.paragraphs[token.paragraph_index]
            assert sentence.start_index <= token.source_index <= sentence.end_index
            assert paragraph.start_index <= token.source_index <= paragraph.end_index


# =============================================================================
# Hyphenation Tests
# =============================================================================


class TestHyphenatedTokens:
    """Long words are emitted as fragment tokens."""

    def test_fragments_share_group_and_source(self, pipeline, settings_600):
        result = pipeline.process("The implementation works.", settings_600)
        raws = [t.raw for t in result.tokens]
        assert raws == ["The", "impleme-", "ntation", "works."]
        assert [t.source_index for t in result.tokens] == [0, 1, 1, 2]
        assert [t.is_hyphenated for t in result.tokens] == [False, True, True, False]

        first, second = result.tokens[1], result.tokens[2]
        assert first.hyphen_group_id is not None
        assert first.hyphen_group_id == second.hyphen_group_id
        assert result.tokens[0].hyphen_group_id is None
        assert result.word_count == 3

    def test_group_id_comes_from_id_factory(self, pipeline, settings_600):
        result = pipeline.process("The implementation works.", settings_600)
        assert [t.id for t in result.tokens] == ["t0", "t2", "t3", "t4"]
        assert result.tokens[1].hyphen_group_id == "t1"

    def test_only_last_fragment_checks_punctuation(self, pipeline, settings_600):
        result = pipeline.process("implementation,", settings_600)
        first, last = result.tokens
        assert first.is_punctuation is False
        assert first.base_duration_ms == 100
        assert last.raw == "ntation,"
        assert last.is_punctuation is True
        assert last.base_duration_ms == 200

    def test_custom_max_chunk_length(self, pipeline):
        settings = ReaderSettings(base_wpm=600, max_chunk_length=20)
        result = pipeline.process("implementation", settings)
        assert [t.raw for t in result.tokens] == ["implementation"]


# =============================================================================
# Pacing and Focal Point Tests
# =============================================================================


class TestPacingIntegration:
    """Durations and focal points come from the calculators."""

    def test_dynamic_pacing_disabled(self, pipeline):
        settings = ReaderSettings(base_wpm=600, dynamic_pacing=False)
        result = pipeline.process("I stop. Then, extraordinarily, go!", settings)
        assert {t.base_duration_ms for t in result.tokens} == {100}
        assert not any(t.is_punctuation for t in result.tokens)

    def test_orp_offset_setting(self, pipeline):
        settings = ReaderSettings(base_wpm=600, orp_offset=0.5)
        assert pipeline.process("reading", settings).tokens[0].focal_index == 3

    def test_focal_index_bounds(self, pipeline, settings_600):
        text = "a I to the word. Supercalifragilisticexpialidocious! ... (x) it's"
        for token in pipeline.process(text, settings_600).tokens:
            assert 0 <= token.focal_index < len(token.raw)

    @pytest.mark.parametrize("slow,fast", [(300, 600), (250, 1000)])
    def test_speed_scales_durations(self, pipeline, slow, fast):
        text = "The quick, brown fox jumps over the extraordinarily lazy dog."
        slow_tokens = pipeline.process(text, ReaderSettings(base_wpm=slow)).tokens
        fast_tokens = pipeline.process(text, ReaderSettings(base_wpm=fast)).tokens
        for s, f in zip(slow_tokens, fast_tokens):
            assert s.multiplier == f.multiplier
            assert f.base_duration_ms < s.base_duration_ms
            assert s.base_duration_ms * slow == pytest.approx(f.base_duration_ms * fast, abs=fast)


# =============================================================================
# Determinism and Coverage Tests
# =============================================================================


class TestProperties:
    """Properties that hold for any input."""

    TEXTS = [
        "Hello world.",
        "Mr. Smith met Dr. Jones at 3.14 p.m. They talked.\n\nAfterwards, everyone left!",
        "Internationalization and antidisestablishmentarianism, together.",
        "  spaced\t\tout\r\n\r\ntext  ",
    ]

    @pytest.mark.parametrize("text", TEXTS)
    def test_deterministic_apart_from_ids(self, text, settings_600):
        first = tokenize(text, settings_600)
        second = tokenize(text, settings_600)
        assert [_without_ids(t) for t in first.tokens] == [_without_ids(t) for t in second.tokens]
        assert first.context_map == second.context_map

    @pytest.mark.parametrize("text", TEXTS)
    def test_tokens_reconstruct_words(self, text, pipeline, settings_600):
        result = pipeline.process(text, settings_600)
        words = split_into_words(result.normalized_text)

        fragments_by_word = {}
        for token in result.tokens:
            fragments_by_word.setdefault(token.source_index, []).append(token.raw)

        rebuilt = [
            "".join(f[:-1] for f in fragments[:-1]) + fragments[-1]
            for _, fragments in sorted(fragments_by_word.items())
        ]
        assert rebuilt == words


# =============================================================================
# Validation Tests
# =============================================================================


class TestValidation:
    """Inputs are rejected before any output is produced."""

    @pytest.mark.parametrize("text", ["", "   ", " \n\n\t "])
    def test_empty_input(self, pipeline, text):
        with pytest.raises(TokenizationError) as exc_info:
            pipeline.process(text)
        assert exc_info.value.code is ErrorCode.EMPTY_INPUT
        assert exc_info.value.recoverable is True

    def test_empty_after_markdown_cleanup(self, pipeline):
        with pytest.raises(TokenizationError) as exc_info:
            pipeline.process("```\ncode only\n```", source_type="md")
        assert exc_info.value.code is ErrorCode.EMPTY_INPUT

    @pytest.mark.parametrize("wpm", [0, -50, 199, 1001, math.nan])
    def test_invalid_wpm(self, pipeline, wpm):
        with pytest.raises(TokenizationError) as exc_info:
            pipeline.process("Hello", ReaderSettings(base_wpm=wpm))
        assert exc_info.value.code is ErrorCode.INVALID_WPM

    @pytest.mark.parametrize("wpm", [200, 1000])
    def test_wpm_bounds_inclusive(self, pipeline, wpm):
        assert pipeline.process("Hello", ReaderSettings(base_wpm=wpm)).tokenization_wpm == wpm

    def test_empty_checked_before_wpm(self, pipeline):
        with pytest.raises(TokenizationError) as exc_info:
            pipeline.process("", ReaderSettings(base_wpm=5))
        assert exc_info.value.code is ErrorCode.EMPTY_INPUT

    def test_input_too_large(self):
        pipeline = TokenizerPipeline(max_input_size=10)
        with pytest.raises(TokenizationError) as exc_info:
            pipeline.process("eleven char")
        assert exc_info.value.code is ErrorCode.TOKENIZATION_FAILED

    def test_custom_wpm_range(self):
        pipeline = TokenizerPipeline(wpm_min=100, wpm_max=150)
        assert pipeline.process("Hi", ReaderSettings(base_wpm=120)).tokenization_wpm == 120

    def test_error_is_value_error(self, pipeline):
        with pytest.raises(ValueError):
            pipeline.process("")

    def test_error_to_dict(self):
        error = TokenizationError(ErrorCode.INVALID_WPM, "too fast")
        assert error.to_dict() == {
            "code": "INVALID_WPM",
            "message": "too fast",
            "recoverable": True,
        }


class TestTokenInvariants:
    """Tests for _validate_token_invariants."""

    def test_valid_token(self):
        _validate_token_invariants(_make_token())

    @pytest.mark.parametrize(
        "overrides",
        [
            {"raw": ""},
            {"focal_index": 4},
            {"focal_index": -1},
            {"base_duration_ms": -1},
            {"is_hyphenated": True},
        ],
    )
    def test_violations(self, overrides):
        with pytest.raises(ValueError):
            _validate_token_invariants(_make_token(**overrides))


def test_language_option():
    result = tokenize("Das ist z.B. gut. Ja.", language="de", id_factory=sequential_ids("w"))
    assert [t.sentence_index for t in result.tokens] == [0, 0, 0, 0, 1]
    assert result.tokens[0].id == "w0"


def test_unsupported_language():
    with pytest.raises(ValueError, match="Unsupported language"):
        TokenizerPipeline(language="fr")
