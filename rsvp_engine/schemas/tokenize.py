"""Pydantic schemas for the tokenize endpoint."""

from pydantic import BaseModel, Field

from rsvp_engine.models.enums import ErrorCode, Language, SourceType
from rsvp_engine.schemas.token import ContextMapDTO, SchemaBase, TokenDTO


class ReaderSettingsDTO(BaseModel):
    """Optional per-request overrides; unset fields use the configured defaults.

    The speed is range-checked by the tokenizer so out-of-range values come
    back as INVALID_WPM rather than a schema error.
    """

    base_wpm: float | None = None
    orp_offset: float | None = Field(None, gt=0, lt=1)
    dynamic_pacing: bool | None = None
    max_chunk_length: int | None = Field(None, ge=4)


class TokenizeRequest(BaseModel):
    text: str
    source_type: SourceType = SourceType.PASTE
    language: Language = Language.ENGLISH
    settings: ReaderSettingsDTO | None = None


class TokenizeResponse(SchemaBase):
    tokens: list[TokenDTO]
    context_map: ContextMapDTO
    total_duration_ms: int
    word_count: int
    tokenization_wpm: float
    tokenizer_version: str


class ErrorResponse(BaseModel):
    code: ErrorCode
    message: str
    recoverable: bool
