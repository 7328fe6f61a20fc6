"""Pydantic schemas for the RSVP engine API."""

from rsvp_engine.schemas.token import (
    ContextMapDTO,
    ParagraphDTO,
    SchemaBase,
    SentenceDTO,
    TokenDTO,
)
from rsvp_engine.schemas.tokenize import (
    ErrorResponse,
    ReaderSettingsDTO,
    TokenizeRequest,
    TokenizeResponse,
)

__all__ = [
    "SchemaBase",
    # Token stream
    "TokenDTO",
    "SentenceDTO",
    "ParagraphDTO",
    "ContextMapDTO",
    # Tokenize endpoint
    "ReaderSettingsDTO",
    "TokenizeRequest",
    "TokenizeResponse",
    "ErrorResponse",
]
