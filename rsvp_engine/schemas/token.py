"""Pydantic schemas for token streams and context maps."""

from pydantic import BaseModel, ConfigDict


class SchemaBase(BaseModel):
    """Base schema that reads from dataclass attributes."""

    model_config = ConfigDict(from_attributes=True)


class TokenDTO(SchemaBase):
    id: str
    raw: str
    focal_index: int
    base_duration_ms: int
    multiplier: float
    is_punctuation: bool
    is_hyphenated: bool
    hyphen_group_id: str | None
    source_index: int
    sentence_index: int
    paragraph_index: int


class SentenceDTO(SchemaBase):
    start_index: int
    end_index: int
    text: str


class ParagraphDTO(SchemaBase):
    start_index: int
    end_index: int
    text: str
    sentences: list[SentenceDTO]


class ContextMapDTO(SchemaBase):
    sentences: list[SentenceDTO]
    paragraphs: list[ParagraphDTO]
