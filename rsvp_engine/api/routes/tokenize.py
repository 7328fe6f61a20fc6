"""Tokenize API route."""

import logging

from fastapi import APIRouter, Depends

from rsvp_engine.config import Settings, get_settings
from rsvp_engine.schemas import TokenizeRequest, TokenizeResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/tokenize", response_model=TokenizeResponse)
def tokenize_text(
    request: TokenizeRequest,
    settings: Settings = Depends(get_settings),
) -> TokenizeResponse:
    """Tokenize text into a pre-computed RSVP token stream.

    Tokenization errors propagate to the application handler (422).
    """
    reader_settings = settings.reader_defaults()
    if request.settings is not None:
        reader_settings = reader_settings.with_changes(
            **request.settings.model_dump(exclude_none=True)
        )

    pipeline = settings.tokenizer_pipeline(request.language.value)
    result = pipeline.process(
        request.text,
        reader_settings,
        source_type=request.source_type.value,
    )

    logger.info(
        "Tokenized %d words into %d tokens (%s, %s)",
        result.word_count,
        len(result.tokens),
        request.source_type.value,
        request.language.value,
    )
    return TokenizeResponse.model_validate(result)
