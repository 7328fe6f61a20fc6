"""Health check API route."""

from fastapi import APIRouter

from rsvp_engine import __version__
from rsvp_engine.services.tokenizer import get_tokenizer_version

router = APIRouter()


@router.get("/health")
def health_check() -> dict:
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": __version__,
        "tokenizer_version": get_tokenizer_version(),
    }
