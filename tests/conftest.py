"""Shared pytest fixtures."""

import pytest
from fastapi.testclient import TestClient

from rsvp_engine.main import app
from rsvp_engine.services.playback import ManualTickSource
from rsvp_engine.services.tokenizer import ReaderSettings, TokenizerPipeline, sequential_ids


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def ticks():
    """Synthetic tick source starting at t=0."""
    return ManualTickSource()


@pytest.fixture
def pipeline():
    """English pipeline with deterministic ids."""
    return TokenizerPipeline(language="en", id_factory=sequential_ids())


@pytest.fixture
def settings_600():
    """Reader settings at 600 WPM (100ms base interval)."""
    return ReaderSettings(base_wpm=600)
