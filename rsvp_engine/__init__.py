"""RSVP reading engine: tokenizer, drift-corrected playback loop and HTTP API."""

__version__ = "0.1.0"
