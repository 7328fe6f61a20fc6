"""HTTP API for the RSVP engine."""
