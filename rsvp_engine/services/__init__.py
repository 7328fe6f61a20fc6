"""Services for the RSVP engine."""
