"""HTTP API for the Fan Archive application."""
