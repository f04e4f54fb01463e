"""Fan Archive: a fan-content archive API."""

__version__ = "1.0.0"
