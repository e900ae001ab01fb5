"""Generate typed API client sources from an OpenAPI description."""

__version__ = "0.1.0"
