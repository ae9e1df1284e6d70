"""HTTP API layer for the PomoTrack backend."""

from .client import APIClient, APIError, get_client

__all__ = ["APIClient", "APIError", "get_client"]
