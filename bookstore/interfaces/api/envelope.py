"""Helpers building the {"error", "message", "data"} response envelope."""

from typing import Any


def envelope(message: str = "", data: Any = None) -> dict:
    """A successful response. `data` is left out entirely when None."""
    payload = {"error": False, "message": message}
    if data is not None:
        payload["data"] = data
    return payload
