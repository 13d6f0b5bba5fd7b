"""Ping utility used by the API health-check."""

from typing import Iterable, List


def get_ping_message() -> str:
    """Return a static ping message."""
    return "pong"


def list_calculators(names: Iterable[str]) -> List[str]:
    """Return the registered calculator names in a stable order."""
    return sorted(names)
