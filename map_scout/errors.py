# map_scout/errors.py
"""
Error taxonomy for source-map collection.

Every :class:`SourceMapError` carries the exact text that ends up in an
artifact's ``errorMessage``; ``str(exc)`` returns it unchanged.
"""
from __future__ import annotations

from typing import Optional


class SourceMapError(Exception):
    """Base for failures recovered at the per-script boundary."""

    @property
    def message(self) -> str:
        return str(self)


class MapResolutionError(SourceMapError):
    """The locator could not be turned into a valid URL."""

    def __init__(self, locator: str) -> None:
        super().__init__(f"Could not resolve map url: {locator}")
        self.locator = locator


class MapFetchError(SourceMapError):
    """The map text could not be obtained over the network."""


class BadStatusError(MapFetchError):
    def __init__(self, status: Optional[int]) -> None:
        shown = "unknown" if status is None else status
        super().__init__(f"Error: Failed fetching source map ({shown})")
        self.status = status


class TransportFetchError(MapFetchError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Error: {reason}")
        self.reason = reason


class MapParseError(SourceMapError):
    """The map text is not valid JSON (or the inline payload is undecodable)."""

    def __init__(self, diagnostic: str) -> None:
        super().__init__(f"SyntaxError: {diagnostic}")
        self.diagnostic = diagnostic


class ResourceFetchError(Exception):
    """Raised by the default HTTP capability on transport failure."""


class CollectorStateError(RuntimeError):
    """Lifecycle method called in the wrong collector state."""


__all__ = [
    "SourceMapError",
    "MapResolutionError",
    "MapFetchError",
    "BadStatusError",
    "TransportFetchError",
    "MapParseError",
    "ResourceFetchError",
    "CollectorStateError",
]
