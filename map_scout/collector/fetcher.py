# map_scout/collector/fetcher.py
"""
Fetcher module: obtains raw source map text, from an inline data URI or over the network.
"""
from __future__ import annotations

import base64
import binascii
from urllib.parse import unquote_to_bytes

from map_scout.collector.models import (
    AbsoluteLocator,
    FetchResource,
    InlineLocator,
    ResolvedLocator,
)
from map_scout.errors import BadStatusError, MapParseError, TransportFetchError
from map_scout.logger import logger


def decode_data_url(data_url: str) -> str:
    """
    Decode a ``data:[<mediatype>][;charset=...][;base64],<payload>`` URI to text.

    Raises MapParseError when the payload cannot be decoded, so a broken
    inline map is reported like any other unparsable map.
    """
    header, sep, payload = data_url[len("data:"):].partition(",")
    if not sep:
        raise MapParseError("Malformed data URL: missing ','")

    params = [p.strip() for p in header.split(";")][1:]
    is_base64 = bool(params) and params[-1].lower() == "base64"
    charset = "utf-8"
    for param in params:
        name, _, value = param.partition("=")
        if name.lower() == "charset" and value:
            charset = value

    raw = unquote_to_bytes(payload)
    try:
        if is_base64:
            raw = b"".join(raw.split())
            raw = base64.b64decode(raw + b"=" * (-len(raw) % 4))
        return raw.decode(charset)
    except (binascii.Error, LookupError, UnicodeDecodeError) as exc:
        raise MapParseError(f"Could not decode inline source map ({exc})") from exc


def _is_success(status: int | None) -> bool:
    # capabilities that do not report a status are trusted on their content
    return status is None or 200 <= status < 300


class MapFetcher:
    """Obtains map text for a resolved locator through an injected fetch capability."""

    def __init__(self, fetch_resource: FetchResource) -> None:
        self._fetch_resource = fetch_resource

    async def fetch(self, locator: ResolvedLocator) -> str:
        """
        Return the raw map text.

        Inline locators are decoded without any I/O. Absolute locators cost
        exactly one call to the capability; failures raise MapFetchError.
        """
        if isinstance(locator, InlineLocator):
            return decode_data_url(locator.data_url)
        if not isinstance(locator, AbsoluteLocator):
            raise TypeError(f"Unsupported locator: {locator!r}")

        try:
            response = await self._fetch_resource(locator.url)
        except Exception as exc:
            logger.debug("Fetch of %s failed: %r", locator.url, exc)
            raise TransportFetchError(str(exc) or type(exc).__name__) from exc

        if response.content is None or not _is_success(response.status):
            raise BadStatusError(response.status)
        return response.content


__all__ = ["MapFetcher", "decode_data_url"]
