# map_scout/collector/resolver.py
"""
Resolution of ``sourceMappingURL`` locators against the owning script's URL.
"""
from __future__ import annotations

from typing import Optional
from urllib.parse import SplitResult, urljoin, urlsplit

from map_scout.collector.models import AbsoluteLocator, InlineLocator, ResolvedLocator
from map_scout.errors import MapResolutionError

# schemes that are meaningless without a host
_HOST_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})
# leading/trailing characters dropped from a locator, as URL parsers do
_C0_AND_SPACE = "".join(chr(c) for c in range(0x21))


def is_data_url(locator: str) -> bool:
    return locator[:5].lower() == "data:"


def _is_valid(parts: SplitResult) -> bool:
    if not parts.scheme:
        return False
    if parts.scheme.lower() in _HOST_SCHEMES:
        if not parts.hostname:
            return False
        # raises ValueError on a non-numeric or out-of-range port
        parts.port
    return True


def resolve_map_url(script_url: str, locator: str) -> Optional[ResolvedLocator]:
    """
    Resolve *locator* relative to *script_url*.

    Returns None when the script declares no map, an :class:`InlineLocator`
    for ``data:`` URIs and an :class:`AbsoluteLocator` otherwise.
    Raises :class:`MapResolutionError` if no valid URL can be produced.
    """
    target = locator.strip(_C0_AND_SPACE)
    if not target:
        return None
    if is_data_url(target):
        return InlineLocator(target)

    try:
        own = urlsplit(target)
        if own.scheme:
            # absolute locators are used verbatim
            if _is_valid(own):
                return AbsoluteLocator(target)
            raise MapResolutionError(locator)

        resolved = urljoin(script_url, target)
        if _is_valid(urlsplit(resolved)):
            return AbsoluteLocator(resolved)
    except ValueError:
        pass
    raise MapResolutionError(locator)


__all__ = ["resolve_map_url", "is_data_url"]
