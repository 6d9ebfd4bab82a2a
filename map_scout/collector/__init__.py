"""map_scout.collector: resolve → fetch → parse pipeline for script source maps."""

from .assembler import assemble_artifacts
from .collector import CollectorState, SourceMapCollector
from .fetcher import MapFetcher, decode_data_url
from .models import (
    AbsoluteLocator,
    Artifact,
    InlineLocator,
    ResolvedLocator,
    ResourceResponse,
    ScriptParsedEvent,
)
from .parser import parse_map
from .resolver import resolve_map_url

__all__ = [
    "AbsoluteLocator",
    "Artifact",
    "CollectorState",
    "InlineLocator",
    "MapFetcher",
    "ResolvedLocator",
    "ResourceResponse",
    "ScriptParsedEvent",
    "SourceMapCollector",
    "assemble_artifacts",
    "decode_data_url",
    "parse_map",
    "resolve_map_url",
]
