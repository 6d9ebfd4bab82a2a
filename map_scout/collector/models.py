# map_scout/collector/models.py
"""
Data models for the source-map collector.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ScriptParsedEvent(BaseModel):
    """Params of a ``Debugger.scriptParsed`` protocol event."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    url: str = ""
    source_map_url: str = Field("", alias="sourceMapURL")

    @field_validator("url", "source_map_url", mode="before")
    def _null_as_empty(cls, v: Any) -> Any:
        # the protocol may send null for an absent sourceMapURL
        return "" if v is None else v


@dataclass(frozen=True, slots=True)
class AbsoluteLocator:
    """Map lives at a network URL."""

    url: str


@dataclass(frozen=True, slots=True)
class InlineLocator:
    """Map is embedded in a ``data:`` URI."""

    data_url: str


ResolvedLocator = Union[AbsoluteLocator, InlineLocator]


@dataclass(frozen=True, slots=True)
class ResourceResponse:
    """What a fetch capability hands back: body (None on failure) and HTTP status."""

    content: Optional[str]
    status: Optional[int] = None


FetchResource = Callable[[str], Awaitable[ResourceResponse]]


@dataclass(frozen=True, slots=True)
class Artifact:
    """Per-script result: the parsed map, or the reason there is none."""

    script_url: str
    source_map_url: Optional[str] = None
    map: Any = None
    error_message: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error_message is not None

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape with camelCase keys; ``map`` and ``errorMessage`` are exclusive."""
        data: Dict[str, Any] = {
            "scriptUrl": self.script_url,
            "sourceMapUrl": self.source_map_url,
        }
        if self.failed:
            data["errorMessage"] = self.error_message
        else:
            data["map"] = self.map
        return data
