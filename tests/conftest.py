# File: tests/conftest.py
import asyncio
import base64
import json
from typing import Dict, List, Optional, Tuple

import pytest

from map_scout.collector.fetcher import MapFetcher
from map_scout.collector.models import ResourceResponse, ScriptParsedEvent
from map_scout.protocol import ReplaySession, SourceMapGatherer, SCRIPT_PARSED

MAP_JSON = json.dumps(
    {
        "version": 3,
        "file": "out.js",
        "sourceRoot": "",
        "sources": ["foo.js", "bar.js"],
        "names": ["src", "maps", "are", "fun"],
        "mappings": "AAgBC,SAAQ,CAAEA",
    }
)


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


def make_json_data_url(data: str) -> str:
    return "data:application/json;charset=utf-8;base64," + base64.b64encode(data.encode()).decode()


class FakeFetch:
    """
    Scripted fetch capability.

    Each URL maps to a ResourceResponse or an exception instance; every call is recorded.
    """

    def __init__(self, responses: Optional[Dict[str, object]] = None) -> None:
        self.responses: Dict[str, object] = dict(responses or {})
        self.calls: List[str] = []
        self.gates: Dict[str, asyncio.Event] = {}

    async def __call__(self, url: str) -> ResourceResponse:
        self.calls.append(url)
        gate = self.gates.get(url)
        if gate is not None:
            await gate.wait()
        outcome = self.responses.get(url, ResourceResponse(content=None, status=404))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome  # type: ignore[return-value]


def script_parsed(url: str, source_map_url: str) -> ScriptParsedEvent:
    return ScriptParsedEvent(url=url, sourceMapURL=source_map_url)


async def run_gatherer(
    events: List[Tuple[str, str]], fetch: FakeFetch
):
    """Replay (url, sourceMapURL) pairs through a SourceMapGatherer, return its artifacts."""
    session = ReplaySession(
        {"method": SCRIPT_PARSED, "params": {"url": url, "sourceMapURL": smu}}
        for url, smu in events
    )
    gatherer = SourceMapGatherer(MapFetcher(fetch))
    await gatherer.start_instrumentation(session)
    session.replay()
    await gatherer.stop_instrumentation(session)
    return gatherer.get_artifact()


@pytest.fixture()
def fake_fetch() -> FakeFetch:
    return FakeFetch()


@pytest.fixture()
def map_json() -> str:
    return MAP_JSON
