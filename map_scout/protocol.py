# map_scout/protocol.py
"""
Binding between a DevTools protocol session and the source-map collector.
"""
from __future__ import annotations

from collections import defaultdict
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

from map_scout.collector.collector import SourceMapCollector
from map_scout.collector.fetcher import MapFetcher
from map_scout.collector.models import Artifact, ScriptParsedEvent
from map_scout.logger import logger

SCRIPT_PARSED = "Debugger.scriptParsed"

EventHandler = Callable[[Mapping[str, Any]], None]


class ProtocolSession(Protocol):
    """The slice of a protocol transport the gatherer needs."""

    def on(self, event: str, handler: EventHandler) -> None: ...

    def off(self, event: str, handler: EventHandler) -> None: ...

    def send_command(self, method: str, params: Optional[Mapping[str, Any]] = None) -> Awaitable[Any]: ...


class SourceMapGatherer:
    """Collects source maps for every script parsed between start and stop of instrumentation."""

    def __init__(self, fetcher: MapFetcher) -> None:
        self.collector = SourceMapCollector(fetcher)

    def _on_script_parsed(self, params: Mapping[str, Any]) -> None:
        self.collector.handle_event(ScriptParsedEvent.model_validate(params))

    async def start_instrumentation(self, session: ProtocolSession) -> None:
        session.on(SCRIPT_PARSED, self._on_script_parsed)
        self.collector.start_collecting()
        await session.send_command("Debugger.enable")

    async def stop_instrumentation(self, session: ProtocolSession) -> None:
        await session.send_command("Debugger.disable")
        session.off(SCRIPT_PARSED, self._on_script_parsed)
        await self.collector.stop_collecting()

    def get_artifact(self) -> Tuple[Artifact, ...]:
        return self.collector.get_artifacts()


class ReplaySession:
    """
    ProtocolSession that replays recorded ``{"method", "params"}`` messages.

    Commands are recorded, not executed; :meth:`replay` emits every message
    to the handlers subscribed at that moment.
    """

    def __init__(self, messages: Iterable[Mapping[str, Any]]) -> None:
        self.messages: List[Mapping[str, Any]] = list(messages)
        self.commands: List[Tuple[str, Optional[Mapping[str, Any]]]] = []
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)

    def on(self, event: str, handler: EventHandler) -> None:
        self._handlers[event].append(handler)

    def off(self, event: str, handler: EventHandler) -> None:
        if handler in self._handlers[event]:
            self._handlers[event].remove(handler)

    async def send_command(self, method: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        self.commands.append((method, params))
        return {}

    def replay(self) -> int:
        """Emit all messages in order; returns how many reached a handler."""
        delivered = 0
        for message in self.messages:
            method = message.get("method", "")
            handlers = list(self._handlers.get(method, ()))
            for handler in handlers:
                handler(message.get("params") or {})
            if handlers:
                delivered += 1
        logger.debug("Replayed %d messages, %d delivered", len(self.messages), delivered)
        return delivered


__all__ = ["ProtocolSession", "SourceMapGatherer", "ReplaySession", "SCRIPT_PARSED"]
