# === FILE: map_scout/collector/collector.py ===
from __future__ import annotations

import asyncio
import enum
import time
from typing import List, Optional, Set, Tuple

from map_scout.collector.assembler import assemble_artifacts
from map_scout.collector.fetcher import MapFetcher
from map_scout.collector.models import AbsoluteLocator, Artifact, ScriptParsedEvent
from map_scout.collector.parser import parse_map
from map_scout.collector.resolver import resolve_map_url
from map_scout.errors import CollectorStateError, SourceMapError
from map_scout.logger import logger

__all__ = ("CollectorState", "SourceMapCollector")


class CollectorState(enum.Enum):
    IDLE = "idle"
    COLLECTING = "collecting"
    DRAINING = "draining"
    CLOSED = "closed"


class SourceMapCollector:
    """
    Собирает source maps для событий ``Debugger.scriptParsed`` одного окна наблюдения.

    Каждое событие получает слот в порядке поступления; задача
    resolve → fetch → parse пишет только в свой слот, поэтому итоговый
    порядок не зависит от порядка завершения задач.
    """

    def __init__(self, fetcher: MapFetcher) -> None:
        self.fetcher = fetcher
        self.state = CollectorState.IDLE
        self.logger = logger
        self._slots: List[Optional[Artifact]] = []
        self._tasks: Set[asyncio.Task[None]] = set()
        self._artifacts: Optional[Tuple[Artifact, ...]] = None
        self._started_at = 0.0

    def start_collecting(self) -> None:
        if self.state is not CollectorState.IDLE:
            raise CollectorStateError(f"Cannot start collecting in state {self.state.value}")
        self.state = CollectorState.COLLECTING
        self._started_at = time.monotonic()
        self.logger.info("Старт сбора source maps")

    def handle_event(self, event: ScriptParsedEvent) -> None:
        """Принимает событие; вне состояния COLLECTING событие игнорируется."""
        if self.state is not CollectorState.COLLECTING:
            self.logger.debug("Событие %s пропущено: сборщик в состоянии %s", event.url, self.state.value)
            return
        index = len(self._slots)
        self._slots.append(None)
        if not event.source_map_url:
            return
        task = asyncio.get_running_loop().create_task(self._collect_one(index, event))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def stop_collecting(self) -> Tuple[Artifact, ...]:
        """Закрывает приём событий, дожидается всех задач и фиксирует результат."""
        if self.state is not CollectorState.COLLECTING:
            raise CollectorStateError(f"Cannot stop collecting in state {self.state.value}")
        self.state = CollectorState.DRAINING
        pending = len(self._tasks)
        if pending:
            self.logger.debug("Ожидание %d незавершённых задач", pending)
            await asyncio.gather(*self._tasks)

        self._artifacts = assemble_artifacts(self._slots)
        self.state = CollectorState.CLOSED
        failed = sum(1 for a in self._artifacts if a.failed)
        duration = time.monotonic() - self._started_at
        self.logger.info(
            "Завершено: %d скриптов, %d source maps (%d с ошибкой) за %.2f с",
            len(self._slots), len(self._artifacts), failed, duration,
        )
        return self._artifacts

    def get_artifacts(self) -> Tuple[Artifact, ...]:
        """Возвращает артефакты; до закрытия окна бросает CollectorStateError."""
        if self._artifacts is None:
            raise CollectorStateError(f"Artifacts are not available in state {self.state.value}")
        return self._artifacts

    def _record_failure(
        self, index: int, event: ScriptParsedEvent, source_map_url: Optional[str], message: str
    ) -> None:
        self._slots[index] = Artifact(
            script_url=event.url,
            source_map_url=source_map_url,
            error_message=message,
        )

    async def _collect_one(self, index: int, event: ScriptParsedEvent) -> None:
        source_map_url: Optional[str] = None
        try:
            locator = resolve_map_url(event.url, event.source_map_url)
            if locator is None:
                return
            if isinstance(locator, AbsoluteLocator):
                source_map_url = locator.url
            content = await self.fetcher.fetch(locator)
            parsed = parse_map(content)
        except SourceMapError as exc:
            self.logger.debug("Source map для %s не получен: %s", event.url, exc)
            self._record_failure(index, event, source_map_url, exc.message)
            return
        except Exception as exc:
            # any other failure stays confined to this script's slot
            self.logger.warning("Непредвиденная ошибка для %s: %r", event.url, exc)
            self._record_failure(index, event, source_map_url, f"Error: {str(exc) or type(exc).__name__}")
            return
        self._slots[index] = Artifact(
            script_url=event.url,
            source_map_url=source_map_url,
            map=parsed,
        )
