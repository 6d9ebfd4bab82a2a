# File: map_scout/engine.py
"""map_scout.engine: Orchestration layer для запуска сбора source maps по записанному логу."""

from __future__ import annotations

import asyncio
from typing import Any, Iterable, Mapping, Optional, Tuple

from map_scout.collector.fetcher import MapFetcher
from map_scout.collector.http import HttpResourceFetcher
from map_scout.collector.models import Artifact, FetchResource
from map_scout.config import CollectorConfig, load_config
from map_scout.logger import logger
from map_scout.protocol import ReplaySession, SourceMapGatherer

__all__ = ["Engine", "collect_source_maps"]


async def _run_gatherer(
    messages: Iterable[Mapping[str, Any]], fetch_resource: FetchResource
) -> Tuple[Artifact, ...]:
    session = ReplaySession(messages)
    gatherer = SourceMapGatherer(MapFetcher(fetch_resource))
    await gatherer.start_instrumentation(session)
    session.replay()
    await gatherer.stop_instrumentation(session)
    return gatherer.get_artifact()


async def collect_source_maps(
    config: CollectorConfig,
    messages: Iterable[Mapping[str, Any]],
    fetch_resource: Optional[FetchResource] = None,
) -> Tuple[Artifact, ...]:
    """Прогоняет сообщения протокола через сборщик и возвращает артефакты.

    Без *fetch_resource* используется HTTP-загрузчик на aiohttp.
    """
    if fetch_resource is not None:
        return await _run_gatherer(messages, fetch_resource)
    async with HttpResourceFetcher(config) as http:
        return await _run_gatherer(messages, http.fetch_resource)


class Engine:
    """Фасад для CLI и тестов: загрузка конфига и синхронный запуск сбора."""

    @staticmethod
    def load_config(path: Optional[str]) -> CollectorConfig:
        """Загружает конфиг из YAML/JSON или использует значения по умолчанию."""
        return load_config(path)

    def __init__(self, config: CollectorConfig, fetch_resource: Optional[FetchResource] = None) -> None:
        self.config = config
        self.fetch_resource = fetch_resource

    def start_collection(self, messages: Iterable[Mapping[str, Any]]) -> Tuple[Artifact, ...]:
        """Запускает сбор в новом event loop и возвращает артефакты."""
        logger.info("Starting source map collection…")
        try:
            return asyncio.run(collect_source_maps(self.config, messages, self.fetch_resource))
        except Exception as exc:
            logger.error("Collection failed: %s", exc)
            raise
