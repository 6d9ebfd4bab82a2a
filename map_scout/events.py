# File: map_scout/events.py
"""map_scout.events: загрузка записанных событий протокола DevTools из JSON-файла."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from map_scout.logger import logger
from map_scout.protocol import SCRIPT_PARSED


def _as_message(entry: Any, position: int) -> Dict[str, Any]:
    """Приводит элемент лога к виду ``{"method", "params"}``."""
    if not isinstance(entry, dict):
        raise TypeError(f"Элемент #{position} должен быть объектом, получено {type(entry).__name__}")
    if "method" in entry:
        return entry
    if "url" in entry:
        return {"method": SCRIPT_PARSED, "params": entry}
    raise ValueError(f"Элемент #{position}: нет ни 'method', ни 'url'")


def load_protocol_messages(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Читает лог протокола (devtools log) или список параметров scriptParsed.

    Args:
        path: путь к JSON-файлу со списком сообщений.

    Returns:
        Список сообщений ``{"method": ..., "params": ...}`` в исходном порядке.

    Пример:
    ```python
    messages = load_protocol_messages('devtoolslog.json')
    ```
    """
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {p}: {exc}") from exc
    if not isinstance(data, list):
        raise TypeError(f"Верхний уровень лога должен быть списком, получено {type(data).__name__}")
    messages = [_as_message(entry, i) for i, entry in enumerate(data)]
    logger.debug("Loaded %d protocol messages from %s", len(messages), p)
    return messages


__all__ = ["load_protocol_messages"]
