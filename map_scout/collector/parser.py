# map_scout/collector/parser.py
"""map_scout.collector.parser: разбор текста source map как JSON."""

from __future__ import annotations

import json
from typing import Any

from map_scout.errors import MapParseError


def describe_json_error(exc: json.JSONDecodeError) -> str:
    """Формирует диагностику фиксированного вида по смещению ошибки.

    Формулировка ``json`` не используется: берётся только позиция и символ.
    """
    if exc.pos >= len(exc.doc):
        return "Unexpected end of JSON input"
    return f"Unexpected token {exc.doc[exc.pos]} in JSON at position {exc.pos}"


def parse_map(content: str) -> Any:
    """Разбирает *content* как JSON и возвращает структуру без изменений.

    Схема source map не проверяется: подходит любой синтаксически
    корректный JSON. При ошибке бросает :class:`MapParseError`.

    Пример:
    ```python
    parse_map('{"version": 3}')   # {'version': 3}
    parse_map('{{}')              # MapParseError: SyntaxError: Unexpected token { in JSON at position 1
    ```
    """
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise MapParseError(describe_json_error(exc)) from exc
    except RecursionError as exc:
        raise MapParseError("Maximum nesting depth exceeded in JSON") from exc


__all__ = ["parse_map", "describe_json_error"]
