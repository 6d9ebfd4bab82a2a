# map_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта MapScout.

Сериализация списка артефактов source maps в файл.
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

from map_scout.collector.models import Artifact


def artifacts_to_json(artifacts: Sequence[Artifact]) -> List[Dict[str, Any]]:
    """Приводит артефакты к JSON-совместимому виду (ключи в camelCase)."""
    return [artifact.to_dict() for artifact in artifacts]


def render_json(artifacts: Sequence[Artifact], output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет артефакты в формате JSON по указанному пути.

    :param artifacts: артефакты, полученные от сборщика
    :param output_path: путь к JSON-файлу
    :param pretty: форматировать с отступом 2
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(artifacts_to_json(artifacts), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
