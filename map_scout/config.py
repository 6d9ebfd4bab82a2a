# === FILE: map_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации сборщика MapScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CollectorConfig(BaseModel):
    """Конфигурация сетевой загрузки source maps."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("MapScoutBot/1.0", min_length=1, description="Заголовок User-Agent.")
    retry_times: int = Field(0, ge=0, description="Число повторных попыток при 5xx/429.")
    max_concurrency: int = Field(10, ge=1, description="Максимум одновременных запросов.")
    headers: Dict[str, str] = Field(
        default_factory=dict, description="Дополнительные заголовки запросов."
    )

    @field_validator("headers")
    def _no_user_agent_header(cls, v: Dict[str, str]) -> Dict[str, str]:
        if any(k.lower() == "user-agent" for k in v):
            raise ValueError("User-Agent задаётся через user_agent, а не headers")
        return v


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CollectorConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CollectorConfig.
    Без пути берёт configs/default.yaml, а если его нет — значения по умолчанию.
    Отсутствующий явно указанный файл → FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return CollectorConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return CollectorConfig(**data)


__all__ = ["CollectorConfig", "load_config"]
