# === FILE: robots_policy/settings.py ===
"""
Модуль для загрузки и валидации настроек robots_policy.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from robots_policy.transport.fetcher import DEFAULT_USER_AGENT


class PolicySettings(BaseModel):
    """Настройки разбора robots.txt и проверки URL."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    user_agent: str = Field(
        DEFAULT_USER_AGENT, min_length=1, description="User-Agent для выбора группы и загрузки."
    )
    agent_grouping: Literal["last", "shared"] = Field(
        "last",
        description="Кому относятся директивы после нескольких строк User-agent подряд.",
    )
    timeout: float = Field(10.0, gt=0, description="Таймаут загрузки robots.txt (секунд).")

    @field_validator("user_agent", mode="before")
    def _strip_user_agent(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
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


def load_settings(path: Union[str, Path, None]) -> PolicySettings:
    """
    Читает YAML или JSON и возвращает проверенный объект PolicySettings.
    Без пути использует configs/default.yaml, если он есть, иначе значения по умолчанию.
    Явно указанный, но отсутствующий файл приводит к FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return PolicySettings()
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

    return PolicySettings(**data)


__all__ = ["PolicySettings", "load_settings"]
