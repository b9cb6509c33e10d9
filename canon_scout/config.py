# === FILE: canon_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации аудита CanonScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Literal, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
)

from canon_scout.rules import SelfReferencePolicy


class AuditConfig(BaseModel):
    """Конфигурация одного запуска аудита."""
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    sitemap_urls: List[HttpUrl] = Field(
        ..., alias="sitemapUrls", min_length=1, description="Sitemap для аудита, по порядку."
    )
    timeout: float = Field(10.0, gt=0, description="Таймаут на один HTTP-запрос (секунд).")
    user_agent: str = Field("CanonScoutBot/1.0", min_length=1, description="Заголовок User-Agent.")
    results_dir: Path = Field(Path("results"), description="Каталог для CSV-отчётов.")
    self_reference: SelfReferencePolicy = Field(
        SelfReferencePolicy.IGNORE,
        description="Должен ли canonical указывать на саму страницу: ignore, equivalent, exact.",
    )
    status_method: Literal["GET", "HEAD"] = Field(
        "GET", description="HTTP-метод для проверки статуса canonical URL."
    )

    @field_validator("status_method", mode="before")
    def _upper_method(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v

    @property
    def sitemaps(self) -> List[str]:
        return [str(url) for url in self.sitemap_urls]


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


def _read_file(path: Union[str, Path, None]) -> dict[str, Any]:
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(path: Union[str, Path, None], **overrides: Any) -> AuditConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект AuditConfig.

    ``overrides`` (например, из опций CLI) накладываются поверх файла; значения
    ``None`` игнорируются. Если файл не указан, используется configs/default.yaml;
    его отсутствие допустимо только когда sitemap_urls переданы в overrides.
    """
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if path is None and not _DEFAULT_CFG.exists() and overrides.get("sitemap_urls"):
        data: dict[str, Any] = {}
    else:
        data = _read_file(path)

    if "sitemap_urls" in overrides:
        data.pop("sitemapUrls", None)
    data.update(overrides)

    return AuditConfig(**data)


__all__ = ["AuditConfig", "load_config"]
