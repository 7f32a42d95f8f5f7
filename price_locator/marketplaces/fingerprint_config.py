"""
Config Loader для отпечатков маркетплейсов.

ЦКП: Единая модель FingerprintConfig из fingerprints.yaml.

Отпечатки вынесены в YAML, чтобы новый шаблон страницы
подключался без правки эвристик.
"""

import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar, Dict, FrozenSet, Optional
from loguru import logger

from config.settings import FINGERPRINTS_FILE
from ..domain.exceptions import FingerprintConfigurationError


@dataclass(frozen=True)
class PriceCellFingerprint:
    """Ячейка цены товара: атрибут-маркер и селекторы основной цены."""
    attribute: str
    value: str
    main_price_classes: FrozenSet[str]
    screen_reader_class: str


@dataclass(frozen=True)
class PriceComponentFingerprint:
    """Компонент цены, собранный из нескольких span."""
    classes: FrozenSet[str]


@dataclass(frozen=True)
class ScoringFingerprint:
    """Маркеры, которые учитывает Confidence Scorer."""
    price_marker_classes: FrozenSet[str]
    price_container_classes: FrozenSet[str]
    main_price_classes: FrozenSet[str]


@dataclass(frozen=True)
class FingerprintConfig:
    price_cell: PriceCellFingerprint
    price_component: PriceComponentFingerprint
    scoring: ScoringFingerprint

    _cache: ClassVar[Dict[str, "FingerprintConfig"]] = {}

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "FingerprintConfig":
        """
        Загружает отпечатки из YAML (с кешем по пути файла).

        Args:
            path: Путь к YAML; по умолчанию FINGERPRINTS_FILE

        Raises:
            FingerprintConfigurationError: Файл не найден или в нём нет нужных ключей
        """
        config_path = Path(path) if path is not None else FINGERPRINTS_FILE
        cache_key = str(config_path)
        if cache_key in cls._cache:
            return cls._cache[cache_key]

        if not config_path.exists():
            raise FingerprintConfigurationError(
                f"Файл отпечатков не найден: {config_path}",
                component="FingerprintConfig"
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise FingerprintConfigurationError(
                f"Некорректный YAML: {config_path}",
                component="FingerprintConfig",
                original_error=e
            )

        config = cls.from_dict(raw)
        cls._cache[cache_key] = config
        logger.debug(f"[FingerprintConfig] Загружены отпечатки из {config_path.name}")
        return config

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "FingerprintConfig":
        try:
            cell = raw["price_cell"]
            component = raw["price_component"]
            scoring = raw["scoring"]
            return cls(
                price_cell=PriceCellFingerprint(
                    attribute=cell["attribute"],
                    value=cell["value"],
                    main_price_classes=frozenset(cell["main_price_classes"]),
                    screen_reader_class=cell["screen_reader_class"],
                ),
                price_component=PriceComponentFingerprint(
                    classes=frozenset(component["classes"]),
                ),
                scoring=ScoringFingerprint(
                    price_marker_classes=frozenset(scoring["price_marker_classes"]),
                    price_container_classes=frozenset(scoring["price_container_classes"]),
                    main_price_classes=frozenset(scoring["main_price_classes"]),
                ),
            )
        except (KeyError, TypeError) as e:
            raise FingerprintConfigurationError(
                "В конфигурации отпечатков нет обязательного ключа",
                component="FingerprintConfig",
                original_error=e
            )

    @classmethod
    def clear_cache(cls) -> None:
        cls._cache.clear()
