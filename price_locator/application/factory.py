"""
Фабрика для создания компонентов Price Locator.

Предоставляет удобные методы для создания и конфигурации
всех компонентов через единый интерфейс.
"""

from typing import Optional
from loguru import logger

from ..domain.interfaces import IDocumentAdapter, IPriceExtractor, ITracer
from ..extraction.subtree_extractor import SubtreeExtractor
from ..infrastructure.html_adapter import HtmlDocumentAdapter
from ..infrastructure.tracing import LoguruTracer
from ..marketplaces.fingerprint_config import FingerprintConfig
from ..marketplaces.registry import RecognizerRegistry
from ..scoring.confidence_scorer import ConfidenceScorer
from ..search.directional_search import DirectionalSearch
from .price_locator import PriceLocator


class PriceLocatorComponentFactory:
    """
    Фабрика для создания компонентов Price Locator.

    Компоненты:
    - Реестр распознавателей шаблонов
    - Confidence Scorer и Directional Search
    - Subtree Extractor
    - Адаптер HTML и фасад PriceLocator
    """

    @staticmethod
    def create_tracer() -> ITracer:
        return LoguruTracer()

    @staticmethod
    def create_registry(
        fingerprints: Optional[FingerprintConfig] = None,
        tracer: Optional[ITracer] = None
    ) -> RecognizerRegistry:
        logger.debug("[PriceLocator] Создание реестра распознавателей")
        return RecognizerRegistry.create_default(fingerprints, tracer)

    @staticmethod
    def create_search(
        fingerprints: Optional[FingerprintConfig] = None,
        tracer: Optional[ITracer] = None
    ) -> DirectionalSearch:
        logger.debug("[PriceLocator] Создание directional search")
        return DirectionalSearch(ConfidenceScorer(fingerprints), tracer)

    @staticmethod
    def create_extractor(
        fingerprints: Optional[FingerprintConfig] = None,
        tracer: Optional[ITracer] = None
    ) -> IPriceExtractor:
        """
        Создает экстрактор поддерева со всеми зависимостями.

        Args:
            fingerprints: Отпечатки маркетплейсов (по умолчанию из fingerprints.yaml)
            tracer: Трассировка (по умолчанию LoguruTracer)

        Returns:
            Экстрактор, реализующий интерфейс IPriceExtractor
        """
        fingerprints = fingerprints or FingerprintConfig.load()
        if tracer is None:
            tracer = PriceLocatorComponentFactory.create_tracer()

        return SubtreeExtractor(
            registry=PriceLocatorComponentFactory.create_registry(fingerprints, tracer),
            search=PriceLocatorComponentFactory.create_search(fingerprints, tracer),
            tracer=tracer,
        )

    @staticmethod
    def create_document_adapter() -> IDocumentAdapter:
        return HtmlDocumentAdapter()

    @staticmethod
    def create_price_locator(
        extractor: Optional[IPriceExtractor] = None,
        document_adapter: Optional[IDocumentAdapter] = None
    ) -> PriceLocator:
        """
        Создает фасад PriceLocator.

        Returns:
            Полностью сконфигурированный PriceLocator
        """
        logger.info("[PriceLocator] Создание PriceLocator с настройками по умолчанию")

        if extractor is None:
            extractor = PriceLocatorComponentFactory.create_extractor()

        if document_adapter is None:
            document_adapter = PriceLocatorComponentFactory.create_document_adapter()

        return PriceLocator(extractor=extractor, document_adapter=document_adapter)
