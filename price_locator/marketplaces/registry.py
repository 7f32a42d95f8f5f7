"""
Recognizer Registry - упорядоченный реестр распознавателей шаблонов.

Экстрактор опрашивает распознаватели по порядку; первый,
вернувший список (пусть и пустой), останавливает поиск.
"""

from typing import List, Optional
from loguru import logger

from ..domain.content_node import ContentNode, ElementNode
from ..domain.interfaces import ITracer
from ..domain.models import PriceCandidate, SearchState
from ..infrastructure.tracing import NullTracer
from .base import AbstractMarketplaceRecognizer, ExtractFn
from .fingerprint_config import FingerprintConfig
from .list_item import ListItemAscensionRecognizer
from .price_cell import PriceCellRecognizer
from .price_component import PriceComponentRecognizer


class RecognizerRegistry:
    """
    Реестр распознавателей.

    Пример:
        registry = RecognizerRegistry.create_default()
        result = registry.recognize(node, state, extractor.extract)
    """

    def __init__(
        self,
        recognizers: List[AbstractMarketplaceRecognizer],
        price_cell: PriceCellRecognizer,
        tracer: Optional[ITracer] = None
    ):
        self.recognizers = list(recognizers)
        self.price_cell = price_cell
        self.tracer = tracer or NullTracer()

    @classmethod
    def create_default(
        cls,
        fingerprints: Optional[FingerprintConfig] = None,
        tracer: Optional[ITracer] = None
    ) -> "RecognizerRegistry":
        """Ячейка цены -> подъём к элементу списка -> компонент цены."""
        fingerprints = fingerprints or FingerprintConfig.load()
        price_cell = PriceCellRecognizer(fingerprints, tracer)
        recognizers = [
            price_cell,
            ListItemAscensionRecognizer(price_cell, fingerprints, tracer),
            PriceComponentRecognizer(fingerprints, tracer),
        ]
        return cls(recognizers, price_cell, tracer)

    def recognize(
        self,
        node: ContentNode,
        state: SearchState,
        extract_fn: ExtractFn
    ) -> Optional[List[PriceCandidate]]:
        """
        Returns:
            Результат первого сработавшего распознавателя или None
        """
        for recognizer in self.recognizers:
            if not recognizer.matches(node, state):
                continue
            result = recognizer.extract(node, state, extract_fn)
            if result is not None:
                self.tracer.trace("RecognizerRegistry", "Сработал распознаватель", name=recognizer.name, found=len(result))
                return result
        return None

    def find_price_cells(self, scope: ElementNode, state: SearchState) -> List[ElementNode]:
        return self.price_cell.find_cells(scope, state)

    def get(self, name: str) -> Optional[AbstractMarketplaceRecognizer]:
        for recognizer in self.recognizers:
            if recognizer.name == name:
                return recognizer
        return None

    def register(self, recognizer: AbstractMarketplaceRecognizer, position: Optional[int] = None) -> None:
        """
        Зарегистрировать новый распознаватель.

        Args:
            recognizer: Экземпляр AbstractMarketplaceRecognizer
            position: Позиция в порядке опроса (None - в конец)
        """
        if position is None:
            self.recognizers.append(recognizer)
        else:
            self.recognizers.insert(position, recognizer)
        logger.info(f"[RecognizerRegistry] Зарегистрирован распознаватель: {recognizer.name}")
