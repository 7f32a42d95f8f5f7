"""
Abstract Base Recognizer для шаблонов разметки маркетплейсов.

Каждый распознаватель знает отпечаток одного шаблона (ячейка цены,
компонент цены, ...) и решает, как искать цену внутри него.

Контракт extract():
- None  -> шаблон не применим, экстрактор идёт дальше
- []    -> шаблон применим, но цены нет (поиск останавливается)
- [...] -> найденные кандидаты
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from ..domain.content_node import ContentNode
from ..domain.interfaces import ITracer
from ..domain.models import PriceCandidate, SearchState
from ..infrastructure.tracing import NullTracer
from .fingerprint_config import FingerprintConfig

ExtractFn = Callable[[ContentNode, SearchState], List[PriceCandidate]]


class AbstractMarketplaceRecognizer(ABC):
    """
    Базовый распознаватель шаблона разметки.

    Получает узел и состояние поиска, сверяет с отпечатком
    и при совпадении извлекает кандидатов.
    """

    def __init__(self, fingerprints: Optional[FingerprintConfig] = None, tracer: Optional[ITracer] = None):
        self.fingerprints = fingerprints or FingerprintConfig.load()
        self.tracer = tracer or NullTracer()

    @property
    @abstractmethod
    def name(self) -> str:
        """Имя распознавателя (для трассировки)."""
        pass

    @abstractmethod
    def matches(self, node: ContentNode, state: SearchState) -> bool:
        """Относится ли узел к шаблону."""
        pass

    @abstractmethod
    def extract(
        self,
        node: ContentNode,
        state: SearchState,
        extract_fn: ExtractFn
    ) -> Optional[List[PriceCandidate]]:
        """
        Извлекает цену внутри шаблона.

        Args:
            node: Узел, для которого matches() вернул True
            state: Состояние поиска
            extract_fn: Экстрактор поддерева (для вложенных вызовов)

        Returns:
            None - продолжить поиск, список - остановиться
        """
        pass
