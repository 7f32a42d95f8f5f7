"""
Интерфейсы (абстрактные классы) для домена Price Locator.

Домен Price Locator отвечает за:
1. Построение дерева контента из документа
2. Поиск цены рядом с якорем
3. Диагностику (трассировку) решений эвристик
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .content_node import ContentNode
from .models import PriceCandidate, SearchState


class ITracer(ABC):
    """Интерфейс для диагностических сообщений ядра."""

    @abstractmethod
    def trace(self, component: str, message: str, **data) -> None:
        """
        Записывает диагностическое событие.

        Args:
            component: Имя компонента (например, 'DirectionalSearch')
            message: Текст события
            **data: Дополнительные поля события
        """
        pass


class IPriceExtractor(ABC):
    """Интерфейс для извлечения цен из поддерева."""

    @abstractmethod
    def extract(self, root: ContentNode, state: Optional[SearchState] = None) -> List[PriceCandidate]:
        """
        Извлекает все цены из поддерева.

        Args:
            root: Корень поддерева
            state: Состояние поиска (None - создаётся новое)

        Returns:
            Список кандидатов в порядке обнаружения
        """
        pass


class IDocumentAdapter(ABC):
    """Интерфейс для адаптера документа (HTML -> ContentNode)."""

    @abstractmethod
    def parse(self, markup: str, anchor_selector: Optional[str] = None):
        """
        Строит дерево ContentNode из разметки.

        Args:
            markup: Исходный документ
            anchor_selector: CSS-селектор узла, который нужно пометить якорем

        Returns:
            Документ с корнем дерева и поиском узлов по селектору
        """
        pass
