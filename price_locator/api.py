"""
Публичные операции ядра: extract_all_prices_from_subtree и is_likely_price.
"""

from typing import List, Optional

from .application.factory import PriceLocatorComponentFactory
from .domain.content_node import ContentNode
from .domain.interfaces import IPriceExtractor
from .domain.models import PriceCandidate, SearchState
from .matching.price_patterns import is_likely_price

_default_extractor: Optional[IPriceExtractor] = None


def default_extractor() -> IPriceExtractor:
    """Экстрактор с настройками по умолчанию (создаётся один раз)."""
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = PriceLocatorComponentFactory.create_extractor()
    return _default_extractor


def extract_all_prices_from_subtree(root: ContentNode, state: Optional[SearchState] = None) -> List[PriceCandidate]:
    """
    Все цены поддерева в порядке обнаружения.

    Args:
        root: Корень поддерева (обычно якорь или узел внутри его элемента списка)
        state: Состояние поиска; None - новое состояние для этого вызова
    """
    return default_extractor().extract(root, state)


__all__ = ["default_extractor", "extract_all_prices_from_subtree", "is_likely_price"]
