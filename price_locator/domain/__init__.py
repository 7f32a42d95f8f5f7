"""
Домен Price Locator: дерево контента, модели результатов, интерфейсы, исключения.
"""

from .content_node import ContentNode, ElementNode, TextNode, nearest_list_item, tree_distance
from .exceptions import (
    AnchorNotFoundError,
    DocumentAdapterError,
    FingerprintConfigurationError,
    PriceLocatorError,
    PriceParseError,
)
from .interfaces import IDocumentAdapter, IPriceExtractor, ITracer
from .models import (
    ConfidenceScore,
    Currency,
    Direction,
    DirectionResult,
    PriceCandidate,
    ScoreBreakdown,
    SearchState,
)

__all__ = [
    "ContentNode",
    "ElementNode",
    "TextNode",
    "nearest_list_item",
    "tree_distance",
    "AnchorNotFoundError",
    "DocumentAdapterError",
    "FingerprintConfigurationError",
    "PriceLocatorError",
    "PriceParseError",
    "IDocumentAdapter",
    "IPriceExtractor",
    "ITracer",
    "ConfidenceScore",
    "Currency",
    "Direction",
    "DirectionResult",
    "PriceCandidate",
    "ScoreBreakdown",
    "SearchState",
]
