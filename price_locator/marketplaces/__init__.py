"""
Распознаватели шаблонов разметки маркетплейсов.
"""

from .base import AbstractMarketplaceRecognizer
from .fingerprint_config import FingerprintConfig
from .list_item import ListItemAscensionRecognizer
from .price_cell import PriceCellRecognizer
from .price_component import PriceComponentRecognizer
from .registry import RecognizerRegistry

__all__ = [
    "AbstractMarketplaceRecognizer",
    "FingerprintConfig",
    "ListItemAscensionRecognizer",
    "PriceCellRecognizer",
    "PriceComponentRecognizer",
    "RecognizerRegistry",
]
