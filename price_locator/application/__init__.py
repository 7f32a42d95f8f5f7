"""
Application-слой Price Locator: фасад и фабрика компонентов.
"""

from .factory import PriceLocatorComponentFactory
from .price_locator import PriceLocator

__all__ = ["PriceLocatorComponentFactory", "PriceLocator"]
