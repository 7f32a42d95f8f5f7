"""
Price Locator: поиск цены рядом с точкой интереса пользователя
в HTML-подобном дереве контента.
"""

from .api import extract_all_prices_from_subtree, is_likely_price
from .application import PriceLocator, PriceLocatorComponentFactory
from .domain import ElementNode, PriceCandidate, SearchState, TextNode
from .formatting import usd_to_btc_and_sats
from .matching import parse_price

__all__ = [
    "extract_all_prices_from_subtree",
    "is_likely_price",
    "parse_price",
    "usd_to_btc_and_sats",
    "PriceLocator",
    "PriceLocatorComponentFactory",
    "ElementNode",
    "PriceCandidate",
    "SearchState",
    "TextNode",
]
