"""
Pattern Matcher: распознавание и разбор строк цен.
"""

from .price_patterns import (
    ParsedPrice,
    find_dollar_amount,
    has_non_usd_marker,
    is_likely_price,
    is_likely_price_range,
    is_per_unit_price,
    normalize_price_text,
    parse_price,
    split_price_range,
)

__all__ = [
    "ParsedPrice",
    "find_dollar_amount",
    "has_non_usd_marker",
    "is_likely_price",
    "is_likely_price_range",
    "is_per_unit_price",
    "normalize_price_text",
    "parse_price",
    "split_price_range",
]
