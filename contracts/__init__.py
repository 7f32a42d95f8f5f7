"""
Контракты DTO проекта Price Locator.

Все контракты используют Pydantic v2 для валидации.

Контракты:
- Price Locator -> Overlay / Formatting: PriceLocateResult (price_locator_dto.py)
"""

from .price_locator_dto import LocatedPrice, PriceLocateResult

__all__ = [
    "LocatedPrice",
    "PriceLocateResult",
]
