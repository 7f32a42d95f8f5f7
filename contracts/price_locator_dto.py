"""
DTO контракт: Price Locator -> Overlay / Formatting

Результат поиска цены рядом с якорем.
Оверлей рисует аннотацию по container_tag/node_count,
форматирование переводит value в BTC/sats.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LocatedPrice(BaseModel):
    """
    Найденная цена.
    """

    price_str: str = Field(..., description="Нормализованная строка цены, например '$12.97'")
    value: float | None = Field(None, description="Числовое значение (None, если разбор не удался)")
    currency: str = Field("USD", description="Валюта цены")
    btc_display: str | None = Field(None, description="Цена в BTC/sats (если передан курс)")
    node_count: int = Field(..., description="Количество узлов, из которых склеена цена")
    container_tag: str | None = Field(None, description="Тег элемента для аннотации")

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @field_validator("node_count")
    @classmethod
    def validate_node_count(cls, v: int) -> int:
        if v < 0:
            raise ValueError("node_count must be non-negative")
        return v


class PriceLocateResult(BaseModel):
    """
    DTO для результата поиска цены.

    prices упорядочены как их нашёл экстрактор (порядок обнаружения).
    """

    anchor_selector: str = Field(..., description="Селектор якоря")
    anchor_tag: str | None = Field(None, description="Тег якоря")
    prices: List[LocatedPrice] = Field(default_factory=list, description="Найденные цены")
    btc_usd_rate: float | None = Field(None, description="Курс BTC/USD, использованный при форматировании")

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @property
    def best(self) -> LocatedPrice | None:
        return self.prices[0] if self.prices else None

    @property
    def found(self) -> bool:
        return bool(self.prices)
