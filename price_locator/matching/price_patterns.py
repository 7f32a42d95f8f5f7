"""
Pattern Matcher - распознавание строк цен.

ЦКП: Ответ "похоже ли это на долларовую цену" и числовое значение цены.

SRP: Только работа с текстом (никаких узлов дерева).

Поддерживаемые формы:
- $10.99, $ 1,000.00, $1299.99
- 10.99 USD
- 1,234.56 (голое число с центами)

Любой маркер не-долларовой валюты (€, £, ¥, ₽, ₹, EUR, GBP, ...) отклоняет текст.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

from ..domain.exceptions import PriceParseError
from ..domain.models import Currency


# Группа цифр: либо с разделителями тысяч, либо сплошная
_DIGITS = r"(?:\d{1,3}(?:,\d{3})+|\d+)"
_CENTS = r"(?:\.\d{2})"

DOLLAR_PATTERN = re.compile(rf"\$\s?{_DIGITS}{_CENTS}?")
USD_SUFFIX_PATTERN = re.compile(rf"{_DIGITS}{_CENTS}?\s?USD", re.IGNORECASE)
PLAIN_CENTS_PATTERN = re.compile(rf"{_DIGITS}{_CENTS}")

PRICE_PATTERNS = (DOLLAR_PATTERN, USD_SUFFIX_PATTERN, PLAIN_CENTS_PATTERN)

NON_USD_SYMBOL_PATTERN = re.compile(r"[€£¥₽₹]")
# Код валюты вплотную к цифрам ("10EUR") тоже считается маркером
NON_USD_CODE_PATTERN = re.compile(r"(?<![A-Za-z])(?:EUR|GBP|JPY|RUB|INR)(?![A-Za-z])", re.IGNORECASE)

US_DOLLAR_PREFIX_PATTERN = re.compile(r"US\s*\$", re.IGNORECASE)
LEADING_NUMBER_PATTERN = re.compile(r"\d+(?:\.\d+)?|\.\d+")

_RANGE_BOUND = r"\$(\d[\d,.]*)"
PRICE_RANGE_PATTERNS = (
    re.compile(rf"{_RANGE_BOUND}\s*[-–—]\s*{_RANGE_BOUND}", re.IGNORECASE),
    re.compile(rf"from\s*{_RANGE_BOUND}\s*to\s*{_RANGE_BOUND}", re.IGNORECASE),
    re.compile(rf"between\s*{_RANGE_BOUND}\s*and\s*{_RANGE_BOUND}", re.IGNORECASE),
    re.compile(rf"{_RANGE_BOUND}\s*to\s*{_RANGE_BOUND}", re.IGNORECASE),
)


@dataclass(frozen=True)
class ParsedPrice:
    """Числовое значение цены и её валюта."""
    value: float
    currency: Currency = Currency.USD

    def to_dict(self) -> dict:
        return {"value": self.value, "currency": self.currency.value}


def has_non_usd_marker(text: str) -> bool:
    """True, если в тексте есть символ или ISO-код другой валюты."""
    return bool(NON_USD_SYMBOL_PATTERN.search(text) or NON_USD_CODE_PATTERN.search(text))


def is_likely_price(text: Optional[str]) -> bool:
    """
    Похоже ли на долларовую цену.

    Args:
        text: Произвольный текст (None и пустая строка допустимы)

    Returns:
        True если есть ценовой паттерн и нет маркеров других валют
    """
    if not text:
        return False
    if has_non_usd_marker(text):
        return False
    cleaned = text.strip()
    return any(pattern.search(cleaned) for pattern in PRICE_PATTERNS)


def find_dollar_amount(text: str) -> Optional[str]:
    """Первая подстрока вида "$12.34" или None."""
    if not text:
        return None
    match = DOLLAR_PATTERN.search(text)
    return match.group(0) if match else None


def normalize_price_text(text: str) -> str:
    """Сокращает "Now $35.99" до "$35.99"; без доллара возвращает обрезанный текст."""
    dollar_amount = find_dollar_amount(text)
    if dollar_amount is not None:
        return dollar_amount
    return text.strip()


def is_per_unit_price(text: str) -> bool:
    """Первая цена в тексте - цена за единицу ("$3.71/oz"), а не цена товара."""
    if not text:
        return False
    match = DOLLAR_PATTERN.search(text)
    if not match:
        return False
    return text[match.end():].lstrip().startswith("/")


def parse_price(text: str) -> ParsedPrice:
    """
    Извлекает числовое значение цены.

    "US $25.00" -> 25.0, "$1,299.99" -> 1299.99,
    "$41.62/mo. for 24 mo." -> 41.62.
    Текст с маркером другой валюты ("€10.99") получает Currency.OTHER.

    Raises:
        PriceParseError: В тексте нет числа
    """
    if text is None:
        raise PriceParseError("Пустой текст цены", component="PricePatterns")

    cleaned = US_DOLLAR_PREFIX_PATTERN.sub("$", text)
    cleaned = cleaned.replace("+", "")

    dollar_amount = find_dollar_amount(cleaned)
    if dollar_amount is not None:
        cleaned = dollar_amount

    cleaned = cleaned.replace(",", "")
    digits = re.sub(r"[^\d.]", "", cleaned)

    # Берём ведущее число, как это делает parseFloat ("1.2.3" -> 1.2)
    match = LEADING_NUMBER_PATTERN.match(digits)
    if not match:
        raise PriceParseError(f"Не удалось извлечь число из '{text}'", component="PricePatterns")

    try:
        value = float(match.group(0))
    except ValueError as e:
        raise PriceParseError(f"Не удалось извлечь число из '{text}'", component="PricePatterns", original_error=e)

    currency = Currency.OTHER if has_non_usd_marker(text) else Currency.USD
    return ParsedPrice(value=value, currency=currency)


def is_likely_price_range(text: Optional[str]) -> bool:
    """Диапазон цен: "$5.99 - $15.99", "from $5 to $10", "between $5 and $10"."""
    if not text:
        return False
    cleaned = text.strip()
    return any(pattern.search(cleaned) for pattern in PRICE_RANGE_PATTERNS)


def split_price_range(text: Optional[str]) -> List[str]:
    """
    Разбивает диапазон на две граничные цены.

    Returns:
        ["$5.99", "$15.99"] или [] если текст не диапазон
    """
    if not text:
        return []
    cleaned = text.strip()
    for pattern in PRICE_RANGE_PATTERNS:
        match = pattern.search(cleaned)
        if match:
            return [f"${match.group(1)}", f"${match.group(2)}"]
    return []
