#!/usr/bin/env python3
"""
Точка входа для поиска цены рядом с якорем в HTML-файле.

Использование:
    # Найти цену для ссылки в первом элементе списка
    python scripts/locate_price.py page.html "ul > li:first-child a"

    # С переводом в BTC/sats по курсу
    python scripts/locate_price.py page.html "[data-clicked]" --btc-rate 65000

    # Подробная трассировка эвристик
    python scripts/locate_price.py page.html ".product-title" --debug
"""

import sys
import argparse
from pathlib import Path

from loguru import logger

# Добавляем корень проекта в путь
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import LOG_LEVEL
from price_locator.application.factory import PriceLocatorComponentFactory
from price_locator.domain.exceptions import PriceLocatorError


def main() -> int:
    """Главная функция поиска цены."""
    parser = argparse.ArgumentParser(description="Price Locator: поиск цены рядом с якорем")
    parser.add_argument("html_file", help="Путь к HTML-файлу")
    parser.add_argument("anchor_selector", help="CSS-селектор узла под курсором")
    parser.add_argument("--btc-rate", type=float, default=None, help="Курс BTC/USD для перевода цены")
    parser.add_argument("--debug", action="store_true", help="Вывести трассировку эвристик")
    args = parser.parse_args()

    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level="DEBUG" if args.debug else LOG_LEVEL
    )

    html_path = Path(args.html_file)
    if not html_path.exists():
        logger.error(f"[locate_price] Файл не найден: {html_path}")
        return 1

    html = html_path.read_text(encoding="utf-8")
    locator = PriceLocatorComponentFactory.create_price_locator()

    try:
        result = locator.locate(html, args.anchor_selector, btc_usd_rate=args.btc_rate)
    except PriceLocatorError as e:
        logger.error(f"[locate_price] {e}")
        return 1

    print(result.model_dump_json(indent=2))

    if not result.found:
        logger.warning("[locate_price] Цена не найдена")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
