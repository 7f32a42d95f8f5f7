"""
Настройки проекта Price Locator.

Все пороги и веса эвристик собраны здесь, чтобы их можно было
подстраивать без правки алгоритмов.
"""

import os
from pathlib import Path

# =============================================================================
# ПУТИ ПРОЕКТА
# =============================================================================
PROJECT_ROOT = Path(__file__).parent.parent
FINGERPRINTS_FILE = PROJECT_ROOT / "price_locator" / "marketplaces" / "fingerprints.yaml"

# =============================================================================
# ЛОГИРОВАНИЕ
# =============================================================================
LOG_LEVEL = os.getenv("PRICE_LOCATOR_LOG_LEVEL", "INFO")

# =============================================================================
# ЯКОРЬ И ГРАНИЦЫ
# =============================================================================
# Атрибут, которым внешний коллаборатор помечает узел под курсором
ANCHOR_ATTRIBUTE = os.getenv("PRICE_LOCATOR_ANCHOR_ATTRIBUTE", "data-clicked")
ANCHOR_ATTRIBUTE_VALUE = "true"

# Тег элемента списка (граница, за которую поиск не выходит)
LIST_ITEM_TAG = "li"

# Листья, по которым пользователь обычно кликает (ссылки и кнопки)
INTERACTIVE_LEAF_TAGS = ("a", "button")
HYPERLINK_TAG = "a"

# Классы "экранных" дублей цены, которые не видны пользователю
OFFSCREEN_CLASSES = ("a-offscreen",)

# =============================================================================
# CONFIDENCE SCORER
# =============================================================================
# Structural
SCORE_PRICE_MARKER = 30
SCORE_PRICE_ATTRIBUTE = 25
SCORE_PRICE_CONTAINER = 20
SCORE_CORRECT_LIST_ITEM = 35
SCORE_WRONG_LIST_ITEM = -25
SCORE_PRICE_TEXT_FALLBACK = 40
SCORE_PRICE_CELL_BOOST = 20
SCORE_MAIN_PRICE_BOOST = 15

# Content
SCORE_TEXT_NODE_PRICE = 40
SCORE_ELEMENT_PRICE = 35

# Context: (максимальная дистанция, баллы)
PROXIMITY_BUCKETS = ((2, 30), (4, 20), (6, 10))
SCORE_VISIBLE = 20

# =============================================================================
# DIRECTIONAL SEARCH
# =============================================================================
MAX_CONSECUTIVE_DECREASES = 3
SIGNIFICANT_INCREASE_THRESHOLD = 5
MIN_CONFIDENCE_DIFFERENCE = 2
MIN_CONFIDENCE = 50
MAX_DISTANCE = 5

# Сколько вложенных вызовов экстрактора допускается за один верхний вызов
MAX_EXTRACTION_DEPTH = int(os.getenv("PRICE_LOCATOR_MAX_EXTRACTION_DEPTH", "200"))

# =============================================================================
# CURRENCY FORMATTER
# =============================================================================
SATS_PER_BTC = 100_000_000
BTC_DISPLAY_THRESHOLD = 0.01
KSATS_DISPLAY_THRESHOLD = 10_000
BTC_DECIMALS = 4
BTC_UNAVAILABLE_MESSAGE = "BTC price unavailable"
