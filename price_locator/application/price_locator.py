"""
Фасад Price Locator.

Обрабатывает HTML через:
1. Построение дерева ContentNode (адаптер документа)
2. Поиск цен от якоря (Subtree Extractor)
3. Разбор значения и перевод в BTC/sats (если передан курс)
"""

from typing import Optional
from loguru import logger

from contracts import LocatedPrice, PriceLocateResult
from ..domain.exceptions import AnchorNotFoundError, PriceParseError
from ..domain.interfaces import IDocumentAdapter, IPriceExtractor
from ..domain.models import PriceCandidate
from ..formatting.btc_formatter import usd_to_btc_and_sats
from ..matching.price_patterns import parse_price


class PriceLocator:
    """
    Поиск цены рядом с якорем в HTML-документе.

    Пример:
        locator = PriceLocatorComponentFactory.create_price_locator()
        result = locator.locate(html, "li:first-child a", btc_usd_rate=50000)
        print(result.best.price_str, result.best.btc_display)
    """

    def __init__(self, extractor: IPriceExtractor, document_adapter: IDocumentAdapter):
        self.extractor = extractor
        self.document_adapter = document_adapter

    def locate(
        self,
        html: str,
        anchor_selector: str,
        btc_usd_rate: Optional[float] = None
    ) -> PriceLocateResult:
        """
        Args:
            html: HTML-документ
            anchor_selector: CSS-селектор узла под курсором пользователя
            btc_usd_rate: Курс BTC/USD (None - без перевода)

        Returns:
            PriceLocateResult с ценами в порядке обнаружения

        Raises:
            AnchorNotFoundError: Селектор якоря ничего не нашёл
        """
        document = self.document_adapter.parse(html, anchor_selector=anchor_selector)
        anchor = document.select_one(anchor_selector)
        if anchor is None:
            raise AnchorNotFoundError(
                f"Селектор якоря не нашёл узел: {anchor_selector}",
                component="PriceLocator"
            )

        candidates = self.extractor.extract(anchor)
        logger.info(f"[PriceLocator] Найдено цен: {len(candidates)} (якорь: {anchor_selector})")

        return PriceLocateResult(
            anchor_selector=anchor_selector,
            anchor_tag=anchor.tag,
            prices=[self._to_located_price(candidate, btc_usd_rate) for candidate in candidates],
            btc_usd_rate=btc_usd_rate,
        )

    @staticmethod
    def _to_located_price(candidate: PriceCandidate, btc_usd_rate: Optional[float]) -> LocatedPrice:
        try:
            value = parse_price(candidate.normalized_text).value
        except PriceParseError as e:
            logger.warning(f"[PriceLocator] Не удалось разобрать цену '{candidate.normalized_text}': {e}")
            value = None

        btc_display = None
        if btc_usd_rate is not None and value is not None:
            btc_display = usd_to_btc_and_sats(value, btc_usd_rate)

        return LocatedPrice(
            price_str=candidate.normalized_text,
            value=value,
            currency=candidate.currency.value,
            btc_display=btc_display,
            node_count=len(candidate.contributing_nodes),
            container_tag=candidate.container.tag if candidate.container is not None else None,
        )
