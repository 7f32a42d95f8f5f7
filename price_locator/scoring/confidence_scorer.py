"""
Confidence Scorer - оценка уверенности, что узел несёт цену.

ЦКП: ConfidenceScore из трёх групп факторов.

- Structural: маркеры разметки (классы, атрибуты, элемент списка)
- Content: текст узла сам по себе похож на цену
- Context: близость к якорю и видимость

Итог = сумма групп. Факторы сохраняются только для диагностики.
"""

from typing import Optional

from config.settings import (
    PROXIMITY_BUCKETS,
    SCORE_CORRECT_LIST_ITEM,
    SCORE_ELEMENT_PRICE,
    SCORE_MAIN_PRICE_BOOST,
    SCORE_PRICE_ATTRIBUTE,
    SCORE_PRICE_CELL_BOOST,
    SCORE_PRICE_CONTAINER,
    SCORE_PRICE_MARKER,
    SCORE_PRICE_TEXT_FALLBACK,
    SCORE_TEXT_NODE_PRICE,
    SCORE_VISIBLE,
    SCORE_WRONG_LIST_ITEM,
)
from ..domain.content_node import ContentNode, ElementNode, nearest_list_item, tree_distance
from ..domain.models import ConfidenceScore, ScoreBreakdown
from ..marketplaces.fingerprint_config import FingerprintConfig
from ..matching.price_patterns import is_likely_price


class ConfidenceScorer:
    """
    Считает уверенность для узла относительно якоря.

    Пример:
        scorer = ConfidenceScorer()
        score = scorer.score(node, anchor, anchor_list_item)
        print(score.total)
    """

    def __init__(self, fingerprints: Optional[FingerprintConfig] = None):
        self.fingerprints = fingerprints or FingerprintConfig.load()

    def score(
        self,
        node: ContentNode,
        anchor: ContentNode,
        anchor_list_item: Optional[ElementNode] = None
    ) -> ConfidenceScore:
        """
        Args:
            node: Оцениваемый узел
            anchor: Якорь (точка интереса пользователя)
            anchor_list_item: Элемент списка якоря (None - якорь вне списка)
        """
        return ConfidenceScore(
            structural=self.structural(node, anchor_list_item),
            content=self.content(node),
            context=self.context(node, anchor),
        )

    def structural(self, node: ContentNode, anchor_list_item: Optional[ElementNode] = None) -> ScoreBreakdown:
        breakdown = ScoreBreakdown()
        if not node.is_element:
            return breakdown

        scoring = self.fingerprints.scoring
        cell = self.fingerprints.price_cell

        if (
            any(node.has_class(name) for name in scoring.price_marker_classes)
            or node.get_attribute(cell.attribute) == cell.value
        ):
            breakdown.add("price-class", SCORE_PRICE_MARKER)

        if self._has_price_attribute(node):
            breakdown.add("price-attribute", SCORE_PRICE_ATTRIBUTE)

        if any(node.has_class(name) for name in scoring.price_container_classes):
            breakdown.add("price-container", SCORE_PRICE_CONTAINER)

        own_list_item = nearest_list_item(node)
        if anchor_list_item is not None and own_list_item is anchor_list_item:
            breakdown.add("correct-list-item", SCORE_CORRECT_LIST_ITEM)
        elif own_list_item is not None and own_list_item is not anchor_list_item:
            breakdown.add("wrong-list-item", SCORE_WRONG_LIST_ITEM)

        if is_likely_price(node.text_content.strip()):
            breakdown.add("price-text-fallback", SCORE_PRICE_TEXT_FALLBACK)

        if node.closest(lambda el: el.get_attribute(cell.attribute) == cell.value) is not None:
            breakdown.add("price-cell-boost", SCORE_PRICE_CELL_BOOST)

        if node.has_classes(scoring.main_price_classes):
            breakdown.add("main-price-boost", SCORE_MAIN_PRICE_BOOST)

        return breakdown

    @staticmethod
    def content(node: ContentNode) -> ScoreBreakdown:
        breakdown = ScoreBreakdown()
        if is_likely_price(node.text_content.strip()):
            points = SCORE_ELEMENT_PRICE if node.is_element else SCORE_TEXT_NODE_PRICE
            breakdown.add("price-text", points)
        return breakdown

    @staticmethod
    def context(node: ContentNode, anchor: ContentNode) -> ScoreBreakdown:
        breakdown = ScoreBreakdown()

        distance = tree_distance(node, anchor)
        if distance is not None:
            for max_distance, points in PROXIMITY_BUCKETS:
                if distance <= max_distance:
                    breakdown.add("proximity", points)
                    break

        if node.is_element and node.visible:
            breakdown.add("visibility", SCORE_VISIBLE)

        return breakdown

    @staticmethod
    def _has_price_attribute(node: ElementNode) -> bool:
        if node.get_attribute("itemprop") == "price":
            return True
        if node.get_attribute("data-price"):
            return True
        test_id = node.get_attribute("data-testid")
        return bool(test_id) and "price" in test_id
