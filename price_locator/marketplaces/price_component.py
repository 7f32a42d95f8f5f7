"""
Распознаватель компонента цены (классы a-price / a-price-text-price).

Цифры цены разбиты на несколько span ("$", "2,599", ".", "99"),
рядом лежит offscreen-дубль. Видимые части склеиваются без пробелов.
"""

import re
from typing import List, Optional

from ..domain.content_node import ContentNode, ElementNode
from ..domain.models import PriceCandidate, SearchState
from ..matching.price_patterns import is_likely_price
from ..recomposition.visible_text import collect_text_nodes, is_offscreen
from .base import AbstractMarketplaceRecognizer, ExtractFn


def _is_skipped(element: ElementNode) -> bool:
    # aria-hidden здесь не скрывает: видимая цена лежит именно в aria-hidden span
    return is_offscreen(element) or not element.visible


class PriceComponentRecognizer(AbstractMarketplaceRecognizer):

    @property
    def name(self) -> str:
        return "PriceComponent"

    def matches(self, node: ContentNode, state: SearchState) -> bool:
        if not node.is_element:
            return False
        return any(node.has_class(name) for name in self.fingerprints.price_component.classes)

    def extract(
        self,
        node: ContentNode,
        state: SearchState,
        extract_fn: ExtractFn
    ) -> Optional[List[PriceCandidate]]:
        text_nodes = [
            text_node for text_node in collect_text_nodes(node, skip_element=_is_skipped)
            if text_node.text.strip()
        ]
        combined = re.sub(r"\s+", "", "".join(n.text for n in text_nodes))
        if not is_likely_price(combined):
            self.tracer.trace(self.name, "Компонент без цены", text=combined)
            return []
        self.tracer.trace(self.name, "Цена компонента", price=combined)
        return [PriceCandidate(
            normalized_text=combined,
            contributing_nodes=tuple(text_nodes),
            container=node,
        )]
