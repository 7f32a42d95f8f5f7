"""
Распознаватель ячейки цены товара (data-automation-id="product-price").

Порядок поиска внутри ячейки:
1. Элемент основной цены (полный набор классов)
2. Дубль для скринридеров
3. Видимые текстовые узлы через Recomposer (цены за единицу отклоняются)
"""

from typing import List, Optional

from ..domain.content_node import ContentNode, ElementNode, nearest_list_item
from ..domain.models import PriceCandidate, SearchState
from ..matching.price_patterns import is_likely_price, is_per_unit_price, normalize_price_text
from ..recomposition.node_recomposer import get_combined_price_string
from ..recomposition.visible_text import collect_text_nodes, neighbour_filter
from .base import AbstractMarketplaceRecognizer, ExtractFn


class PriceCellRecognizer(AbstractMarketplaceRecognizer):
    """Ячейка цены товара в сетке/списке выдачи."""

    @property
    def name(self) -> str:
        return "PriceCell"

    def is_cell(self, node: ContentNode) -> bool:
        fingerprint = self.fingerprints.price_cell
        return node.is_element and node.get_attribute(fingerprint.attribute) == fingerprint.value

    def enclosing_cell(self, node: ContentNode) -> Optional[ElementNode]:
        return node.closest(self.is_cell)

    def find_cells(self, scope: ElementNode, state: SearchState) -> List[ElementNode]:
        """Ячейки цены внутри scope, не выходящие за элемент списка якоря."""
        return [
            cell for cell in scope.find_all(self.is_cell)
            if not state.crosses_boundary(cell)
        ]

    def matches(self, node: ContentNode, state: SearchState) -> bool:
        if not node.is_element:
            return False
        if self.is_cell(node):
            return True
        return nearest_list_item(node) is not None and self.enclosing_cell(node) is not None

    def extract(
        self,
        node: ContentNode,
        state: SearchState,
        extract_fn: ExtractFn
    ) -> Optional[List[PriceCandidate]]:
        cell = self.enclosing_cell(node)
        if cell is None:
            return []

        fingerprint = self.fingerprints.price_cell

        main_price = cell.find_first(lambda el: el.has_classes(fingerprint.main_price_classes))
        candidate = self._from_element(main_price, cell)
        if candidate is not None:
            self.tracer.trace(self.name, "Основная цена", price=candidate.normalized_text)
            return [candidate]

        screen_reader = cell.find_first(lambda el: el.has_class(fingerprint.screen_reader_class))
        candidate = self._from_element(screen_reader, cell)
        if candidate is not None:
            self.tracer.trace(self.name, "Цена для скринридера", price=candidate.normalized_text)
            return [candidate]

        exclude = neighbour_filter(state.crosses_boundary)
        for text_node in collect_text_nodes(cell, exclude=state.crosses_boundary):
            combined = get_combined_price_string(text_node, exclude=exclude)
            if not is_likely_price(combined.price_str):
                continue
            if is_per_unit_price(combined.text):
                self.tracer.trace(self.name, "Пропущена цена за единицу", text=combined.text)
                continue
            self.tracer.trace(self.name, "Цена в тексте ячейки", price=combined.price_str)
            return [PriceCandidate(
                normalized_text=combined.price_str,
                contributing_nodes=tuple(combined.nodes),
                container=cell,
            )]

        self.tracer.trace(self.name, "Ячейка без цены")
        return []

    @staticmethod
    def _from_element(element: Optional[ElementNode], cell: ElementNode) -> Optional[PriceCandidate]:
        if element is None:
            return None
        text = element.text_content.strip()
        if not text or not is_likely_price(text):
            return None
        return PriceCandidate(
            normalized_text=normalize_price_text(text),
            contributing_nodes=(element,),
            container=cell,
        )
