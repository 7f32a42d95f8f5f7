"""
Подъём к элементу списка.

Узел внутри элемента списка, но вне ячейки цены: если в этом
элементе списка есть ячейка цены, поиск ограничивается ею.
"""

from typing import List, Optional

from ..domain.content_node import ContentNode, nearest_list_item
from ..domain.models import PriceCandidate, SearchState
from .base import AbstractMarketplaceRecognizer, ExtractFn
from .price_cell import PriceCellRecognizer


class ListItemAscensionRecognizer(AbstractMarketplaceRecognizer):

    def __init__(self, price_cell: PriceCellRecognizer, fingerprints=None, tracer=None):
        super().__init__(fingerprints=fingerprints or price_cell.fingerprints, tracer=tracer or price_cell.tracer)
        self.price_cell = price_cell

    @property
    def name(self) -> str:
        return "ListItemAscension"

    def matches(self, node: ContentNode, state: SearchState) -> bool:
        if not node.is_element:
            return False
        return nearest_list_item(node) is not None and self.price_cell.enclosing_cell(node) is None

    def extract(
        self,
        node: ContentNode,
        state: SearchState,
        extract_fn: ExtractFn
    ) -> Optional[List[PriceCandidate]]:
        list_item = nearest_list_item(node)
        cell = list_item.find_first(self.price_cell.is_cell)
        if cell is None:
            return None
        self.tracer.trace(self.name, "Поиск ограничен ячейкой цены элемента списка")
        return extract_fn(cell, state)
