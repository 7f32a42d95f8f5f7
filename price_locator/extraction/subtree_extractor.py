"""
Subtree Extractor - верхнеуровневый поиск цен в поддереве.

ЦКП: Список PriceCandidate в порядке обнаружения.

Шаги (первый успешный останавливает поиск):
1. visited и граница чужого элемента списка
2. Якорь: ячейки цены родителя (для ссылки), затем Directional Search
3-5. Распознаватели шаблонов (ячейка цены, подъём к элементу списка, компонент цены)
6. Ссылка/кнопка: ячейки цены родителя, затем собственный текст
7. Общий проход: root, дети, следующие и предыдущие соседи;
   текстовые куски найденной цены попадают в visited
8. Последний шанс: все непосещённые текстовые узлы поддерева

Единственный побочный эффект - рост state.visited. Экстрактор не бросает исключений.
"""

from typing import Iterator, List, Optional

from config.settings import HYPERLINK_TAG, INTERACTIVE_LEAF_TAGS, MAX_EXTRACTION_DEPTH
from ..domain.content_node import ContentNode, ElementNode
from ..domain.interfaces import IPriceExtractor, ITracer
from ..domain.models import PriceCandidate, SearchState
from ..infrastructure.tracing import NullTracer
from ..marketplaces.registry import RecognizerRegistry
from ..matching.price_patterns import (
    is_likely_price,
    is_likely_price_range,
    normalize_price_text,
    split_price_range,
)
from ..recomposition.node_recomposer import get_combined_price_string
from ..recomposition.visible_text import collect_text_nodes, neighbour_filter
from ..search.directional_search import DirectionalSearch


class SubtreeExtractor(IPriceExtractor):
    """
    Извлечение цен из поддерева.

    Пример:
        extractor = PriceLocatorComponentFactory.create_extractor()
        candidates = extractor.extract(anchor_node)
    """

    COMPONENT = "SubtreeExtractor"

    def __init__(
        self,
        registry: RecognizerRegistry,
        search: DirectionalSearch,
        tracer: Optional[ITracer] = None,
        max_depth: int = MAX_EXTRACTION_DEPTH
    ):
        self.registry = registry
        self.search = search
        self.tracer = tracer or NullTracer()
        self.max_depth = max_depth

    def extract(self, root: ContentNode, state: Optional[SearchState] = None) -> List[PriceCandidate]:
        if state is None:
            state = SearchState.for_root(root)
        return self._extract(root, state)

    def _extract(self, root: ContentNode, state: SearchState) -> List[PriceCandidate]:
        if state.is_visited(root):
            return []
        state.mark_visited(root)

        if state.depth >= self.max_depth:
            self.tracer.trace(self.COMPONENT, "Превышена глубина вложенных вызовов", depth=state.depth)
            return []

        if state.crosses_boundary(root):
            self.tracer.trace(self.COMPONENT, "Узел в чужом элементе списка")
            return []

        state.depth += 1
        try:
            return self._run_steps(root, state)
        finally:
            state.depth -= 1

    def _run_steps(self, root: ContentNode, state: SearchState) -> List[PriceCandidate]:
        if root is state.anchor:
            anchored = self._extract_at_anchor(root, state)
            if anchored is not None:
                return anchored

        recognized = self.registry.recognize(root, state, self._extract)
        if recognized is not None:
            return recognized

        if root.is_element and root.tag in INTERACTIVE_LEAF_TAGS:
            return self._extract_from_leaf(root, state)

        candidates = self._generic_scan(root, state)
        if candidates:
            return candidates

        return self._last_resort_scan(root, state)

    def _extract_at_anchor(self, anchor: ElementNode, state: SearchState) -> Optional[List[PriceCandidate]]:
        is_hyperlink = anchor.tag == HYPERLINK_TAG

        if is_hyperlink:
            candidates = self._search_parent_cells(anchor, state)
            if candidates:
                self.tracer.trace(self.COMPONENT, "Цена в ячейке рядом со ссылкой-якорем")
                return candidates

        best = self.search.search(anchor, state, self._extract)
        if best is not None:
            return [best]

        # Для ссылки-якоря поиск на этом заканчивается
        return [] if is_hyperlink else None

    def _search_parent_cells(self, leaf: ElementNode, state: SearchState) -> List[PriceCandidate]:
        parent = leaf.parent
        if parent is None:
            return []
        for cell in self.registry.find_price_cells(parent, state):
            if cell is leaf or state.is_visited(cell):
                continue
            candidates = self._extract(cell, state)
            if candidates:
                return candidates
        return []

    def _extract_from_leaf(self, leaf: ElementNode, state: SearchState) -> List[PriceCandidate]:
        candidates = self._search_parent_cells(leaf, state)
        if candidates:
            return candidates

        text = leaf.text_content.strip()
        if is_likely_price(text):
            self.tracer.trace(self.COMPONENT, "Цена в тексте ссылки/кнопки", price=text)
            return [PriceCandidate(normalized_text=normalize_price_text(text), contributing_nodes=(leaf,))]
        return []

    def _generic_scan(self, root: ContentNode, state: SearchState) -> List[PriceCandidate]:
        if not root.is_element:
            return self._scan(root, state)

        for scope in self._scopes(root):
            candidates = self._scan(scope, state)
            if candidates:
                return candidates
        return []

    @staticmethod
    def _scopes(root: ElementNode) -> Iterator[ElementNode]:
        """root, его дети-элементы, затем следующие и предыдущие соседи (лениво)."""
        yield root
        yield from root.element_children
        sibling = root.next_element_sibling
        while sibling is not None:
            yield sibling
            sibling = sibling.next_element_sibling
        sibling = root.previous_element_sibling
        while sibling is not None:
            yield sibling
            sibling = sibling.previous_element_sibling

    def _scan(self, scope: ContentNode, state: SearchState) -> List[PriceCandidate]:
        """Первая цена (или диапазон) среди видимых текстовых узлов scope."""
        container = scope if scope.is_element else None
        exclude = neighbour_filter(state.crosses_boundary)

        for text_node in collect_text_nodes(scope, exclude=state.crosses_boundary):
            combined = get_combined_price_string(text_node, exclude=exclude)
            if not combined.found:
                continue

            if is_likely_price_range(combined.text):
                bounds = split_price_range(combined.text)
                if len(bounds) == 2:
                    self._mark_contributing(combined.nodes, state)
                    self.tracer.trace(self.COMPONENT, "Диапазон цен", low=bounds[0], high=bounds[1])
                    return [
                        PriceCandidate(normalized_text=bound, contributing_nodes=tuple(combined.nodes), container=container)
                        for bound in bounds
                    ]

            if is_likely_price(combined.price_str):
                self._mark_contributing(combined.nodes, state)
                self.tracer.trace(self.COMPONENT, "Цена найдена", price=combined.price_str, nodes=len(combined.nodes))
                return [PriceCandidate(
                    normalized_text=combined.price_str,
                    contributing_nodes=tuple(combined.nodes),
                    container=container,
                )]
        return []

    @staticmethod
    def _mark_contributing(nodes: List[ContentNode], state: SearchState) -> None:
        # Куски склеенной цены повторно не извлекаются; элементы остаются доступны обходу
        for node in nodes:
            if not node.is_element:
                state.mark_visited(node)

    def _last_resort_scan(self, root: ContentNode, state: SearchState) -> List[PriceCandidate]:
        """Каждый подходящий текстовый узел - отдельный кандидат (без склейки)."""
        if not root.is_element:
            return []

        candidates = []
        stack = list(reversed(root.children))
        while stack:
            node = stack.pop()
            if state.is_visited(node) or state.crosses_boundary(node):
                continue
            state.mark_visited(node)
            if node.is_element:
                stack.extend(reversed(node.children))
                continue
            text = node.text.strip()
            if is_likely_price(text):
                candidates.append(PriceCandidate(normalized_text=normalize_price_text(text), contributing_nodes=(node,)))

        if candidates:
            self.tracer.trace(self.COMPONENT, "Цены найдены полным обходом поддерева", found=len(candidates))
        return candidates
