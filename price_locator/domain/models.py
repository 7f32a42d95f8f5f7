"""
Модели результатов ядра Price Locator.

PriceCandidate, ConfidenceScore и SearchState - внутренние результаты,
наружу (оверлею, форматированию) уходят DTO из contracts/.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set

from .content_node import ContentNode, ElementNode, nearest_list_item


class Currency(str, Enum):
    USD = "USD"
    OTHER = "OTHER"


class Direction(str, Enum):
    """Направления обхода дерева от якоря."""
    ANCESTOR = "ancestor"
    DESCENDANT = "descendant"
    SIBLING = "sibling"


@dataclass(frozen=True)
class PriceCandidate:
    """
    Найденная цена.

    contributing_nodes - узлы, из которых склеен текст (в порядке документа),
    container - элемент, к которому оверлей прикрепляет аннотацию.
    """
    normalized_text: str
    contributing_nodes: tuple
    container: Optional[ElementNode] = None
    currency: Currency = Currency.USD

    def with_container(self, container: Optional[ElementNode]) -> "PriceCandidate":
        return PriceCandidate(
            normalized_text=self.normalized_text,
            contributing_nodes=self.contributing_nodes,
            container=container,
            currency=self.currency,
        )

    def to_dict(self) -> dict:
        return {
            "normalized_text": self.normalized_text,
            "currency": self.currency.value,
            "node_count": len(self.contributing_nodes),
            "container_tag": self.container.tag if self.container is not None else None,
        }


@dataclass
class ScoreBreakdown:
    """Сумма баллов одной группы факторов и сами факторы (для диагностики)."""
    total: int = 0
    factors: Dict[str, int] = field(default_factory=dict)

    def add(self, factor: str, points: int) -> None:
        self.total += points
        self.factors[factor] = points


@dataclass
class ConfidenceScore:
    structural: ScoreBreakdown
    content: ScoreBreakdown
    context: ScoreBreakdown

    @property
    def total(self) -> int:
        return self.structural.total + self.content.total + self.context.total

    def to_dict(self) -> dict:
        return {
            "structural": {"total": self.structural.total, "factors": dict(self.structural.factors)},
            "content": {"total": self.content.total, "factors": dict(self.content.factors)},
            "context": {"total": self.context.total, "factors": dict(self.context.factors)},
            "total": self.total,
        }


@dataclass
class DirectionResult:
    """Лучший результат одного направления поиска."""
    direction: Direction
    candidate: PriceCandidate
    node: ContentNode
    confidence: int
    distance: int


@dataclass
class SearchState:
    """
    Состояние одного верхнеуровневого вызова экстрактора.

    Создаётся один раз на вызов, передаётся во все вложенные вызовы
    и после вызова выбрасывается.
    """
    anchor: Optional[ElementNode] = None
    anchor_list_item: Optional[ElementNode] = None
    visited: Set[int] = field(default_factory=set)
    per_direction_best: Dict[Direction, DirectionResult] = field(default_factory=dict)
    depth: int = 0

    @classmethod
    def for_root(cls, root: ContentNode) -> "SearchState":
        """Находит якорь (сам root или ближайший помеченный предок) и его элемент списка."""
        anchor = root.closest(lambda element: element.is_anchor)
        anchor_list_item = nearest_list_item(anchor) if anchor is not None else None
        return cls(anchor=anchor, anchor_list_item=anchor_list_item)

    def is_visited(self, node: ContentNode) -> bool:
        return id(node) in self.visited

    def mark_visited(self, node: ContentNode) -> None:
        self.visited.add(id(node))

    def crosses_boundary(self, node: ContentNode) -> bool:
        """
        True, если узел лежит в другом элементе списка, чем якорь.

        Вложенные списки внутри элемента списка якоря границу не пересекают.
        """
        if self.anchor_list_item is None:
            return False
        own_list_item = nearest_list_item(node)
        if own_list_item is None or own_list_item is self.anchor_list_item:
            return False
        return not self.anchor_list_item.contains(own_list_item)
