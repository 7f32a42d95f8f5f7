"""
Directional Search - поиск цены вокруг якоря в трёх направлениях.

ЦКП: Лучший кандидат по уверенности среди направлений
ancestor, descendant, sibling.

Каждое направление идёт от якоря шаг за шагом, на каждом шаге
прогоняет узлы через экстрактор поддерева и оценивает их scorer'ом.
Обход направления прекращается после MAX_CONSECUTIVE_DECREASES шагов
без улучшения или при выходе за пределы дерева.
"""

from typing import Callable, List, Optional

from config.settings import (
    MAX_CONSECUTIVE_DECREASES,
    MAX_DISTANCE,
    MIN_CONFIDENCE,
    MIN_CONFIDENCE_DIFFERENCE,
    SIGNIFICANT_INCREASE_THRESHOLD,
)
from ..domain.content_node import ContentNode, ElementNode
from ..domain.interfaces import ITracer
from ..domain.models import Direction, DirectionResult, PriceCandidate, SearchState
from ..infrastructure.tracing import NullTracer
from ..scoring.confidence_scorer import ConfidenceScorer

ExtractFn = Callable[[ContentNode, SearchState], List[PriceCandidate]]


class _DirectionWalk:
    """Текущий лучший результат одного направления и счётчик неудачных шагов."""

    def __init__(self, direction: Direction):
        self.direction = direction
        self.best: Optional[DirectionResult] = None
        self.misses = 0
        self.distance = 0

    @property
    def best_confidence(self) -> int:
        return self.best.confidence if self.best is not None else 0

    def record(self, node: ContentNode, candidate: PriceCandidate, confidence: int) -> None:
        best_confidence = self.best_confidence
        if confidence > best_confidence:
            self.best = DirectionResult(
                direction=self.direction,
                candidate=candidate,
                node=node,
                confidence=confidence,
                distance=self.distance,
            )
            self.misses = 0
        elif best_confidence - confidence < SIGNIFICANT_INCREASE_THRESHOLD:
            self.misses = 0
        elif abs(confidence - best_confidence) < MIN_CONFIDENCE_DIFFERENCE:
            self.misses = 0
        else:
            self.misses += 1


class DirectionalSearch:
    """
    Поиск цены вокруг якоря.

    Пример:
        search = DirectionalSearch(ConfidenceScorer())
        candidate = search.search(anchor, state, extractor.extract)
    """

    DIRECTIONS = (Direction.ANCESTOR, Direction.DESCENDANT, Direction.SIBLING)

    def __init__(self, scorer: ConfidenceScorer, tracer: Optional[ITracer] = None):
        self.scorer = scorer
        self.tracer = tracer or NullTracer()

    def search(self, anchor: ElementNode, state: SearchState, extract_fn: ExtractFn) -> Optional[PriceCandidate]:
        """
        Обходит все направления и выбирает лучший результат.

        Args:
            anchor: Якорь
            state: Состояние поиска (per_direction_best заполняется здесь)
            extract_fn: Экстрактор поддерева

        Returns:
            Кандидат с container=anchor или None
        """
        results = []
        for direction in self.DIRECTIONS:
            result = self.walk(direction, anchor, state, extract_fn)
            if result is None:
                continue
            state.per_direction_best[direction] = result
            results.append(result)
            self.tracer.trace(
                "DirectionalSearch", "Лучший результат направления",
                direction=direction.value,
                price=result.candidate.normalized_text,
                confidence=result.confidence,
                distance=result.distance,
            )

        accepted = [
            result for result in results
            if result.confidence >= MIN_CONFIDENCE and result.distance <= MAX_DISTANCE
        ]
        if not accepted:
            self.tracer.trace("DirectionalSearch", "Нет результата выше порога уверенности")
            return None

        accepted.sort(key=lambda result: (-result.confidence, result.distance))
        winner = accepted[0]
        self.tracer.trace(
            "DirectionalSearch", "Выбран кандидат",
            direction=winner.direction.value,
            price=winner.candidate.normalized_text,
        )
        return winner.candidate.with_container(anchor)

    def walk(
        self,
        direction: Direction,
        anchor: ElementNode,
        state: SearchState,
        extract_fn: ExtractFn
    ) -> Optional[DirectionResult]:
        """Обход одного направления; возвращает лучший найденный результат."""
        walk = _DirectionWalk(direction)
        current: Optional[ContentNode] = anchor

        while (
            current is not None
            and walk.misses < MAX_CONSECUTIVE_DECREASES
            and (current is anchor or not state.is_visited(current))
        ):
            self._explore(current, anchor, state, extract_fn, walk)

            if direction is Direction.ANCESTOR:
                parent = current.parent
                if parent is not None:
                    for sibling in parent.children:
                        self._explore(sibling, anchor, state, extract_fn, walk)
                current = parent
            elif direction is Direction.DESCENDANT:
                if current.is_element:
                    for child in current.element_children:
                        self._explore(child, anchor, state, extract_fn, walk)
                    current = current.children[0] if current.children else None
                else:
                    current = None
            else:
                current = current.next_sibling

            walk.distance += 1

        return walk.best

    def _explore(
        self,
        node: ContentNode,
        anchor: ElementNode,
        state: SearchState,
        extract_fn: ExtractFn,
        walk: _DirectionWalk
    ) -> None:
        """Прогоняет узел и его потомков через экстрактор (без рекурсии Python)."""
        stack = [node]
        while stack:
            current = stack.pop()
            if state.is_visited(current):
                continue
            if state.crosses_boundary(current):
                self.tracer.trace("DirectionalSearch", "Граница чужого элемента списка", direction=walk.direction.value)
                continue

            candidates = extract_fn(current, state)
            if candidates:
                confidence = self.scorer.score(current, anchor, state.anchor_list_item).total
                walk.record(current, candidates[0], confidence)

            if current.is_element:
                stack.extend(reversed(current.element_children))
