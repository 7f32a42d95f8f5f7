"""
Сбор видимых текстовых узлов поддерева.
"""

from typing import Callable, List, Optional

from config.settings import OFFSCREEN_CLASSES
from ..domain.content_node import ContentNode, ElementNode


def is_offscreen(element: ElementNode) -> bool:
    return any(element.has_class(name) for name in OFFSCREEN_CLASSES)


def is_hidden(element: ElementNode) -> bool:
    """Скрытый от пользователя элемент: offscreen-класс, aria-hidden или display:none."""
    return (
        is_offscreen(element)
        or element.get_attribute("aria-hidden") == "true"
        or not element.visible
    )


def neighbour_filter(crosses_boundary: Callable[[ContentNode], bool]) -> Callable[[ContentNode], bool]:
    """Фильтр соседей для Recomposer: скрытые элементы и узлы за границей элемента списка."""
    def exclude(node: ContentNode) -> bool:
        return (node.is_element and is_hidden(node)) or crosses_boundary(node)
    return exclude


def collect_text_nodes(
    root: ContentNode,
    skip_element: Callable[[ElementNode], bool] = is_hidden,
    exclude: Optional[Callable[[ContentNode], bool]] = None
) -> List[ContentNode]:
    """
    Текстовые узлы поддерева в порядке документа.

    Args:
        root: Корень (текстовый узел возвращается как [root])
        skip_element: Элементы, поддерево которых пропускается целиком
        exclude: Дополнительный фильтр узлов (например, граница элемента списка)

    Returns:
        Список текстовых узлов
    """
    result = []
    stack = [root]
    while stack:
        node = stack.pop()
        if exclude is not None and exclude(node):
            continue
        if not node.is_element:
            result.append(node)
            continue
        if skip_element(node):
            continue
        stack.extend(reversed(node.children))
    return result
