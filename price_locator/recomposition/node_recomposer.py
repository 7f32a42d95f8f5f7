"""
Node Text Recomposer - склейка цены, разбитой на соседние узлы.

ЦКП: Строка цены и узлы, из которых она собрана.

Разметка часто дробит цену: "$" | "1,299" | ".99". Recomposer
пробует окна из соседей узла (до двух слева и двух справа) в
фиксированном порядке и берёт первое окно, в тексте которого есть
долларовая цена.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from ..domain.content_node import ContentNode
from ..matching.price_patterns import find_dollar_amount, is_likely_price


# Смещения относительно узла; порядок важен (первое совпадение выигрывает)
WINDOW_OFFSETS: Tuple[Tuple[int, ...], ...] = (
    (-2, -1, 0, 1, 2),
    (-1, 0, 1, 2),
    (-2, -1, 0, 1),
    (-1, 0, 1),
    (-2, -1, 0),
    (0, 1, 2),
    (0, 1),
    (-1, 0),
    (0,),
)


@dataclass
class CombinedPrice:
    """
    Результат склейки.

    price_str - найденная долларовая подстрока ('' если цены нет),
    text - полный текст окна (нужен для распознавания диапазонов).
    """
    price_str: str
    nodes: List[ContentNode] = field(default_factory=list)
    text: str = ""

    @property
    def found(self) -> bool:
        return bool(self.price_str)


def _neighbours(node: ContentNode, exclude: Optional[Callable[[ContentNode], bool]]) -> dict:
    """Соседи узла по смещению; отсутствующие и исключённые пропускаются."""
    left1 = node.previous_sibling
    left2 = left1.previous_sibling if left1 is not None else None
    right1 = node.next_sibling
    right2 = right1.next_sibling if right1 is not None else None

    result = {0: node}
    for offset, neighbour in ((-2, left2), (-1, left1), (1, right1), (2, right2)):
        if neighbour is None:
            continue
        if exclude is not None and exclude(neighbour):
            continue
        result[offset] = neighbour
    return result


def get_combined_price_string(
    node: ContentNode,
    exclude: Optional[Callable[[ContentNode], bool]] = None
) -> CombinedPrice:
    """
    Ищет цену в окнах соседей узла.

    Args:
        node: Узел-затравка
        exclude: Предикат для соседей, которых нельзя брать в окно
                 (например, узлы из чужого элемента списка)

    Returns:
        CombinedPrice; если цена не найдена - пустой price_str и nodes=[node]
    """
    neighbours = _neighbours(node, exclude)
    tried = set()

    for offsets in WINDOW_OFFSETS:
        present = tuple(offset for offset in offsets if offset in neighbours)
        # Без части соседей разные окна совпадают
        if present in tried:
            continue
        tried.add(present)
        nodes = [neighbours[offset] for offset in present]
        text = "".join(n.text_content for n in nodes).strip()
        price_str = find_dollar_amount(text)
        if price_str:
            return CombinedPrice(price_str=price_str, nodes=nodes, text=text)

    own_text = node.text_content.strip()
    price_str = find_dollar_amount(own_text)
    if price_str:
        return CombinedPrice(price_str=price_str, nodes=[node], text=own_text)

    return CombinedPrice(price_str="", nodes=[node], text=own_text)


def find_price_nodes(root: ContentNode) -> List[CombinedPrice]:
    """
    Собирает все склеенные цены поддерева.

    Затравками служат текстовые узлы. Узлы, уже вошедшие в найденную
    цену, повторно не рассматриваются, поэтому раздробленная цена
    попадает в результат один раз.
    """
    results: List[CombinedPrice] = []
    seen = set()
    stack = [root]

    while stack:
        node = stack.pop()
        if node.is_element:
            stack.extend(reversed(node.children))
            continue
        if id(node) in seen:
            continue
        combined = get_combined_price_string(node)
        if is_likely_price(combined.price_str):
            seen.update(id(n) for n in combined.nodes)
            results.append(combined)

    return results
