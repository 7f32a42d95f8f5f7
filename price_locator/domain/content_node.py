"""
Модель дерева контента: TextNode | ElementNode.

Дерево строит адаптер документа (см. infrastructure/html_adapter.py),
ядро его только читает. Узлы сравниваются и хэшируются по identity,
поэтому их можно класть в visited.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Iterator, List, Optional, Union

from config.settings import ANCHOR_ATTRIBUTE, ANCHOR_ATTRIBUTE_VALUE, LIST_ITEM_TAG


@dataclass(eq=False)
class TextNode:
    """Текстовый узел."""
    text: str
    parent: Optional["ElementNode"] = field(default=None, repr=False)

    @property
    def is_element(self) -> bool:
        return False

    @property
    def text_content(self) -> str:
        return self.text

    @property
    def previous_sibling(self) -> Optional["ContentNode"]:
        return _sibling_at(self, -1)

    @property
    def next_sibling(self) -> Optional["ContentNode"]:
        return _sibling_at(self, 1)

    def ancestors(self) -> Iterator["ElementNode"]:
        return _iter_ancestors(self)

    def closest(self, predicate: Callable[["ElementNode"], bool]) -> Optional["ElementNode"]:
        # У текстового узла ближайший подходящий элемент ищется среди предков
        for ancestor in self.ancestors():
            if predicate(ancestor):
                return ancestor
        return None


@dataclass(eq=False)
class ElementNode:
    """Элемент с тегом, классами, атрибутами и детьми."""
    tag: str
    classes: FrozenSet[str] = frozenset()
    attributes: Dict[str, str] = field(default_factory=dict)
    visible: bool = True
    children: List["ContentNode"] = field(default_factory=list, repr=False)
    parent: Optional["ElementNode"] = field(default=None, repr=False)
    # id(ребёнка) -> позиция в children
    _child_index: Dict[int, int] = field(default_factory=dict, init=False, repr=False)

    @property
    def is_element(self) -> bool:
        return True

    @property
    def text_content(self) -> str:
        """Конкатенация всех текстовых потомков (аналог DOM textContent)."""
        return "".join(node.text for node in self.iter_descendants() if not node.is_element)

    @property
    def element_children(self) -> List["ElementNode"]:
        return [child for child in self.children if child.is_element]

    @property
    def previous_sibling(self) -> Optional["ContentNode"]:
        return _sibling_at(self, -1)

    @property
    def next_sibling(self) -> Optional["ContentNode"]:
        return _sibling_at(self, 1)

    @property
    def previous_element_sibling(self) -> Optional["ElementNode"]:
        node = self.previous_sibling
        while node is not None and not node.is_element:
            node = node.previous_sibling
        return node

    @property
    def next_element_sibling(self) -> Optional["ElementNode"]:
        node = self.next_sibling
        while node is not None and not node.is_element:
            node = node.next_sibling
        return node

    @property
    def is_anchor(self) -> bool:
        return self.attributes.get(ANCHOR_ATTRIBUTE) == ANCHOR_ATTRIBUTE_VALUE

    @property
    def is_list_item(self) -> bool:
        return self.tag == LIST_ITEM_TAG

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def has_classes(self, names) -> bool:
        """True, если у элемента есть все перечисленные классы."""
        return self.classes.issuperset(names)

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def append(self, child: "ContentNode") -> "ContentNode":
        """Используется только адаптером при построении дерева."""
        child.parent = self
        self._child_index[id(child)] = len(self.children)
        self.children.append(child)
        return child

    def ancestors(self) -> Iterator["ElementNode"]:
        return _iter_ancestors(self)

    def closest(self, predicate: Callable[["ElementNode"], bool]) -> Optional["ElementNode"]:
        """Ближайший элемент (включая сам узел), удовлетворяющий предикату."""
        if predicate(self):
            return self
        for ancestor in self.ancestors():
            if predicate(ancestor):
                return ancestor
        return None

    def iter_descendants(self) -> Iterator["ContentNode"]:
        """Обход потомков в прямом порядке (без рекурсии)."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            if node.is_element:
                stack.extend(reversed(node.children))

    def find_all(self, predicate: Callable[["ElementNode"], bool]) -> List["ElementNode"]:
        return [node for node in self.iter_descendants() if node.is_element and predicate(node)]

    def find_first(self, predicate: Callable[["ElementNode"], bool]) -> Optional["ElementNode"]:
        for node in self.iter_descendants():
            if node.is_element and predicate(node):
                return node
        return None

    def contains(self, node: "ContentNode") -> bool:
        """True, если node является потомком (или самим элементом)."""
        if node is self:
            return True
        return any(ancestor is self for ancestor in node.ancestors())


ContentNode = Union[TextNode, ElementNode]


def _sibling_at(node: ContentNode, offset: int) -> Optional[ContentNode]:
    parent = node.parent
    if parent is None:
        return None
    siblings = parent.children
    index = parent._child_index.get(id(node))
    if index is None or index >= len(siblings) or siblings[index] is not node:
        # children изменили в обход append - перестраиваем индекс
        parent._child_index = {id(child): position for position, child in enumerate(siblings)}
        index = parent._child_index.get(id(node))
        if index is None:
            return None
    target = index + offset
    if 0 <= target < len(siblings):
        return siblings[target]
    return None


def _iter_ancestors(node: ContentNode) -> Iterator[ElementNode]:
    current = node.parent
    while current is not None:
        yield current
        current = current.parent


def nearest_list_item(node: ContentNode) -> Optional[ElementNode]:
    """Ближайший элемент списка (включая сам узел)."""
    return node.closest(lambda element: element.is_list_item)


def tree_distance(node: ContentNode, other: ContentNode) -> Optional[int]:
    """
    Длина пути между узлами через ближайшего общего предка.

    None, если узлы в разных деревьях.
    """
    depths = {}
    depth = 0
    current = node
    while current is not None:
        depths[id(current)] = depth
        current = current.parent
        depth += 1

    depth = 0
    current = other
    while current is not None:
        if id(current) in depths:
            return depths[id(current)] + depth
        current = current.parent
        depth += 1
    return None
