import pytest

from price_locator.domain.content_node import ElementNode, TextNode
from price_locator.recomposition.node_recomposer import (
    WINDOW_OFFSETS,
    find_price_nodes,
    get_combined_price_string,
)


def element(tag, *children, classes=(), attrs=None, visible=True):
    node = ElementNode(tag=tag, classes=frozenset(classes), attributes=dict(attrs or {}), visible=visible)
    for child in children:
        node.append(TextNode(child) if isinstance(child, str) else child)
    return node


@pytest.fixture
def split_price():
    """Fixture: цена, разбитая на три текстовых узла."""
    return element("span", "$", "1,299", ".99")


def test_window_order_is_fixed():
    """Тест: порядок окон - от широкого к узлу без соседей."""
    assert WINDOW_OFFSETS[0] == (-2, -1, 0, 1, 2)
    assert WINDOW_OFFSETS[4] == (-2, -1, 0)
    assert WINDOW_OFFSETS[-1] == (0,)
    assert len(WINDOW_OFFSETS) == 9


def test_recomposes_split_price_from_middle_node(split_price):
    """Тест: '1,299' между '$' и '.99' склеивается в '$1,299.99'."""
    middle = split_price.children[1]

    combined = get_combined_price_string(middle)

    assert combined.price_str == "$1,299.99"
    assert len(combined.nodes) > 1
    assert combined.nodes == split_price.children


def test_recomposes_split_price_from_first_node(split_price):
    """Тест: затравка '$' тоже собирает полную цену."""
    combined = get_combined_price_string(split_price.children[0])

    assert combined.price_str == "$1,299.99"
    assert len(combined.nodes) == 3


def test_single_node_price():
    """Тест: цена в одном узле без соседей."""
    parent = element("div", "$49.99")

    combined = get_combined_price_string(parent.children[0])

    assert combined.found
    assert combined.price_str == "$49.99"
    assert combined.nodes == [parent.children[0]]


def test_no_price_returns_empty_result_with_node():
    """Тест: без цены - пустой price_str и сам узел."""
    parent = element("div", "Free", " shipping")
    seed = parent.children[0]

    combined = get_combined_price_string(seed)

    assert combined.found is False
    assert combined.price_str == ""
    assert combined.nodes == [seed]


def test_window_text_keeps_range():
    """Тест: text окна содержит весь диапазон, price_str - только первую цену."""
    parent = element("div", "$10.99", " - ", "$150.99")

    combined = get_combined_price_string(parent.children[0])

    assert combined.price_str == "$10.99"
    assert combined.text == "$10.99 - $150.99"


def test_element_siblings_contribute_text_content():
    """Тест: соседи-элементы участвуют в окне своим textContent."""
    parent = element("div", element("span", "$"), element("span", "79.99"))

    combined = get_combined_price_string(parent.children[0])

    assert combined.price_str == "$79.99"
    assert len(combined.nodes) == 2


def test_excluded_neighbours_are_dropped():
    """Тест: соседи, отклонённые exclude, в окно не попадают."""
    hidden = element("span", "$999.99", visible=False)
    parent = element("div", "Price:", hidden, "$49.99")
    seed = parent.children[0]

    combined = get_combined_price_string(seed, exclude=lambda node: node is hidden)

    assert combined.price_str == "$49.99"
    assert hidden not in combined.nodes


def test_find_price_nodes_reports_fragmented_price_once(split_price):
    """Тест: раздробленная цена попадает в результат один раз."""
    root = element("div", split_price, element("p", "$5.00"))

    results = find_price_nodes(root)

    assert [result.price_str for result in results] == ["$1,299.99", "$5.00"]
