import pytest

from price_locator.domain.content_node import ElementNode, TextNode
from price_locator.scoring.confidence_scorer import ConfidenceScorer


def element(tag, *children, classes=(), attrs=None, visible=True):
    node = ElementNode(tag=tag, classes=frozenset(classes), attributes=dict(attrs or {}), visible=visible)
    for child in children:
        node.append(TextNode(child) if isinstance(child, str) else child)
    return node


@pytest.fixture
def scorer():
    """Fixture: scorer с отпечатками по умолчанию."""
    return ConfidenceScorer()


@pytest.fixture
def two_item_list():
    """Fixture: два элемента списка с одинаковыми ценами."""
    first_price = element("div", "$12.97", classes=("amount",))
    second_price = element("div", "$12.97", classes=("amount",))
    first_item = element("li", first_price)
    second_item = element("li", second_price)
    container = element("ul", first_item, second_item)
    return container, first_item, first_price, second_price


def test_anchor_list_item_scores_60_points_higher(scorer, two_item_list):
    """Тест: узел в элементе списка якоря выше на 60 (+35 против -25)."""
    container, first_item, first_price, second_price = two_item_list

    inside = scorer.score(first_price, container, first_item)
    outside = scorer.score(second_price, container, first_item)

    assert inside.structural.factors["correct-list-item"] == 35
    assert outside.structural.factors["wrong-list-item"] == -25
    assert inside.total - outside.total == 60


def test_structural_markers(scorer):
    """Тест: класс, атрибут и контейнер цены дают свои баллы."""
    node = element(
        "span", "$5.00",
        classes=("price", "price-container"),
        attrs={"itemprop": "price"},
    )

    structural = scorer.structural(node)

    assert structural.factors["price-class"] == 30
    assert structural.factors["price-attribute"] == 25
    assert structural.factors["price-container"] == 20
    assert structural.factors["price-text-fallback"] == 40
    assert structural.total == 115


@pytest.mark.parametrize("attrs", [
    {"data-price": "5.00"},
    {"data-testid": "product-price-label"},
    {"itemprop": "price"},
])
def test_price_attribute_variants(scorer, attrs):
    """Тест: варианты ценового data-атрибута."""
    node = element("span", "sale", attrs=attrs)

    assert scorer.structural(node).factors.get("price-attribute") == 25


def test_walmart_cell_and_main_price_boosts(scorer):
    """Тест: бонусы ячейки цены (+20) и основной цены (+15)."""
    main_price = element("div", "$12.97", classes=("mr1", "mr2-xl", "b", "black", "lh-copy"))
    cell = element("div", main_price, attrs={"data-automation-id": "product-price"})

    main_structural = scorer.structural(main_price)
    cell_structural = scorer.structural(cell)

    assert main_structural.factors["price-cell-boost"] == 20
    assert main_structural.factors["main-price-boost"] == 15
    assert cell_structural.factors["price-class"] == 30
    assert cell_structural.factors["price-cell-boost"] == 20


def test_text_nodes_get_no_structural_score(scorer):
    """Тест: структурные факторы есть только у элементов."""
    parent = element("div", "$9.99", classes=("price",))

    assert scorer.structural(parent.children[0]).total == 0


def test_content_score_by_node_kind(scorer):
    """Тест: +40 для текстового узла, +35 для элемента."""
    parent = element("div", " $9.99 ")

    assert scorer.content(parent.children[0]).total == 40
    assert scorer.content(parent).total == 35
    assert scorer.content(element("div", "Add to cart")).total == 0


@pytest.mark.parametrize("depth,expected", [(1, 30), (2, 30), (3, 20), (4, 20), (5, 10), (6, 10), (7, 0)])
def test_proximity_buckets(scorer, depth, expected):
    """Тест: баллы близости по расстоянию до якоря."""
    anchor = element("div")
    current = anchor
    for _ in range(depth):
        child = element("div")
        current.append(child)
        current = child

    context = scorer.context(current, anchor)

    assert context.factors.get("proximity", 0) == expected


def test_proximity_uses_common_ancestor(scorer):
    """Тест: расстояние до соседней ветки считается через общего предка."""
    price = element("span", "$3.00")
    anchor = element("a", "Buy")
    element("div", anchor, price)

    context = scorer.context(price, anchor)

    assert context.factors["proximity"] == 30


def test_visibility(scorer):
    """Тест: +20 только для видимого элемента."""
    visible = element("span", "$1.00")
    hidden = element("span", "$1.00", visible=False)
    root = element("div", visible, hidden)

    assert scorer.context(visible, root).factors["visibility"] == 20
    assert "visibility" not in scorer.context(hidden, root).factors


def test_score_to_dict(scorer, two_item_list):
    """Тест: итог равен сумме групп."""
    container, first_item, first_price, _ = two_item_list

    score = scorer.score(first_price, container, first_item)
    data = score.to_dict()

    assert data["total"] == (
        data["structural"]["total"] + data["content"]["total"] + data["context"]["total"]
    )
