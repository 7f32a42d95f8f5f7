"""
Unit-тесты распознавателей шаблонов разметки и их реестра.

ЦКП: Проверка отпечатков (YAML), ячейки цены, подъёма к элементу
списка и компонента цены.
"""

import pytest

from config.settings import ANCHOR_ATTRIBUTE
from price_locator.domain.content_node import ElementNode, TextNode
from price_locator.domain.exceptions import FingerprintConfigurationError
from price_locator.domain.models import SearchState
from price_locator.infrastructure.tracing import RecordingTracer
from price_locator.marketplaces import (
    FingerprintConfig,
    ListItemAscensionRecognizer,
    PriceCellRecognizer,
    PriceComponentRecognizer,
    RecognizerRegistry,
)
from price_locator.marketplaces.base import AbstractMarketplaceRecognizer


MAIN_PRICE_CLASSES = ("mr1", "mr2-xl", "b", "black", "lh-copy", "f5", "f4-l")


def element(tag, *children, classes=(), attrs=None, visible=True):
    node = ElementNode(tag=tag, classes=frozenset(classes), attributes=dict(attrs or {}), visible=visible)
    for child in children:
        node.append(TextNode(child) if isinstance(child, str) else child)
    return node


def price_cell(*children):
    return element("div", *children, attrs={"data-automation-id": "product-price"})


def never_called(node, state):
    raise AssertionError("extract_fn не должен вызываться")


@pytest.fixture
def tracer():
    return RecordingTracer()


@pytest.fixture
def cell_recognizer(tracer):
    """Fixture: распознаватель ячейки цены с отпечатками по умолчанию."""
    return PriceCellRecognizer(tracer=tracer)


class TestFingerprintConfig:

    @pytest.fixture(autouse=True)
    def fresh_cache(self):
        """Каждый тест читает файлы заново."""
        FingerprintConfig.clear_cache()
        yield
        FingerprintConfig.clear_cache()

    def test_default_file_loads_and_is_cached(self):
        """Отпечатки по умолчанию загружаются один раз."""
        config = FingerprintConfig.load()

        assert config is FingerprintConfig.load()
        assert config.price_cell.attribute == "data-automation-id"
        assert config.price_cell.value == "product-price"
        assert "a-price" in config.price_component.classes
        assert {"mr1", "mr2-xl", "b", "black"} == config.scoring.main_price_classes

    def test_custom_file(self, tmp_path):
        """Отпечатки из другого файла."""
        path = tmp_path / "custom.yaml"
        path.write_text(
            "price_cell:\n"
            "  attribute: data-test\n"
            "  value: cell\n"
            "  main_price_classes: [main]\n"
            "  screen_reader_class: sr\n"
            "price_component:\n"
            "  classes: [price-widget]\n"
            "scoring:\n"
            "  price_marker_classes: [price]\n"
            "  price_container_classes: []\n"
            "  main_price_classes: [main]\n",
            encoding="utf-8",
        )

        config = FingerprintConfig.load(path)

        assert config.price_cell.attribute == "data-test"
        assert config.price_component.classes == frozenset({"price-widget"})

    def test_clear_cache_rereads_file(self, tmp_path):
        """После clear_cache изменения файла видны при следующей загрузке."""
        path = tmp_path / "custom.yaml"
        template = (
            "price_cell:\n"
            "  attribute: {attribute}\n"
            "  value: cell\n"
            "  main_price_classes: [main]\n"
            "  screen_reader_class: sr\n"
            "price_component:\n"
            "  classes: [price-widget]\n"
            "scoring:\n"
            "  price_marker_classes: [price]\n"
            "  price_container_classes: []\n"
            "  main_price_classes: [main]\n"
        )
        path.write_text(template.format(attribute="data-test"), encoding="utf-8")
        first = FingerprintConfig.load(path)
        path.write_text(template.format(attribute="data-cell"), encoding="utf-8")

        assert FingerprintConfig.load(path) is first

        FingerprintConfig.clear_cache()
        reloaded = FingerprintConfig.load(path)

        assert reloaded is not first
        assert reloaded.price_cell.attribute == "data-cell"

    def test_missing_file(self, tmp_path):
        """Отсутствующий файл - FingerprintConfigurationError."""
        with pytest.raises(FingerprintConfigurationError):
            FingerprintConfig.load(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Битый YAML - FingerprintConfigurationError с исходной ошибкой."""
        path = tmp_path / "broken.yaml"
        path.write_text("price_cell: [unclosed\n", encoding="utf-8")

        with pytest.raises(FingerprintConfigurationError) as exc_info:
            FingerprintConfig.load(path)

        assert exc_info.value.original_error is not None

    def test_missing_section(self):
        """Нет обязательной секции - FingerprintConfigurationError."""
        with pytest.raises(FingerprintConfigurationError) as exc_info:
            FingerprintConfig.from_dict({"price_cell": {}})

        assert "FingerprintConfig" in str(exc_info.value)


class TestPriceCellRecognizer:

    def test_main_price_wins(self, cell_recognizer):
        """Основная цена важнее дубля для скринридера и цены за единицу."""
        main = element("div", "$15.98", classes=MAIN_PRICE_CLASSES)
        cell = price_cell(
            element("span", "current price $14.00", classes=("w_iUH7",)),
            main,
            element("div", "$3.71/oz"),
        )

        result = cell_recognizer.extract(cell, SearchState(), never_called)

        assert [c.normalized_text for c in result] == ["$15.98"]
        assert result[0].contributing_nodes == (main,)
        assert result[0].container is cell

    def test_screen_reader_fallback(self, cell_recognizer, tracer):
        """Без основной цены берётся дубль для скринридера."""
        cell = price_cell(element("span", "current price Now $12.97", classes=("w_iUH7",)))

        result = cell_recognizer.extract(cell, SearchState(), never_called)

        assert [c.normalized_text for c in result] == ["$12.97"]
        assert "Цена для скринридера" in tracer.messages("PriceCell")

    def test_per_unit_price_is_skipped(self, cell_recognizer):
        """Цена за единицу пропускается, берётся следующая видимая цена."""
        cell = price_cell(element("div", "$3.71/oz"), element("div", "$8.48"))

        result = cell_recognizer.extract(cell, SearchState(), never_called)

        assert [c.normalized_text for c in result] == ["$8.48"]

    def test_hidden_text_is_ignored(self, cell_recognizer):
        """Скрытые элементы ячейки не участвуют в поиске."""
        cell = price_cell(element("div", "$99.99", visible=False), element("div", "$8.48"))

        result = cell_recognizer.extract(cell, SearchState(), never_called)

        assert [c.normalized_text for c in result] == ["$8.48"]

    def test_cell_without_price_stops_search(self, cell_recognizer):
        """Ячейка без цены - пустой список, а не None."""
        cell = price_cell(element("span", "See price in cart"))

        assert cell_recognizer.extract(cell, SearchState(), never_called) == []

    def test_matches(self, cell_recognizer):
        """Сама ячейка или узел ячейки внутри элемента списка."""
        inner = element("span", "$1.00")
        cell = price_cell(inner)
        element("li", cell)
        standalone_inner = element("span", "$2.00")
        price_cell(standalone_inner)

        assert cell_recognizer.matches(cell, SearchState())
        assert cell_recognizer.matches(inner, SearchState())
        assert not cell_recognizer.matches(standalone_inner, SearchState())
        assert not cell_recognizer.matches(inner.children[0], SearchState())

    def test_find_cells_respects_list_item_boundary(self, cell_recognizer):
        """Ячейки чужого элемента списка не возвращаются."""
        link = element("a", "Item", attrs={ANCHOR_ATTRIBUTE: "true"})
        own_cell = price_cell("$1.00")
        foreign_cell = price_cell("$2.00")
        root = element("ul", element("li", link, own_cell), element("li", foreign_cell))

        state = SearchState.for_root(link)

        assert cell_recognizer.find_cells(root, state) == [own_cell]


class TestListItemAscensionRecognizer:

    def test_delegates_to_cell_of_list_item(self, cell_recognizer):
        """Узел элемента списка передаёт поиск в ячейку цены этого элемента."""
        link = element("a", "Product")
        cell = price_cell("$5.00")
        element("li", link, cell)
        recognizer = ListItemAscensionRecognizer(cell_recognizer)
        calls = []

        def extract_fn(node, state):
            calls.append(node)
            return []

        assert recognizer.matches(link, SearchState())
        recognizer.extract(link, SearchState(), extract_fn)

        assert calls == [cell]

    def test_list_item_without_cell_falls_through(self, cell_recognizer):
        """Без ячейки цены распознаватель возвращает None."""
        link = element("a", "Product")
        element("li", link, element("span", "$5.00"))
        recognizer = ListItemAscensionRecognizer(cell_recognizer)

        assert recognizer.extract(link, SearchState(), never_called) is None

    def test_does_not_match_inside_cell(self, cell_recognizer):
        inner = element("span", "$5.00")
        element("li", price_cell(inner))
        recognizer = ListItemAscensionRecognizer(cell_recognizer)

        assert not recognizer.matches(inner, SearchState())


class TestPriceComponentRecognizer:

    @pytest.fixture
    def recognizer(self):
        return PriceComponentRecognizer()

    def test_split_price_is_joined(self, recognizer):
        """Видимые части склеиваются, offscreen-дубль пропускается."""
        whole = element("span", "2,599", element("span", ".", classes=("a-price-decimal",)), classes=("a-price-whole",))
        component = element(
            "span",
            element("span", "$2,599.99", classes=("a-offscreen",)),
            element(
                "span",
                element("span", "$", classes=("a-price-symbol",)),
                whole,
                element("span", "99", classes=("a-price-fraction",)),
                attrs={"aria-hidden": "true"},
            ),
            classes=("a-price",),
        )

        assert recognizer.matches(component, SearchState())
        result = recognizer.extract(component, SearchState(), never_called)

        assert [c.normalized_text for c in result] == ["$2,599.99"]
        assert len(result[0].contributing_nodes) == 4
        assert result[0].container is component

    def test_whitespace_is_removed(self, recognizer):
        component = element("span", "$ ", "12", " .99", classes=("a-price-text-price",))

        result = recognizer.extract(component, SearchState(), never_called)

        assert [c.normalized_text for c in result] == ["$12.99"]

    @pytest.mark.parametrize("text", ["See price in cart", "€10.99"])
    def test_component_without_usd_price(self, recognizer, text):
        """Компонент без долларовой цены - пустой список."""
        component = element("span", text, classes=("a-price",))

        assert recognizer.extract(component, SearchState(), never_called) == []


class _AlwaysEmpty(AbstractMarketplaceRecognizer):

    @property
    def name(self) -> str:
        return "AlwaysEmpty"

    def matches(self, node, state) -> bool:
        return True

    def extract(self, node, state, extract_fn):
        return []


class TestRecognizerRegistry:

    def test_default_order(self):
        """Порядок по умолчанию: ячейка, элемент списка, компонент."""
        registry = RecognizerRegistry.create_default()

        assert [r.name for r in registry.recognizers] == ["PriceCell", "ListItemAscension", "PriceComponent"]
        assert registry.get("PriceComponent") is registry.recognizers[2]
        assert registry.get("Unknown") is None

    def test_no_recognizer_matches(self):
        """Обычный узел - None, экстрактор идёт дальше."""
        registry = RecognizerRegistry.create_default()

        assert registry.recognize(element("div", "$1.00"), SearchState(), never_called) is None

    def test_registered_recognizer_stops_search(self):
        """Распознаватель в начале списка останавливает поиск пустым результатом."""
        registry = RecognizerRegistry.create_default()
        registry.register(_AlwaysEmpty(), position=0)

        assert registry.recognizers[0].name == "AlwaysEmpty"
        assert registry.recognize(element("div", "$1.00"), SearchState(), never_called) == []
