"""
HTML Document Adapter - построение дерева ContentNode из HTML.

ЦКП: HtmlDocument (корень дерева + поиск узлов по CSS-селектору).

SRP: Только перевод разметки в дерево. Никаких эвристик цены.

- Пробельные строки сохраняются как текстовые узлы (важно для Recomposer)
- Комментарии, doctype, script/style/template/noscript отбрасываются
- visible=False для hidden, display:none, visibility:hidden (наследуется)
"""

import re
from typing import Dict, List, Optional

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag
from loguru import logger

from config.settings import ANCHOR_ATTRIBUTE, ANCHOR_ATTRIBUTE_VALUE
from ..domain.content_node import ElementNode, TextNode
from ..domain.exceptions import AnchorNotFoundError, DocumentAdapterError
from ..domain.interfaces import IDocumentAdapter

DOCUMENT_TAG = "#document"
SKIPPED_TAGS = frozenset({"script", "style", "template", "noscript"})

DISPLAY_NONE_PATTERN = re.compile(r"display\s*:\s*none", re.IGNORECASE)
VISIBILITY_HIDDEN_PATTERN = re.compile(r"visibility\s*:\s*hidden", re.IGNORECASE)


def _attribute_value(value) -> str:
    # bs4 отдаёт многозначные атрибуты (class, rel) списком
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return "" if value is None else str(value)


def _is_hidden_tag(tag: Tag) -> bool:
    if tag.has_attr("hidden"):
        return True
    style = tag.get("style")
    if not style:
        return False
    style = _attribute_value(style)
    return bool(DISPLAY_NONE_PATTERN.search(style) or VISIBILITY_HIDDEN_PATTERN.search(style))


class HtmlDocument:
    """Дерево ContentNode и соответствие исходным тегам."""

    def __init__(self, soup: BeautifulSoup, root: ElementNode, nodes_by_tag: Dict[int, ElementNode]):
        self.soup = soup
        self.root = root
        self._nodes_by_tag = nodes_by_tag

    def node_for(self, tag: Tag) -> Optional[ElementNode]:
        return self._nodes_by_tag.get(id(tag))

    def select_one(self, selector: str) -> Optional[ElementNode]:
        """Первый узел по CSS-селектору или None."""
        tag = self.soup.select_one(selector)
        if tag is None:
            return None
        return self.node_for(tag)

    def select(self, selector: str) -> List[ElementNode]:
        nodes = (self.node_for(tag) for tag in self.soup.select(selector))
        return [node for node in nodes if node is not None]

    @property
    def anchor(self) -> Optional[ElementNode]:
        return self.root.find_first(lambda element: element.is_anchor)


class HtmlDocumentAdapter(IDocumentAdapter):
    """
    Адаптер HTML -> ContentNode на BeautifulSoup.

    Пример:
        document = HtmlDocumentAdapter().parse(html, anchor_selector="li:first-child a")
        candidates = extractor.extract(document.anchor)
    """

    def __init__(self, parser: str = "html.parser"):
        self.parser = parser

    def parse(self, markup: str, anchor_selector: Optional[str] = None) -> HtmlDocument:
        """
        Args:
            markup: HTML-документ или фрагмент
            anchor_selector: CSS-селектор узла, помечаемого якорем

        Raises:
            DocumentAdapterError: Разметку не удалось разобрать
            AnchorNotFoundError: Селектор якоря ничего не нашёл
        """
        if markup is None:
            raise DocumentAdapterError("Пустой документ", component="HtmlDocumentAdapter")

        try:
            soup = BeautifulSoup(markup, self.parser)
        except Exception as e:
            raise DocumentAdapterError("Не удалось разобрать HTML", component="HtmlDocumentAdapter", original_error=e)

        if anchor_selector:
            self._mark_anchor(soup, anchor_selector)

        root, nodes_by_tag = self._convert(soup)
        logger.debug(f"[HtmlDocumentAdapter] Построено дерево: {len(nodes_by_tag)} элементов")
        return HtmlDocument(soup, root, nodes_by_tag)

    @staticmethod
    def _mark_anchor(soup: BeautifulSoup, anchor_selector: str) -> None:
        try:
            tag = soup.select_one(anchor_selector)
        except Exception as e:
            raise DocumentAdapterError(
                f"Некорректный селектор якоря: {anchor_selector}",
                component="HtmlDocumentAdapter",
                original_error=e
            )
        if tag is None:
            raise AnchorNotFoundError(
                f"Селектор якоря не нашёл узел: {anchor_selector}",
                component="HtmlDocumentAdapter"
            )
        tag[ANCHOR_ATTRIBUTE] = ANCHOR_ATTRIBUTE_VALUE

    @staticmethod
    def _convert(soup: BeautifulSoup):
        root = ElementNode(tag=DOCUMENT_TAG)
        nodes_by_tag: Dict[int, ElementNode] = {}
        stack = [(child, root) for child in reversed(soup.contents)]

        while stack:
            source, parent = stack.pop()

            if isinstance(source, NavigableString):
                if isinstance(source, PreformattedString):
                    continue
                parent.append(TextNode(text=str(source)))
                continue

            if not isinstance(source, Tag) or source.name in SKIPPED_TAGS:
                continue

            attributes = {
                name: _attribute_value(value)
                for name, value in source.attrs.items()
                if name != "class"
            }
            element = ElementNode(
                tag=source.name.lower(),
                classes=frozenset(source.get("class") or ()),
                attributes=attributes,
                visible=parent.visible and not _is_hidden_tag(source),
            )
            parent.append(element)
            nodes_by_tag[id(source)] = element
            stack.extend((child, element) for child in reversed(source.contents))

        return root, nodes_by_tag
