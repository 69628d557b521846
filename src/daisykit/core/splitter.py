# ABOUTME: Splits a node's direct children into parts at tag boundaries and pages the parts.
# ABOUTME: Used to render long DTBook content flows a bounded number of paragraphs at a time.

import math
from collections.abc import Callable, Collection
from dataclasses import dataclass

from daisykit.xml.nodes import Element, Node, Root, is_parent

DEFAULT_ITEMS_PER_PAGE = 10
DEFAULT_SPLIT_TAG = "p"

Part = list[Node]
SplitTest = str | Collection[str] | Callable[[Node], bool]


@dataclass
class PageUrls:
    """Navigation paths for a page. Absent links are None."""

    current: str
    prev: str | None = None
    next: str | None = None
    first: str | None = None
    last: str | None = None


@dataclass
class Page:
    """A bounded group of parts with its position in the full part list.

    ``start`` and ``end`` are zero-based slice bounds, so
    ``parts[page.start:page.end] == page.data``.
    """

    data: list[Part]
    start: int
    end: int
    total: int
    current_page: int
    size: int
    last_page: int
    url: PageUrls

    def to_tree(self) -> Root:
        """Wrap the page's nodes in a new Root for serialization.

        Nodes are shared with the source tree, not copied.
        """
        return Root(children=[node for part in self.data for node in part])


def _compile_test(test: SplitTest) -> Callable[[Node], bool]:
    if callable(test):
        return test
    names = frozenset([test]) if isinstance(test, str) else frozenset(test)
    return lambda node: isinstance(node, Element) and node.name in names


def split_by_tag(tree: Node, test: SplitTest) -> list[Part]:
    """Partition the direct children of ``tree`` into parts.

    A part collects children until one matches ``test``; the match closes the
    part. Children after the last match form a final part. Only direct
    children are inspected, matched or not.

    Args:
        tree: The parent whose children are split.
        test: A tag name, a collection of tag names, or a node predicate.

    Returns:
        Parts in document order. No children gives no parts; no match gives a
        single part holding every child.
    """
    if not is_parent(tree):
        return []

    matches = _compile_test(test)
    parts: list[Part] = []
    current: Part = []
    for child in tree.children:
        current.append(child)
        if matches(child):
            parts.append(current)
            current = []
    if current:
        parts.append(current)
    return parts


def _page_url(base_path: str, page_number: int) -> str:
    return f"{base_path}{page_number}"


def paginate(
    tree: Node,
    *,
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE,
    tag_name: str | Collection[str] = DEFAULT_SPLIT_TAG,
    base_path: str = "/",
) -> list[Page]:
    """Split ``tree`` at ``tag_name`` boundaries and group the parts into pages.

    Args:
        tree: The parent whose direct children are split.
        items_per_page: Parts per page; the last page may hold fewer.
        tag_name: Tag name, or several, that closes a part.
        base_path: Prefix for navigation urls, followed by the page number.

    Returns:
        One Page per ``items_per_page`` parts. Zero parts gives zero pages.

    Raises:
        ValueError: If ``items_per_page`` is less than 1.
    """
    if items_per_page < 1:
        msg = f"items_per_page must be at least 1, got {items_per_page}"
        raise ValueError(msg)

    parts = split_by_tag(tree, tag_name)
    total = len(parts)
    last_page = math.ceil(total / items_per_page)

    pages: list[Page] = []
    for number in range(1, last_page + 1):
        start = (number - 1) * items_per_page
        end = min(start + items_per_page, total)
        url = PageUrls(current=_page_url(base_path, number))
        if number > 1:
            url.prev = _page_url(base_path, number - 1)
            url.first = _page_url(base_path, 1)
        if number < last_page:
            url.next = _page_url(base_path, number + 1)
            url.last = _page_url(base_path, last_page)
        pages.append(
            Page(
                data=parts[start:end],
                start=start,
                end=end,
                total=total,
                current_page=number,
                size=items_per_page,
                last_page=last_page,
                url=url,
            )
        )
    return pages
