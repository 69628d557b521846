# ABOUTME: DAISY v3 NCX navigation file parsing and in-place head metadata patching.
# ABOUTME: Flattens the nested navMap into NavPoints that carry their nesting level.

import logging
from collections.abc import Mapping

from daisykit.errors import MissingContainerError, MissingRootElementError
from daisykit.metadata.extract import extract_metadata
from daisykit.metadata.types import NavPoint, NcxData, PageTarget
from daisykit.metadata.update import NewValue, update_meta_elements
from daisykit.xml.nodes import Element, Root
from daisykit.xml.parser import parse_xml
from daisykit.xml.query import (
    find_direct_children,
    find_element,
    find_elements,
    get_attribute,
    get_text_content,
)

logger = logging.getLogger(__name__)


def _play_order(element: Element) -> int:
    try:
        return int(get_attribute(element, "playOrder") or 0)
    except ValueError:
        return 0


def _label(element: Element, label_tag: str) -> str:
    """Text of the element's own ``<label_tag><text>``, ignoring nested entries."""
    labels = find_direct_children(element, label_tag)
    if not labels:
        return ""
    texts = find_direct_children(labels[0], "text")
    return get_text_content(texts[0] if texts else labels[0])


def _content_src(element: Element) -> str:
    contents = find_direct_children(element, "content")
    return (get_attribute(contents[0], "src") if contents else None) or ""


def _walk_nav_points(nav_points: list[Element], level: int, out: list[NavPoint]) -> None:
    """Depth-first: each navPoint, then its own nested navPoints one level down."""
    for nav_point in nav_points:
        out.append(
            NavPoint(
                id=get_attribute(nav_point, "id") or "",
                level=level,
                label=_label(nav_point, "navLabel"),
                src=_content_src(nav_point),
                play_order=_play_order(nav_point),
            )
        )
        _walk_nav_points(find_direct_children(nav_point, "navPoint"), level + 1, out)


def _page_targets(ncx: Element) -> list[PageTarget]:
    page_list = find_element(ncx, "pageList")
    if page_list is None:
        return []
    return [
        PageTarget(
            id=get_attribute(target, "id") or "",
            type=get_attribute(target, "type") or "",
            value=get_attribute(target, "value") or "",
            label=_label(target, "navLabel"),
            src=_content_src(target),
            play_order=_play_order(target),
        )
        for target in find_direct_children(page_list, "pageTarget")
    ]


def _doc_text(ncx: Element, tag_name: str) -> str | None:
    element = find_element(ncx, tag_name)
    if element is None:
        return None
    text = find_element(element, "text")
    return get_text_content(text) if text is not None else None


def parse_ncx(ncx_content: str | bytes) -> NcxData:
    """Parse an NCX navigation file.

    Args:
        ncx_content: The NCX document text.

    Returns:
        NcxData with head metadata, document title and author, the flattened
        navMap and the pageList targets.

    Raises:
        MalformedXmlError: If the content is not well-formed XML.
        MissingRootElementError: If there is no ``ncx`` element.
    """
    tree = parse_xml(ncx_content)
    ncx = find_element(tree, "ncx")
    if ncx is None:
        raise MissingRootElementError("ncx", "NCX")

    head = find_element(ncx, "head")
    metadata = extract_metadata(find_elements(head, "meta") if head is not None else [])

    nav_points: list[NavPoint] = []
    nav_map = find_element(ncx, "navMap")
    if nav_map is not None:
        _walk_nav_points(find_direct_children(nav_map, "navPoint"), 1, nav_points)

    page_targets = _page_targets(ncx)

    logger.debug(
        "Parsed NCX: %d nav points, %d page targets", len(nav_points), len(page_targets)
    )
    return NcxData(
        metadata=metadata,
        nav_points=nav_points,
        doc_title=_doc_text(ncx, "docTitle"),
        doc_author=_doc_text(ncx, "docAuthor"),
        page_targets=page_targets,
    )


def update_ncx_metadata_from_tree(
    tree: Root,
    new_values: Mapping[str, NewValue],
    *,
    create_if_missing: bool = True,
) -> None:
    """Patch ``<meta>`` elements in the NCX ``head`` in place.

    Raises:
        MissingContainerError: If the tree has no ``head`` element.
    """
    head = find_element(tree, "head")
    if head is None:
        raise MissingContainerError("head", "NCX")
    update_meta_elements(head, new_values, create_if_missing=create_if_missing)
