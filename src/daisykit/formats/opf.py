# ABOUTME: DAISY v3 OPF package file parsing and in-place metadata patching.
# ABOUTME: Maps Dublin Core elements and x-metadata <meta> pairs into one metadata map.

import logging
from collections.abc import Mapping

from daisykit.errors import MissingContainerError, MissingRootElementError
from daisykit.metadata.extract import add_metadata_value, extract_metadata
from daisykit.metadata.types import ManifestItem, MetadataMap, OpfData, SpineItem
from daisykit.metadata.update import NewValue, apply_metadata_value, update_meta_elements
from daisykit.xml.nodes import Element, Root, Text
from daisykit.xml.parser import parse_xml
from daisykit.xml.query import (
    find_ancestors,
    find_by_attribute,
    find_element,
    find_elements,
    get_attribute,
    get_text_content,
    select_elements,
)

logger = logging.getLogger(__name__)

DC_NAMESPACE = "http://purl.org/dc/elements/1.1/"
DC_PREFIX = "dc:"

# The fifteen Dublin Core elements an OPF metadata block may carry.
DUBLIN_CORE_TERMS: frozenset[str] = frozenset(
    {
        "title",
        "creator",
        "subject",
        "description",
        "publisher",
        "contributor",
        "date",
        "type",
        "format",
        "identifier",
        "source",
        "language",
        "relation",
        "coverage",
        "rights",
    }
)


def _dc_term(element: Element) -> str | None:
    """Return the lower-case Dublin Core term for a ``dc:*`` element, if any."""
    if not element.name.lower().startswith(DC_PREFIX):
        return None
    term = element.name[len(DC_PREFIX) :].lower()
    return term if term in DUBLIN_CORE_TERMS else None


def _read_metadata(metadata_element: Element | None) -> MetadataMap:
    if metadata_element is None:
        return {}

    metadata: MetadataMap = {}
    for element in select_elements(metadata_element, lambda el: _dc_term(el) is not None):
        text = get_text_content(element)
        if text:
            add_metadata_value(metadata, _dc_term(element), text)

    # <meta> pairs are applied last and win over Dublin Core for shared keys.
    metadata.update(extract_metadata(find_elements(metadata_element, "meta")))
    return metadata


def parse_opf(opf_content: str | bytes) -> OpfData:
    """Parse an OPF package file.

    Args:
        opf_content: The OPF document text.

    Returns:
        OpfData with metadata, manifest items and spine items in document order.

    Raises:
        MalformedXmlError: If the content is not well-formed XML.
        MissingRootElementError: If there is no ``package`` element.
    """
    tree = parse_xml(opf_content)
    package = find_element(tree, "package")
    if package is None:
        raise MissingRootElementError("package", "OPF")

    metadata = _read_metadata(find_element(package, "metadata"))

    manifest_element = find_element(package, "manifest")
    manifest = [
        ManifestItem(
            id=get_attribute(item, "id") or "",
            href=get_attribute(item, "href") or "",
            media_type=get_attribute(item, "media-type") or "",
        )
        for item in (
            find_elements(manifest_element, "item") if manifest_element is not None else []
        )
    ]

    spine_element = find_element(package, "spine")
    spine = [
        SpineItem(
            idref=get_attribute(itemref, "idref") or "",
            linear=get_attribute(itemref, "linear") != "no",
        )
        for itemref in (
            find_elements(spine_element, "itemref") if spine_element is not None else []
        )
    ]

    unique_identifier = None
    identifier_id = get_attribute(package, "unique-identifier")
    if identifier_id:
        identifier = find_by_attribute(package, "id", identifier_id)
        if identifier is not None:
            unique_identifier = get_text_content(identifier) or None

    logger.debug(
        "Parsed OPF: %d metadata keys, %d manifest items, %d spine items",
        len(metadata),
        len(manifest),
        len(spine),
    )
    return OpfData(
        metadata=metadata,
        manifest=manifest,
        spine=spine,
        unique_identifier=unique_identifier,
    )


def _write_text(element: Element, value: str) -> None:
    element.children = [Text(value)]


def _dc_declared(tree: Root, container: Element) -> bool:
    """Whether the ``dc`` prefix is bound on the container or an ancestor."""
    lineage = [*(find_ancestors(tree, container) or []), container]
    return any("xmlns:dc" in node.attributes for node in lineage if isinstance(node, Element))


def update_opf_metadata_from_tree(
    tree: Root,
    new_values: Mapping[str, NewValue],
    *,
    create_if_missing: bool = True,
) -> None:
    """Patch OPF metadata in place.

    ``dc:*`` keys (``dc:Title``, matched case-insensitively) rewrite the text
    of Dublin Core elements in ``dc-metadata``; every other key rewrites the
    ``content`` of ``<meta name=..>`` in ``x-metadata``. Either section falls
    back to ``metadata`` when absent. Keys with no matching element are
    appended when ``create_if_missing`` is set.

    Raises:
        MissingContainerError: If the tree has no ``metadata`` element.
    """
    metadata_element = find_element(tree, "metadata")
    if metadata_element is None:
        raise MissingContainerError("metadata", "OPF")

    dc_container = find_element(metadata_element, "dc-metadata") or metadata_element
    x_container = find_element(metadata_element, "x-metadata") or metadata_element
    # New dc:* elements declare the prefix themselves unless it is already in scope.
    dc_attributes = {} if _dc_declared(tree, dc_container) else {"xmlns:dc": DC_NAMESPACE}

    meta_values: dict[str, NewValue] = {}
    for key, value in new_values.items():
        if not key.lower().startswith(DC_PREFIX):
            meta_values[key] = value
            continue
        existing = select_elements(
            dc_container, lambda el, key=key: el.name.lower() == key.lower()
        )
        apply_metadata_value(
            dc_container,
            key,
            value,
            existing,
            write=_write_text,
            build=lambda item, key=key: Element(key, dict(dc_attributes), [Text(item)]),
            create_if_missing=create_if_missing,
        )

    update_meta_elements(x_container, meta_values, create_if_missing=create_if_missing)
