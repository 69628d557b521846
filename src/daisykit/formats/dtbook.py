# ABOUTME: DTBook (and generic DAISY XML) metadata reading and <head> meta patching.
# ABOUTME: Any root element is accepted; the parsed tree is handed back for splitting or editing.

import logging
from collections.abc import Mapping

from daisykit.errors import MissingContainerError
from daisykit.metadata.extract import extract_metadata
from daisykit.metadata.types import DtbData
from daisykit.metadata.update import NewValue, update_meta_elements
from daisykit.xml.nodes import Root
from daisykit.xml.parser import parse_xml
from daisykit.xml.query import find_element, find_elements

logger = logging.getLogger(__name__)


def parse_dtbook(xml_content: str | bytes) -> DtbData:
    """Parse a DTBook document, collecting every ``<meta>`` in the tree.

    Raises:
        MalformedXmlError: If the content is not well-formed XML.
    """
    tree = parse_xml(xml_content)
    metadata = extract_metadata(find_elements(tree, "meta"))
    logger.debug("Parsed DTBook: %d metadata keys", len(metadata))
    return DtbData(metadata=metadata, tree=tree)


def update_dtbook_metadata_from_tree(
    tree: Root,
    new_values: Mapping[str, NewValue],
    *,
    create_if_missing: bool = True,
) -> None:
    """Patch ``<meta name=.. content=..>`` elements in the DTBook ``head`` in place.

    Dublin Core values are plain metas here (``name="dc:Title"``).

    Raises:
        MissingContainerError: If the tree has no ``head`` element.
    """
    head = find_element(tree, "head")
    if head is None:
        raise MissingContainerError("head", "DTBook")
    update_meta_elements(head, new_values, create_if_missing=create_if_missing)
