# ABOUTME: Flattens <meta name=".." content=".."> elements into a key -> value mapping.
# ABOUTME: Repeated keys are promoted from a scalar to an ordered list of values.

from collections.abc import Iterable

from daisykit.metadata.types import MetadataMap
from daisykit.xml.nodes import Element
from daisykit.xml.query import get_attribute


def add_metadata_value(metadata: MetadataMap, key: str, value: str) -> None:
    """Record a value, promoting the key to a list on its second occurrence."""
    existing = metadata.get(key)
    if existing is None:
        metadata[key] = value
    elif isinstance(existing, list):
        existing.append(value)
    else:
        metadata[key] = [existing, value]


def extract_metadata(meta_elements: Iterable[Element]) -> MetadataMap:
    """Build a metadata mapping from meta-like elements.

    Elements without a ``name`` or ``content`` (or with an empty one) are
    skipped. Keys appear in first-encounter order.

    Args:
        meta_elements: Elements already filtered to the relevant meta tag.

    Returns:
        Mapping of name to content, or to a list of contents for repeats.
    """
    metadata: MetadataMap = {}
    for meta in meta_elements:
        name = get_attribute(meta, "name")
        content = get_attribute(meta, "content")
        if not name or not content:
            continue
        add_metadata_value(metadata, name, content)
    return metadata
