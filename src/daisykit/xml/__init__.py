# ABOUTME: XML layer for daisykit: node model, lxml-backed parsing/serialization, tree queries.
# ABOUTME: Exports the primitives the format parsers and the splitter are built on.

from daisykit.xml.nodes import (
    Comment,
    Doctype,
    Element,
    EntityRef,
    Instruction,
    Node,
    Parent,
    Root,
    Text,
)
from daisykit.xml.parser import parse_xml, to_xml
from daisykit.xml.query import (
    find_ancestors,
    find_by_attribute,
    find_direct_children,
    find_element,
    find_elements,
    get_attribute,
    get_text_content,
    select_elements,
)

__all__ = [
    "Comment",
    "Doctype",
    "Element",
    "EntityRef",
    "Instruction",
    "Node",
    "Parent",
    "Root",
    "Text",
    "find_ancestors",
    "find_by_attribute",
    "find_direct_children",
    "find_element",
    "find_elements",
    "get_attribute",
    "get_text_content",
    "parse_xml",
    "select_elements",
    "to_xml",
]
