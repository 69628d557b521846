# ABOUTME: XML text <-> node tree conversion backed by lxml.
# ABOUTME: Parses into the daisykit node model and serializes it back without reformatting.

import logging
import re
from dataclasses import dataclass

from lxml import etree

from daisykit.errors import MalformedXmlError
from daisykit.xml.nodes import (
    Comment,
    Doctype,
    Element,
    EntityRef,
    Instruction,
    Node,
    Root,
    Text,
)

logger = logging.getLogger(__name__)

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

# DAISY files reference remote DTDs; they are never fetched or validated.
PARSER_OPTIONS = {
    "load_dtd": False,
    "no_network": True,
    "resolve_entities": False,
    "remove_comments": False,
    "remove_pis": False,
    "remove_blank_text": False,
}

# Prolog tokens before the document element: PIs (the XML declaration
# included), comments and the doctype with an optional internal subset.
_PROLOG_TOKEN_RE = re.compile(
    r"""\s*(?:
        (?P<pi><\?.*?\?>)
        | (?P<comment><!--.*?-->)
        | (?P<doctype><!DOCTYPE
            (?:[^\["'>]|"[^"]*"|'[^']*')*
            (?:\[(?:<!--.*?-->|"[^"]*"|'[^']*'|[^\]"'])*\]\s*)?
          >)
    )""",
    re.DOTALL | re.VERBOSE,
)
_DECLARATION_RE = re.compile(r"<\?xml\s+(.*?)\s*\?>", re.DOTALL)

# Characters lxml writes as character references so they survive re-parsing.
_TEXT_ESCAPES = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;", "\r": "&#13;"})
_ATTRIBUTE_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "\n": "&#10;",
        "\r": "&#13;",
        "\t": "&#9;",
    }
)


@dataclass
class _Prolog:
    """Verbatim prolog pieces lxml does not expose."""

    declaration: str | None = None
    doctype: str | None = None
    # Number of comments and PIs preceding the doctype.
    doctype_index: int = 0


def _make_parser(encoding: str | None = None) -> etree.XMLParser:
    return etree.XMLParser(encoding=encoding, **PARSER_OPTIONS)


def _qualified_name(tag: str, prefix: str | None) -> str:
    local = etree.QName(tag).localname
    return f"{prefix}:{local}" if prefix else local


def _attribute_name(key: str, nsmap: dict[str | None, str]) -> str:
    """Turn an lxml ``{uri}local`` attribute key back into ``prefix:local``."""
    if not key.startswith("{"):
        return key
    qname = etree.QName(key)
    if qname.namespace == XML_NAMESPACE:
        return f"xml:{qname.localname}"
    for prefix, uri in nsmap.items():
        if prefix and uri == qname.namespace:
            return f"{prefix}:{qname.localname}"
    return qname.localname


def _convert_element(source: etree._Element) -> Element:
    parent = source.getparent()
    inherited = parent.nsmap if parent is not None else {}

    attributes: dict[str, str] = {}
    for prefix, uri in source.nsmap.items():
        if inherited.get(prefix) != uri:
            attributes["xmlns" if prefix is None else f"xmlns:{prefix}"] = uri
    for key, value in source.attrib.items():
        attributes[_attribute_name(key, source.nsmap)] = value

    element = Element(
        name=_qualified_name(source.tag, source.prefix),
        attributes=attributes,
    )
    if source.text:
        element.children.append(Text(source.text))
    for child in source:
        element.children.append(_convert_node(child))
        if child.tail:
            element.children.append(Text(child.tail))
    return element


def _convert_node(source: etree._Element) -> Node:
    if source.tag is etree.Comment:
        return Comment(source.text or "")
    if source.tag is etree.ProcessingInstruction:
        return Instruction(source.target, source.text or "")
    if source.tag is etree.Entity:
        return EntityRef(source.name)
    return _convert_element(source)


def _source_text(xml_content: str | bytes, encoding: str | None) -> str:
    if isinstance(xml_content, str):
        return xml_content
    try:
        return xml_content.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        logger.debug("Unknown encoding %r, reading prolog as UTF-8", encoding)
        return xml_content.decode("utf-8", errors="replace")


def _scan_prolog(text: str) -> _Prolog:
    """Read the declaration and doctype text, and where the doctype sits.

    The input has already been accepted by lxml, so the scan only has to find
    token boundaries. It stops at the document element.
    """
    prolog = _Prolog()
    start = 1 if text.startswith("\ufeff") else 0
    pos = start
    siblings = 0
    while True:
        match = _PROLOG_TOKEN_RE.match(text, pos)
        if match is None:
            break
        if match.group("doctype"):
            prolog.doctype = match.group("doctype")
            prolog.doctype_index = siblings
        elif match.group("pi") and match.start("pi") == start:
            declaration = _DECLARATION_RE.fullmatch(match.group("pi"))
            if declaration:
                prolog.declaration = declaration.group(1)
            else:
                siblings += 1
        else:
            siblings += 1
        pos = match.end()
    return prolog


def parse_xml(xml_content: str | bytes) -> Root:
    """Parse XML text into a node tree.

    Args:
        xml_content: The document, as text or as bytes in the encoding it
            declares (UTF-8 when it declares none). A declared encoding is
            ignored for text input, which is already decoded.

    Returns:
        The document Root.

    Raises:
        MalformedXmlError: If the input is not well-formed XML.
    """
    if isinstance(xml_content, str):
        data = xml_content.encode("utf-8")
        parser = _make_parser(encoding="utf-8")
    else:
        data = xml_content
        parser = _make_parser()

    try:
        document = etree.fromstring(data, parser=parser).getroottree()
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise MalformedXmlError(f"Invalid XML content: {exc}") from exc

    root_element = document.getroot()
    prolog = _scan_prolog(_source_text(xml_content, document.docinfo.encoding))
    preceding = [
        _convert_node(sibling)
        for sibling in reversed(list(root_element.itersiblings(preceding=True)))
    ]
    if prolog.doctype is None and document.docinfo.doctype:
        prolog.doctype = document.docinfo.doctype
        prolog.doctype_index = len(preceding)

    root = Root()
    if prolog.declaration is not None:
        root.children.append(Instruction("xml", prolog.declaration))
    root.children.extend(preceding[: prolog.doctype_index])
    if prolog.doctype is not None:
        root.children.append(Doctype(prolog.doctype))
    root.children.extend(preceding[prolog.doctype_index :])
    root.children.append(_convert_element(root_element))
    for sibling in root_element.itersiblings():
        root.children.append(_convert_node(sibling))

    logger.debug("Parsed XML document with root <%s>", root_element.tag)
    return root


def _escape_text(value: str) -> str:
    return value.translate(_TEXT_ESCAPES)


def _escape_attribute(value: str) -> str:
    return value.translate(_ATTRIBUTE_ESCAPES)


def _serialize(node: Node, out: list[str]) -> None:
    if isinstance(node, Text):
        out.append(_escape_text(node.value))
    elif isinstance(node, EntityRef):
        out.append(f"&{node.name};")
    elif isinstance(node, Comment):
        out.append(f"<!--{node.value}-->")
    elif isinstance(node, Instruction):
        out.append(f"<?{node.name} {node.value}?>" if node.value else f"<?{node.name}?>")
    elif isinstance(node, Doctype):
        out.append(node.value)
    elif isinstance(node, Element):
        attrs = "".join(
            f' {name}="{_escape_attribute(value)}"' for name, value in node.attributes.items()
        )
        if not node.children:
            out.append(f"<{node.name}{attrs}/>")
            return
        out.append(f"<{node.name}{attrs}>")
        for child in node.children:
            _serialize(child, out)
        out.append(f"</{node.name}>")
    elif isinstance(node, Root):
        previous: Node | None = None
        for child in node.children:
            # Whitespace between prolog nodes is not kept by the parser.
            if _needs_prolog_break(previous, child):
                out.append("\n")
            _serialize(child, out)
            previous = child


def _needs_prolog_break(previous: Node | None, current: Node) -> bool:
    if previous is None or isinstance(previous, Text) or isinstance(current, Text):
        return False
    return not (isinstance(previous, Element) and isinstance(current, Element))


def to_xml(tree: Node) -> str:
    """Serialize a node tree (or any subtree) back to XML text."""
    out: list[str] = []
    _serialize(tree, out)
    return "".join(out)
