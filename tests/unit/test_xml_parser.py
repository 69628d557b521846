# ABOUTME: Unit tests for lxml-backed XML parsing and node tree serialization.
# ABOUTME: Covers the node model shape, namespaces, prolog handling and malformed input.

import pytest

from daisykit.errors import MalformedXmlError
from daisykit.xml import (
    Comment,
    Doctype,
    Element,
    EntityRef,
    Instruction,
    Root,
    Text,
    get_text_content,
    parse_xml,
    to_xml,
)


class TestParseXml:
    """Tests for parse_xml."""

    def test_returns_root_with_document_element(self) -> None:
        """The document element is a child of the returned Root."""
        tree = parse_xml("<ncx><head/></ncx>")
        assert isinstance(tree, Root)
        assert tree.type == "root"
        assert len(tree.children) == 1
        ncx = tree.children[0]
        assert isinstance(ncx, Element)
        assert ncx.name == "ncx"
        assert ncx.children == [Element("head")]

    def test_text_runs_are_child_nodes(self) -> None:
        """Text and tails become Text nodes interleaved with elements."""
        tree = parse_xml("<p>one <em>two</em> three</p>")
        p = tree.children[0]
        assert p.children == [
            Text("one "),
            Element("em", children=[Text("two")]),
            Text(" three"),
        ]

    def test_attributes_keep_order(self) -> None:
        """Attributes are kept in document order."""
        tree = parse_xml('<meta name="dtb:uid" content="42"/>')
        meta = tree.children[0]
        assert list(meta.attributes.items()) == [("name", "dtb:uid"), ("content", "42")]

    def test_prefixed_names_are_kept(self) -> None:
        """Namespaced elements keep their prefix and declarations become attributes."""
        tree = parse_xml(
            '<metadata><dc:Title xmlns:dc="http://purl.org/dc/elements/1.1/">T</dc:Title>'
            "</metadata>"
        )
        title = tree.children[0].children[0]
        assert title.name == "dc:Title"
        assert title.attributes == {"xmlns:dc": "http://purl.org/dc/elements/1.1/"}

    def test_inherited_namespace_not_redeclared(self) -> None:
        """A default namespace is declared only on the element that declares it."""
        tree = parse_xml('<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/"><head/></ncx>')
        ncx = tree.children[0]
        assert ncx.attributes == {"xmlns": "http://www.daisy.org/z3986/2005/ncx/"}
        assert ncx.children[0].attributes == {}

    def test_xml_lang_attribute(self) -> None:
        """The xml: prefix is restored on attributes."""
        tree = parse_xml('<dtbook xml:lang="vi-VN"/>')
        assert tree.children[0].attributes == {"xml:lang": "vi-VN"}

    def test_prolog_nodes(self, sample_dtbook: str) -> None:
        """Declaration and doctype precede the document element."""
        tree = parse_xml(sample_dtbook)
        declaration, doctype, dtbook = tree.children
        assert isinstance(declaration, Instruction)
        assert declaration.name == "xml"
        assert 'version="1.0"' in declaration.value
        assert isinstance(doctype, Doctype)
        assert doctype.value.startswith("<!DOCTYPE dtbook")
        assert dtbook.name == "dtbook"

    def test_no_declaration_when_absent(self) -> None:
        """Documents without a declaration do not gain one."""
        tree = parse_xml("<smil/>")
        assert [node.type for node in tree.children] == ["element"]

    def test_comments_are_kept(self) -> None:
        """Comments inside and before the document element are kept."""
        tree = parse_xml("<!-- generated --><head><!-- note --></head>")
        assert tree.children[0] == Comment(" generated ")
        assert tree.children[1].children == [Comment(" note ")]

    def test_accepts_bytes(self) -> None:
        """UTF-8 bytes parse the same as text."""
        tree = parse_xml('<?xml version="1.0" encoding="UTF-8"?><p>Bỉ Vỏ</p>'.encode())
        assert tree.children[-1].children == [Text("Bỉ Vỏ")]

    def test_text_ignores_declared_encoding(self) -> None:
        """Text input is already decoded, so a Latin-1 declaration cannot garble it."""
        tree = parse_xml('<?xml version="1.0" encoding="ISO-8859-1"?><p>Café</p>')
        assert tree.children[-1].children == [Text("Café")]
        assert tree.children[0] == Instruction("xml", 'version="1.0" encoding="ISO-8859-1"')

    def test_text_with_utf16_declaration(self) -> None:
        """A UTF-16 declaration on text input does not make it fail."""
        tree = parse_xml('<?xml version="1.0" encoding="UTF-16"?><p>Bỉ Vỏ</p>')
        assert get_text_content(tree) == "Bỉ Vỏ"

    def test_bytes_in_declared_encoding(self) -> None:
        """Bytes are decoded with the encoding they declare."""
        data = '<?xml version="1.0" encoding="UTF-16"?><p>Bỉ Vỏ</p>'.encode("utf-16")
        tree = parse_xml(data)
        assert tree.children[0] == Instruction("xml", 'version="1.0" encoding="UTF-16"')
        assert get_text_content(tree) == "Bỉ Vỏ"

    def test_entity_reference_is_kept(self) -> None:
        """Entity references declared in an internal subset stay unexpanded."""
        tree = parse_xml('<!DOCTYPE d [<!ENTITY e "E">]><d>a&e;b</d>')
        d = tree.children[-1]
        assert d.children == [Text("a"), EntityRef("e"), Text("b")]
        assert get_text_content(d) == "ab"

    def test_doctype_internal_subset_is_kept(self) -> None:
        """The doctype keeps its internal subset verbatim."""
        tree = parse_xml('<!DOCTYPE d [<!ENTITY e "E"> <!-- note ] -->]><d/>')
        assert tree.children[0] == Doctype('<!DOCTYPE d [<!ENTITY e "E"> <!-- note ] -->]>')

    def test_prolog_in_document_order(self) -> None:
        """Comments and PIs before the doctype stay before it."""
        tree = parse_xml('<!-- c --><!DOCTYPE a><?pi x?><a/>')
        assert [node.type for node in tree.children] == [
            "comment",
            "doctype",
            "instruction",
            "element",
        ]
        assert tree.children[2] == Instruction("pi", "x")

    def test_malformed_input_raises(self) -> None:
        """Unparsable text raises MalformedXmlError."""
        with pytest.raises(MalformedXmlError):
            parse_xml("invalid xml")

    def test_empty_input_raises(self) -> None:
        """An empty document is malformed."""
        with pytest.raises(MalformedXmlError):
            parse_xml("")

    def test_unclosed_tag_raises(self) -> None:
        """Truncated markup raises MalformedXmlError."""
        with pytest.raises(MalformedXmlError):
            parse_xml("<ncx><head></ncx>")


class TestToXml:
    """Tests for to_xml."""

    def test_escapes_text_and_attributes(self) -> None:
        """Special characters are escaped."""
        tree = Element("meta", {"content": 'a "b" & <c>'}, [Text("x < y & z")])
        assert to_xml(tree) == (
            '<meta content="a &quot;b&quot; &amp; &lt;c&gt;">x &lt; y &amp; z</meta>'
        )

    def test_childless_element_is_self_closing(self) -> None:
        """Elements without children serialize as <name/>."""
        assert to_xml(Element("itemref", {"idref": "c1"})) == '<itemref idref="c1"/>'

    def test_comment_and_instruction(self) -> None:
        """Comments and processing instructions keep their delimiters."""
        tree = Root([Instruction("xml", 'version="1.0"'), Comment(" c "), Element("a")])
        assert to_xml(tree) == '<?xml version="1.0"?>\n<!-- c -->\n<a/>'

    def test_sibling_elements_at_root_are_not_separated(self) -> None:
        """Adjacent top-level elements (a page of parts) stay adjacent."""
        assert to_xml(Root([Element("p"), Element("p")])) == "<p/><p/>"

    def test_attribute_whitespace_uses_character_references(self) -> None:
        """Newlines, tabs and carriage returns in attributes survive re-parsing."""
        tree = parse_xml('<meta content="x&#10;y&#9;z&#13;"/>')
        assert tree.children[0].attributes == {"content": "x\ny\tz\r"}
        output = to_xml(tree)
        assert output == '<meta content="x&#10;y&#9;z&#13;"/>'
        assert parse_xml(output) == tree

    def test_carriage_return_in_text(self) -> None:
        """A carriage return in text is written as a character reference."""
        assert to_xml(Element("p", children=[Text("a\rb")])) == "<p>a&#13;b</p>"

    def test_entity_reference_round_trip(self) -> None:
        """Entity references and the internal subset are written back as found."""
        source = '<!DOCTYPE d [<!ENTITY e "E">]><d>a&e;b</d>'
        tree = parse_xml(source)
        output = to_xml(tree)
        assert output == '<!DOCTYPE d [<!ENTITY e "E">]>\n<d>a&e;b</d>'
        assert parse_xml(output) == tree

    def test_declaration_kept_verbatim(self) -> None:
        """The declaration is not rebuilt with an encoding it did not have."""
        assert to_xml(parse_xml('<?xml version="1.0"?><a/>')) == '<?xml version="1.0"?>\n<a/>'

    def test_prolog_order_round_trip(self) -> None:
        """Prolog nodes are written in their original order."""
        output = to_xml(parse_xml("<!-- c --><!DOCTYPE a><?pi x?><a/>"))
        assert output == "<!-- c -->\n<!DOCTYPE a>\n<?pi x?>\n<a/>"

    def test_round_trip_preserves_structure(self, sample_ncx: str) -> None:
        """Serializing an unmodified tree and reparsing gives the same tree."""
        tree = parse_xml(sample_ncx)
        assert parse_xml(to_xml(tree)) == tree

    def test_round_trip_with_doctype(self, sample_dtbook: str) -> None:
        """Doctype and namespaces survive a round trip."""
        tree = parse_xml(sample_dtbook)
        output = to_xml(tree)
        assert output.startswith('<?xml version="1.0" encoding="')
        assert "<!DOCTYPE dtbook" in output
        assert parse_xml(output) == tree
