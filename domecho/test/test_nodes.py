from __future__ import annotations

from lxml import etree

from domecho import nodes
from domecho.constants import XML_NS, XMLNS_NS
from domecho.nodes import Node, NodeKind
from domecho.test.helpers import data_path


def _doc(xml: str | bytes, parser: etree.XMLParser | None = None) -> Node:
    return nodes.from_tree(etree.fromstring(xml, parser).getroottree())


def test_document_node() -> None:
    doc = _doc("<root/>")

    assert doc.kind is NodeKind.DOCUMENT
    assert doc.name == "#document"
    assert doc.value is None
    assert doc.namespace_uri is doc.prefix is doc.local_name is None
    assert [c.name for c in doc.children] == ["root"]


def test_element_without_namespace() -> None:
    (root,) = _doc("<root/>").children

    assert root == Node(NodeKind.ELEMENT, "root", local_name="root")


def test_text_and_tails_become_text_nodes() -> None:
    (root,) = _doc("<r>a<!--c-->b<x/>c</r>").children

    assert [(c.kind, c.value) for c in root.children] == [
        (NodeKind.TEXT, "a"),
        (NodeKind.COMMENT, "c"),
        (NodeKind.TEXT, "b"),
        (NodeKind.ELEMENT, None),
        (NodeKind.TEXT, "c"),
    ]
    assert [c.name for c in root.children] == [
        "#text",
        "#comment",
        "#text",
        "x",
        "#text",
    ]


def test_empty_comment_has_empty_value() -> None:
    (root,) = _doc("<r><!----></r>").children
    assert root.children == (Node(NodeKind.COMMENT, "#comment", value=""),)


def test_attributes_are_ordered_by_name() -> None:
    (root,) = _doc('<r b="2" a="1" c=""/>').children

    assert root.attributes == (
        Node(NodeKind.OTHER, "a", local_name="a", value="1"),
        Node(NodeKind.OTHER, "b", local_name="b", value="2"),
        Node(NodeKind.OTHER, "c", local_name="c", value=""),
    )
    assert root.children == ()


def test_namespace_declarations_are_attributes_of_declaring_element() -> None:
    doc = _doc(
        '<p:r xmlns:p="urn:p" xmlns="urn:d" p:a="1">'
        '<c xml:lang="en"/>'
        '<q:c xmlns:q="urn:q"/>'
        "</p:r>"
    )
    (root,) = doc.children

    assert root == Node(
        NodeKind.ELEMENT,
        "p:r",
        namespace_uri="urn:p",
        prefix="p",
        local_name="r",
        attributes=(
            Node(
                NodeKind.OTHER,
                "p:a",
                namespace_uri="urn:p",
                prefix="p",
                local_name="a",
                value="1",
            ),
            Node(
                NodeKind.OTHER,
                "xmlns",
                namespace_uri=XMLNS_NS,
                local_name="xmlns",
                value="urn:d",
            ),
            Node(
                NodeKind.OTHER,
                "xmlns:p",
                namespace_uri=XMLNS_NS,
                prefix="xmlns",
                local_name="p",
                value="urn:p",
            ),
        ),
        children=root.children,
    )

    default_child, prefixed_child = root.children
    assert default_child.name == "c"
    assert default_child.namespace_uri == "urn:d"
    assert default_child.prefix is None
    assert default_child.attributes == (
        Node(
            NodeKind.OTHER,
            "xml:lang",
            namespace_uri=XML_NS,
            prefix="xml",
            local_name="lang",
            value="en",
        ),
    )

    assert prefixed_child.name == "q:c"
    assert [a.name for a in prefixed_child.attributes] == ["xmlns:q"]


def test_processing_instructions_and_comments_outside_root() -> None:
    doc = nodes.from_tree(etree.parse(data_path("namespaces.xml")))

    pi, root, trailer = doc.children
    assert pi == Node(
        NodeKind.OTHER, "xml-stylesheet", value='href="style.css" type="text/css"'
    )
    assert root.name == "doc:catalog"
    assert trailer == Node(NodeKind.COMMENT, "#comment", value=" trailer ")


def test_processing_instruction_without_data() -> None:
    (root,) = _doc("<r><?target?></r>").children
    assert root.children == (Node(NodeKind.OTHER, "target", value=""),)


def test_doctype_is_first_child_of_document() -> None:
    doc = _doc('<!DOCTYPE r [<!ELEMENT r EMPTY>]><!--c--><r/>')

    assert [(c.kind, c.name) for c in doc.children] == [
        (NodeKind.OTHER, "r"),
        (NodeKind.COMMENT, "#comment"),
        (NodeKind.ELEMENT, "r"),
    ]
    assert doc.children[0].value is None


def test_unresolved_entity_reference() -> None:
    parser = etree.XMLParser(resolve_entities=False)
    (_, root) = _doc('<!DOCTYPE r [<!ENTITY e "v">]><r>&e;</r>', parser).children

    assert root.children == (Node(NodeKind.OTHER, "e"),)


def test_namespace_declarations_are_ordered_with_other_attributes() -> None:
    (root,) = _doc('<root xmlns:z="urn:z" b="2" a="1"/>').children

    assert [a.name for a in root.attributes] == ["a", "b", "xmlns:z"]


def test_cdata_sections_are_merged_into_text() -> None:
    (root,) = _doc("<r>x<![CDATA[<y> & ]]>z</r>").children

    assert root.children == (Node(NodeKind.TEXT, "#text", value="x<y> & z"),)
