"""
A read-only, DOM-shaped view of a parsed XML document.

lxml's ``etree`` API folds character data into ``.text``/``.tail`` and keeps
namespace declarations in ``nsmap`` rather than as attributes. The printer
wants to see a document the way a namespace aware DOM does, so
:func:`from_tree` converts an lxml tree into a tree of :class:`Node` objects:
text becomes ``#text`` nodes, namespace declarations become ``xmlns``
attributes and the document and its DOCTYPE get nodes of their own.
"""

from __future__ import annotations

import enum
import operator
from dataclasses import dataclass
from typing import Iterator, Sequence

from lxml import etree

from domecho.constants import (
    COMMENT_NAME,
    DOCUMENT_NAME,
    TEXT_NAME,
    XML_NS,
    XMLNS_NS,
)

__all__ = ["NodeKind", "Node", "from_tree", "from_lxml"]


class NodeKind(enum.Enum):
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"
    DOCUMENT = "document"
    # Attributes, processing instructions, doctypes, entity references
    OTHER = "other"


@dataclass(frozen=True)
class Node:
    kind: NodeKind
    name: str
    namespace_uri: str | None = None
    prefix: str | None = None
    local_name: str | None = None
    value: str | None = None
    attributes: Sequence[Node] = ()
    children: Sequence[Node] = ()


def _qualified_name(prefix: str | None, local_name: str) -> str:
    if prefix:
        return f"{prefix}:{local_name}"
    return local_name


def _text(value: str) -> Node:
    return Node(NodeKind.TEXT, TEXT_NAME, value=value)


def _attribute_prefix(el: etree._Element, namespace: str | None) -> str | None:
    if namespace is None:
        return None
    if namespace == XML_NS:
        return "xml"
    for prefix, uri in el.nsmap.items():
        # Attributes never pick up the default namespace
        if prefix is not None and uri == namespace:
            return prefix
    return None


def _declared_namespaces(el: etree._Element) -> Iterator[Node]:
    """
    Yield ``xmlns`` attribute nodes for the namespaces declared on ``el``
    itself, i.e. those in its nsmap which it didn't inherit from its parent.
    """
    parent = el.getparent()
    inherited = {} if parent is None else parent.nsmap

    for prefix, uri in el.nsmap.items():
        if prefix in inherited and inherited[prefix] == uri:
            continue
        if prefix is None:
            yield Node(
                NodeKind.OTHER,
                "xmlns",
                namespace_uri=XMLNS_NS,
                local_name="xmlns",
                value=uri,
            )
        else:
            yield Node(
                NodeKind.OTHER,
                f"xmlns:{prefix}",
                namespace_uri=XMLNS_NS,
                prefix="xmlns",
                local_name=prefix,
                value=uri,
            )


def _attributes(el: etree._Element) -> Iterator[Node]:
    yield from _declared_namespaces(el)

    for key, value in el.attrib.items():
        qname = etree.QName(key)
        prefix = _attribute_prefix(el, qname.namespace)
        yield Node(
            NodeKind.OTHER,
            _qualified_name(prefix, qname.localname),
            namespace_uri=qname.namespace,
            prefix=prefix,
            local_name=qname.localname,
            value=value,
        )


def _children(el: etree._Element) -> Iterator[Node]:
    if el.text:
        yield _text(el.text)
    for child in el:
        yield from_lxml(child)
        if child.tail:
            yield _text(child.tail)


def from_lxml(el: etree._Element) -> Node:
    """
    Convert an lxml element (or comment, processing instruction or entity
    reference) and everything beneath it.
    """
    # Comments, PIs and entities are _Element subclasses, so check them first
    if isinstance(el, etree._Comment):
        return Node(NodeKind.COMMENT, COMMENT_NAME, value=el.text or "")
    if isinstance(el, etree._ProcessingInstruction):
        return Node(NodeKind.OTHER, el.target, value=el.text or "")
    if isinstance(el, etree._Entity):
        return Node(NodeKind.OTHER, el.name)

    qname = etree.QName(el)
    return Node(
        NodeKind.ELEMENT,
        _qualified_name(el.prefix, qname.localname),
        namespace_uri=qname.namespace,
        prefix=el.prefix,
        local_name=qname.localname,
        # Attribute maps are ordered by name, namespace declarations included
        attributes=tuple(sorted(_attributes(el), key=operator.attrgetter("name"))),
        children=tuple(_children(el)),
    )


def from_tree(tree: etree._ElementTree[etree._Element]) -> Node:
    """
    Create the Document node for a parsed lxml tree.

    The document's children are its DOCTYPE (if it has one), followed by the
    comments and processing instructions preceding the root element, the root
    element and whatever follows it.
    """
    root = tree.getroot()
    children: list[Node] = []

    if tree.docinfo.doctype:
        children.append(Node(NodeKind.OTHER, tree.docinfo.root_name))

    prolog = reversed(list(root.itersiblings(preceding=True)))
    children.extend(from_lxml(node) for node in prolog)
    children.append(from_lxml(root))
    children.extend(from_lxml(node) for node in root.itersiblings())

    return Node(NodeKind.DOCUMENT, DOCUMENT_NAME, children=tuple(children))
