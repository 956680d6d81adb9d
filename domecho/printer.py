"""
Render a document's node tree as an indented, one-line-per-node trace.

>>> from domecho.nodes import Node, NodeKind
>>> greeting = Node(NodeKind.ELEMENT, "greeting", local_name="greeting",
...                 children=(Node(NodeKind.TEXT, "#text", value="hi"),))
>>> import sys
>>> render(greeting, sys.stdout)
Element:  nodeName="greeting" localName="greeting"
 Text:  nodeName="#text" nodeValue="hi"
"""

from __future__ import annotations

from typing import Iterator, TextIO

from typing_extensions import Final

from domecho.nodes import Node, NodeKind

__all__ = ["format_node", "iter_lines", "render"]

INDENT: Final = " "
WHITESPACE: Final = "[Whitespace]"

LABELS: Final = {
    NodeKind.ELEMENT: "Element: ",
    NodeKind.TEXT: "Text: ",
    NodeKind.COMMENT: "Comment: ",
    NodeKind.DOCUMENT: "Document: ",
}
OTHER_LABEL: Final = "Other Node: "

# Attributes sit one level below an element's children
ATTRIBUTE_DEPTH: Final = 2
CHILD_DEPTH: Final = 1


def format_value(value: str) -> str:
    # Quotes in the value are not escaped
    if not value.strip():
        return WHITESPACE
    return f'"{value}"'


def format_node(node: Node) -> str:
    """
    Describe a single node, without indentation or a line terminator.
    """
    parts = [LABELS.get(node.kind, OTHER_LABEL), f' nodeName="{node.name}"']

    if node.namespace_uri is not None:
        parts.append(f' uri="{node.namespace_uri}"')
    if node.prefix is not None:
        parts.append(f' prefix="{node.prefix}"')
    if node.local_name is not None:
        parts.append(f' localName="{node.local_name}"')
    if node.value is not None:
        parts.append(f" nodeValue={format_value(node.value)}")

    return "".join(parts)


def iter_lines(node: Node, depth: int = 0) -> Iterator[tuple[int, str]]:
    """
    Walk ``node`` in document order (pre-order), yielding a ``(depth, line)``
    pair for it and for every node beneath it.

    An element's attributes are yielded directly after the element itself
    and before any of its children.
    """
    yield depth, format_node(node)

    if node.kind is NodeKind.ELEMENT:
        for attribute in node.attributes:
            yield depth + ATTRIBUTE_DEPTH, format_node(attribute)

    for child in node.children:
        yield from iter_lines(child, depth + CHILD_DEPTH)


def render(root: Node, out: TextIO, depth: int = 0) -> None:
    """
    Write the trace of ``root`` and its descendants to ``out``, one line per
    node, indented by one space per level.
    """
    for line_depth, line in iter_lines(root, depth):
        out.write(INDENT * line_depth + line + "\n")
