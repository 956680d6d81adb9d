from __future__ import annotations

from typing import TextIO

from importlib_metadata import version

from domecho.nodes import Node, NodeKind
from domecho.parsing import AnySource, DocumentParser, ValidationMode
from domecho.printer import render
from domecho.reporting import Reporter

__version__ = version("domecho")

__all__ = ["echo", "DocumentParser", "Node", "NodeKind", "ValidationMode"]


def echo(
    src: AnySource,
    out: TextIO,
    *,
    validation: ValidationMode = ValidationMode.NONE,
    schema_source: AnySource | None = None,
    reporter: Reporter | None = None,
) -> None:
    """
    Parse an XML document and write a trace of its node tree to ``out``.

    Validation occurrences are all reported before anything is written to
    ``out``.

    Keyword Args:
        validation: Validate the document against its DTD, or an XML Schema,
            while parsing it.
        schema_source: The XML Schema to validate with when ``validation``
            is ``ValidationMode.XSD``. Defaults to the schema the document
            names.
        reporter: Receives validation warnings and errors. Defaults to
            writing them to stderr.
    Raises:
        DomEchoError: (or subclass) if the document or schema can't be
            loaded.
    """
    document = DocumentParser(reporter=reporter).parse(
        src, validation, schema_source
    )
    render(document, out)
