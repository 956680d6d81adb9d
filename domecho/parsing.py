from __future__ import annotations

import enum
import os
from typing import BinaryIO, Union
from urllib.parse import urljoin

from lxml import etree

from domecho import nodes
from domecho.constants import XSI_NO_NAMESPACE_SCHEMA_LOCATION, XSI_SCHEMA_LOCATION
from domecho.exceptions import ParseError, SchemaError
from domecho.reporting import (
    Reporter,
    Severity,
    StreamReporter,
    ValidationOccurrence,
    report,
    report_log,
)

__all__ = ["ValidationMode", "DocumentParser", "parse"]

AnySource = Union[str, "os.PathLike[str]", BinaryIO]


class ValidationMode(enum.Enum):
    NONE = "none"
    DTD = "dtd"
    XSD = "xsd"


def _is_well_formedness_error(entry: etree._LogEntry) -> bool:
    if entry.level == etree.ErrorLevels.FATAL:
        return True
    return (
        entry.domain == etree.ErrorDomains.PARSER
        and entry.level >= etree.ErrorLevels.ERROR
    )


def _describe(src: AnySource) -> str:
    if isinstance(src, (str, os.PathLike)):
        return os.fspath(src)
    return str(getattr(src, "name", src))


class DocumentParser:
    """
    Parses XML documents into :class:`domecho.nodes.Node` trees, optionally
    validating them against a DTD or an XML Schema.

    Warnings and validity errors found along the way are passed to the
    parser's reporter as they're found. They don't stop the document being
    parsed; only a document which is not well-formed (or can't be read) does,
    in which case :class:`domecho.exceptions.ParseError` is raised.
    """

    reporter: Reporter

    def __init__(self, reporter: Reporter | None = None):
        """
        Args:
            reporter: Receives validation occurrences. Defaults to a
                :class:`domecho.reporting.StreamReporter` writing to stderr.
        """
        self.reporter = StreamReporter() if reporter is None else reporter

    def create_parser(self, mode: ValidationMode) -> etree.XMLParser:
        if mode is ValidationMode.DTD:
            # Recover so that validity errors don't cost us the document.
            # Well-formedness errors are still logged as fatal.
            return etree.XMLParser(
                load_dtd=True,
                dtd_validation=True,
                attribute_defaults=True,
                recover=True,
            )
        return etree.XMLParser()

    def parse(
        self,
        src: AnySource,
        mode: ValidationMode = ValidationMode.NONE,
        schema_source: AnySource | None = None,
    ) -> nodes.Node:
        """
        Parse and (optionally) validate a document.

        Args:
            src: A filesystem path or binary file object to read the
                document from.
            mode: The kind of validation to perform while parsing.
            schema_source: The XML Schema to validate against. Only allowed
                with ``ValidationMode.XSD``; if omitted the schema named by
                the document's ``xsi`` schema location attributes is used.
        Returns:
            The Document node of the parsed document.
        Raises:
            ParseError: if the document can't be read or isn't well-formed
            SchemaError: if the XML Schema can't be loaded
        """
        if schema_source is not None and mode is not ValidationMode.XSD:
            raise ValueError(
                "schema_source can only be used with ValidationMode.XSD, "
                f"got: {mode}"
            )

        tree = self.parse_tree(src, self.create_parser(mode))

        if mode is ValidationMode.XSD:
            self.validate_schema(tree, schema_source)

        return nodes.from_tree(tree)

    def parse_tree(
        self, src: AnySource, parser: etree.XMLParser
    ) -> etree._ElementTree[etree._Element]:
        try:
            tree = etree.parse(src, parser)
        except etree.XMLSyntaxError as cause:
            # The exception's own log can hold entries from earlier parses
            report_log(self.reporter, parser.error_log)
            raise ParseError(f"Unable to parse {_describe(src)}: {cause}") from cause
        except OSError as cause:
            raise ParseError(f"Unable to read {_describe(src)}: {cause}") from cause

        report_log(self.reporter, parser.error_log)

        # A recovering parser can return a tree for a document which is not
        # well-formed.
        malformed = [e for e in parser.error_log if _is_well_formedness_error(e)]
        if malformed or tree.getroot() is None:
            reason = malformed[0].message if malformed else "no root element"
            raise ParseError(f"Unable to parse {_describe(src)}: {reason}")

        return tree

    def find_schema_location(
        self, tree: etree._ElementTree[etree._Element]
    ) -> str | None:
        """
        Get the location of the XML Schema for ``tree``'s root element from
        its ``xsi:noNamespaceSchemaLocation`` or ``xsi:schemaLocation``
        attribute, resolved against the document's URL.
        """
        root = tree.getroot()
        namespace = etree.QName(root).namespace

        if namespace is None:
            location = root.get(XSI_NO_NAMESPACE_SCHEMA_LOCATION)
        else:
            # Whitespace separated namespace, location pairs
            pairs = root.get(XSI_SCHEMA_LOCATION, "").split()
            location = dict(zip(pairs[::2], pairs[1::2])).get(namespace)

        if location is None:
            return None

        base = tree.docinfo.URL
        return location if base is None else urljoin(base, location)

    def load_schema(self, source: AnySource) -> etree.XMLSchema:
        try:
            # Schema default attribute values are added to validated trees
            return etree.XMLSchema(etree.parse(source), attribute_defaults=True)
        except (etree.XMLSyntaxError, etree.XMLSchemaParseError, OSError) as cause:
            raise SchemaError(
                f"Unable to load XML Schema from {_describe(source)}: {cause}"
            ) from cause

    def validate_schema(
        self,
        tree: etree._ElementTree[etree._Element],
        schema_source: AnySource | None,
    ) -> None:
        if schema_source is None:
            schema_source = self.find_schema_location(tree)

        if schema_source is None:
            root = tree.getroot()
            report(
                self.reporter,
                ValidationOccurrence(
                    Severity.ERROR,
                    tree.docinfo.URL,
                    root.sourceline or 0,
                    "Cannot find the declaration of element "
                    f"'{etree.QName(root).localname}'.",
                ),
            )
            return

        schema = self.load_schema(schema_source)
        schema.validate(tree)
        report_log(self.reporter, schema.error_log)


def parse(
    src: AnySource,
    mode: ValidationMode = ValidationMode.NONE,
    schema_source: AnySource | None = None,
    reporter: Reporter | None = None,
) -> nodes.Node:
    """
    Parse ``src`` with a :class:`DocumentParser` created with ``reporter``.

    See :meth:`DocumentParser.parse`.
    """
    return DocumentParser(reporter=reporter).parse(src, mode, schema_source)
