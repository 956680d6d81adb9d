from __future__ import annotations


class DomEchoError(Exception):
    pass


class ParseError(DomEchoError):
    pass


class SchemaError(DomEchoError):
    pass
