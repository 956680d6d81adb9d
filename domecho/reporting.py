"""
Reporters receive the warnings and errors found while a document is parsed
and validated.

Reporting an occurrence never affects parsing: whether parsing continues
after an error is decided by the parser alone.
"""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass
from typing import Iterable, TextIO

from lxml import etree
from typing_extensions import Final, Protocol

__all__ = [
    "Severity",
    "ValidationOccurrence",
    "Reporter",
    "StreamReporter",
    "report",
    "report_log",
]

UNKNOWN_SOURCE: Final = "??"


class Severity(enum.Enum):
    WARNING = "Warning"
    ERROR = "Error"
    FATAL = "Fatal Error"

    @property
    def label(self) -> str:
        return self.value


_LXML_LEVELS: Final = {
    etree.ErrorLevels.WARNING: Severity.WARNING,
    etree.ErrorLevels.ERROR: Severity.ERROR,
    etree.ErrorLevels.FATAL: Severity.FATAL,
}


@dataclass(frozen=True)
class ValidationOccurrence:
    severity: Severity
    source_locator: str | None
    line: int
    message: str

    @classmethod
    def from_log_entry(cls, entry: etree._LogEntry) -> ValidationOccurrence:
        return cls(
            severity=_LXML_LEVELS[entry.level],
            source_locator=entry.filename,
            line=entry.line,
            message=entry.message,
        )

    def format(self) -> str:
        source = UNKNOWN_SOURCE if self.source_locator is None else self.source_locator
        return (
            f"{self.severity.label}: URI={source} Line={self.line}: {self.message}"
        )


class Reporter(Protocol):
    def warning(self, occurrence: ValidationOccurrence) -> None:
        ...

    def error(self, occurrence: ValidationOccurrence) -> None:
        ...

    def fatal_error(self, occurrence: ValidationOccurrence) -> None:
        ...


class StreamReporter(Reporter):
    """
    A ``Reporter`` which writes each occurrence as a single line to a text
    stream.

    Args:
        out: The stream to write to. Defaults to ``sys.stderr`` as it is when
            each occurrence is reported.
    """

    def __init__(self, out: TextIO | None = None):
        self._out = out

    @property
    def out(self) -> TextIO:
        return sys.stderr if self._out is None else self._out

    def _write(self, occurrence: ValidationOccurrence) -> None:
        print(occurrence.format(), file=self.out)

    def warning(self, occurrence: ValidationOccurrence) -> None:
        self._write(occurrence)

    def error(self, occurrence: ValidationOccurrence) -> None:
        self._write(occurrence)

    def fatal_error(self, occurrence: ValidationOccurrence) -> None:
        self._write(occurrence)


def report(reporter: Reporter, occurrence: ValidationOccurrence) -> None:
    """Pass ``occurrence`` to the reporter method matching its severity."""
    if occurrence.severity is Severity.WARNING:
        reporter.warning(occurrence)
    elif occurrence.severity is Severity.ERROR:
        reporter.error(occurrence)
    else:
        reporter.fatal_error(occurrence)


def report_log(reporter: Reporter, error_log: Iterable[etree._LogEntry]) -> None:
    """
    Report each entry of an lxml error log in the order they were logged.

    Entries below warning level (informational messages) are skipped.
    """
    for entry in error_log:
        if entry.level in _LXML_LEVELS:
            report(reporter, ValidationOccurrence.from_log_entry(entry))
