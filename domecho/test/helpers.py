from __future__ import annotations

import importlib_resources

from domecho.reporting import Reporter, Severity, ValidationOccurrence


def data_path(name: str) -> str:
    """Get the filesystem path of a file in the test data dir."""
    return str(importlib_resources.files("domecho.test") / "data" / name)


class CollectingReporter(Reporter):
    def __init__(self) -> None:
        self.occurrences: list[ValidationOccurrence] = []
        self.calls: list[str] = []

    def warning(self, occurrence: ValidationOccurrence) -> None:
        self.calls.append("warning")
        self.occurrences.append(occurrence)

    def error(self, occurrence: ValidationOccurrence) -> None:
        self.calls.append("error")
        self.occurrences.append(occurrence)

    def fatal_error(self, occurrence: ValidationOccurrence) -> None:
        self.calls.append("fatal_error")
        self.occurrences.append(occurrence)

    def severities(self) -> set[Severity]:
        return {o.severity for o in self.occurrences}
