"""Non-fatal findings collected while translating a catalog."""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass


logger = logging.getLogger(__name__)


class Severity(str, enum.Enum):
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A configuration gap or lossy decision surfaced to the caller."""
    severity: Severity
    message: str
    subject: str = ""

    def __str__(self) -> str:
        if self.subject:
            return f"{self.severity.value}: {self.subject}: {self.message}"
        return f"{self.severity.value}: {self.message}"


class DiagnosticSink(list):
    """List of diagnostics that also forwards each entry to the module logger."""

    def warn(self, message: str, *, subject: str = "") -> Diagnostic:
        diagnostic = Diagnostic(Severity.WARNING, message, subject)
        self.append(diagnostic)
        logger.warning("%s", diagnostic)
        return diagnostic

    @property
    def warnings(self) -> list[Diagnostic]:
        return [diagnostic for diagnostic in self if diagnostic.severity is Severity.WARNING]
