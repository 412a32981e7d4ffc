"""Diagnostics collected while generating mapper implementations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

from daogen.kernel.logging import get_logger

logger = get_logger(__name__)


class DiagnosticSink(Protocol):
    """Receiver of problems found in mapper declarations."""

    def report(self, location: str, message: str) -> None:
        """Record an error at ``location``."""
        ...

    def warn(self, location: str, message: str) -> None:
        """Record a problem that does not prevent generation."""
        ...


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single problem found during generation."""

    location: str
    message: str
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


class DiagnosticReport:
    """Accumulates diagnostics across a whole generation run."""

    __slots__ = ("_diagnostics",)

    def __init__(self) -> None:
        """Initialize an empty report."""
        self._diagnostics: list[Diagnostic] = []

    def report(self, location: str, message: str) -> None:
        """Record an error."""
        logger.debug("Diagnostic at {location}: {message}", location=location, message=message)
        self._diagnostics.append(Diagnostic(location, message))

    def warn(self, location: str, message: str) -> None:
        """Record a warning."""
        self._diagnostics.append(Diagnostic(location, message, severity="warning"))

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """All diagnostics, in reporting order."""
        return self._diagnostics

    @property
    def errors(self) -> list[Diagnostic]:
        """Diagnostics with severity 'error'."""
        return [d for d in self._diagnostics if d.severity == "error"]

    @property
    def warnings(self) -> list[Diagnostic]:
        """Diagnostics with severity 'warning'."""
        return [d for d in self._diagnostics if d.severity == "warning"]

    @property
    def has_errors(self) -> bool:
        """True if any error-level diagnostic exists."""
        return any(d.severity == "error" for d in self._diagnostics)

    def __len__(self) -> int:
        return len(self._diagnostics)
