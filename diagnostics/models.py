"""Models for diagnostics results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class DiagnosticStatus(str, Enum):
    """Status for diagnostics checks."""

    PASS = "PASS"
    FAIL = "FAIL"


@dataclass(frozen=True)
class DiagnosticResult:
    """Abstract outcome of a single check invocation.

    Build ``Success`` or ``Failure`` instead; the variant type is what carries
    pass/fail, ``status`` simply mirrors it.
    """

    status: ClassVar[DiagnosticStatus]

    message: str = ""

    def __post_init__(self) -> None:
        if type(self) is DiagnosticResult:
            raise TypeError("DiagnosticResult is abstract; use Success or Failure")


@dataclass(frozen=True)
class Success(DiagnosticResult):
    """The check passed."""

    status: ClassVar[DiagnosticStatus] = DiagnosticStatus.PASS


@dataclass(frozen=True)
class Failure(DiagnosticResult):
    """The check failed; ``message`` explains why."""

    status: ClassVar[DiagnosticStatus] = DiagnosticStatus.FAIL


@dataclass(frozen=True)
class CheckReport:
    """Result of a check paired with the check's display name."""

    name: str
    result: DiagnosticResult

    @property
    def status(self) -> DiagnosticStatus:
        return self.result.status
