"""Interface shared by every diagnostics check."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from diagnostics.models import DiagnosticResult


@runtime_checkable
class Check(Protocol):
    """A named probe that reports a result each time it is invoked."""

    def check(self) -> DiagnosticResult:
        """Run the probe and return ``Success`` or ``Failure``."""
        ...

    def name(self) -> str:
        """Return the human-readable label of the check."""
        ...
