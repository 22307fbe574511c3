"""Diagnostics checks and runner for procheck."""

from diagnostics.check import Check
from diagnostics.models import (
    CheckReport,
    DiagnosticResult,
    DiagnosticStatus,
    Failure,
    Success,
)
from diagnostics.process_active import (
    ListingErrorMode,
    ProcessActiveCheck,
    ProcessLister,
    ProcessListingError,
)
from diagnostics.runner import format_results, has_failures, run_checks

__all__ = [
    "Check",
    "CheckReport",
    "DiagnosticResult",
    "DiagnosticStatus",
    "Failure",
    "ListingErrorMode",
    "ProcessActiveCheck",
    "ProcessLister",
    "ProcessListingError",
    "Success",
    "format_results",
    "has_failures",
    "run_checks",
]
