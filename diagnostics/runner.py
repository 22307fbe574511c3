"""Diagnostics runner utilities."""

from __future__ import annotations

from collections.abc import Iterable

from core.logging import logger as LOGGER
from diagnostics.check import Check
from diagnostics.models import CheckReport, DiagnosticStatus, Failure


def format_results(reports: Iterable[CheckReport]) -> str:
    """Return a human-friendly diagnostics report."""

    lines = ["Diagnostics report", "-" * 60]
    for report in reports:
        status = report.status.value
        message = report.result.message
        if message:
            lines.append(f"[{status}] {report.name}: {message}")
        else:
            lines.append(f"[{status}] {report.name}")
    lines.append("-" * 60)
    return "\n".join(lines)


def has_failures(reports: Iterable[CheckReport]) -> bool:
    """Return True when at least one report failed."""

    return any(report.status is DiagnosticStatus.FAIL for report in reports)


def run_checks(checks: Iterable[Check]) -> list[CheckReport]:
    """Run checks one after the other and return their reports."""

    reports: list[CheckReport] = []
    for check in checks:
        name = check.name()
        try:
            result = check.check()
        except Exception as exc:  # noqa: BLE001 - remaining checks must still run
            LOGGER.exception("Check failed: %s", name)
            result = Failure(f"Check raised exception: {exc}")
        reports.append(CheckReport(name=name, result=result))
    return reports
