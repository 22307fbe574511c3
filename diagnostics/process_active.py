"""Check that a process containing a given token is running on the host."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import os
import subprocess
import sys
from typing import Sequence

from core.logging import log_check_result, log_warning, logger as LOGGER
from diagnostics.models import DiagnosticResult, Failure, Success

# "ww" keeps ps from cutting command lines to the terminal width.
DEFAULT_LISTING_COMMAND: tuple[str, ...] = ("ps", "-efww")

# Lines carrying this word are treated as the search tool's own entry, even
# when a real process command line happens to contain it.
_SELF_MATCH_MARKERS: tuple[str, ...] = ("grep",)


class ProcessListingError(RuntimeError):
    """Raised when the process listing command could not be run."""


class ListingErrorMode(str, Enum):
    """How a failure to list processes is reported by the check."""

    COLLAPSE = "collapse"
    RAISE = "raise"


@dataclass(frozen=True)
class ProcessListing:
    """Raw output of one process listing run."""

    returncode: int
    lines: tuple[str, ...]


class ProcessLister:
    """Runs the host process listing command without a shell."""

    def __init__(self, command: Sequence[str] = DEFAULT_LISTING_COMMAND) -> None:
        if not command:
            raise ValueError("Listing command must not be empty.")
        self._command = tuple(command)

    @property
    def command(self) -> tuple[str, ...]:
        return self._command

    def list_processes(self) -> ProcessListing:
        """Return every line printed by the listing command.

        Raises:
            ProcessListingError: If the command cannot be started or exits
                with a non-zero status.
        """

        env = {key: value for key, value in os.environ.items() if key != "COLUMNS"}
        try:
            result = subprocess.run(
                list(self._command),
                check=False,
                capture_output=True,
                text=True,
                env=env,
            )
        except OSError as exc:
            raise ProcessListingError(
                f"Unable to run {' '.join(self._command)!r}: {exc}"
            ) from exc

        if result.returncode != 0:
            stderr = result.stderr.strip()
            raise ProcessListingError(
                f"{' '.join(self._command)!r} exited with status {result.returncode}"
                + (f": {stderr}" if stderr else "")
            )

        return ProcessListing(
            returncode=result.returncode,
            lines=tuple(result.stdout.splitlines()),
        )


class ProcessActiveCheck:
    """Pass when at least one running process line contains ``command``.

    The token is matched as a plain substring of each ``ps -efww`` line, so
    ``"nginx"`` matches ``nginx: worker process`` as well as
    ``/usr/sbin/nginx -g daemon off;``.
    """

    def __init__(
        self,
        command: str,
        *,
        lister: ProcessLister | None = None,
        listing_errors: ListingErrorMode | str = ListingErrorMode.COLLAPSE,
    ) -> None:
        self._command = command
        self._lister = lister if lister is not None else ProcessLister()
        self._listing_errors = ListingErrorMode(listing_errors)

    @property
    def command(self) -> str:
        return self._command

    def name(self) -> str:
        return f"Process Active: {self._command}"

    def check(self) -> DiagnosticResult:
        try:
            listing = self._lister.list_processes()
        except ProcessListingError as exc:
            if self._listing_errors is ListingErrorMode.RAISE:
                raise
            log_warning(f"Process listing failed, reporting no match: {exc}")
            return self._report(self._not_found())

        matches = self.matching_lines(listing.lines)
        if not matches:
            return self._report(self._not_found())
        LOGGER.debug("%d process line(s) contain %r", len(matches), self._command)
        return self._report(Success())

    def matching_lines(self, lines: Sequence[str]) -> list[str]:
        """Return the lines containing the token, minus self-match artifacts."""

        return [
            line
            for line in lines
            if self._command in line and not self._is_self_match(line)
        ]

    def _is_self_match(self, line: str) -> bool:
        if any(marker in line for marker in _SELF_MATCH_MARKERS):
            return True
        stripped = line.rstrip()
        return any(
            stripped == invocation or stripped.endswith(f" {invocation}")
            for invocation in self._search_invocations()
        )

    def _search_invocations(self) -> tuple[str, ...]:
        """Command lines of the listing tool and of the process running the check."""

        own = " ".join(sys.orig_argv).rstrip()
        listing = " ".join(self._lister.command)
        return (listing, own) if own else (listing,)

    def _not_found(self) -> Failure:
        return Failure(f'There is no process running containing "{self._command}"')

    def _report(self, result: DiagnosticResult) -> DiagnosticResult:
        log_check_result(self.name(), result.status.value, result.message)
        return result
