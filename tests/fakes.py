"""Fake collaborators shared by the test modules."""

from __future__ import annotations

import subprocess
import sys

from diagnostics.process_active import ProcessLister, ProcessListing

PS_LINES = (
    "UID          PID    PPID  C STIME TTY          TIME CMD",
    "root           1       0  0 09:12 ?        00:00:02 /sbin/init",
    "root         812       1  0 09:12 ?        00:00:00 nginx: master process /usr/sbin/nginx",
    "www         1234     812  0 09:12 ?        00:00:01 nginx: worker process",
    "alice       4242    4100  0 09:30 pts/0    00:00:00 -bash",
)


class FakeLister(ProcessLister):
    """Serves a fixed process table instead of running ``ps``."""

    def __init__(self, lines=PS_LINES, error: Exception | None = None) -> None:
        super().__init__()
        self.lines = tuple(lines)
        self.error = error
        self.calls = 0

    def list_processes(self) -> ProcessListing:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return ProcessListing(returncode=0, lines=self.lines)


def spawn_sleeper(token: str, padding: int = 120) -> subprocess.Popen:
    """Start a real idle process whose long argv ends with ``token``."""

    return subprocess.Popen(
        [
            sys.executable,
            "-c",
            "import time; time.sleep(60)",
            "x" * padding,
            "--worker",
            token,
        ]
    )


def stop_process(process: subprocess.Popen) -> None:
    process.terminate()
    process.wait(timeout=10)
