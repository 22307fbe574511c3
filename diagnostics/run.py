"""Command-line entry point for running process checks."""

from __future__ import annotations

import argparse
from pathlib import Path

from config.controller import ConfigController, ConfigError
from core.logging import enable_file_logging, log_error, log_info, set_log_level
from diagnostics.process_active import ListingErrorMode, ProcessActiveCheck, ProcessLister
from diagnostics.runner import format_results, has_failures, run_checks


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""

    parser = argparse.ArgumentParser(
        description="Check that processes containing the given tokens are running."
    )
    parser.add_argument(
        "commands",
        nargs="*",
        help="Search tokens; each one becomes a 'Process Active' check.",
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory holding default.yaml and an optional override.yaml.",
    )
    parser.add_argument(
        "--strict-listing",
        action="store_true",
        help="Report a failing process listing as an error instead of 'not running'.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (defaults to the configured log_level).",
    )
    return parser.parse_args(argv)


def build_checks(
    commands: list[str],
    lister: ProcessLister,
    listing_errors: ListingErrorMode,
) -> list[ProcessActiveCheck]:
    """Create one process check per search token."""

    return [
        ProcessActiveCheck(command, lister=lister, listing_errors=listing_errors)
        for command in commands
    ]


def main(argv: list[str] | None = None) -> int:
    """Run process checks and return an exit code."""

    args = parse_args(argv)

    try:
        controller = ConfigController.get_instance(config_dir=args.config_dir)
        settings = controller.process_active_settings()
        log_level = controller.get_config()["log_level"]
    except (ConfigError, OSError) as exc:
        log_error(f"Unable to load configuration: {exc}")
        return 2

    set_log_level(args.log_level or log_level)
    if args.log_file is not None:
        enable_file_logging(args.log_file)

    commands = [*settings.commands, *args.commands]
    if not commands:
        log_error("No process tokens given on the command line or in configuration.")
        return 2

    listing_errors = (
        ListingErrorMode.RAISE if args.strict_listing else settings.listing_errors
    )
    lister = ProcessLister(settings.listing_command)
    log_info(
        f"Checking {len(commands)} process token(s) with "
        f"{' '.join(lister.command)!r}"
    )
    reports = run_checks(build_checks(commands, lister, listing_errors))

    print(format_results(reports))

    return 1 if has_failures(reports) else 0


if __name__ == "__main__":
    raise SystemExit(main())
