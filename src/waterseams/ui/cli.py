from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from waterseams.app import (
    import_load_order_files,
    reconcile_database,
    reconcile_load_order_files,
)
from waterseams.config import (
    ConfigurationError,
    ReconcileConfig,
    configure_logging,
    get_reconcile_config,
)
from waterseams.domain.model import FaultIsolation, ModKey
from waterseams.ui.report import render_authorities, render_report

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from waterseams.domain.reconciliation import ReconciliationReport

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Restore water data reverted by plugins")
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser("reconcile", help="Build the water seams patch")
    reconcile.add_argument(
        "inputs",
        nargs="*",
        type=Path,
        help="Load-order dump files, concatenated in the given order",
    )
    reconcile.add_argument(
        "--output",
        type=Path,
        help="Where to write the patch plugin dump (required with input files)",
    )
    reconcile.add_argument(
        "--from-database",
        action="store_true",
        help="Reconcile the load order stored by 'import' and store the patch there",
    )
    reconcile.add_argument(
        "--isolation",
        choices=[isolation.value for isolation in FaultIsolation],
        help="Contain errors per plugin or per record (defaults to config)",
    )
    reconcile.add_argument(
        "--patch-name",
        type=str,
        help="File name of the generated patch plugin (defaults to config)",
    )

    load = subparsers.add_parser("import", help="Store a load order in the database")
    load.add_argument("inputs", nargs="+", type=Path, help="Load-order dump files")

    return parser.parse_args(list(argv))


def _build_config(args: argparse.Namespace) -> ReconcileConfig:
    config = get_reconcile_config()
    if args.isolation is not None:
        config = dataclasses.replace(config, fault_isolation=FaultIsolation(args.isolation))
    if args.patch_name is not None:
        try:
            patch_mod = ModKey(args.patch_name)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
        config = dataclasses.replace(config, patch_mod=patch_mod)
    return config


def _validate_reconcile_args(args: argparse.Namespace) -> None:
    if args.from_database and args.inputs:
        raise ValueError("Pass either input files or --from-database, not both")
    if not args.from_database and not args.inputs:
        raise ValueError("Missing input files (or use --from-database)")
    if args.inputs and args.output is None:
        raise ValueError("Missing --output for the patch plugin dump")


def _log_report(config: ReconcileConfig, report: ReconciliationReport) -> None:
    for line in render_authorities(config.authority_sources, report.authorities_present):
        log.info("%s", line)
    for line in render_report(report):
        log.info("%s", line)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        configure_logging()
        parsed_args = _parse_args(args_list)
        config: ReconcileConfig | None = None
        if parsed_args.command == "reconcile":
            _validate_reconcile_args(parsed_args)
            config = _build_config(parsed_args)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "reconcile" and config is not None:
            if parsed_args.from_database:
                result = reconcile_database(config=config)
            else:
                result = reconcile_load_order_files(
                    parsed_args.inputs,
                    output_path=parsed_args.output,
                    config=config,
                )
            _log_report(config, result.report)
        elif parsed_args.command == "import":
            stored = import_load_order_files(parsed_args.inputs)
            log.info("Stored %s plugins", stored)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
