#!/usr/bin/env python3
"""
CSV Loader for Databend

Streams a CSV file, URL or standard input into a Databend table as batched
INSERT statements.

Usage:
    bendload data.csv --table t                       # Table must exist
    bendload data.csv --table t --schema a:uint8,b:uint64
    cat data.csv | bendload --table t --skip-head-lines 1
    bendload https://example.com/data.csv --table t --batch-size 50000
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from colorama import Fore, Style, init

from bendload.config.logging_setup import setup_logging
from bendload.config.settings import SUPPORTED_FORMATS, SUPPORTED_PROFILES, get_load_config
from bendload.core.extractors.source_reader import resolve_source
from bendload.core.jobs.load_job import LoadReport, LoadRequest, run_load
from bendload.utils.errors import LoadError
from bendload.utils.query_client import QueryClient

# Initialize colorama
init(autoreset=True)

logger = logging.getLogger(__name__)


def print_info(msg: str, color=Fore.CYAN):
    """Print colored info message"""
    print(f"{color}[INFO]{Style.RESET_ALL} {msg}")


def print_success(msg: str):
    print(f"{Fore.GREEN}[SUCCESS]{Style.RESET_ALL} {msg}")


def print_warning(msg: str):
    print(f"{Fore.YELLOW}[WARNING]{Style.RESET_ALL} {msg}")


def print_error(msg: str):
    print(f"{Fore.RED}[ERROR]{Style.RESET_ALL} {msg}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bendload",
        description="Load a CSV file, URL or stdin into a Databend table",
    )
    parser.add_argument(
        "load",
        nargs="?",
        default=None,
        help="file or http(s) URL to load, for example foo.csv (reads stdin when omitted)",
    )
    parser.add_argument("--table", required=True, help="database table")
    parser.add_argument(
        "--schema",
        default=None,
        help="schema used to create the table when missing, for example: a:uint8, b:uint64, c:String",
    )
    parser.add_argument(
        "--skip-head-lines",
        type=int,
        default=None,
        help="number of leading lines to ignore, for example 1 for a header row (BENDLOAD_SKIP_HEAD_LINES)",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="lines per INSERT statement (BENDLOAD_BATCH_SIZE, default 100000)",
    )
    parser.add_argument("--format", default="csv", choices=SUPPORTED_FORMATS, help="the format of file")
    parser.add_argument(
        "--profile", default="local", choices=SUPPORTED_PROFILES, help="profile to run the load with"
    )
    parser.add_argument("--no-progress", action="store_true", help="hide the batch progress bar")
    return parser


def print_report(report: LoadReport):
    for outcome in report.failures:
        print_error(f"Batch {outcome.batch_number}: {outcome.message}")

    print("\n" + "=" * 70)
    if report.batches_dispatched == 0:
        print_warning(f"No data loaded into {report.table}")
    elif report.completed_with_errors:
        print_warning(
            f"Loaded {report.records_sent:,} rows into {report.table}, "
            f"{report.batches_failed}/{report.batches_dispatched} batches failed"
        )
    else:
        print_success(
            f"✅ Loaded {report.records_sent:,} rows into {report.table} "
            f"in {report.batches_dispatched} batches"
        )
    print_info(f"⏱️  Total time: {report.elapsed:.2f} seconds")
    print("=" * 70 + "\n")


async def _run(args: argparse.Namespace) -> LoadReport:
    config = get_load_config()
    request = LoadRequest(
        source=resolve_source(args.load),
        table=args.table,
        schema=args.schema,
        skip_head_lines=config["skip_head_lines"] if args.skip_head_lines is None else args.skip_head_lines,
        batch_size=config["batch_size"] if args.batch_size is None else args.batch_size,
        file_format=args.format,
        profile=args.profile,
    )
    client = QueryClient.from_profile(request.profile)
    try:
        return await run_load(
            request,
            client,
            workers=config["workers"],
            fetch_timeout=config["fetch_timeout"],
            show_progress=not args.no_progress,
        )
    finally:
        client.close()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        report = asyncio.run(_run(args))
    except KeyboardInterrupt:
        print("\n")
        print_warning("Load cancelled")
        return 130
    except (LoadError, ValueError) as e:
        print_error(f"Load did not complete: {e}")
        logger.error(f"Load failed: {e}", exc_info=True)
        return 1

    print_report(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
