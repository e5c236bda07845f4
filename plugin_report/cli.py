#!/usr/bin/env python3
"""Print the plugin documentation migration report.

Usage:
    plugin-report                          # Report for the last finalized month
    plugin-report --period 202401          # Report for a given month
    plugin-report --status TODO --top 20   # Most installed plugins still to do
    plugin-report --output report.json     # Also save the full report
"""

import argparse
import json
import sys
from pathlib import Path

from tabulate import tabulate

from plugin_report.errors import ReportError
from plugin_report.models import Status
from plugin_report.pulls import load_pulls
from plugin_report.report import ReportBuilder
from plugin_report.sources.base import DEFAULT_TIMEOUT, CachedFetcher
from plugin_report.sources.installs import validate_period


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Report documentation migration status of Jenkins plugins",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s --pulls pulls.json           # Link open migration pull requests
    %(prog)s --status PR                  # Only show plugins with an open PR
        """,
    )
    parser.add_argument(
        "--documentation-url",
        default=None,
        help="Override the documentation feed URL",
    )
    parser.add_argument(
        "--installs-url",
        default=None,
        help="Override the installs feed URL",
    )
    parser.add_argument(
        "--period",
        type=validate_period,
        default=None,
        help="Installs period as YYYYMM (default: 35 days ago)",
    )
    parser.add_argument(
        "--pulls",
        type=Path,
        default=Path("pulls.json"),
        help="JSON file mapping plugin name to open PR number (default: pulls.json)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"HTTP request timeout in seconds (default: {DEFAULT_TIMEOUT})",
    )
    parser.add_argument(
        "--status",
        choices=[s.value for s in Status],
        default=None,
        help="Only print plugins with this status",
    )
    parser.add_argument(
        "--top",
        type=positive_int,
        default=50,
        help="Number of plugins to print (default: 50)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the full report as JSON to this file",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        pulls = load_pulls(args.pulls)
        builder = ReportBuilder(
            CachedFetcher(timeout=args.timeout),
            pulls=pulls,
            documentation_url=args.documentation_url,
            installs_url=args.installs_url,
            period=args.period,
        )
        report = builder.build()
    except (ReportError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    rows = report.plugins
    if args.status:
        rows = [p for p in rows if p.status.value == args.status]
    rows = rows[: args.top]

    print(f"\nTop {len(rows)} plugins by installs ({report.period}):")
    table = [
        [i, p.name, p.installs, p.status.value, p.action or ""]
        for i, p in enumerate(rows, 1)
    ]
    print(tabulate(table, headers=["#", "Plugin", "Installs", "Status", "Action"]))

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, "w") as f:
            json.dump(
                report.model_dump(mode="json", by_alias=True, exclude_none=True),
                f,
                indent=2,
            )
        print(f"\nReport saved to {args.output}")

    print(f"\n{'='*60}")
    print("SUMMARY")
    print(f"{'='*60}")
    print(f"Done:   {report.done}")
    print(f"PR:     {report.pr}")
    print(f"TODO:   {report.todo}")
    print(f"Total:  {report.total}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
