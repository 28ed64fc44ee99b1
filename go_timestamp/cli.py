"""
Command-line interface for the go-timestamp tool.
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from .aggregator import VendorDateAggregator
from .errors import FatalError
from .extraction import GoToolchainExtractor
from .forge import ForgeConfig, GitHubClient
from .interfaces import DependencyExtractor
from .reporting import export_dates_csv, print_report, save_results_json
from .resolvers import ReleaseDateResolver


LONG_TM_HELP = """\
Calculate the approximate (minimum) build timestamp of a Go binary.

The versions of third-party dependencies embedded in the binary bound its
build time from below:
  1. Get the list of dependencies
  2. Get the version of each dependency
  3. Get the date of that version (pseudo-version timestamp or GitHub tag)
  4. Take the latest date: the binary cannot have been built before it
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="go-timestamp",
        description="Estimate when a Go binary was built from its dependency versions"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    tm = subparsers.add_parser(
        "tm",
        aliases=["t"],
        help="Calculate approximate timestamp",
        description=LONG_TM_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    tm.add_argument(
        "path",
        help="Path to the Go binary"
    )
    tm.add_argument(
        "--token",
        default=None,
        help="GitHub token for a higher API rate limit. Default: $GITHUB_TOKEN"
    )
    tm.add_argument(
        "--api-url",
        default=None,
        help="GitHub API base URL. Default: https://api.github.com"
    )
    tm.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-request timeout in seconds. Default: 30"
    )
    tm.add_argument(
        "--min-interval",
        type=float,
        default=None,
        help="Minimum seconds between GitHub requests. Default: 0"
    )
    tm.add_argument(
        "--go",
        default="go",
        help="Go toolchain executable used to read build info. Default: go"
    )
    tm.add_argument(
        "--output-dir",
        default=None,
        help="Also save results as JSON and CSV into this directory"
    )
    tm.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar while resolving dates"
    )
    tm.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def build_config(args: argparse.Namespace) -> ForgeConfig:
    """Environment settings overridden by command-line flags."""
    config = ForgeConfig.from_env()
    overrides = {
        "token": args.token,
        "base_url": args.api_url,
        "timeout": args.timeout,
        "min_interval": args.min_interval,
    }
    values = {key: value for key, value in overrides.items() if value is not None}
    return replace(config, **values)


def calc_timestamp(args: argparse.Namespace) -> int:
    config = build_config(args)
    extractor: DependencyExtractor = GoToolchainExtractor(go_binary=args.go, timeout=config.timeout)
    client = GitHubClient(config)
    aggregator = VendorDateAggregator(ReleaseDateResolver(client), progress=args.progress)

    try:
        records = extractor.extract_dependencies(args.path)
        report = aggregator.aggregate(records)
    except FatalError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        client.close()

    print_report(report)

    if args.output_dir:
        output_dir = Path(args.output_dir)
        results_file = save_results_json(report, output_dir, args.path)
        print(f"\nResults saved to: {results_file}")
        dates_file = export_dates_csv(report, output_dir, args.path)
        if dates_file is not None:
            print(f"Dates saved to: {dates_file}")

    return 0


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    sys.exit(calc_timestamp(args))


if __name__ == "__main__":
    main()
