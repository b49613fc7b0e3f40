#!/usr/bin/env python3
"""
GitHub Pull Request Lifetime Statistics

Fetches the pull requests of a single repository created within a date
window and reports how long they stayed open.

Usage:
    # Summary for all pull requests against master
    gh-pr-stats --owner myorg --repo myrepo

    # Restrict to a date window
    gh-pr-stats -o myorg -r myrepo --start 2024-01-01 --end 2024-07-01

    # Full per-PR details as CSV for other tools
    gh-pr-stats -o myorg -r myrepo --csv > pull_requests.csv

    # GitHub Enterprise
    gh-pr-stats -o myorg -r myrepo --enterprise https://ghe.example.com/api/v3

Requirements:
    - GITHUB_TOKEN environment variable (or a .env file) with read access
      to the repository
"""

import argparse
import sys
from typing import List, Optional

from gh_pr_stats import PROJECT_NAME, __version__
from gh_pr_stats.collector import collect_pull_requests
from gh_pr_stats.config import (
    DEFAULT_BASE_BRANCH,
    DEFAULT_PER_PAGE,
    DEFAULT_TIMEOUT,
    ConfigError,
    build_config,
    load_token,
)
from gh_pr_stats.details import PullRequestDetails, export_to_csv
from gh_pr_stats.github_client import FetchError, GitHubPRFetcher
from gh_pr_stats.report import print_summary
from gh_pr_stats.stats import PullRequestStats


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that exits with status 1 on bad arguments"""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}. Please use --help for available options.\n")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog=PROJECT_NAME,
        description="Report open/closed counts and open-duration statistics "
                    "for a GitHub repository's pull requests",
    )
    parser.add_argument(
        "-o", "--owner",
        required=True,
        help="GitHub Owner/Org name (required)"
    )
    parser.add_argument(
        "-r", "--repo",
        required=True,
        help="GitHub Repo name (required)"
    )
    parser.add_argument(
        "-s", "--start",
        help="Only count PRs created after this date (YYYY-MM-DD, default: epoch)"
    )
    parser.add_argument(
        "-e", "--end",
        help="Only count PRs created before this date (YYYY-MM-DD, default: now)"
    )
    parser.add_argument(
        "--enterprise",
        help="GitHub Enterprise URL in the format http(s)://[hostname]/api/v3"
    )
    parser.add_argument(
        "--base",
        default=DEFAULT_BASE_BRANCH,
        help=f"Base branch filter (default: {DEFAULT_BASE_BRANCH}, pass \"\" for all branches)"
    )
    parser.add_argument(
        "--per-page",
        type=int,
        default=DEFAULT_PER_PAGE,
        help=f"Pull requests per API page (default: {DEFAULT_PER_PAGE}, max 100)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"Per-request timeout in seconds (default: {DEFAULT_TIMEOUT})"
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        help="Dump the full PR details to stdout as CSV for stats processing by other tools"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Display verbose messages on stderr"
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"{PROJECT_NAME} {__version__}",
        help="Display version information"
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not 1 <= args.per_page <= 100:
        parser.error("--per-page must be between 1 and 100")
    if args.timeout <= 0:
        parser.error("--timeout must be positive")

    return args


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point

    1. Parse command line arguments and read GITHUB_TOKEN
    2. Page through the repository's pull requests, newest first
    3. Print either the summary or the CSV export

    Exits with status 1 on a missing token, a bad argument or any
    failure talking to GitHub; nothing is printed to stdout in that case.
    """
    args = parse_args(argv)

    try:
        token = load_token()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Create a .env file or export GITHUB_TOKEN=your_token", file=sys.stderr)
        sys.exit(1)

    config = build_config(args, token)

    if config.verbose:
        print(f"Fetching PRs for {config.owner}/{config.repo} created between "
              f"{config.start.isoformat()} and {config.end.isoformat()}...", file=sys.stderr)

    prs_stats = PullRequestStats()
    details: Optional[List[PullRequestDetails]] = [] if config.csv else None

    with GitHubPRFetcher(config.token, base_url=config.base_url, timeout=config.timeout) as fetcher:
        try:
            pages = collect_pull_requests(fetcher, config, prs_stats, details)
        except FetchError as e:
            print(f"Error retrieving pull requests: {e}", file=sys.stderr)
            sys.exit(1)

    if config.verbose:
        print(f"✓ {prs_stats.total} PRs counted across {pages} page(s)\n", file=sys.stderr)

    if config.csv:
        export_to_csv(details)
    else:
        print_summary(prs_stats)


if __name__ == "__main__":
    main()
