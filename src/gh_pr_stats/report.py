"""
Human-readable summary output
"""

import sys
from typing import Optional, TextIO

from gh_pr_stats.stats import BoundaryPullRequest, PullRequestStats


# (unit name, seconds), largest first; a year is 365 days
DURATION_UNITS = [
    ("year", 365 * 24 * 3600),
    ("week", 7 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
]


def format_duration(seconds: float) -> str:
    """
    Format a number of seconds as e.g. "1 week 2 days 3 hours 4 minutes 5 seconds"

    Zero-valued units are left out and fractional seconds are truncated.
    """
    remaining = int(seconds)
    if remaining <= 0:
        return "0 seconds"

    parts = []
    for name, size in DURATION_UNITS:
        value, remaining = divmod(remaining, size)
        if value:
            parts.append(f"{value} {name}" if value == 1 else f"{value} {name}s")

    return " ".join(parts)


def _print_boundary(label: str, boundary: Optional[BoundaryPullRequest], stream: TextIO) -> None:
    if boundary is None:
        return

    pr = boundary.pull_request
    author = (pr.get("user") or {}).get("login", "")
    print(f"{label}:", file=stream)
    print(f"\tTitle: {pr.get('title', '')}", file=stream)
    print(f"\tURL: {pr.get('html_url', '')}", file=stream)
    print(f"\tAuthor: {author}", file=stream)


def print_summary(prs_stats: PullRequestStats, stream: Optional[TextIO] = None) -> None:
    """
    Print open/closed counts, min/median/max open duration and the
    shortest- and longest-lived pull requests

    The shortest/longest sections are omitted when no pull request was
    counted.

    Args:
        prs_stats: Accumulator after the fetch loop finished
        stream: Destination (defaults to stdout)
    """
    if stream is None:
        stream = sys.stdout

    summary = prs_stats.summarize()

    print("Pull Requests:", file=stream)
    print(f"\tOpen: {prs_stats.open_count}", file=stream)
    print(f"\tClosed: {prs_stats.closed_count}", file=stream)
    print("Open Duration:", file=stream)
    print(f"\tMinimum: {format_duration(summary.minimum)}", file=stream)
    print(f"\tMedian: {format_duration(summary.median)}", file=stream)
    print(f"\tMaximum: {format_duration(summary.maximum)}", file=stream)

    if summary.is_empty:
        return

    _print_boundary("Shortest-lived PR", prs_stats.shortest, stream)
    _print_boundary("Longest-lived PR", prs_stats.longest, stream)
