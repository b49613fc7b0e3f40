"""
Tests for the human-readable summary.
"""

import io
from datetime import datetime, timezone

import pytest

from gh_pr_stats.report import format_duration, print_summary
from gh_pr_stats.stats import PullRequestStats


@pytest.mark.parametrize("seconds, expected", [
    (0, "0 seconds"),
    (1, "1 second"),
    (59, "59 seconds"),
    (60, "1 minute"),
    (3661, "1 hour 1 minute 1 second"),
    (86400 * 9 + 3 * 3600 + 4 * 60 + 5, "1 week 2 days 3 hours 4 minutes 5 seconds"),
    (365 * 86400 * 2, "2 years"),
    (150.5, "2 minutes 30 seconds"),
])
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_print_summary(make_pr):
    created = datetime(2024, 2, 1, tzinfo=timezone.utc)
    prs_stats = PullRequestStats()
    short = make_pr(created, 100, title="Quick fix", login="alice")
    long = make_pr(created, title="Big refactor", login="bob")
    prs_stats.record(short, 100)
    prs_stats.record(long, 7200)
    out = io.StringIO()

    print_summary(prs_stats, out)

    assert out.getvalue() == (
        "Pull Requests:\n"
        "\tOpen: 1\n"
        "\tClosed: 1\n"
        "Open Duration:\n"
        "\tMinimum: 1 minute 40 seconds\n"
        "\tMedian: 1 hour 50 seconds\n"
        "\tMaximum: 2 hours\n"
        "Shortest-lived PR:\n"
        "\tTitle: Quick fix\n"
        f"\tURL: {short['html_url']}\n"
        "\tAuthor: alice\n"
        "Longest-lived PR:\n"
        "\tTitle: Big refactor\n"
        f"\tURL: {long['html_url']}\n"
        "\tAuthor: bob\n"
    )


def test_print_summary_empty():
    out = io.StringIO()

    print_summary(PullRequestStats(), out)

    text = out.getvalue()
    assert "\tOpen: 0\n\tClosed: 0\n" in text
    assert "\tMinimum: 0 seconds\n" in text
    assert "Shortest-lived PR" not in text
    assert "Longest-lived PR" not in text
