"""
Unit tests for the PullRequestStats accumulator.
"""

import random
from datetime import datetime, timezone

import pytest

from gh_pr_stats.stats import BoundaryPullRequest, DurationSummary, PullRequestStats

CREATED = datetime(2024, 2, 1, tzinfo=timezone.utc)


def reference_summary(durations):
    ordered = sorted(durations)
    n = len(ordered)
    if n % 2:
        median = ordered[n // 2]
    else:
        median = (ordered[n // 2 - 1] + ordered[n // 2]) / 2
    return ordered[0], median, ordered[-1]


# ============================================================================
# record()
# ============================================================================

class TestRecord:

    def test_counts_open_and_closed(self, make_pr):
        prs_stats = PullRequestStats()
        prs_stats.record(make_pr(CREATED, state="open"), 10)
        prs_stats.record(make_pr(CREATED, 20), 20)
        prs_stats.record(make_pr(CREATED, 30), 30)

        assert prs_stats.open_count == 1
        assert prs_stats.closed_count == 2
        assert prs_stats.total == 3
        assert prs_stats.durations == [10, 20, 30]

    def test_first_record_sets_both_boundaries(self, make_pr):
        prs_stats = PullRequestStats()
        pr = make_pr(CREATED, 42)
        prs_stats.record(pr, 42)

        assert prs_stats.shortest == BoundaryPullRequest(pr, 42)
        assert prs_stats.longest == BoundaryPullRequest(pr, 42)
        assert prs_stats.shortest is not prs_stats.longest

    def test_ties_keep_earlier_record(self, make_pr):
        prs_stats = PullRequestStats()
        first = make_pr(CREATED, 50, title="first")
        second = make_pr(CREATED, 50, title="second")
        prs_stats.record(first, 50)
        prs_stats.record(second, 50)

        assert prs_stats.shortest.pull_request is first
        assert prs_stats.longest.pull_request is first

    def test_boundaries_correct_after_every_prefix(self, make_pr):
        rng = random.Random(7)
        durations = [rng.randint(0, 10_000_000) for _ in range(200)]
        prs_stats = PullRequestStats()

        for i, duration in enumerate(durations, 1):
            prs_stats.record(make_pr(CREATED, duration), duration)
            assert prs_stats.shortest.duration == min(durations[:i])
            assert prs_stats.longest.duration == max(durations[:i])

    def test_boundaries_start_unset(self):
        prs_stats = PullRequestStats()
        assert prs_stats.shortest is None
        assert prs_stats.longest is None


# ============================================================================
# summarize()
# ============================================================================

class TestSummarize:

    def test_three_prs_scenario(self, make_pr):
        prs_stats = PullRequestStats()
        prs = {d: make_pr(CREATED, d) for d in (100, 300, 200)}
        for duration, pr in prs.items():
            prs_stats.record(pr, duration)

        summary = prs_stats.summarize()

        assert summary == DurationSummary(count=3, minimum=100, median=200, maximum=300)
        assert prs_stats.shortest.pull_request is prs[100]
        assert prs_stats.longest.pull_request is prs[300]

    def test_even_count_median_is_mean_of_middle_values(self, make_pr):
        prs_stats = PullRequestStats()
        for duration in (40, 10, 30, 25):
            prs_stats.record(make_pr(CREATED, duration), duration)

        assert prs_stats.summarize().median == 27.5

    def test_empty_summary(self):
        summary = PullRequestStats().summarize()

        assert summary.is_empty
        assert (summary.minimum, summary.median, summary.maximum) == (0, 0, 0)

    @pytest.mark.parametrize("seed", range(10))
    def test_matches_sort_based_reference(self, make_pr, seed):
        rng = random.Random(seed)
        durations = [rng.randint(0, 5_000_000) for _ in range(rng.randint(1, 60))]
        prs_stats = PullRequestStats()
        for duration in durations:
            prs_stats.record(make_pr(CREATED, duration), duration)

        summary = prs_stats.summarize()

        assert (summary.minimum, summary.median, summary.maximum) == reference_summary(durations)
        assert summary.count == len(durations)
