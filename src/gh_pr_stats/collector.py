"""
Fetch loop: page through a repository's pull requests and accumulate stats

Pull requests arrive newest-first by creation date, so once one was
created before start every later one was too. The loop stops at the
first pull request outside the (start, end) window without requesting
further pages.

Window bounds are exclusive on both ends: a pull request is counted
only when start < created_at < end, compared at whole-second resolution.
"""

import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from gh_pr_stats.config import RunConfig
from gh_pr_stats.details import PullRequestDetails, parse_timestamp
from gh_pr_stats.github_client import GitHubPRFetcher
from gh_pr_stats.stats import PullRequestStats


def _epoch_seconds(value: datetime) -> int:
    return int(value.timestamp())


def is_in_window(created: datetime, start: datetime, end: datetime) -> bool:
    return _epoch_seconds(start) < _epoch_seconds(created) < _epoch_seconds(end)


def calculate_open_seconds(pr: Dict[str, Any], now: datetime) -> int:
    """
    Calculate how many whole seconds a pull request was open

    The end time is closed_at, or now when the pull request is still open.

    Args:
        pr: Pull request object from the GitHub API
        now: Current time (timezone-aware)

    Returns:
        Duration in seconds
    """
    created = parse_timestamp(pr["created_at"])
    closed_at = pr.get("closed_at")
    end_time = parse_timestamp(closed_at) if closed_at else now
    return _epoch_seconds(end_time) - _epoch_seconds(created)


def _log(config: RunConfig, message: str) -> None:
    if config.verbose:
        print(message, file=sys.stderr)


def collect_pull_requests(fetcher: GitHubPRFetcher, config: RunConfig,
                          prs_stats: PullRequestStats,
                          details: Optional[List[PullRequestDetails]] = None,
                          now: Optional[datetime] = None) -> int:
    """
    Retrieve in-window pull requests page by page and feed the accumulator

    Pages are requested strictly one after another. The loop ends on an
    empty page or on the first pull request created outside the window;
    in the latter case the rest of that page is not looked at.

    Args:
        fetcher: Client used to list pages
        config: Run configuration (repository, window, page size)
        prs_stats: Accumulator updated in place
        details: When given, an export row is appended for each in-window PR
        now: End time for still-open pull requests (defaults to current UTC time)

    Returns:
        Number of pages requested

    Raises:
        FetchError: Propagated unchanged from the fetcher
    """
    if now is None:
        now = datetime.now(timezone.utc)

    page = 1
    while True:
        pulls = fetcher.list_page(config.owner, config.repo, page, config.per_page,
                                  base=config.base_branch)
        _log(config, f"Page {page}: {len(pulls)} PRs")

        if not pulls:
            _log(config, "✓ Reached the last page")
            return page

        for pull in pulls:
            created = parse_timestamp(pull["created_at"])
            if not is_in_window(created, config.start, config.end):
                _log(config, f"✓ Reached a PR created {created.isoformat()}, outside the window; stopping")
                return page

            if details is not None:
                details.append(PullRequestDetails.from_github_pull_request(pull))

            duration = calculate_open_seconds(pull, now)
            prs_stats.record(pull, duration)

            _log(config, f"Pull ({pull.get('state')}): {pull.get('title')} closed after {duration} seconds")

        page += 1
