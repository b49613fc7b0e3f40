"""
Shared fixtures: synthetic GitHub pull request objects and run configs
"""

from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

from gh_pr_stats.config import RunConfig

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


def iso(dt: datetime) -> str:
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_pr():
    """Factory for pull request dicts shaped like the GitHub list endpoint."""
    ids = count(1)

    def _make_pr(created, duration=None, state=None, title=None, login="octocat", **extra):
        number = next(ids)
        closed = created + timedelta(seconds=duration) if duration is not None else None
        pr = {
            "id": 1000 + number,
            "number": number,
            "title": title or f"PR {number}",
            "user": {"login": login},
            "merged_by": None,
            "state": state or ("closed" if closed else "open"),
            "created_at": iso(created),
            "updated_at": iso(closed or created),
            "closed_at": iso(closed) if closed else None,
            "merged_at": None,
            "draft": False,
            "locked": False,
            "html_url": f"https://github.com/octo/repo/pull/{number}",
        }
        pr.update(extra)
        return pr

    return _make_pr


@pytest.fixture
def run_config():
    return RunConfig(
        owner="octo",
        repo="repo",
        start=datetime(2024, 1, 1, tzinfo=timezone.utc),
        end=datetime(2024, 5, 1, tzinfo=timezone.utc),
        token="fake_github_token",
        per_page=3,
    )
