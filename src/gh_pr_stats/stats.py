"""
Pull request lifetime statistics

PullRequestStats is a single-pass accumulator: the fetch loop calls
record() once per in-window pull request and summarize() is called once
at the end of the run.
"""

import statistics
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class BoundaryPullRequest:
    """The pull request holding the shortest or longest duration so far"""

    pull_request: Dict[str, Any]
    duration: int


@dataclass(frozen=True)
class DurationSummary:
    count: int = 0
    minimum: int = 0
    median: Union[int, float] = 0
    maximum: int = 0

    @property
    def is_empty(self) -> bool:
        return self.count == 0


@dataclass
class PullRequestStats:
    open_count: int = 0
    closed_count: int = 0
    durations: List[int] = field(default_factory=list)
    shortest: Optional[BoundaryPullRequest] = None
    longest: Optional[BoundaryPullRequest] = None

    @property
    def total(self) -> int:
        return self.open_count + self.closed_count

    def increment_open(self) -> None:
        self.open_count += 1

    def increment_closed(self) -> None:
        self.closed_count += 1

    def record(self, pr: Dict[str, Any], duration: int) -> None:
        """
        Add one in-window pull request

        Args:
            pr: Pull request object from the GitHub API
            duration: Seconds the pull request was (or has been) open
        """
        if pr.get("state") == "open":
            self.increment_open()
        else:
            self.increment_closed()

        self.durations.append(duration)

        # Strict comparisons: on a tie the earlier pull request is kept
        if self.shortest is None or duration < self.shortest.duration:
            self.shortest = BoundaryPullRequest(pr, duration)
        if self.longest is None or duration > self.longest.duration:
            self.longest = BoundaryPullRequest(pr, duration)

    def summarize(self) -> DurationSummary:
        """
        Compute minimum, median and maximum duration

        Returns:
            DurationSummary, all zero with count=0 when nothing was recorded
        """
        if not self.durations:
            return DurationSummary()

        return DurationSummary(
            count=len(self.durations),
            minimum=min(self.durations),
            median=statistics.median(self.durations),
            maximum=max(self.durations),
        )
