"""
Flattened pull request rows for CSV export

With --csv, every in-window pull request is projected onto a
PullRequestDetails row and the rows are written to stdout once the fetch
loop finishes, for processing by other tools.
"""

import csv
import sys
from dataclasses import asdict, dataclass, fields
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, TextIO


RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def parse_timestamp(value: str) -> datetime:
    """Parse a GitHub ISO 8601 timestamp (e.g. 2024-05-01T12:00:00Z) into an aware datetime"""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: Optional[str]) -> str:
    """Normalize a GitHub timestamp to RFC 3339 UTC, or "" when null"""
    if not value:
        return ""
    return parse_timestamp(value).astimezone(timezone.utc).strftime(RFC3339_FORMAT)


def _login(user: Optional[Dict[str, Any]]) -> str:
    if not user:
        return ""
    return user.get("login") or ""


@dataclass
class PullRequestDetails:
    id: int
    title: str
    author: str
    merged_by: str
    created_at: str
    updated_at: str
    closed_at: str
    merged_at: str
    draft: bool
    merged: bool
    locked: bool
    commits: int
    comments: int
    additions: int
    deletions: int
    changed_files: int
    url: str

    @classmethod
    def from_github_pull_request(cls, pr: Dict[str, Any]) -> "PullRequestDetails":
        """
        Project a GitHub pull request object onto an export row

        The list endpoint does not include the commit/comment/line
        counters or the merged flag; those read as 0 / False unless the
        object came from the single pull request endpoint. merged falls
        back to whether merged_at is set.

        Args:
            pr: Pull request object from the GitHub API

        Returns:
            PullRequestDetails row
        """
        merged_at = pr.get("merged_at")
        return cls(
            id=pr.get("id", 0),
            title=pr.get("title") or "",
            author=_login(pr.get("user")),
            merged_by=_login(pr.get("merged_by")),
            created_at=format_timestamp(pr.get("created_at")),
            updated_at=format_timestamp(pr.get("updated_at")),
            closed_at=format_timestamp(pr.get("closed_at")),
            merged_at=format_timestamp(merged_at),
            draft=bool(pr.get("draft", False)),
            merged=bool(pr.get("merged", merged_at is not None)),
            locked=bool(pr.get("locked", False)),
            commits=pr.get("commits", 0),
            comments=pr.get("comments", 0),
            additions=pr.get("additions", 0),
            deletions=pr.get("deletions", 0),
            changed_files=pr.get("changed_files", 0),
            url=pr.get("html_url") or "",
        )


# CSV column order
CSV_FIELDNAMES = [f.name for f in fields(PullRequestDetails)]


def _csv_row(row: PullRequestDetails) -> Dict[str, Any]:
    # Booleans as lowercase true/false
    return {
        key: str(value).lower() if isinstance(value, bool) else value
        for key, value in asdict(row).items()
    }


def export_to_csv(rows: List[PullRequestDetails], stream: Optional[TextIO] = None) -> None:
    """
    Write export rows as CSV, header first

    A header is written even when there are no rows.

    Args:
        rows: Rows in fetch order
        stream: Destination (defaults to stdout)
    """
    if stream is None:
        stream = sys.stdout

    writer = csv.DictWriter(stream, fieldnames=CSV_FIELDNAMES, lineterminator="\n")
    writer.writeheader()
    writer.writerows(_csv_row(row) for row in rows)
