"""
Run configuration

Everything a run needs (repository, date window, credentials, output
mode) is collected once at startup into a RunConfig and passed down to
the fetch loop explicitly.
"""

import os
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from dotenv import find_dotenv, load_dotenv


DATE_FORMAT = "%Y-%m-%d"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_BASE_BRANCH = "master"
DEFAULT_PER_PAGE = 50
DEFAULT_TIMEOUT = 15
TOKEN_ENV_VAR = "GITHUB_TOKEN"

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ConfigError(Exception):
    """Raised when the run cannot be configured (e.g. no token)"""


@dataclass
class RunConfig:
    owner: str
    repo: str
    start: datetime
    end: datetime
    token: str
    base_url: str = DEFAULT_API_URL
    base_branch: Optional[str] = DEFAULT_BASE_BRANCH
    per_page: int = DEFAULT_PER_PAGE
    timeout: float = DEFAULT_TIMEOUT
    csv: bool = False
    verbose: bool = False


def parse_date(value: Optional[str], default: datetime,
               verbose: bool = False) -> datetime:
    """
    Parse a YYYY-MM-DD date as midnight UTC

    A missing or malformed value is not an error: the default is used
    instead.

    Args:
        value: Date string from the command line, or None
        default: Datetime to fall back to
        verbose: Print a note on stderr when falling back

    Returns:
        Timezone-aware datetime
    """
    if not value:
        return default

    try:
        parsed = datetime.strptime(value, DATE_FORMAT)
        # strptime also accepts unpadded fields such as 2024-1-5
        if parsed.strftime(DATE_FORMAT) != value:
            raise ValueError(f"not zero-padded: {value}")
    except ValueError:
        if verbose:
            print(f"⚠ Could not parse date '{value}', using {default.isoformat()}",
                  file=sys.stderr)
        return default

    return parsed.replace(tzinfo=timezone.utc)


def load_token() -> str:
    """
    Read the GitHub token from the environment

    A .env file in the working directory is loaded first; variables that
    are already set in the environment take precedence over it.

    Raises:
        ConfigError: If GITHUB_TOKEN is not set
    """
    load_dotenv(find_dotenv(usecwd=True))

    token = os.getenv(TOKEN_ENV_VAR)
    if not token:
        raise ConfigError(f"Environment variable {TOKEN_ENV_VAR} not found.")
    return token


def build_config(args, token: str, now: Optional[datetime] = None) -> RunConfig:
    """
    Build the RunConfig from parsed command line arguments

    Args:
        args: argparse namespace produced by cli.parse_args
        token: GitHub token
        now: Reference time for the default end date (defaults to current UTC time)

    Returns:
        Populated RunConfig
    """
    if now is None:
        now = datetime.now(timezone.utc)

    start = parse_date(args.start, EPOCH, args.verbose)
    end = parse_date(args.end, now, args.verbose)

    return RunConfig(
        owner=args.owner,
        repo=args.repo,
        start=start,
        end=end,
        token=token,
        base_url=(args.enterprise or DEFAULT_API_URL).rstrip("/"),
        base_branch=args.base or None,
        per_page=args.per_page,
        timeout=args.timeout,
        csv=args.csv,
        verbose=args.verbose,
    )
