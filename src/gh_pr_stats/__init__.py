"""
gh-pr-stats: pull request lifetime statistics for a GitHub repository
"""

__version__ = "0.1.0"
PROJECT_NAME = "gh-pr-stats"
