"""Issue tracker providers."""

from release_notes.providers.base import IssueTracker
from release_notes.providers.github_rest import GitHubRestProvider

__all__ = [
    "GitHubRestProvider",
    "IssueTracker",
]
