"""
Domain models for the release notes generator.

These models are the normalized internal representation of tracker data,
converted from provider-specific objects (PyGithub's Milestone and Issue).

Example:
    Creating an issue from provider data::

        issue = TrackerIssue(
            number=42,
            title="Fix login bug",
            url="https://github.com/org/repo/issues/42",
            state=IssueState.CLOSED,
            is_pull_request=False,
        )
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class IssueState(str, Enum):
    """Enumeration of possible issue and milestone states."""

    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class Milestone:
    """A named group of issues on the tracker, one per release.

    Attributes:
        number: Repository-scoped milestone number
        title: Milestone title, compared against the release version
        state: Whether the milestone is open or closed
    """

    number: int
    title: str
    state: IssueState = IssueState.OPEN

    def matches(self, release_version: str) -> bool:
        """Return True if the title equals the release version, ignoring case."""
        return self.title.lower() == release_version.lower()


@dataclass(frozen=True)
class TrackerIssue:
    """An issue or pull request belonging to a milestone.

    Pull requests are issues on GitHub; ``is_pull_request`` tells them apart.
    """

    number: int
    title: str
    url: str
    state: IssueState = IssueState.CLOSED
    is_pull_request: bool = False

    @property
    def kind(self) -> str:
        return "Pull" if self.is_pull_request else "Issue"


@dataclass
class MilestoneResult:
    """Outcome of processing one milestone that matched the release version.

    Attributes:
        milestone: Title of the processed milestone
        notes: Generated release notes, or None if building them failed
        published: Whether a release was created on the tracker
        output_file: Path of the written release page, if any
        error: Error description if processing stopped early
    """

    milestone: str
    notes: str | None = None
    published: bool = False
    output_file: Path | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None
