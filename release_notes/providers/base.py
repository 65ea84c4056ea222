"""
Abstract base class for issue tracker providers.

The release notes pipeline only talks to this interface, which keeps the
note builder, publisher and orchestrator independent of PyGithub.
"""

from abc import ABC, abstractmethod

from release_notes.models.domain import IssueState, Milestone, TrackerIssue


class IssueTracker(ABC):
    """Contract every tracker implementation must fulfill.

    Implementations normalize provider objects into the domain models of
    ``release_notes.models.domain`` and wrap provider failures in
    ``TrackerError``.
    """

    @abstractmethod
    def connect(self) -> None:
        """Authenticate and resolve the configured repository.

        Raises:
            TrackerError: If authentication or repository lookup fails.
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Release the underlying client, if connected."""
        pass

    @abstractmethod
    def get_milestones(self, state: str = "all") -> list[Milestone]:
        """List milestones of the repository.

        Args:
            state: "open", "closed" or "all".

        Raises:
            TrackerError: If the API request fails.
        """
        pass

    @abstractmethod
    def get_issues(self, milestone: Milestone, state: IssueState = IssueState.CLOSED) -> list[TrackerIssue]:
        """List issues and pull requests scoped to a milestone.

        Raises:
            TrackerError: If the API request fails.
        """
        pass

    @abstractmethod
    def create_release(self, tag: str, name: str, body: str) -> None:
        """Create a release for ``tag``.

        Raises:
            TrackerError: If the API request fails.
        """
        pass
