"""GitHub provider implementation using PyGithub."""

import structlog
from github import Auth, Github, GithubException  # type: ignore[import-not-found]
from github.Issue import Issue as GHIssue  # type: ignore[import-not-found]
from github.Milestone import Milestone as GHMilestone  # type: ignore[import-not-found]
from github.Repository import Repository as GHRepository  # type: ignore[import-not-found]

from release_notes.config.settings import DEFAULT_API_URL, Credentials, PasswordAuth
from release_notes.exceptions import TrackerError
from release_notes.models.domain import IssueState, Milestone, TrackerIssue
from release_notes.providers.base import IssueTracker

log = structlog.get_logger(__name__)


class GitHubRestProvider(IssueTracker):
    """GitHub implementation using PyGithub library."""

    def __init__(
        self,
        credentials: Credentials,
        repository: str,
        base_url: str = DEFAULT_API_URL,
    ):
        """Initialize GitHub provider.

        Args:
            credentials: Token or password credentials
            repository: Repository identifier in owner/repo form
            base_url: GitHub API base URL (for GitHub Enterprise)
        """
        self.credentials = credentials
        self.repository = repository
        self.base_url = base_url.rstrip("/")
        self._client: Github | None = None
        self._repo: GHRepository | None = None
        self._milestones: dict[int, GHMilestone] = {}

    def _auth(self) -> Auth.Auth:
        if isinstance(self.credentials, PasswordAuth):
            return Auth.Login(self.credentials.login, self.credentials.password.get_secret_value())
        return Auth.Token(self.credentials.token.get_secret_value())

    def connect(self) -> None:
        """Initialize GitHub client and resolve the repository."""
        try:
            self._client = Github(auth=self._auth(), base_url=self.base_url)
            self._repo = self._client.get_repo(self.repository)
        except GithubException as e:
            log.error("github_connect_failed", repository=self.repository, error=str(e))
            raise TrackerError(f"Cannot access repository {self.repository}: {e}", e.status) from e

        log.info(
            "github_connected",
            base_url=self.base_url,
            repository=self.repository,
            auth=self.credentials.kind,
        )

    def disconnect(self) -> None:
        """Close GitHub client."""
        if self._client:
            self._client.close()
            self._client = None
            self._repo = None
            self._milestones = {}

    @property
    def repo(self) -> GHRepository:
        if self._repo is None:
            raise TrackerError("GitHub provider is not connected")
        return self._repo

    def get_milestones(self, state: str = "all") -> list[Milestone]:
        """Retrieve milestones via GitHub API."""
        log.debug("get_milestones", state=state)

        try:
            gh_milestones = list(self.repo.get_milestones(state=state))
        except GithubException as e:
            log.error("github_get_milestones_failed", error=str(e))
            raise TrackerError(f"Cannot list milestones of {self.repository}: {e}", e.status) from e

        for gh_milestone in gh_milestones:
            self._milestones[gh_milestone.number] = gh_milestone
        return [self._convert_milestone(m) for m in gh_milestones]

    def get_issues(self, milestone: Milestone, state: IssueState = IssueState.CLOSED) -> list[TrackerIssue]:
        """Retrieve issues and pull requests of a milestone."""
        log.debug("get_issues", milestone=milestone.title, state=state.value)

        try:
            gh_milestone = self._milestones.get(milestone.number)
            if gh_milestone is None:
                gh_milestone = self.repo.get_milestone(milestone.number)
                self._milestones[milestone.number] = gh_milestone
            gh_issues = list(self.repo.get_issues(milestone=gh_milestone, state=state.value))
        except GithubException as e:
            log.error("github_get_issues_failed", milestone=milestone.title, error=str(e))
            raise TrackerError(f"Cannot list issues of milestone {milestone.title}: {e}", e.status) from e

        return [self._convert_issue(gh_issue) for gh_issue in gh_issues]

    def create_release(self, tag: str, name: str, body: str) -> None:
        """Create a GitHub release, creating the tag if needed."""
        log.info("create_release", tag=tag, name=name)

        try:
            self.repo.create_git_release(tag=tag, name=name, message=body)
        except GithubException as e:
            log.error("github_create_release_failed", tag=tag, error=str(e))
            raise TrackerError(f"Cannot create release {tag}: {e}", e.status) from e

    def _convert_milestone(self, gh_milestone: GHMilestone) -> Milestone:
        """Convert GitHub Milestone to our Milestone model."""
        state = IssueState.CLOSED if gh_milestone.state == "closed" else IssueState.OPEN
        return Milestone(number=gh_milestone.number, title=gh_milestone.title, state=state)

    def _convert_issue(self, gh_issue: GHIssue) -> TrackerIssue:
        """Convert GitHub Issue to our TrackerIssue model."""
        state = IssueState.CLOSED if gh_issue.state == "closed" else IssueState.OPEN

        return TrackerIssue(
            number=gh_issue.number,
            title=gh_issue.title,
            url=gh_issue.html_url,
            state=state,
            is_pull_request=gh_issue.pull_request is not None,
        )
