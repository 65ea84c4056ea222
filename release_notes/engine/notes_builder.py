"""Build the HTML release notes list of a milestone."""

import structlog

from release_notes.models.domain import IssueState, Milestone, TrackerIssue
from release_notes.providers.base import IssueTracker

log = structlog.get_logger(__name__)

LINE_FORMAT = "<li>[<a href='{url}'>{kind} {number}</a>] - {title}</li>\n"


def format_issue_line(issue: TrackerIssue) -> str:
    """Format one issue or pull request as an HTML list item, newline included."""
    return LINE_FORMAT.format(url=issue.url, kind=issue.kind, number=issue.number, title=issue.title)


def build_release_notes(milestone: Milestone, tracker: IssueTracker) -> str:
    """Return the release notes of all closed issues of ``milestone``.

    Lines are ordered by their formatted text, not by issue number.

    Raises:
        TrackerError: If the issues cannot be fetched.
    """
    issues = tracker.get_issues(milestone, state=IssueState.CLOSED)
    lines = sorted(format_issue_line(issue) for issue in issues)
    log.debug("release_notes_built", milestone=milestone.title, entries=len(lines))
    return "".join(lines)
