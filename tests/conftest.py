"""Pytest configuration and shared fixtures."""

import os
from unittest.mock import Mock

import pytest

from release_notes.config.settings import ReleaseNotesSettings
from release_notes.models.domain import IssueState, Milestone, TrackerIssue
from release_notes.providers.base import IssueTracker


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep RELEASE_NOTES_* variables of the developer shell out of the settings."""
    for name in list(os.environ):
        if name.upper().startswith("RELEASE_NOTES_"):
            monkeypatch.delenv(name)


@pytest.fixture
def milestone() -> Milestone:
    """Milestone matching release 2.30."""
    return Milestone(number=7, title="2.30", state=IssueState.CLOSED)


@pytest.fixture
def sample_issues() -> list[TrackerIssue]:
    """Closed issues and pull requests of the 2.30 milestone."""
    return [
        TrackerIssue(
            number=4120,
            title="Support for JDK 11",
            url="https://github.com/eclipse-ee4j/jersey/pull/4120",
            is_pull_request=True,
        ),
        TrackerIssue(
            number=3987,
            title="NPE in client filter",
            url="https://github.com/eclipse-ee4j/jersey/issues/3987",
        ),
        TrackerIssue(
            number=4001,
            title="Update Jackson",
            url="https://github.com/eclipse-ee4j/jersey/pull/4001",
            is_pull_request=True,
        ),
    ]


@pytest.fixture
def mock_tracker(milestone: Milestone, sample_issues: list[TrackerIssue]) -> Mock:
    """Tracker serving one matching milestone and one unrelated milestone."""
    tracker = Mock(spec=IssueTracker)
    tracker.get_milestones.return_value = [
        Milestone(number=6, title="2.29.1", state=IssueState.CLOSED),
        milestone,
    ]
    tracker.get_issues.return_value = sample_issues
    return tracker


@pytest.fixture
def settings(tmp_path) -> ReleaseNotesSettings:
    """Complete settings writing into a temporary directory."""
    return ReleaseNotesSettings(
        release_version="2.30",
        repository="eclipse-ee4j/jersey",
        login="jersey-bot",
        token="ghp_test_token_123",
        output_directory=str(tmp_path / "release-notes"),
    )


@pytest.fixture
def template_file(tmp_path):
    """Release notes page template with all markers and anchors."""
    path = tmp_path / "template.html"
    path.write_text(
        "<html>\n"
        "<h1>Jersey @LATEST_VERSION@ Release Notes</h1>\n"
        "<p>Released on @RELEASE_DATE@.</p>\n"
        "<h2>Previous releases</h2>\n"
        "<ul>\n"
        '    <li><a href="2.29.1.html">Jersey 2.29.1 Release Notes</a></li>\n'
        "</ul>\n"
        "</html>\n"
    )
    return path
