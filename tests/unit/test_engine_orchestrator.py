"""Tests for release_notes/engine/orchestrator.py and publisher.py."""

from unittest.mock import Mock, patch

import pytest

from release_notes.config.settings import ReleaseNotesSettings, TokenAuth
from release_notes.engine.orchestrator import ReleaseNotesOrchestrator
from release_notes.engine.publisher import publish_release_notes
from release_notes.exceptions import ConfigurationError, TrackerError
from release_notes.models.domain import IssueState, Milestone, TrackerIssue
from release_notes.providers.base import IssueTracker


def make_settings(tmp_path, **overrides):
    values = {
        "release_version": "2.30",
        "login": "jersey-bot",
        "token": "ghp_test_token_123",
        "output_directory": str(tmp_path / "release-notes"),
    }
    values.update(overrides)
    return ReleaseNotesSettings(**values)


class TestPublisher:
    """Tests for publish_release_notes."""

    def test_release_tagged_and_named_with_version(self):
        tracker = Mock(spec=IssueTracker)

        publish_release_notes("<li>x</li>\n", "2.30", tracker)

        tracker.create_release.assert_called_once_with(tag="2.30", name="2.30", body="<li>x</li>\n")

    def test_failure_propagates(self):
        tracker = Mock(spec=IssueTracker)
        tracker.create_release.side_effect = TrackerError("exists")

        with pytest.raises(TrackerError):
            publish_release_notes("", "2.30", tracker)


class TestValidation:
    """Configuration errors stop the run before the tracker is used."""

    def test_missing_credentials(self, tmp_path, mock_tracker):
        settings = ReleaseNotesSettings(release_version="2.30", login="bot")

        with pytest.raises(ConfigurationError):
            ReleaseNotesOrchestrator(settings, mock_tracker).run()

        mock_tracker.connect.assert_not_called()

    def test_missing_release_version(self, mock_tracker):
        settings = ReleaseNotesSettings(login="bot", token="t")

        with pytest.raises(ConfigurationError):
            ReleaseNotesOrchestrator(settings, mock_tracker).run()

        mock_tracker.connect.assert_not_called()

    @patch("release_notes.engine.orchestrator.GitHubRestProvider")
    def test_default_tracker_built_from_settings(self, mock_provider_class, tmp_path):
        mock_provider_class.return_value.get_milestones.return_value = []
        settings = make_settings(tmp_path, repository="owner/repo", api_url="https://ghe.example.com/api/v3")

        ReleaseNotesOrchestrator(settings).run()

        kwargs = mock_provider_class.call_args.kwargs
        assert isinstance(kwargs["credentials"], TokenAuth)
        assert kwargs["repository"] == "owner/repo"
        assert kwargs["base_url"] == "https://ghe.example.com/api/v3"
        mock_provider_class.return_value.connect.assert_called_once()


class TestMilestoneMatching:
    """Tests for selecting milestones."""

    def test_lists_milestones_of_all_states(self, settings, mock_tracker):
        ReleaseNotesOrchestrator(settings, mock_tracker).run()

        mock_tracker.get_milestones.assert_called_once_with(state="all")

    def test_only_matching_milestone_processed(self, settings, mock_tracker, milestone):
        results = ReleaseNotesOrchestrator(settings, mock_tracker).run()

        assert [r.milestone for r in results] == ["2.30"]
        mock_tracker.get_issues.assert_called_once_with(milestone, state=IssueState.CLOSED)

    def test_match_ignores_case(self, tmp_path, mock_tracker):
        mock_tracker.get_milestones.return_value = [Milestone(number=1, title="2.30-RC")]

        results = ReleaseNotesOrchestrator(make_settings(tmp_path, release_version="2.30-rc"), mock_tracker).run()

        assert len(results) == 1

    @pytest.mark.parametrize("title", ["2.3", "2.30.1", "v2.30", " 2.30"])
    def test_no_prefix_or_substring_match(self, tmp_path, mock_tracker, title):
        mock_tracker.get_milestones.return_value = [Milestone(number=1, title=title)]

        results = ReleaseNotesOrchestrator(make_settings(tmp_path), mock_tracker).run()

        assert results == []
        mock_tracker.get_issues.assert_not_called()

    def test_every_matching_milestone_processed(self, tmp_path, mock_tracker):
        mock_tracker.get_milestones.return_value = [
            Milestone(number=1, title="2.30"),
            Milestone(number=2, title="2.30", state=IssueState.CLOSED),
        ]

        results = ReleaseNotesOrchestrator(make_settings(tmp_path), mock_tracker).run()

        assert len(results) == 2
        assert mock_tracker.get_issues.call_count == 2

    def test_disconnects_after_run(self, settings, mock_tracker):
        ReleaseNotesOrchestrator(settings, mock_tracker).run()

        mock_tracker.disconnect.assert_called_once()


class TestPipeline:
    """Tests for publishing and page writing decisions."""

    def test_publish_when_enabled_and_not_dry_run(self, tmp_path, mock_tracker):
        settings = make_settings(tmp_path, publish=True, dry_run=False)

        results = ReleaseNotesOrchestrator(settings, mock_tracker).run()

        mock_tracker.create_release.assert_called_once_with(tag="2.30", name="2.30", body=results[0].notes)
        assert results[0].published is True

    def test_dry_run_never_publishes(self, tmp_path, mock_tracker):
        settings = make_settings(tmp_path, publish=True, dry_run=True)

        results = ReleaseNotesOrchestrator(settings, mock_tracker).run()

        mock_tracker.create_release.assert_not_called()
        assert results[0].published is False

    def test_publish_disabled(self, tmp_path, mock_tracker):
        settings = make_settings(tmp_path, publish=False, dry_run=False)

        ReleaseNotesOrchestrator(settings, mock_tracker).run()

        mock_tracker.create_release.assert_not_called()

    def test_page_written_when_not_dry_run(self, tmp_path, mock_tracker, template_file):
        settings = make_settings(tmp_path, dry_run=False, template_file=str(template_file), release_date="today")

        results = ReleaseNotesOrchestrator(settings, mock_tracker).run()

        page = tmp_path / "release-notes" / "2.30.html"
        assert results[0].output_file == page
        content = page.read_text()
        assert results[0].notes in content
        assert "Released on today." in content

    def test_dry_run_writes_no_page(self, tmp_path, mock_tracker, template_file):
        settings = make_settings(tmp_path, dry_run=True, template_file=str(template_file))

        results = ReleaseNotesOrchestrator(settings, mock_tracker).run()

        assert results[0].output_file is None
        assert not (tmp_path / "release-notes").exists()


class TestErrorHandling:
    """I/O failures are logged and recorded, never raised."""

    def test_issue_fetch_failure_recorded(self, settings, mock_tracker):
        mock_tracker.get_issues.side_effect = TrackerError("rate limited")

        results = ReleaseNotesOrchestrator(settings, mock_tracker).run()

        assert results[0].error == "rate limited"
        assert results[0].notes is None
        assert results[0].succeeded is False

    def test_failure_does_not_stop_other_milestones(self, tmp_path, mock_tracker):
        mock_tracker.get_milestones.return_value = [
            Milestone(number=1, title="2.30"),
            Milestone(number=2, title="2.30"),
        ]
        mock_tracker.get_issues.side_effect = [
            TrackerError("boom"),
            [TrackerIssue(number=1, title="Fix bug", url="http://x/1")],
        ]

        results = ReleaseNotesOrchestrator(make_settings(tmp_path), mock_tracker).run()

        assert results[0].succeeded is False
        assert results[1].notes == "<li>[<a href='http://x/1'>Issue 1</a>] - Fix bug</li>\n"

    def test_publish_failure_skips_page(self, tmp_path, mock_tracker, template_file):
        mock_tracker.create_release.side_effect = TrackerError("already_exists")
        settings = make_settings(tmp_path, publish=True, dry_run=False, template_file=str(template_file))

        results = ReleaseNotesOrchestrator(settings, mock_tracker).run()

        assert results[0].notes is not None
        assert results[0].published is False
        assert results[0].output_file is None
        assert not (tmp_path / "release-notes").exists()

    def test_filesystem_failure_recorded(self, tmp_path, mock_tracker, template_file):
        settings = make_settings(tmp_path, dry_run=False, template_file=str(template_file))

        with patch("release_notes.engine.orchestrator.store_release_notes", side_effect=PermissionError("denied")):
            results = ReleaseNotesOrchestrator(settings, mock_tracker).run()

        assert results[0].error == "denied"

    def test_connection_failure_returns_no_results(self, settings, mock_tracker):
        mock_tracker.connect.side_effect = TrackerError("bad credentials", status_code=401)

        orchestrator = ReleaseNotesOrchestrator(settings, mock_tracker)

        assert orchestrator.run() == []
        assert orchestrator.tracker_error == "bad credentials"
        mock_tracker.get_milestones.assert_not_called()
        mock_tracker.disconnect.assert_called_once()

    def test_network_failure_listing_milestones(self, settings, mock_tracker):
        mock_tracker.get_milestones.side_effect = ConnectionError("unreachable")
        orchestrator = ReleaseNotesOrchestrator(settings, mock_tracker)

        assert orchestrator.run() == []
        assert orchestrator.tracker_error == "unreachable"

    def test_no_tracker_error_on_success(self, settings, mock_tracker):
        orchestrator = ReleaseNotesOrchestrator(settings, mock_tracker)

        orchestrator.run()

        assert orchestrator.tracker_error is None


class TestEndToEnd:
    """Single closed issue, no template, dry run."""

    def test_single_issue_dry_run(self, tmp_path):
        tracker = Mock(spec=IssueTracker)
        tracker.get_milestones.return_value = [Milestone(number=1, title="1.0")]
        tracker.get_issues.return_value = [TrackerIssue(number=1, title="Fix bug", url="http://x/1")]
        settings = make_settings(tmp_path, release_version="1.0", publish=False, dry_run=True)

        results = ReleaseNotesOrchestrator(settings, tracker).run()

        assert results[0].notes == "<li>[<a href='http://x/1'>Issue 1</a>] - Fix bug</li>\n"
        assert results[0].error is None
        tracker.create_release.assert_not_called()
        assert not (tmp_path / "release-notes").exists()
