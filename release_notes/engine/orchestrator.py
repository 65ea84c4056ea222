"""
Release notes orchestrator.

Runs the release notes pipeline for every milestone whose title matches the
release version:

    build notes -> publish (unless disabled or dry run) -> write page

Tracker and filesystem failures are logged and recorded per milestone; they
never stop the processing of the other milestones. Configuration errors are
raised before the tracker is contacted.

Example:
    >>> settings = ReleaseNotesSettings.load("release-notes.yaml")
    >>> results = ReleaseNotesOrchestrator(settings).run()
    >>> results[0].notes
"""

import structlog

from release_notes.config.settings import ReleaseNotesSettings
from release_notes.engine.notes_builder import build_release_notes
from release_notes.engine.publisher import publish_release_notes
from release_notes.exceptions import TrackerError
from release_notes.models.domain import Milestone, MilestoneResult
from release_notes.providers.base import IssueTracker
from release_notes.providers.github_rest import GitHubRestProvider
from release_notes.rendering.template import store_release_notes

log = structlog.get_logger(__name__)


class ReleaseNotesOrchestrator:
    """Coordinate note building, publishing and page writing.

    Attributes:
        settings: Settings of this run.
        tracker: Issue tracker; built from the settings on ``run`` if not given.
        tracker_error: Why the tracker could not be reached, if it could not.
    """

    def __init__(self, settings: ReleaseNotesSettings, tracker: IssueTracker | None = None) -> None:
        self.settings = settings
        self.tracker = tracker
        self.tracker_error: str | None = None

    def run(self) -> list[MilestoneResult]:
        """Generate release notes for all milestones matching the release version.

        Returns:
            One result per matching milestone, in tracker order.

        Raises:
            ConfigurationError: If the settings are incomplete.
        """
        self.settings.require_complete()
        release_version = self.settings.release_version
        assert release_version is not None

        if self.tracker is None:
            self.tracker = GitHubRestProvider(
                credentials=self.settings.credentials,
                repository=self.settings.repository,
                base_url=self.settings.api_url,
            )

        structlog.contextvars.bind_contextvars(release_version=release_version)
        try:
            return self._run(self.tracker, release_version)
        finally:
            structlog.contextvars.unbind_contextvars("release_version")

    def _run(self, tracker: IssueTracker, release_version: str) -> list[MilestoneResult]:
        try:
            tracker.connect()
            milestones = tracker.get_milestones(state="all")
        except (TrackerError, OSError) as e:
            log.error("tracker_unavailable", repository=self.settings.repository, exc_info=True)
            self.tracker_error = str(e)
            tracker.disconnect()
            return []

        results: list[MilestoneResult] = []
        try:
            for milestone in milestones:
                if milestone.matches(release_version):
                    log.info("milestone_found", milestone=milestone.title)
                    results.append(self.process_milestone(milestone, tracker))
        finally:
            tracker.disconnect()

        if not results:
            log.warning("milestone_not_found", repository=self.settings.repository)
        return results

    def process_milestone(self, milestone: Milestone, tracker: IssueTracker) -> MilestoneResult:
        """Run the pipeline for one milestone, recording instead of raising I/O failures."""
        settings = self.settings
        release_version = settings.release_version
        assert release_version is not None
        result = MilestoneResult(milestone=milestone.title)

        try:
            result.notes = build_release_notes(milestone, tracker)
            log.info("release_notes_prepared", milestone=milestone.title, notes=result.notes)

            if settings.publish and not settings.dry_run:
                publish_release_notes(result.notes, release_version, tracker)
                result.published = True
            elif settings.publish:
                log.info("publishing_skipped", reason="dry_run")
            else:
                log.info("publishing_skipped", reason="disabled")

            result.output_file = store_release_notes(
                result.notes,
                settings.template_path,
                release_version,
                settings.release_date,
                settings.output_path,
                dry_run=settings.dry_run,
                product_name=settings.product_name,
            )
        except (TrackerError, OSError) as e:
            log.error("milestone_processing_failed", milestone=milestone.title, exc_info=True)
            result.error = str(e)

        return result
