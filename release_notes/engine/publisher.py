"""Publish release notes as a tracker release."""

import structlog

from release_notes.providers.base import IssueTracker

log = structlog.get_logger(__name__)


def publish_release_notes(notes: str, release_version: str, tracker: IssueTracker) -> None:
    """Create a release tagged and named ``release_version`` with ``notes`` as body.

    There is no rollback: a created release stays on the tracker.

    Raises:
        TrackerError: If the release cannot be created.
    """
    tracker.create_release(tag=release_version, name=release_version, body=notes)
    log.info("release_published", release_version=release_version)
