"""Release notes pipeline.

Key Components:
    - build_release_notes: Format the closed issues of a milestone
    - publish_release_notes: Create the tracker release
    - ReleaseNotesOrchestrator: Run the pipeline for matching milestones
"""

from release_notes.engine.notes_builder import build_release_notes, format_issue_line
from release_notes.engine.orchestrator import ReleaseNotesOrchestrator
from release_notes.engine.publisher import publish_release_notes

__all__ = [
    "ReleaseNotesOrchestrator",
    "build_release_notes",
    "format_issue_line",
    "publish_release_notes",
]
