"""Domain models for the release notes generator."""

from release_notes.models.domain import IssueState, Milestone, MilestoneResult, TrackerIssue

__all__ = [
    "IssueState",
    "Milestone",
    "MilestoneResult",
    "TrackerIssue",
]
