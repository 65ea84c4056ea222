"""Release notes page rendering."""

from release_notes.rendering.template import LineRule, TemplateMerger, store_release_notes

__all__ = [
    "LineRule",
    "TemplateMerger",
    "store_release_notes",
]
