"""Merge release notes into the HTML release notes page template.

The template is plain HTML with two marker tokens and two structural
anchors. Each template line is classified by the first matching rule:

    1. ``@RELEASE_DATE@``              marker replaced by the release date
    2. ``@LATEST_VERSION@``            marker replaced by the release version
    3. ``<h2>Previous releases</h2>``  notes section inserted before the line
    4. ``<ul>``                        link to the new page appended after the line
    5. anything else                   copied unchanged

Key Exports:
    TemplateMerger: Applies the rules to a sequence of lines.
    store_release_notes: Reads the template and writes ``{version}.html``.

Example:
    >>> merger = TemplateMerger(notes, release_version="2.30", release_date="June 2019")
    >>> merger.merge(["<p>Released @RELEASE_DATE@</p>"])
    ['<p>Released June 2019</p>']
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

import structlog

log = structlog.get_logger(__name__)

RELEASE_DATE_MARKER = "@RELEASE_DATE@"
LATEST_VERSION_MARKER = "@LATEST_VERSION@"
PREVIOUS_RELEASES_HEADING = "<h2>Previous releases</h2>"
NOTES_HEADING = "<h2>Pull requests and issues</h2>"
LIST_OPEN = "<ul>"
LIST_CLOSE = "</ul>"
RELEASE_LINK_FORMAT = '    <li><a href="{version}.html">{product} {version} Release Notes</a></li>'


@dataclass(frozen=True)
class LineRule:
    """A template rule: lines containing ``token`` are rewritten by ``transform``."""

    name: str
    token: str
    transform: Callable[[str], list[str]]

    def matches(self, line: str) -> bool:
        return self.token in line


class TemplateMerger:
    """Rewrites template lines with the notes of one release.

    Attributes:
        rules: Ordered rules; only the first matching rule applies to a line.
    """

    def __init__(
        self,
        notes: str,
        release_version: str,
        release_date: str,
        product_name: str = "Jersey",
    ) -> None:
        self.notes = notes
        self.release_version = release_version
        self.release_date = release_date
        self.product_name = product_name
        self.rules: tuple[LineRule, ...] = (
            LineRule("release_date", RELEASE_DATE_MARKER, self._replace_date),
            LineRule("latest_version", LATEST_VERSION_MARKER, self._replace_version),
            LineRule("previous_releases", PREVIOUS_RELEASES_HEADING, self._insert_notes),
            LineRule("release_index", LIST_OPEN, self._append_release_link),
        )

    def merge(self, lines: Iterable[str]) -> list[str]:
        merged: list[str] = []
        for line in lines:
            merged.extend(self.transform_line(line))
        return merged

    def transform_line(self, line: str) -> list[str]:
        for rule in self.rules:
            if rule.matches(line):
                return rule.transform(line)
        return [line]

    def _replace_date(self, line: str) -> list[str]:
        return [line.replace(RELEASE_DATE_MARKER, self.release_date)]

    def _replace_version(self, line: str) -> list[str]:
        return [line.replace(LATEST_VERSION_MARKER, self.release_version)]

    def _insert_notes(self, line: str) -> list[str]:
        return [NOTES_HEADING, LIST_OPEN, self.notes, LIST_CLOSE, line]

    def _append_release_link(self, line: str) -> list[str]:
        return [line, RELEASE_LINK_FORMAT.format(version=self.release_version, product=self.product_name)]


def read_template(template_path: Path) -> list[str]:
    """Read template lines without their line terminators."""
    with open(template_path) as f:
        return [line.rstrip("\n") for line in f]


def release_page_path(output_directory: Path, release_version: str) -> Path:
    return output_directory / f"{release_version}.html"


def store_release_notes(
    notes: str,
    template_path: Path | None,
    release_version: str,
    release_date: str,
    output_directory: Path,
    dry_run: bool = True,
    product_name: str = "Jersey",
) -> Path | None:
    """Merge ``notes`` into the template and write ``{output_directory}/{version}.html``.

    Nothing happens when the template path is unset or the file does not
    exist. In dry run mode the page is prepared but not written.

    Returns:
        The written file, or None if nothing was written.

    Raises:
        OSError: If the template cannot be read or the page cannot be written.
    """
    if template_path is None or not template_path.exists():
        log.info("release_page_skipped", template=str(template_path) if template_path else None)
        return None

    merger = TemplateMerger(notes, release_version, release_date, product_name)
    lines = merger.merge(read_template(template_path))
    target = release_page_path(output_directory, release_version)

    if dry_run:
        log.info("release_page_dry_run", path=str(target), lines=len(lines))
        return None

    output_directory.mkdir(parents=True, exist_ok=True)
    with open(target, "w") as f:
        for line in lines:
            f.write(line + "\n")

    log.info("release_page_written", path=str(target))
    return target
