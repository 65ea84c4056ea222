"""Configuration for the release notes generator.

Example:
    >>> from release_notes.config import ReleaseNotesSettings
    >>> settings = ReleaseNotesSettings.from_yaml("release-notes.yaml")
    >>> settings.require_complete()
"""

from release_notes.config.settings import Credentials, PasswordAuth, ReleaseNotesSettings, TokenAuth

__all__ = [
    "Credentials",
    "PasswordAuth",
    "ReleaseNotesSettings",
    "TokenAuth",
]
