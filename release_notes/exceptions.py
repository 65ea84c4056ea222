"""Custom exception hierarchy for the release notes generator.

Exception Hierarchy:
    ReleaseNotesError (base)
    ├── ConfigurationError
    └── ExternalServiceError
        └── TrackerError

Example Usage:
    >>> from release_notes.exceptions import ConfigurationError
    >>> try:
    ...     settings.require_complete()
    ... except ConfigurationError as e:
    ...     print(e.message)
"""


class ReleaseNotesError(Exception):
    """Base exception for all release notes errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(ReleaseNotesError):
    """Configuration-related errors.

    Raised before any tracker call is made, when the settings are incomplete
    or the configuration file cannot be loaded.

    Examples:
        - Release version not provided
        - Login not provided
        - Neither token nor password provided
        - Invalid YAML syntax
    """

    pass


class ExternalServiceError(ReleaseNotesError):
    """Errors raised while talking to a remote service.

    Attributes:
        message: Human-readable error description
        status_code: HTTP status code returned by the service, if any
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class TrackerError(ExternalServiceError):
    """Issue tracker request failed (milestones, issues or releases)."""

    pass
