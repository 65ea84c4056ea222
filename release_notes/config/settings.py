"""
Configuration system using Pydantic for type-safe settings management.

Settings are resolved from (highest priority first) explicit keyword
arguments such as CLI options, an optional YAML file, ``RELEASE_NOTES_*``
environment variables, and finally the field defaults.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Annotated, Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from release_notes.exceptions import ConfigurationError

DEFAULT_REPOSITORY = "eclipse-ee4j/jersey"
DEFAULT_OUTPUT_DIRECTORY = "target/release-notes"
DEFAULT_API_URL = "https://api.github.com"


class TokenAuth(BaseModel):
    """Login plus personal access token."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["token"] = "token"
    login: str
    token: SecretStr


class PasswordAuth(BaseModel):
    """Login plus password (basic authentication)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["password"] = "password"
    login: str
    password: SecretStr


Credentials = Annotated[TokenAuth | PasswordAuth, Field(discriminator="kind")]


class ReleaseNotesSettings(BaseSettings):
    """Settings for one release notes run.

    Completeness (release version, login, token or password) is checked by
    ``require_complete`` rather than on construction, so that a partially
    filled YAML file can be completed by CLI options before validation.
    """

    model_config = SettingsConfigDict(
        env_prefix="RELEASE_NOTES_",
        case_sensitive=False,
        frozen=True,
    )

    release_version: str | None = Field(default=None, description="Release version, matched against milestone titles")
    repository: str = Field(default=DEFAULT_REPOSITORY, description="Tracker repository in owner/repo form")
    login: str | None = Field(default=None, description="Tracker login")
    token: SecretStr | None = Field(default=None, description="Personal access token")
    password: SecretStr | None = Field(default=None, description="Password, takes precedence over the token")
    publish: bool = Field(default=False, description="Create a release on the tracker")
    dry_run: bool = Field(default=True, description="Suppress publishing and file writes")
    template_file: str | None = Field(default=None, description="HTML template of the release notes page")
    release_date: str = Field(default="", description="Free-text release date substituted into the template")
    output_directory: str = Field(default=DEFAULT_OUTPUT_DIRECTORY, description="Directory of the generated page")
    api_url: str = Field(default=DEFAULT_API_URL, description="Tracker API base URL (GitHub Enterprise)")
    product_name: str = Field(default="Jersey", description="Product name used in the release index link")
    fail_on_error: bool = Field(default=False, description="Exit non-zero when a milestone fails")

    @field_validator("repository")
    @classmethod
    def validate_repository(cls, value: str) -> str:
        owner, sep, name = value.partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError(f"repository must be in owner/repo form, got: {value!r}")
        return value

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def output_path(self) -> Path:
        """Get output directory as Path object."""
        return Path(self.output_directory)

    @property
    def template_path(self) -> Path | None:
        return Path(self.template_file) if self.template_file else None

    @property
    def credentials(self) -> Credentials:
        """Credential variant used to connect; a password wins over a token.

        Raises:
            ConfigurationError: If login or both secrets are missing
        """
        self.require_complete()
        assert self.login is not None
        if self.password is not None:
            return PasswordAuth(login=self.login, password=self.password)
        assert self.token is not None
        return TokenAuth(login=self.login, token=self.token)

    def require_complete(self) -> None:
        """Check the settings needed before any tracker call.

        Raises:
            ConfigurationError: If the release version, the login or both
                token and password are missing
        """
        if not self.release_version:
            raise ConfigurationError("release_version shall be provided")
        if not self.login:
            raise ConfigurationError("login shall be provided")
        if self.password is None and self.token is None:
            raise ConfigurationError("either password or token shall be provided")

    @classmethod
    def load(cls, config_path: str | None = None, **overrides: Any) -> ReleaseNotesSettings:
        """Build settings from an optional YAML file and explicit overrides.

        ``None`` overrides are ignored so unset CLI options fall through to
        the file, the environment and the defaults.

        Raises:
            ConfigurationError: If the file cannot be loaded or a value is invalid
        """
        values: dict[str, Any] = {}
        if config_path is not None:
            values.update(cls._read_yaml(config_path))
        values.update({key: value for key, value in overrides.items() if value is not None})

        release_version = values.get("release_version")
        if isinstance(release_version, int | float) and not isinstance(release_version, bool):
            raise ConfigurationError(
                f"release_version must be a string, got the number {release_version}; "
                "quote it in YAML, e.g. release_version: \"2.30\""
            )

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_yaml(cls, config_path: str) -> ReleaseNotesSettings:
        """Load settings from YAML file with environment variable interpolation.

        Args:
            config_path: Path to YAML configuration file

        Raises:
            ConfigurationError: If config file is invalid or missing
        """
        return cls.load(config_path)

    @classmethod
    def _read_yaml(cls, config_path: str) -> dict[str, Any]:
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file) as f:
                yaml_content = f.read()
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {config_path}") from e

        try:
            yaml_content = cls._interpolate_env_vars(yaml_content)
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment variable reference in config: {e}") from e

        try:
            config_dict = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if config_dict is None:
            return {}
        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration must be a YAML object, not a list or scalar")
        return config_dict

    @staticmethod
    def _interpolate_env_vars(content: str) -> str:
        """Interpolate ${VAR_NAME} placeholders with environment variables.

        Supports two syntaxes:
        - ${VAR_NAME} - Required environment variable (raises if not set)
        - ${VAR_NAME:-default} - Optional with default value

        YAML comment lines are left untouched.

        Raises:
            ValueError: If a required environment variable is not set
        """
        pattern = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2)
            value = os.getenv(var_name)

            if value is not None:
                return value
            elif default_value is not None:
                return default_value
            else:
                raise ValueError(f"Environment variable {var_name} is not set")

        def process_line(line: str) -> str:
            if line.lstrip().startswith("#"):
                return line
            return pattern.sub(replace_var, line)

        return "\n".join(process_line(line) for line in content.split("\n"))
