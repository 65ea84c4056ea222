"""CLI entry point for the release notes generator."""

import sys

import click
import structlog
from click.core import ParameterSource

from release_notes.config.settings import ReleaseNotesSettings
from release_notes.engine.orchestrator import ReleaseNotesOrchestrator
from release_notes.exceptions import ConfigurationError
from release_notes.utils.logging_config import configure_logging

log = structlog.get_logger(__name__)


@click.group()
@click.option(
    "--config",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to YAML configuration file",
)
@click.option("--log-level", default="INFO", help="Logging level")
@click.pass_context
def cli(ctx: click.Context, config: str | None, log_level: str) -> None:
    """release-notes: Generate release notes from tracker milestones."""
    configure_logging(log_level)
    ctx.obj = {"config": config}


@cli.command()
@click.option("--release-version", help="Release version, matched against milestone titles")
@click.option("--repository", help="Repository in owner/repo form")
@click.option("--login", help="Tracker login")
@click.option("--token", help="Personal access token")
@click.option("--password", help="Password (takes precedence over the token)")
@click.option("--publish/--no-publish", default=None, help="Create a release on the tracker")
@click.option("--dry-run/--no-dry-run", default=None, help="Do not publish or write files (default: dry run)")
@click.option("--template-file", help="HTML template of the release notes page")
@click.option("--release-date", help="Release date substituted into the template")
@click.option("--output-directory", help="Directory of the generated page")
@click.option("--api-url", help="Tracker API base URL")
@click.option("--product-name", help="Product name used in the release index link")
@click.option("--fail-on-error/--no-fail-on-error", default=None, help="Exit with status 1 if a milestone fails")
@click.pass_context
def generate(ctx: click.Context, **options: str | bool | None) -> None:
    """Generate release notes for the configured release version."""
    overrides = {
        name: value for name, value in options.items() if ctx.get_parameter_source(name) is not ParameterSource.DEFAULT
    }
    try:
        settings = ReleaseNotesSettings.load(ctx.obj["config"], **overrides)
        orchestrator = ReleaseNotesOrchestrator(settings)
        results = orchestrator.run()
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        log.debug("config_error", exc_info=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        sys.exit(130)

    if orchestrator.tracker_error is not None:
        click.echo(f"Error: {orchestrator.tracker_error}", err=True)
        if settings.fail_on_error:
            sys.exit(1)
        return

    if not results:
        click.echo(f"No milestone found for release version {settings.release_version}", err=True)

    for result in results:
        if result.notes is not None:
            click.echo(result.notes, nl=False)
        if result.output_file is not None:
            click.echo(f"Release notes stored to {result.output_file}", err=True)
        if result.error is not None:
            click.echo(f"Milestone {result.milestone} failed: {result.error}", err=True)

    if settings.fail_on_error and not all(result.succeeded for result in results):
        sys.exit(1)


if __name__ == "__main__":
    cli()
