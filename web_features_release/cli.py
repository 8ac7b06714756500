"""CLI entry point for web-features-release."""

from __future__ import annotations

from pathlib import Path

import click

from web_features_release import __version__
from web_features_release.config import load_config
from web_features_release.errors import CommandError, ReleaseError
from web_features_release.log import configure_logging, logger
from web_features_release.models import ReleaseContext, SemverLevel
from web_features_release.pipeline import init_release, publish_release, update_release

SEMVER_LEVELS = [level.value for level in SemverLevel]


def _fail(exc: Exception) -> None:
    """Report a failed release step and exit with code 1."""
    logger.error(str(exc))
    if isinstance(exc, CommandError) and exc.result.stderr.strip():
        logger.error(exc.result.stderr.strip())
    raise SystemExit(1)


@click.group()
@click.version_option(__version__, prog_name="release")
@click.option("-v", "--verbose", is_flag=True, help="Log each command as it runs.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="TOML file with release settings (default: pyproject.toml).",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """Prepare and publish web-features releases."""
    configure_logging(verbose)
    ctx.obj = config_path


def _release_context(config_path: Path | None) -> ReleaseContext:
    """Load settings for the repository in the current directory."""
    try:
        config = load_config(Path.cwd(), config_path)
    except ReleaseError as exc:
        _fail(exc)
    return ReleaseContext(config=config)


@cli.command()
@click.argument(
    "semverlevel",
    type=click.Choice(SEMVER_LEVELS),
    default=SemverLevel.PATCH.value,
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show the branch, commit and pull request without creating them.",
)
@click.pass_obj
def init(config_path: Path | None, semverlevel: str, dry_run: bool) -> None:
    """Start a new release pull request.

    SEMVERLEVEL is the Semantic Versioning level for the release.
    """
    release = _release_context(config_path)
    release.dry_run = dry_run
    try:
        init_release(release, SemverLevel(semverlevel))
    except ReleaseError as exc:
        _fail(exc)


@cli.command()
@click.argument("pr")
@click.pass_obj
def update(config_path: Path | None, pr: str) -> None:
    """Update an existing release pull request."""
    try:
        update_release(_release_context(config_path), pr)
    except NotImplementedError as exc:
        _fail(exc)


@cli.command()
@click.argument("pr")
@click.pass_obj
def publish(config_path: Path | None, pr: str) -> None:
    """Publish the package to npm."""
    try:
        publish_release(_release_context(config_path), pr)
    except NotImplementedError as exc:
        _fail(exc)
