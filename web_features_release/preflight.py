"""Preflight checks run before any mutating release step.

Only read-only commands run here. Missing or unauthenticated tools halt the
release with exit status 1; a non-default base branch only warns.
"""

from __future__ import annotations

from .log import logger
from .models import ReleaseContext
from .shell import fatal, step


def check_base_branch(ctx: ReleaseContext) -> str:
    """Return the current branch, warning if it is not the base branch."""
    logger.info("Checking base branch")
    head = ctx.shell.git("rev-parse", "--abbrev-ref", "HEAD")
    if head != ctx.config.base_branch:
        logger.warning(f"Base branch is not {ctx.config.base_branch} (on {head})")
    return head


def check_gh(ctx: ReleaseContext) -> None:
    """Confirm gh is installed and has a logged-in session."""
    logger.info("Confirming gh CLI is installed and authorized")
    result = ctx.shell.run("gh", "version")
    if not result.ok:
        fatal("gh CLI failed to run. Do you have it installed?", result.stderr)

    result = ctx.shell.run("gh", "auth", "status")
    if not result.ok:
        fatal(
            "`gh auth status` was non-zero. Try running `gh auth login` "
            "or `gh auth refresh` and try again.",
            result.stderr,
        )


def check_jq(ctx: ReleaseContext) -> None:
    logger.info("Confirming jq is installed")
    result = ctx.shell.run("jq", "--version")
    if not result.ok:
        fatal("jq failed to run. Do you have it installed?", result.stderr)


def run_preflight(ctx: ReleaseContext) -> str:
    """Run every preflight check.

    Returns:
        The current head branch, which the release branch is created from.

    Raises:
        SystemExit: If gh or jq is missing, or gh is not authenticated.
    """
    step("Running preflight checks")
    head = check_base_branch(ctx)
    check_gh(ctx)
    check_jq(ctx)
    return head
