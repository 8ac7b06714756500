"""Release pipeline: preflight → diff → branch → bump → commit → push → PR.

This module orchestrates preparing a web-features release:
1. Check that git, gh and jq are usable
2. Diff the published data file against a fresh build
3. Start a timestamped release branch from the current head
4. Bump the package version with npm (no tag)
5. Commit and push the release branch
6. Open a pull request whose description embeds the diff

Nothing is retried or rolled back. If a step fails, the branch and any
partial changes stay in place for manual recovery.
"""

from __future__ import annotations

import re
import shlex
import shutil
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from .diff import diff_json
from .log import logger
from .models import PullRequest, ReleaseContext, SemverLevel
from .preflight import run_preflight
from .shell import step
from .versions import (
    commit_message,
    predict_version,
    read_manifest_version,
    release_title,
)

# Convention borrowed from w3c/webref's prepare-release script
BRANCH_PUNCTUATION = re.compile(r"[-T:.Z]")


def release_branch_name(now: datetime) -> str:
    """Name a release branch after a UTC timestamp.

    Example: 2026-10-18T04:50:12.123Z → "release-20261018045012123"
    """
    utc = now.astimezone(timezone.utc)
    stamp = utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"
    return f"release-{BRANCH_PUNCTUATION.sub('', stamp)}"


def _mutate(ctx: ReleaseContext, *args: str, cwd: Path | None = None) -> None:
    """Run a command that changes the repository, or log it under --dry-run."""
    if ctx.dry_run:
        logger.info(f"[dry-run] {shlex.join(args)}")
        return
    ctx.shell.run(*args, cwd=cwd, capture=False).check()


def start_release_branch(ctx: ReleaseContext, head: str) -> str:
    """Create a release branch from head and check it out."""
    branch = release_branch_name(ctx.now())
    logger.info(f"Starting release branch {branch}")
    _mutate(ctx, "git", "branch", branch, head)

    logger.info(f"Checking out release branch {branch}")
    _mutate(ctx, "git", "checkout", branch)
    return branch


def bump_version(ctx: ReleaseContext, level: SemverLevel) -> str:
    """Bump the package version without tagging and return the new version."""
    logger.info("Bumping version number")
    package_dir = ctx.config.package_dir
    _mutate(ctx, "npm", "version", "--no-git-tag-version", level.value, cwd=package_dir)
    version = read_manifest_version(package_dir)
    if ctx.dry_run:
        version = predict_version(version, level.value)
    logger.debug(f"{package_dir / 'package.json'} version is now {version}")
    return version


def commit_and_push(
    ctx: ReleaseContext, level: SemverLevel, version: str, branch: str
) -> None:
    logger.info("Committing version bump")
    message = commit_message(level.value, version)
    _mutate(ctx, "git", "commit", "--all", f"--message={message}")

    logger.info("Pushing release branch")
    _mutate(ctx, "git", "push", "--set-upstream", ctx.config.remote, branch)


def write_pull_body(template: Path, diff: str) -> Path:
    """Copy the description template to a fresh temp file and append the diff."""
    body_file = Path(tempfile.mkdtemp(prefix="pull-request-")) / "body.md"
    shutil.copyfile(template, body_file)
    with open(body_file, "a", encoding="utf-8") as fh:
        fh.write("\n".join(["```diff", diff, "```"]))
    return body_file


def open_pull_request(
    ctx: ReleaseContext, version: str, branch: str, diff: str
) -> PullRequest:
    """Create the release pull request with gh."""
    cfg = ctx.config
    logger.info(f"Creating PR for {version}")
    pr = PullRequest(
        title=release_title(cfg.package, version),
        reviewer=cfg.reviewer,
        repo=cfg.repo,
        base=cfg.base_branch,
        head=branch,
        body_file=write_pull_body(cfg.body_template, diff),
    )
    if ctx.dry_run:
        print(pr.body_file.read_text(encoding="utf-8"))
    _mutate(ctx, "gh", *pr.gh_args())
    return pr


def init_release(
    ctx: ReleaseContext, level: SemverLevel = SemverLevel.PATCH
) -> PullRequest:
    """Prepare a release and open its pull request.

    Args:
        ctx: Release context (config, command runner, clock).
        level: Semantic Versioning level passed to ``npm version``.

    Returns:
        The pull request that was created (or, with dry_run, would be).

    Raises:
        SystemExit: If a preflight check fails.
        CommandError: If any external command fails.
    """
    head = run_preflight(ctx)
    diff = diff_json(ctx)

    step(f"Preparing {level.value} release")
    branch = start_release_branch(ctx, head)
    version = bump_version(ctx, level)
    commit_and_push(ctx, level, version, branch)
    pr = open_pull_request(ctx, version, branch, diff)

    logger.info(f"Release {ctx.config.package}@{version} is ready on {branch}")
    return pr


def update_release(ctx: ReleaseContext, pr: str) -> None:
    """Rebase an existing release PR, rebuild, and commit the result.

    Not implemented yet; always raises before running anything.
    """
    # TODO: rebase the PR branch, run `npm run build`, commit the build output
    raise NotImplementedError(f"update of release PR {pr} is not implemented")


def publish_release(ctx: ReleaseContext, pr: str) -> None:
    """Publish the package to npm once its release PR is merged.

    Not implemented yet; always raises before running anything.
    """
    # TODO: run `npm publish` from the package directory
    raise NotImplementedError(f"publish of release PR {pr} is not implemented")
