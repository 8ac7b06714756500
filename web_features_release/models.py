"""Data models for web-features-release.

These Pydantic models represent the core data structures passed between
the release steps.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .config import ReleaseConfig
from .shell import Shell


class SemverLevel(str, Enum):
    """Semantic Versioning level accepted by ``npm version``."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PRERELEASE = "prerelease"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReleaseContext(BaseModel):
    """Everything a release step needs from its environment.

    Attributes:
        config: Resolved release settings.
        shell: Command runner; tests swap in a recording fake.
        now: Clock used to name the release branch.
        dry_run: If True, mutating commands are logged instead of run.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: ReleaseConfig = Field(default_factory=ReleaseConfig)
    shell: Shell = Field(default_factory=Shell)
    now: Callable[[], datetime] = utcnow
    dry_run: bool = False


class PullRequest(BaseModel):
    """Arguments for ``gh pr create``.

    Attributes:
        title: Pull request title, e.g. "📦 Release web-features@1.2.3".
        reviewer: GitHub login requested for review.
        repo: Target repository as OWNER/NAME.
        base: Branch the pull request merges into.
        head: The release branch.
        body_file: Description file (template plus diff).
    """

    title: str
    reviewer: str
    repo: str
    base: str
    head: str
    body_file: Path

    def gh_args(self) -> list[str]:
        return [
            "pr",
            "create",
            f"--title={self.title}",
            f"--reviewer={self.reviewer}",
            f"--body-file={self.body_file}",
            f"--repo={self.repo}",
            f"--base={self.base}",
            f"--head={self.head}",
        ]
