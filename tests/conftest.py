"""Shared test fixtures."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

import pytest

from web_features_release.config import ReleaseConfig
from web_features_release.models import ReleaseContext
from web_features_release.shell import CommandResult, Shell

Handler = Callable[[list[str], Path | None], CommandResult]

MUTATING = [
    ("git", "branch"),
    ("git", "checkout"),
    ("git", "commit"),
    ("git", "push"),
    ("npm", "version"),
    ("gh", "pr", "create"),
]


class FakeShell(Shell):
    """Records every command and answers from canned responses.

    Responses are keyed by an argv prefix; the longest matching prefix wins.
    A response is either a CommandResult-style tuple
    (returncode, stdout, stderr) or a callable taking (argv, cwd).
    Unmatched commands succeed with empty output.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.cwds: list[Path | None] = []
        self.responses: dict[tuple[str, ...], tuple[int, str, str] | Handler] = {}

    def on(
        self, *prefix: str, returncode: int = 0, stdout: str = "", stderr: str = ""
    ) -> None:
        self.responses[prefix] = (returncode, stdout, stderr)

    def handle(self, *prefix: str, handler: Handler) -> None:
        self.responses[prefix] = handler

    def run(
        self, *args: str, cwd: Path | None = None, capture: bool = True
    ) -> CommandResult:
        argv = list(args)
        self.calls.append(argv)
        self.cwds.append(cwd)
        matches = [p for p in self.responses if tuple(argv[: len(p)]) == p]
        if not matches:
            return CommandResult(args=argv, returncode=0)
        response = self.responses[max(matches, key=len)]
        if callable(response):
            return response(argv, cwd)
        returncode, stdout, stderr = response
        return CommandResult(
            args=argv, returncode=returncode, stdout=stdout, stderr=stderr
        )

    def called(self, *prefix: str) -> bool:
        return any(tuple(c[: len(prefix)]) == prefix for c in self.calls)

    def mutating_calls(self) -> list[list[str]]:
        return [
            c for c in self.calls if any(tuple(c[: len(p)]) == p for p in MUTATING)
        ]


@pytest.fixture(autouse=True)
def release_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture release logging down to debug level."""
    caplog.set_level(logging.DEBUG, logger="web_features_release")
    return caplog


@pytest.fixture
def package_dir(tmp_path: Path) -> Path:
    """A web-features package directory with a manifest and built data file."""
    pkg = tmp_path / "packages" / "web-features"
    pkg.mkdir(parents=True)
    (pkg / "package.json").write_text(
        json.dumps({"name": "web-features", "version": "1.0.0"}, indent=2)
    )
    (pkg / "index.json").write_text('{"a":2}')
    return pkg


@pytest.fixture
def body_template(tmp_path: Path) -> Path:
    template = tmp_path / "release-pull-description.md"
    template.write_text("Release notes go here.\n\n")
    return template


@pytest.fixture
def fake_shell() -> FakeShell:
    """A shell where preflight passes on main and diff finds one change."""
    shell = FakeShell()
    shell.on("git", "rev-parse", stdout="main\n")
    shell.on("gh", "version", stdout="gh version 2.40.0\n")
    shell.on("jq", stdout='{\n  "a": 1\n}\n')
    shell.on("diff", returncode=1, stdout='-  "a": 1\n+  "a": 2\n')
    return shell


@pytest.fixture
def release_ctx(
    fake_shell: FakeShell, package_dir: Path, body_template: Path
) -> ReleaseContext:
    """Release context wired to the fake shell and a fixed clock."""
    config = ReleaseConfig(package_dir=package_dir, body_template=body_template)
    return ReleaseContext(
        config=config,
        shell=fake_shell,
        now=lambda: datetime(2026, 10, 18, 4, 50, 12, 123000, tzinfo=timezone.utc),
    )
