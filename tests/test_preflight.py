"""Tests for web_features_release.preflight."""

from __future__ import annotations

import logging

import pytest

from web_features_release.models import ReleaseContext
from web_features_release.preflight import run_preflight

from conftest import FakeShell


def test_returns_head_branch(
    release_ctx: ReleaseContext, fake_shell: FakeShell
) -> None:
    assert run_preflight(release_ctx) == "main"
    assert fake_shell.calls == [
        ["git", "rev-parse", "--abbrev-ref", "HEAD"],
        ["gh", "version"],
        ["gh", "auth", "status"],
        ["jq", "--version"],
    ]


def test_other_branch_only_warns(
    release_ctx: ReleaseContext,
    fake_shell: FakeShell,
    caplog: pytest.LogCaptureFixture,
) -> None:
    fake_shell.on("git", "rev-parse", stdout="my-feature\n")

    assert run_preflight(release_ctx) == "my-feature"

    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert warnings == ["Base branch is not main (on my-feature)"]


def test_missing_gh_is_fatal(
    release_ctx: ReleaseContext, fake_shell: FakeShell, caplog: pytest.LogCaptureFixture
) -> None:
    fake_shell.on("gh", "version", returncode=127, stderr="gh: command not found")

    with pytest.raises(SystemExit) as excinfo:
        run_preflight(release_ctx)

    assert excinfo.value.code == 1
    assert "Do you have it installed?" in caplog.text
    assert not fake_shell.called("jq")


def test_unauthenticated_gh_is_fatal(
    release_ctx: ReleaseContext, fake_shell: FakeShell, caplog: pytest.LogCaptureFixture
) -> None:
    fake_shell.on(
        "gh", "auth", "status", returncode=1, stderr="You are not logged into any hosts"
    )

    with pytest.raises(SystemExit) as excinfo:
        run_preflight(release_ctx)

    assert excinfo.value.code == 1
    assert "gh auth login" in caplog.text
    assert "You are not logged into any hosts" in caplog.text
    assert fake_shell.mutating_calls() == []


def test_missing_jq_is_fatal(
    release_ctx: ReleaseContext, fake_shell: FakeShell, caplog: pytest.LogCaptureFixture
) -> None:
    fake_shell.on("jq", "--version", returncode=127)

    with pytest.raises(SystemExit) as excinfo:
        run_preflight(release_ctx)

    assert excinfo.value.code == 1
    assert "jq failed to run" in caplog.text
