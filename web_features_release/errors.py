"""Exceptions raised by web-features-release."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .shell import CommandResult


class ReleaseError(Exception):
    """Base class for release failures the CLI reports without a traceback."""


class CommandError(ReleaseError):
    """An external command exited with an unexpected status."""

    def __init__(self, result: CommandResult) -> None:
        super().__init__(
            f"`{result.cmdline}` exited with status {result.returncode}"
        )
        self.result = result


class ConfigError(ReleaseError):
    """Configuration or package manifest could not be read."""
