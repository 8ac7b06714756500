"""Shell utilities.

Wraps subprocess calls to the external tools the release relies on (git, gh,
npm, jq, diff). Every call returns a CommandResult so callers decide what a
non-zero exit means; most just call .check().
"""

from __future__ import annotations

import shlex
import subprocess
from pathlib import Path

from pydantic import BaseModel

from .errors import CommandError
from .log import logger


class CommandResult(BaseModel):
    """Outcome of a single external command.

    Attributes:
        args: The argv that was run.
        returncode: Process exit status (127 when the executable is missing).
        stdout: Captured stdout, or "" when output was streamed.
        stderr: Captured stderr, or "" when output was streamed.
    """

    args: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def cmdline(self) -> str:
        return shlex.join(self.args)

    def check(self) -> CommandResult:
        """Raise CommandError unless the command exited 0."""
        if not self.ok:
            raise CommandError(self)
        return self


class Shell:
    """Runs external commands.

    Tests substitute a recording fake with the same run() signature.
    """

    def run(
        self, *args: str, cwd: Path | None = None, capture: bool = True
    ) -> CommandResult:
        """Run a command and wait for it to exit.

        Args:
            *args: Command and arguments (e.g., "git", "status").
            cwd: Working directory, defaults to the current one.
            capture: If True (default), capture stdout/stderr as text. If
                     False, stream them to the terminal so users can see
                     install and build progress.
        """
        argv = list(args)
        logger.debug(shlex.join(argv))
        if cwd is not None and not Path(cwd).is_dir():
            return CommandResult(
                args=argv, returncode=1, stderr=f"{cwd}: no such directory"
            )
        try:
            proc = subprocess.run(argv, cwd=cwd, capture_output=capture, text=True)
        except FileNotFoundError:
            return CommandResult(
                args=argv, returncode=127, stderr=f"{argv[0]}: command not found"
            )
        return CommandResult(
            args=argv,
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )

    def git(self, *args: str, cwd: Path | None = None) -> str:
        """Run a git command and return its stripped stdout, raising on failure."""
        return self.run("git", *args, cwd=cwd).check().stdout.strip()


def step(msg: str) -> None:
    """Log a visually distinct step header.

    Used to separate major phases of the release in terminal output.
    """
    logger.info(f"{'─' * 60}")
    logger.info(msg)
    logger.info(f"{'─' * 60}")


def fatal(msg: str, *details: str) -> None:
    """Log an error message and exit with code 1.

    Use for unrecoverable environment problems that should halt the release.
    Any non-empty details (typically captured stderr) are logged after msg.
    """
    logger.error(msg)
    for detail in details:
        if detail.strip():
            logger.error(detail.strip())
    raise SystemExit(1)
