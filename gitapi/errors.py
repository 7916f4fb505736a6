from __future__ import annotations
from typing import Sequence


class GitError(Exception):
    """Base class for everything gitapi raises."""


class GitSpawnError(GitError):
    """The git process could not be started (binary or working directory missing)."""

    def __init__(self, args: Sequence[str], cwd: str | None, reason: str):
        self.args_run = tuple(args)
        self.cwd = cwd
        self.reason = reason
        super().__init__(f"could not run {' '.join(self.args_run)!r} in {cwd or '.'}: {reason}")


class GitCommandError(GitError):
    """git ran but exited non-zero (or timed out, exit_code == -1)."""

    def __init__(self, args: Sequence[str], exit_code: int, output: str):
        self.args_run = tuple(args)
        self.exit_code = exit_code
        self.output = output
        detail = output.strip().splitlines()[-1] if output.strip() else "no output"
        super().__init__(f"{' '.join(self.args_run)!r} exited with {exit_code}: {detail}")
