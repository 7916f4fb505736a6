from __future__ import annotations
import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from rich.console import Console

from .config import GitSettings, get_settings
from .errors import GitCommandError, GitSpawnError

logger = logging.getLogger(__name__)

# Command echo goes to stderr so it never mixes with captured git output.
diag_console = Console(stderr=True)

PathArg = Union[str, os.PathLike, None]


@dataclass(frozen=True)
class CommandResult:
    """Output of one git invocation. stdout and stderr are merged into ``output``."""
    args: tuple
    output: str
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def lines(self) -> List[str]:
        return self.output.splitlines()

    def check_returncode(self) -> "CommandResult":
        if self.exit_code != 0:
            raise GitCommandError(self.args, self.exit_code, self.output)
        return self


def run_git_command(path: PathArg, args: Sequence[str], show_command: bool = False,
                    settings: Optional[GitSettings] = None) -> CommandResult:
    """Run git with ``args`` inside ``path`` and return its combined output and exit code.

    The working directory is handed to the child process; the caller's cwd is
    never changed. ``path=None`` runs in the current directory. A non-zero exit
    is returned as data, only a failure to start the process raises.
    """
    settings = settings or get_settings()
    argv = [settings.git_binary, *args]
    cwd = os.fspath(path) if path is not None else None

    if show_command or settings.show_commands:
        diag_console.print(f"$ {shlex.join(argv)}", style="dim", markup=False, highlight=False)
    logger.debug(f"running {argv!r} in {cwd or '.'}")

    try:
        p = subprocess.run(
            argv,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",  # git may emit non-UTF-8 bytes (commit encodings, blobs)
            timeout=settings.timeout,
        )
    except subprocess.TimeoutExpired as e:
        output = e.output or ""
        if isinstance(output, bytes):
            output = output.decode("utf-8", errors="replace")
        logger.debug(f"{argv!r} timed out after {settings.timeout}s")
        raise GitCommandError(argv, -1, output) from e
    except OSError as e:
        raise GitSpawnError(argv, cwd, f"{type(e).__name__}: {e}") from e

    if p.returncode != 0:
        logger.debug(f"{argv!r} exited with {p.returncode}")
    return CommandResult(args=tuple(argv), output=p.stdout or "", exit_code=p.returncode)


def git_command(*args: str, path: PathArg = None, show_command: bool = False) -> str:
    """Run an arbitrary git command and return only its output text."""
    return run_git_command(path, list(args), show_command=show_command).output
