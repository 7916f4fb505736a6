"""
Repository handles and the git operations that run against them.

A GitRepo is a plain value: a path plus a default author. Nothing is checked
when one is built; a bad path only shows up in the output of the first
command run against it.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .config import GitSettings
from .runner import CommandResult, run_git_command

logger = logging.getLogger(__name__)


def _as_list(files: Union[str, Iterable[str]]) -> List[str]:
    # a lone path must not be split into characters
    return [files] if isinstance(files, str) else list(files)


@dataclass(frozen=True)
class GitRepo:
    path: str
    user: str = ""
    show_command: bool = field(default=False, compare=False)
    check: bool = field(default=False, compare=False)  # raise GitCommandError on non-zero exit
    settings: Optional[GitSettings] = field(default=None, compare=False, repr=False)

    def _run(self, args: Sequence[str]) -> CommandResult:
        result = run_git_command(self.path, args, show_command=self.show_command, settings=self.settings)
        if self.check:
            result.check_returncode()
        return result

    def command(self, *args: str) -> str:
        """Run any git command in this repository and return its output."""
        return self._run(list(args)).output

    def init(self) -> CommandResult:
        return self._run(["init"])

    def id(self) -> str:
        """Hash of the most recent commit."""
        return self._run(["log", "--pretty=format:%H", "-n", "1"]).output.rstrip()

    def add(self, filename: str) -> CommandResult:
        return self._run(["add", filename])

    def remove(self, filename: str) -> CommandResult:
        return self._run(["rm", filename])

    def checkout(self, reference: str, branch: bool = False) -> CommandResult:
        """Check out ``reference``; with ``branch`` a new branch of that name is created."""
        args = ["checkout"]
        if branch:
            args.append("-b")
        args.append(reference)
        return self._run(args)

    def branches(self) -> List[str]:
        names: List[str] = []
        for line in self._run(["branch"]).lines():
            name = line.strip()
            if name.startswith("*"):
                name = name[1:].strip()
            if name:
                names.append(name)
        return names

    def branch(self, name: str, start: str = "HEAD") -> str:
        return self._run(["branch", name, start]).output

    def tags(self, pattern: Optional[str] = None, points_at: Optional[str] = None, *extra: str) -> List[str]:
        """List tags. Filtering by ``pattern`` and ``points_at`` is left to git."""
        args = ["tag", "-l", *extra]
        if points_at:
            args += ["--points-at", points_at]
        if pattern:
            args.append(pattern)
        return self._run(args).lines()

    def tag(self, name: str, message: str, reference: Optional[str] = None, annotated: bool = False) -> str:
        args = ["tag", "-m", message]
        if annotated:
            args.append("-a")
        args.append(name)
        if reference:
            args.append(reference)
        return self._run(args).output

    def merge(self, reference: str) -> CommandResult:
        return self._run(["merge", reference])

    def reset(self, hard: bool = True, files: Union[str, Iterable[str]] = ()) -> CommandResult:
        args = ["reset"]
        if hard:
            args.append("--hard")
        args.extend(_as_list(files))
        return self._run(args)

    def node(self) -> str:
        # Spawns twice: once for id(), once for the lookup itself.
        return self._run(["log", "-r", self.id(), "--template", "{node}"]).output.rstrip()

    def commit(self, message: str, user: Optional[str] = None, files: Union[str, Iterable[str]] = (),
               close_branch: bool = False) -> CommandResult:
        """Commit staged changes (or ``files``).

        The author is ``user`` when given, otherwise the handle's ``user``;
        with neither, git picks its configured identity.
        """
        args = ["commit", "-m", message]
        if close_branch:
            args.append("--close-branch")
        author = user or self.user
        if author:
            args += ["--author", author]
        args.extend(_as_list(files))
        return self._run(args)

    def log(self, identifier: Optional[str] = None, limit: Optional[int] = None,
            template: Optional[str] = None, extra: Iterable[Tuple[str, str]] = ()) -> str:
        """Raw ``git log`` output.

        ``extra`` holds (option, value) pairs appended in order, e.g.
        ``[("--author", "alice"), ("--since", "2 weeks")]``.
        """
        args = ["log"]
        if identifier:
            args += [identifier, "-n", "1"]
        if limit is not None:
            args += ["-n", str(limit)]
        if template:
            args.append(template)
        for option, value in extra:
            args += [option, value]
        return self._run(args).output

    def push(self, destination: Optional[str] = None, branch: Optional[str] = None) -> CommandResult:
        args = ["push"]
        if destination:
            args.append(destination)
        if branch:
            args.append(branch)
        return self._run(args)

    def pull(self, source: Optional[str] = None, rebase: bool = False) -> CommandResult:
        args = ["pull"]
        if rebase:
            args.append("--rebase")
        if source:
            args.append(source)
        return self._run(args)

    def fetch(self, source: Optional[str] = None) -> CommandResult:
        args = ["fetch"]
        if source:
            args.append(source)
        return self._run(args)


def create_repo(path: str, user: str = "") -> GitRepo:
    return GitRepo(path, user)


def clone(remote_url: str, local_path: str, extra_args: Union[str, Sequence[str]] = (), show_command: bool = False,
          check: bool = False, settings: Optional[GitSettings] = None) -> GitRepo:
    """Clone ``remote_url`` into ``local_path`` and return a handle for the new checkout.

    The clone runs from the current directory. Its exit code is ignored unless
    ``check`` is set, so a handle comes back even when the clone failed.
    """
    result = run_git_command(None, ["clone", remote_url, local_path, *_as_list(extra_args)],
                             show_command=show_command, settings=settings)
    if check:
        result.check_returncode()
    elif not result.ok:
        logger.debug(f"clone of {remote_url} into {local_path} failed with {result.exit_code}")
    return GitRepo(local_path, show_command=show_command, check=check, settings=settings)
