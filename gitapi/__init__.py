from .config import GitSettings, get_settings
from .errors import GitError, GitCommandError, GitSpawnError
from .runner import CommandResult, run_git_command, git_command
from .repo import GitRepo, create_repo, clone

__all__ = [
    "GitSettings", "get_settings",
    "GitError", "GitCommandError", "GitSpawnError",
    "CommandResult", "run_git_command", "git_command",
    "GitRepo", "create_repo", "clone",
]
