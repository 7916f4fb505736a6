from __future__ import annotations
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import find_dotenv, load_dotenv

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class GitSettings:
    git_binary: str = "git"
    show_commands: bool = False
    timeout: Optional[float] = None  # seconds; None blocks until git exits

    @classmethod
    def from_env(cls) -> "GitSettings":
        """Build settings from GITAPI_* environment variables (and a .env file if present)."""
        load_dotenv(find_dotenv(usecwd=True))
        timeout = os.environ.get("GITAPI_TIMEOUT", "").strip()
        return cls(
            git_binary=os.environ.get("GITAPI_GIT_BINARY", "").strip() or "git",
            show_commands=os.environ.get("GITAPI_SHOW_COMMANDS", "").strip().lower() in _TRUTHY,
            timeout=float(timeout) if timeout else None,
        )


@lru_cache(maxsize=1)
def get_settings() -> GitSettings:
    return GitSettings.from_env()
