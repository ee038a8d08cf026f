"""A local copy of a template git repository."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Iterable

from snake.cli.base import copy_dir, module_path, snake_home_with_dir

GIT_TIMEOUT = 60.0
"""Seconds a git command may take."""


class Repo:
    """Clones a repository into the tool's home and copies it out as a new project."""

    def __init__(self, url: str, home: str | os.PathLike | None = None) -> None:
        self.url = url
        self.home = Path(home) if home is not None else snake_home_with_dir("repo")

    def path(self) -> Path:
        """Where the local copy lives: the repository name under the home directory."""
        start = self.url.rfind("/")
        end = self.url.rfind(".git")
        if end == -1 or end < start + 1:
            raise ValueError(f"cannot take a repository name from {self.url!r}")
        return self.home / self.url[start + 1:end]

    def pull(self) -> None:
        """Bring the local copy up to date."""
        subprocess.run(
            ["git", "-C", str(self.path()), "pull", "origin"],
            check=True,
            timeout=GIT_TIMEOUT,
        )

    def clone(self) -> None:
        """Clone the repository, or pull when a local copy already exists."""
        target = self.path()
        if target.exists():
            self.pull()
            return
        subprocess.run(
            ["git", "clone", self.url, str(target)],
            check=True,
            timeout=GIT_TIMEOUT,
        )

    def copy_to(
        self,
        to: str | os.PathLike,
        mod_path: str,
        ignores: Iterable[str] | None = None,
    ) -> None:
        """Copy the repository to ``to``, renaming its module path to ``mod_path``."""
        self.clone()
        mod = module_path(self.path() / "go.mod")
        copy_dir(self.path(), to, [mod, mod_path], ignores)