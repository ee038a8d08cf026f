"""Creating a new project from the layout repository."""

from __future__ import annotations

import os
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from snake.cli.repo import Repo

LAYOUT_URL_ENV = "SNAKE_LAYOUT_URL"
"""Environment variable holding the git URL of the project layout."""

_IGNORES = [".git", ".github"]


class ProjectExistsError(FileExistsError):
    """The target directory of a new project already exists."""


def _layout_url() -> str:
    url = os.environ.get(LAYOUT_URL_ENV, "")
    if not url:
        raise ValueError(f"layout repository is not configured, set {LAYOUT_URL_ENV}")
    return url


@dataclass
class Project:
    """A project to be created from the layout."""

    name: str

    def new(self, dir: str | os.PathLike, repo: Repo | None = None) -> Path:
        """Create the project under ``dir`` and return its path."""
        to = Path(dir) / self.name
        if to.exists():
            raise ProjectExistsError(f"{self.name} already exists")
        print(f"Creating service {self.name}")
        if repo is None:
            repo = Repo(_layout_url())
        repo.copy_to(to, self.name, list(_IGNORES))
        try:
            (to / "cmd" / "server").rename(to / "cmd" / self.name)
        except OSError:
            pass
        return to


def run(args: Sequence[str]) -> int:
    """The ``new`` command: create a project named by the first argument."""
    if not args:
        print(
            "\033[31mERROR: project name is required.\033[m Example: snake new helloworld",
            file=sys.stderr,
        )
        return 1
    project = Project(name=args[0])
    try:
        project.new(Path.cwd())
    except (OSError, ValueError, subprocess.SubprocessError) as exc:
        print(f"\033[31mERROR: {exc}\033[m", file=sys.stderr)
        return 1
    return 0