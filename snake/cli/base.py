"""Helpers of the command-line tool: go commands, module files and file copying."""

from __future__ import annotations

import os
import re
import shutil
import stat
import subprocess
from pathlib import Path
from typing import Iterable, Sequence

MODULE_ENV = "SNAKE_MODULE"
"""Environment variable naming the framework's own module path."""

DEFAULT_MODULE = "snake"
HOME_DIR_NAME = ".snake"

_MODULE_LINE = re.compile(r"^\s*module\s+(.+?)\s*$")


def go_get(*args: str) -> None:
    """Run ``go get -u`` for each path in turn, stopping at the first failure."""
    for path in args:
        subprocess.run(["go", "get", "-u", path], check=True)


def module_path(filename: str | os.PathLike) -> str:
    """The module path declared in a go.mod file; empty when there is none."""
    text = Path(filename).read_text(encoding="utf-8")
    for line in text.splitlines():
        line = line.split("//", 1)[0]
        match = _MODULE_LINE.match(line)
        if match is None:
            continue
        value = match.group(1)
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"`":
            value = value[1:-1]
        return value
    return ""


def module_version(path: str) -> str:
    """The versioned path of module ``path`` as found in ``go mod graph``."""
    result = subprocess.run(
        ["go", "mod", "graph"],
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        check=True,
        text=True,
    )
    for line in result.stdout.splitlines():
        at = line.find("@")
        if at != -1 and path + "@" in line:
            return path + line[at:]
    raise LookupError(f"module {path} not found in the module graph")


def snake_mod() -> Path:
    """Where the framework's module sources live under GOPATH."""
    gopath = os.environ.get("GOPATH", "")
    module = os.environ.get(MODULE_ENV, DEFAULT_MODULE)
    try:
        versioned = module_version(module)
    except (OSError, LookupError, subprocess.SubprocessError):
        return Path(gopath, "src", *module.split("/"))
    return Path(gopath, "pkg", "mod", *versioned.split("/"))


def snake_home() -> Path:
    """The tool's home directory, created when missing."""
    home = Path.home() / HOME_DIR_NAME
    home.mkdir(mode=0o700, parents=True, exist_ok=True)
    return home


def snake_home_with_dir(dir: str) -> Path:
    """A directory inside the tool's home, created when missing."""
    home = snake_home() / dir
    home.mkdir(mode=0o700, parents=True, exist_ok=True)
    return home


def copy_file(
    src: str | os.PathLike, dst: str | os.PathLike, replaces: Sequence[str] = ()
) -> None:
    """Copy a file, replacing text in pairs of (old, new) taken from ``replaces``."""
    data = Path(src).read_bytes()
    for old, new in zip(replaces[0::2], replaces[1::2]):
        data = data.replace(old.encode("utf-8"), new.encode("utf-8"))
    Path(dst).write_bytes(data)
    shutil.copymode(src, dst)


def copy_dir(
    src: str | os.PathLike,
    dst: str | os.PathLike,
    replaces: Sequence[str] = (),
    ignores: Iterable[str] | None = None,
) -> None:
    """Copy a directory tree, skipping entries named in ``ignores``."""
    src_path, dst_path = Path(src), Path(dst)
    mode = stat.S_IMODE(src_path.stat().st_mode)
    dst_path.mkdir(mode=mode, parents=True, exist_ok=True)
    skipped = set(ignores or ())
    for entry in sorted(src_path.iterdir(), key=lambda p: p.name):
        if entry.name in skipped:
            continue
        target = dst_path / entry.name
        if entry.is_dir():
            copy_dir(entry, target, replaces, skipped)
        else:
            copy_file(entry, target, replaces)