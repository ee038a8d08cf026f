"""The ``snake`` command."""

from __future__ import annotations

import argparse
import os
import subprocess
from typing import Sequence

from snake.cli import project
from snake.cli.base import DEFAULT_MODULE, MODULE_ENV, go_get

VERSION = "v0.2.0"
_DESCRIPTION = "Snake: An elegant toolkit for Go microservices."


def upgrade() -> int:
    """Upgrade the tool with ``go get``; print the error on failure."""
    module = os.environ.get(MODULE_ENV, DEFAULT_MODULE)
    try:
        go_get(f"{module}/cmd/snake")
    except (OSError, subprocess.SubprocessError) as exc:
        print(exc)
        return 1
    return 0


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="snake", description=_DESCRIPTION)
    parser.add_argument("--version", action="version", version=f"snake version {VERSION}")
    commands = parser.add_subparsers(dest="command")
    new = commands.add_parser(
        "new",
        help="Create a project template",
        description="Create a project using the repository template. "
        "Example: snake new helloworld",
    )
    new.add_argument("names", nargs="*", metavar="name")
    commands.add_parser(
        "upgrade",
        help="Upgrade the snake tools",
        description="Upgrade the snake tools. Example: snake upgrade",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return its exit status."""
    parser = _parser()
    args = parser.parse_args(argv)
    if args.command == "new":
        return project.run(args.names)
    if args.command == "upgrade":
        return upgrade()
    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())