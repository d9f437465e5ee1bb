"""`go list -m all` runner.

Locates the Go toolchain on PATH and captures the module listing of the
current (or given) module directory.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

from core.config import AppSettings

GO_LIST_ARGS = ("list", "-mod=readonly", "-m", "all")


class GoNotFoundError(RuntimeError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unable to find `{name}` in PATH={os.environ.get('PATH', '')}")


class GoListError(RuntimeError):
    def __init__(self, command: list[str], returncode: int, stderr: str) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"error executing {' '.join(command)}: {detail}")


def find_executable(name: str) -> str | None:
    """Full path of an executable file named `name` in PATH, or None."""

    return shutil.which(name)


def list_modules(directory: Path | None = None, settings: AppSettings | None = None) -> list[str]:
    """Run `go list -mod=readonly -m all` and return its stdout lines.

    `directory` is used as the working directory (the `-C` flag of the CLI).
    """

    settings = settings or AppSettings()
    go_path = find_executable(settings.go_binary)
    if not go_path:
        raise GoNotFoundError(settings.go_binary)

    command = [go_path, *GO_LIST_ARGS]
    completed = subprocess.run(
        command,
        cwd=str(directory) if directory else None,
        capture_output=True,
        text=True,
        check=False,
    )
    if completed.returncode != 0:
        raise GoListError(command, completed.returncode, completed.stderr)
    return completed.stdout.splitlines()
