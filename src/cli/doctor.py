"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

from rich.console import Console

from adapters.go_import import GoImportResolver
from adapters.go_list import find_executable
from cli.ui_components import build_checks_table
from core.config import AppSettings
from core.domain.errors import ResolutionError

_console = Console()

SAMPLE_MODULE = "golang.org/x/net"


async def _check_resolution(settings: AppSettings, module: str) -> tuple[bool, str]:
    try:
        repository_url = await GoImportResolver(settings).resolve(module)
    except ResolutionError as exc:
        return False, str(exc)
    return True, repository_url


def run() -> None:
    """Check the Go toolchain and go-get connectivity."""

    settings = AppSettings()

    table = build_checks_table("goimportgraph doctor")

    go_path = find_executable(settings.go_binary)
    if go_path:
        table.add_row("Go toolchain", "OK", go_path)
    else:
        table.add_row("Go toolchain", "FAIL", f"`{settings.go_binary}` not found in PATH (use --input instead)")

    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Concurrency", "OK", str(settings.max_concurrency))

    ok_lookup, detail_lookup = asyncio.run(_check_resolution(settings, SAMPLE_MODULE))
    table.add_row(f"go-get lookup ({SAMPLE_MODULE})", "OK" if ok_lookup else "FAIL", detail_lookup)

    _console.print(table)

    if not go_path:
        _console.print(
            "\n[yellow]Note:[/yellow] without Go, pipe `go list -m all` output in with `--input -`."
        )
