"""goimportgraph CLI (Typer).

Lists the Git repositories behind `go list -mod=readonly -m all` by crawling
each module path for its go-import meta tag. Repository URLs go to stdout;
diagnostics go to stderr and are silenced by `-q`.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from adapters.go_import import GoImportResolver
from adapters.go_list import GO_LIST_ARGS, GoListError, GoNotFoundError, list_modules
from adapters.json_exporter import export_resolutions_json
from cli import doctor
from cli.ui_components import format_resolution
from core.config import AppSettings
from core.domain.models import ModuleResolution
from core.services.resolution_pipeline import PipelineHooks, resolve_modules

app = typer.Typer(
    add_completion=False,
    help="List the Git repositories behind `go list -mod=readonly -m all` (via go-import meta tags).",
)
app.command(name="doctor")(doctor.run)


def _read_lines(input_file: str) -> list[str]:
    if input_file == "-":
        return sys.stdin.read().splitlines()
    return Path(input_file).read_text(encoding="utf-8").splitlines()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Be more quiet (no diagnostics on stderr)."),
    chdir: Optional[Path] = typer.Option(
        None,
        "-C",
        "--chdir",
        help=f"Change to DIRECTORY before executing go {' '.join(GO_LIST_ARGS)}.",
        metavar="DIRECTORY",
    ),
    print_name: bool = typer.Option(False, "-n", "--name", help="Print module name after the repository URL."),
    internalize: bool = typer.Option(
        False,
        "-z",
        "--internalize",
        help="Print an internalized module name instead of the actual name.",
    ),
    prefix: str = typer.Option("", "-p", "--prefix", help="Prefix for the internalized module name."),
    suffix: str = typer.Option("", "-s", "--suffix", help="Suffix for the internalized module name."),
    readable: bool = typer.Option(False, "-r", "--readable", help="More human readable output."),
    input_file: Optional[str] = typer.Option(
        None,
        "-i",
        "--input",
        help="Read `go list -m` output from FILE ('-' for stdin) instead of running go.",
        metavar="FILE",
    ),
    concurrency: Optional[int] = typer.Option(
        None,
        "-j",
        "--concurrency",
        min=1,
        max=64,
        help="Resolve up to N modules in parallel (default: sequential).",
    ),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0.1, help="HTTP timeout in seconds."),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Also export every result to a JSON file."),
) -> None:
    """Resolve every module of the current Go module to its repository URL."""

    if ctx.invoked_subcommand is not None:
        return

    err_console = Console(stderr=True, quiet=quiet)

    overrides: dict[str, object] = {}
    if concurrency is not None:
        overrides["max_concurrency"] = concurrency
    if timeout is not None:
        overrides["http_timeout_seconds"] = timeout
    settings = AppSettings(**overrides)

    try:
        if input_file is not None:
            lines = _read_lines(input_file)
        else:
            lines = list_modules(chdir, settings)
    except (GoNotFoundError, GoListError, OSError) as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    def on_result(_: int, result: ModuleResolution) -> None:
        if not result.ok:
            err_console.print(f"[red]Error:[/red] {escape(str(result.error))}")
            return
        typer.echo(
            format_resolution(
                result,
                print_name=print_name,
                readable=readable,
                internalize=internalize,
                prefix=prefix,
                suffix=suffix,
            )
        )

    resolutions = asyncio.run(
        resolve_modules(
            lines,
            GoImportResolver(settings),
            max_concurrency=settings.max_concurrency,
            hooks=PipelineHooks(on_result=on_result),
        )
    )

    if json_path is not None:
        export_resolutions_json(resolutions=resolutions, output_path=json_path)
        err_console.print(f"[green]Saved JSON to:[/green] {escape(str(json_path))}")


def run() -> None:
    app()
