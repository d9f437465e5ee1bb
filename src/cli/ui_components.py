"""CLI presentation helpers (Rich).

Keeps output formatting out of the command functions so it can be reused by
`doctor` and tested on its own.
"""

from __future__ import annotations

from rich.table import Table

from core.domain.models import ModuleResolution
from core.services.resolution_pipeline import display_module_name


def format_resolution(
    result: ModuleResolution,
    *,
    print_name: bool = False,
    readable: bool = False,
    internalize: bool = False,
    prefix: str = "",
    suffix: str = "",
) -> str:
    """Single stdout line for a successful resolution.

    - default:        `<repo-url>`
    - `print_name`:   `<repo-url> <module>`
    - `+ readable`:   `<repo-url> => <module>`
    """

    if not print_name:
        return str(result.repository_url)
    name = display_module_name(result.line, internalize=internalize, prefix=prefix, suffix=suffix)
    separator = " => " if readable else " "
    return f"{result.repository_url}{separator}{name}"


def build_checks_table(title: str) -> Table:
    table = Table(title=title)
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
