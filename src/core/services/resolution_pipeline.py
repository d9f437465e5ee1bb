"""Module resolution orchestration.

Turns a stream of `go list -m` lines into `ModuleResolution` results. Each
line is resolved independently; a failure is recorded on its own result and
never stops the remaining lines. Side effects (printing, progress) stay in the
CLI through `PipelineHooks`.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, Iterable

from core.domain.errors import ResolutionError
from core.domain.models import ModuleResolution
from core.interfaces.resolver import RepositoryResolver

NA_MODULE_NAME = "NA/USE_URL"

_INTERNALIZE_TABLE = str.maketrans({".": "_", "/": "_", "!": None, ":": None, "+": None})


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers."""

    on_result: Callable[[int, ModuleResolution], None] | None = None


def internalize_module_name(module_line: str, *, prefix: str = "", suffix: str = "") -> str:
    """Filesystem/identifier-friendly token for a module.

    `github.com/foo/bar-baz v1.0.0` -> `github_com_foo_bar-baz`. Returns an
    empty string for a line without fields.
    """

    fields = module_line.split()
    if not fields:
        return ""
    return prefix + fields[0].translate(_INTERNALIZE_TABLE) + suffix


def display_module_name(
    module_line: str,
    *,
    internalize: bool = False,
    prefix: str = "",
    suffix: str = "",
) -> str:
    fields = module_line.split()
    if not internalize:
        return fields[0] if fields else ""
    name = internalize_module_name(module_line, prefix=prefix, suffix=suffix)
    if len(name) < 3:
        return NA_MODULE_NAME
    return name


async def resolve_line(resolver: RepositoryResolver, line: str) -> ModuleResolution:
    try:
        repository_url = await resolver.resolve(line)
    except ResolutionError as exc:
        return ModuleResolution.failure(line, exc)
    return ModuleResolution.success(line, repository_url)


async def resolve_modules(
    lines: Iterable[str],
    resolver: RepositoryResolver,
    *,
    max_concurrency: int = 1,
    hooks: PipelineHooks | None = None,
) -> list[ModuleResolution]:
    """Resolve every line, returning results in input order.

    With `max_concurrency == 1` lines are fetched strictly one after another.
    Higher values run up to that many lookups at once; ordering is still by
    input index, not completion time.
    """

    hooks = hooks or PipelineHooks()
    lines = list(lines)

    # `on_result` fires in input order even when lookups finish out of order.
    finished: dict[int, ModuleResolution] = {}
    next_index = 0

    def emit(index: int, result: ModuleResolution) -> None:
        nonlocal next_index
        finished[index] = result
        while next_index in finished:
            ready = finished.pop(next_index)
            if hooks.on_result:
                hooks.on_result(next_index, ready)
            next_index += 1

    if max_concurrency <= 1:
        results: list[ModuleResolution] = []
        for index, line in enumerate(lines):
            result = await resolve_line(resolver, line)
            emit(index, result)
            results.append(result)
        return results

    semaphore = asyncio.Semaphore(max_concurrency)

    async def bounded(index: int, line: str) -> ModuleResolution:
        async with semaphore:
            result = await resolve_line(resolver, line)
        emit(index, result)
        return result

    return list(await asyncio.gather(*(bounded(i, line) for i, line in enumerate(lines))))
