import asyncio

import pytest

from core.domain.errors import NotAModuleError, UnsupportedVCSError
from core.domain.models import ModuleLine, ModuleResolution
from core.services.resolution_pipeline import (
    NA_MODULE_NAME,
    PipelineHooks,
    display_module_name,
    internalize_module_name,
    resolve_modules,
)


class StubResolver:
    """
    Resolver answering from a module -> repo table

    Unknown modules raise UnsupportedVCSError; delays (seconds) shuffle completion order.
    """

    def __init__(self, repos, delays=None):
        self.repos = repos
        self.delays = delays or {}
        self.active = 0
        self.peak = 0

    async def resolve(self, module_line):
        module = ModuleLine.parse(module_line).module
        self.active += 1
        self.peak = max(self.peak, self.active)
        try:
            await asyncio.sleep(self.delays.get(module, 0))
        finally:
            self.active -= 1
        if module not in self.repos:
            raise UnsupportedVCSError(f"https://{module}?go-get=1", "hg")
        return self.repos[module]


LINES = [
    "example.com/a v1.0.0",
    "example.com/b v2.0.0",
    "",
    "example.com/hg v0.1.0",
    "example.com/c v3.0.0",
]
REPOS = {
    "example.com/a": "https://git.example/a",
    "example.com/b": "https://git.example/b",
    "example.com/c": "https://git.example/c",
}


@pytest.mark.asyncio
async def test_failures_are_isolated_per_line():
    results = await resolve_modules(LINES, StubResolver(REPOS))

    assert [r.repository_url for r in results] == [
        "https://git.example/a",
        "https://git.example/b",
        None,
        None,
        "https://git.example/c",
    ]
    assert results[2].error_kind == "NotAModuleError"
    assert results[2].module is None
    assert results[3].error_kind == "UnsupportedVCSError"
    assert results[3].module == "example.com/hg"
    assert "unsupported vcs hg" in results[3].error


@pytest.mark.asyncio
async def test_sequential_by_default():
    resolver = StubResolver(REPOS)
    await resolve_modules(LINES, resolver)
    assert resolver.peak == 1


@pytest.mark.asyncio
async def test_concurrent_results_keep_input_order():
    delays = {"example.com/a": 0.05, "example.com/b": 0.01, "example.com/c": 0.0}
    resolver = StubResolver(REPOS, delays=delays)
    seen = []

    results = await resolve_modules(
        LINES,
        resolver,
        max_concurrency=3,
        hooks=PipelineHooks(on_result=lambda index, result: seen.append(index)),
    )

    assert [r.line for r in results] == LINES
    assert seen == [0, 1, 2, 3, 4]
    assert 1 < resolver.peak <= 3


@pytest.mark.asyncio
async def test_empty_input():
    assert await resolve_modules([], StubResolver(REPOS)) == []


def test_module_line_parsing():
    line = ModuleLine.parse("golang.org/x/net v0.24.0 => golang.org/x/net v0.25.0")
    assert line.module == "golang.org/x/net"
    assert line.version == "v0.24.0"
    assert ModuleLine.parse("example.com/main").version is None
    with pytest.raises(NotAModuleError):
        ModuleLine.parse("  ")


def test_resolution_model_helpers():
    ok = ModuleResolution.success("example.com/a v1", "https://git.example/a")
    assert ok.ok and ok.module == "example.com/a" and ok.error is None

    failed = ModuleResolution.failure("", NotAModuleError(""))
    assert not failed.ok
    assert failed.error == "not a module: "


@pytest.mark.parametrize(
    "line, expected",
    [
        ("github.com/spf13/cobra v1.8.0", "github_com_spf13_cobra"),
        ("github.com/!burnt!sushi/toml v1.3.2", "github_com_burntsushi_toml"),
        ("gopkg.in/yaml.v3 v3.0.1", "gopkg_in_yaml_v3"),
        ("example.com/a:b+c v0.0.0", "example_com_abc"),
        ("", ""),
    ],
)
def test_internalize_module_name(line, expected):
    assert internalize_module_name(line) == expected


def test_internalize_with_prefix_and_suffix():
    assert internalize_module_name("golang.org/x/net", prefix="dep_", suffix="_src") == "dep_golang_org_x_net_src"


def test_display_module_name():
    assert display_module_name("golang.org/x/net v0.1.0") == "golang.org/x/net"
    assert display_module_name("golang.org/x/net v0.1.0", internalize=True) == "golang_org_x_net"
    assert display_module_name("a v1", internalize=True) == NA_MODULE_NAME
    assert display_module_name("", internalize=True) == NA_MODULE_NAME
