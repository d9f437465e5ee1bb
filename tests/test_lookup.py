from urllib.parse import urlsplit

import pytest

from core.domain.errors import ModulePathError, PathError
from core.domain.lookup import build_lookup_url, path_segments


@pytest.mark.parametrize(
    "module_path, expected",
    [
        ("example.com/pkg", "https://example.com/pkg?go-get=1"),
        ("golang.org/x/net", "https://golang.org/x/net?go-get=1"),
        ("gopkg.in/yaml.v3", "https://gopkg.in/yaml.v3?go-get=1"),
        ("example.com", "https://example.com?go-get=1"),
    ],
)
def test_lookup_url_is_https_with_go_get_query(module_path, expected):
    assert build_lookup_url(module_path) == expected


@pytest.mark.parametrize(
    "module_path",
    [
        "http://example.com/pkg",
        "ftp://example.com/pkg?x=1&y=2",
        "example.com/pkg?go-get=0",
        "example.com/pkg#frag",
    ],
)
def test_scheme_and_query_are_always_replaced(module_path):
    parts = urlsplit(build_lookup_url(module_path))
    assert parts.scheme == "https"
    assert parts.query == "go-get=1"
    assert parts.netloc == "example.com"
    assert parts.path == "/pkg"
    assert parts.fragment == ""


def test_github_sub_package_collapses_to_repository_root():
    url = build_lookup_url("github.com/spf13/cobra/doc/man")
    assert url == "https://github.com/spf13/cobra?go-get=1"


def test_github_host_match_is_case_insensitive():
    assert path_segments("GitHub.com/Owner/Repo/sub") == ["GitHub.com", "Owner", "Repo"]


def test_github_repository_root_is_untouched():
    assert path_segments("github.com/spf13/cobra") == ["github.com", "spf13", "cobra"]


def test_other_hosts_keep_deep_paths():
    url = build_lookup_url("gitlab.com/group/subgroup/project/pkg")
    assert url == "https://gitlab.com/group/subgroup/project/pkg?go-get=1"


def test_github_truncation_applies_with_explicit_scheme():
    url = build_lookup_url("https://github.com/a/b/c/d")
    assert url == "https://github.com/a/b?go-get=1"


def test_empty_host_is_a_path_error():
    with pytest.raises(PathError):
        build_lookup_url("/only/a/path")


@pytest.mark.parametrize(
    "module_path",
    [
        "example.com/%zz",
        "example.com/pkg\x7f",
        "http://[::1/pkg",
        "example.com:abc/pkg",
    ],
)
def test_unparseable_module_paths_raise_module_path_error(module_path):
    with pytest.raises(ModulePathError):
        build_lookup_url(module_path)
