"""Module path -> go-get lookup URL.

The lookup URL is always `https://<module path>?go-get=1`. For github.com,
sub-package paths collapse to the repository root (host/owner/repo) because
GitHub only serves go-import tags there.
"""

from __future__ import annotations

import re
from urllib.parse import SplitResult, urlsplit, urlunsplit

from core.domain.errors import ModulePathError, PathError

GO_GET_QUERY = "go-get=1"
GITHUB_HOST = "github.com"
GITHUB_MAX_SEGMENTS = 3

_RE_CONTROL = re.compile(r"[\x00-\x1f\x7f]")
_RE_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _split(module_path: str) -> SplitResult:
    if _RE_CONTROL.search(module_path):
        raise ModulePathError(module_path, "invalid control character in URL")
    if _RE_BAD_ESCAPE.search(module_path):
        raise ModulePathError(module_path, "invalid URL escape")
    try:
        parts = urlsplit(module_path)
        _ = parts.port  # raises ValueError on a malformed port
    except ValueError as exc:
        raise ModulePathError(module_path, str(exc)) from exc
    if parts.scheme and not parts.netloc:
        # e.g. "host:123/x" parses as scheme "host" with an opaque path
        raise ModulePathError(module_path, "missing host")
    return parts


def path_segments(module_path: str) -> list[str]:
    """Host-first path segments of a module path, github.com truncation applied.

    A scheme, query or fragment on the input is discarded.
    """

    parts = _split(module_path)
    raw = parts.netloc + parts.path if parts.netloc else parts.path
    segments = raw.split("/")
    if not segments or not segments[0]:
        raise PathError(f"https://{raw}?{GO_GET_QUERY}")

    if segments[0].lower() == GITHUB_HOST and len(segments) > GITHUB_MAX_SEGMENTS:
        segments = segments[:GITHUB_MAX_SEGMENTS]
    return segments


def build_lookup_url(module_path: str) -> str:
    segments = path_segments(module_path)
    host, rest = segments[0], segments[1:]
    path = "/" + "/".join(rest) if rest else ""
    return urlunsplit(("https", host, path, GO_GET_QUERY, ""))
