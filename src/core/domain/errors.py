"""Resolution errors.

Every failure a single module line can hit is a `ResolutionError`. The
pipeline records them per line and keeps going; none of them aborts a run.
"""

from __future__ import annotations


class ResolutionError(Exception):
    """Base class for every per-module resolution failure."""


class NotAModuleError(ResolutionError):
    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f"not a module: {line}")


class ModulePathError(ResolutionError):
    """The module path could not be parsed as a URL."""

    def __init__(self, module_path: str, reason: str) -> None:
        self.module_path = module_path
        self.reason = reason
        super().__init__(f"invalid module path {module_path!r}: {reason}")


class PathError(ResolutionError):
    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"path error: {url}")


class FetchError(ResolutionError):
    """Transport-level failure (DNS, TLS, connection reset, timeout...)."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"unable to GET {url}: {reason}")


class HTTPStatusError(ResolutionError):
    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"{status_code}: unable to GET {url}")


class TagNotFoundError(ResolutionError):
    def __init__(self) -> None:
        super().__init__("unable to find go-import meta tag")


class UnsupportedVCSError(ResolutionError):
    def __init__(self, url: str, kind: str) -> None:
        self.url = url
        self.kind = kind
        super().__init__(f"{url}: unsupported vcs {kind}")


class ExtractionError(ResolutionError):
    """The go-import tag was found but carried fewer than three fields."""

    def __init__(self, url: str, fields: list[str]) -> None:
        self.url = url
        self.fields = list(fields)
        super().__init__(f"{url}: unable to extract repository URL from {' '.join(fields)!r}")
