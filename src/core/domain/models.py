"""Domain models (Pydantic v2).

These models describe *what* the information is (a line of `go list -m`
output, the outcome of resolving it), not *how* it is obtained.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from core.domain.errors import NotAModuleError, ResolutionError


class ModuleLine(BaseModel):
    """One record of `go list -m all` output.

    Only the first field (the module path) matters for resolution; the version
    and any `=> replacement` tail are kept for presentation.
    """

    raw: str = Field(..., description="Line exactly as read from the listing.")
    module: str = Field(..., min_length=1, description="Module path (first field).")
    version: str | None = Field(default=None, description="Version token, when present.")

    @classmethod
    def parse(cls, line: str) -> "ModuleLine":
        fields = line.split()
        if not fields:
            raise NotAModuleError(line)
        return cls(
            raw=line,
            module=fields[0],
            version=fields[1] if len(fields) > 1 else None,
        )


class ModuleResolution(BaseModel):
    """Outcome of resolving a single module line.

    Exactly one of `repository_url` / `error` is set.
    """

    line: str = Field(..., description="Input line.")
    module: str | None = Field(
        default=None,
        description="Module path, absent when the line had no fields.",
    )
    repository_url: str | None = Field(
        default=None,
        description="Repository URL declared by the go-import tag.",
    )
    error: str | None = Field(default=None, description="Human-readable failure.")
    error_kind: str | None = Field(
        default=None,
        description="Class name of the failure (e.g. 'UnsupportedVCSError').",
    )

    @property
    def ok(self) -> bool:
        return self.repository_url is not None

    @classmethod
    def success(cls, line: str, repository_url: str) -> "ModuleResolution":
        fields = line.split()
        return cls(line=line, module=fields[0] if fields else None, repository_url=repository_url)

    @classmethod
    def failure(cls, line: str, exc: ResolutionError) -> "ModuleResolution":
        fields = line.split()
        return cls(
            line=line,
            module=fields[0] if fields else None,
            error=str(exc),
            error_kind=type(exc).__name__,
        )
