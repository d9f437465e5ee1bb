"""Repository resolver contract.

Structural (Protocol) so the pipeline can be driven by the go-import resolver
or by a stub in tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RepositoryResolver(Protocol):
    """Minimal contract for turning a module line into a repository URL.

    - `resolve` is async because it typically performs HTTP I/O.
    - Failures are raised as `core.domain.errors.ResolutionError` subclasses.
    """

    async def resolve(self, module_line: str) -> str:
        """Resolve one `go list -m` line to its repository URL."""

        ...
