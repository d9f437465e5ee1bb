"""
Pytest configuration and shared fixtures
"""

import httpx
import pytest

from core.config import AppSettings

GO_IMPORT_PAGE = (
    "<!DOCTYPE html><html><head>"
    '<meta name="go-import" content="{prefix} {vcs} {repo}">'
    "</head><body>Nothing to see here.</body></html>"
)


def go_import_page(prefix, vcs, repo):
    """Minimal go-get=1 response page"""
    return GO_IMPORT_PAGE.format(prefix=prefix, vcs=vcs, repo=repo)


class FakeGoProxy:
    """
    URL -> (status, body) table served through httpx.MockTransport

    Unknown URLs answer 404. Every request URL is recorded in `requested`.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.requested = []

    def handler(self, request):
        url = str(request.url)
        self.requested.append(url)
        status, body = self.responses.get(url, (404, "not found"))
        return httpx.Response(status, text=body)

    @property
    def transport(self):
        return httpx.MockTransport(self.handler)


@pytest.fixture
def settings():
    """Settings independent of the developer's environment"""
    return AppSettings(
        _env_file=None,
        http_timeout_seconds=5.0,
        user_agent="goimportgraph-tests",
        max_concurrency=1,
        go_binary="go",
    )


@pytest.fixture
def fake_proxy():
    return FakeGoProxy()
