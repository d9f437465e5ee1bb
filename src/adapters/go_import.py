"""go-import resolution.

- `DiscoveryTagScanner` tokenizes an HTML page chunk by chunk and stops at the
  first `<meta name="go-import" content="...">`.
- `GoImportResolver` fetches `https://<module>?go-get=1`, streams the body
  into the scanner and turns the tag fields into a repository URL. Only `git`
  repositories are supported.
"""

from __future__ import annotations

import codecs
from html.parser import HTMLParser
from typing import Iterable

import httpx
from bs4.dammit import EncodingDetector

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import (
    ExtractionError,
    FetchError,
    HTTPStatusError,
    ModulePathError,
    TagNotFoundError,
    UnsupportedVCSError,
)
from core.domain.lookup import build_lookup_url
from core.domain.models import ModuleLine
from core.interfaces.resolver import RepositoryResolver

GO_IMPORT_META_NAME = "go-import"
SUPPORTED_VCS = "git"
DEFAULT_ENCODING = "utf-8"


def _pick_encoding(*candidates: str | None) -> str:
    for candidate in candidates:
        if not candidate:
            continue
        try:
            return codecs.lookup(candidate).name
        except LookupError:
            continue
    return DEFAULT_ENCODING


class _MetaTokenizer(HTMLParser):
    """Start-tag tokenizer that records the first qualifying go-import meta."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.fields: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if self.fields or tag != "meta":
            return
        found = False
        content: list[str] = []
        for key, value in attrs:
            if key == "name" and value == GO_IMPORT_META_NAME:
                found = True
            if key == "content":
                content = (value or "").split()
        if found and content:
            self.fields = content


class DiscoveryTagScanner:
    """Incremental go-import scanner.

    `feed` returns the tag fields as soon as a qualifying tag has been
    tokenized, so callers can stop reading. `close` flushes the tokenizer and
    raises `TagNotFoundError` if the markup ended without one. The byte
    encoding is taken from a BOM or a declared charset in the first chunk
    (bs4's `EncodingDetector`), UTF-8 otherwise.
    """

    def __init__(self) -> None:
        self._tokenizer = _MetaTokenizer()
        self._decoder: codecs.IncrementalDecoder | None = None
        self._broken = False

    def _decode(self, chunk: bytes, final: bool = False) -> str:
        if self._decoder is None:
            chunk, bom_encoding = EncodingDetector.strip_byte_order_mark(chunk)
            declared = EncodingDetector.find_declared_encoding(chunk, is_html=True)
            encoding = _pick_encoding(bom_encoding, declared)
            self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        return self._decoder.decode(chunk, final)

    def _tokenize(self, text: str, final: bool = False) -> list[str] | None:
        if self._broken:
            return None
        try:
            if text:
                self._tokenizer.feed(text)
            if final:
                self._tokenizer.close()
        except (AssertionError, ValueError):
            # a tokenizer error ends the scan like end-of-stream does
            self._broken = True
        return self._tokenizer.fields or None

    def feed(self, chunk: bytes | str) -> list[str] | None:
        if not chunk:
            return self._tokenizer.fields or None
        text = chunk if isinstance(chunk, str) else self._decode(chunk)
        return self._tokenize(text)

    def close(self) -> list[str]:
        tail = self._decoder.decode(b"", True) if self._decoder is not None else ""
        fields = self._tokenize(tail, final=True)
        if not fields:
            raise TagNotFoundError()
        return fields


def scan_for_discovery_tag(markup: bytes | str | Iterable[bytes]) -> list[str]:
    """Return the whitespace-split `content` of the first go-import meta tag.

    Only `meta` start tags are looked at, in document order; the first one
    carrying `name="go-import"` and a non-empty `content` wins. An iterable of
    chunks is consumed only up to that tag. Raises `TagNotFoundError` when the
    markup ends (or cannot be tokenized) without such a tag.
    """

    scanner = DiscoveryTagScanner()
    chunks = [markup] if isinstance(markup, (bytes, str)) else markup
    for chunk in chunks:
        fields = scanner.feed(chunk)
        if fields:
            return fields
    return scanner.close()


def repository_url_from_fields(url: str, fields: list[str]) -> str:
    """Validate go-import fields (`prefix vcs repo-root`) and return the repo root."""

    if len(fields) >= 3 and fields[1] != SUPPORTED_VCS:
        raise UnsupportedVCSError(url, fields[1])
    if len(fields) >= 3:
        return fields[2]
    raise ExtractionError(url, fields)


class GoImportResolver(RepositoryResolver):
    """Resolves `go list -m` lines through the go-get meta tag protocol.

    Every call opens its own client and closes the response before returning,
    so resolutions never share connection state. The body is read only up to
    the go-import tag.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def resolve(self, module_line: str) -> str:
        module = ModuleLine.parse(module_line)
        url = build_lookup_url(module.module)

        async with build_async_client(self._settings, transport=self._transport) as client:
            fields = await self._fetch(client, module.module, url)

        return repository_url_from_fields(url, fields)

    async def _fetch(self, client: httpx.AsyncClient, module_path: str, url: str) -> list[str]:
        try:
            async with client.stream("GET", url) as response:
                if response.status_code != httpx.codes.OK:
                    raise HTTPStatusError(response.status_code, url)
                scanner = DiscoveryTagScanner()
                async for chunk in response.aiter_bytes():
                    fields = scanner.feed(chunk)
                    if fields:
                        return fields
                return scanner.close()
        except (httpx.InvalidURL, UnicodeError) as exc:
            # hosts urllib accepts but httpx/idna refuse (e.g. "xn--.com")
            raise ModulePathError(module_path, str(exc) or type(exc).__name__) from exc
        except httpx.HTTPError as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc
