"""Timeout-bounded HTTP fetcher and URL normalisation.

All network I/O for website checks goes through a single Fetcher instance
shared across tool calls. The Fetcher receives an httpx.AsyncClient via
constructor injection — the lifespan owns the client lifecycle.

Each fetch runs inside its own ``asyncio.timeout`` scope. When the scope (or
any enclosing scope set up by the caller) expires, the awaiting task is
cancelled and httpx closes the underlying connection.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

import httpx
import structlog

from llmstxt_explorer.errors import FetchError, FetchTimeoutError, InvalidUrlError

if TYPE_CHECKING:
    from llmstxt_explorer.config import CheckerSettings

log = structlog.get_logger()

_HTTP_PREFIXES = ("http://", "https://")
# httpx percent-encodes these in a host instead of rejecting them
_FORBIDDEN_HOST_CHARS = frozenset(" %<>^|\\\"`{}")


def build_http_client(settings: CheckerSettings) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(settings.fetch_timeout_seconds),
        headers={"User-Agent": settings.user_agent},
        limits=httpx.Limits(
            max_connections=20,
            max_keepalive_connections=10,
        ),
    )


def normalize_origin(value: str) -> str:
    """Return the origin (scheme + host + port) for a domain or URL.

    Inputs without an ``http://`` or ``https://`` prefix are treated as
    ``https://<value>``. Path, query and fragment are discarded; default
    ports are dropped. Raises InvalidUrlError when no host can be parsed or
    the host contains characters a hostname cannot hold (spaces, ``%``, ...).

    ``'supabase.com/docs'`` → ``'https://supabase.com'``
    """
    candidate = value if value.startswith(_HTTP_PREFIXES) else f"https://{value}"
    try:
        url = httpx.URL(candidate)
    except httpx.InvalidURL as exc:
        raise InvalidUrlError(value) from exc

    if not url.host or not _is_valid_host(url.host):
        raise InvalidUrlError(value)

    return f"{url.scheme}://{url.netloc.decode('ascii')}"


def _is_valid_host(host: str) -> bool:
    return not any(
        char in _FORBIDDEN_HOST_CHARS or char.isspace() or not char.isprintable() for char in host
    )


def hostname_of(value: str) -> str | None:
    """Return the lowercase hostname for a domain or URL, or None if unparseable."""
    try:
        origin = normalize_origin(value)
    except InvalidUrlError:
        return None
    return httpx.URL(origin).host


class Fetcher:
    """Single-request HTTP fetcher with a hard per-call time bound."""

    def __init__(self, client: httpx.AsyncClient, timeout: float = 5.0) -> None:
        self._client = client
        self._timeout = timeout

    async def fetch(self, url: str, timeout: float | None = None) -> httpx.Response:
        """GET a URL and return the response with its body fully read.

        Non-2xx responses are returned, not raised — callers decide what a
        missing file means. Raises FetchTimeoutError when the bound elapses
        and FetchError on network or URL errors.
        """
        bound = self._timeout if timeout is None else timeout
        log.debug("fetch_started", url=url, timeout=bound)
        started = time.monotonic()

        try:
            async with asyncio.timeout(bound):
                response = await self._client.get(url)
        except (TimeoutError, httpx.TimeoutException) as exc:
            log.warning("fetch_timeout", url=url, timeout=bound)
            raise FetchTimeoutError(url, bound) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log.warning("fetch_error", url=url, error=str(exc))
            raise FetchError(url, f"Network error fetching {url}: {exc}") from exc

        log.info(
            "fetch_complete",
            url=url,
            status_code=response.status_code,
            content_length=len(response.content),
            elapsed_ms=round((time.monotonic() - started) * 1000),
        )
        return response
