"""Protocol interfaces for swappable components.

The check engine and AppState reference these protocols, not the concrete
implementations. This allows:
- Tests to use lightweight fakes that record calls
- Future backends (e.g. a TTL cache) to be swapped without changing engine code
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    import httpx

    from llmstxt_explorer.models.check import WebsiteCheckResult


class CacheProtocol(Protocol):
    """Interface for the website check result cache."""

    def get(self, key: str) -> WebsiteCheckResult | None: ...

    def set(self, key: str, result: WebsiteCheckResult) -> None: ...


class FetcherProtocol(Protocol):
    """Interface for the timeout-bounded HTTP fetcher."""

    async def fetch(self, url: str, timeout: float | None = None) -> httpx.Response: ...
