"""Application state container.

AppState is created once at server startup (inside the FastMCP lifespan context
manager) and injected into every tool and resource handler via the MCP Context
object.

The website index is loaded once and never reassigned. The result cache is
mutated only by the check engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from llmstxt_explorer.checker import WebsiteChecker
    from llmstxt_explorer.config import Settings
    from llmstxt_explorer.models.website import WebsiteIndex
    from llmstxt_explorer.protocols import CacheProtocol, FetcherProtocol


@dataclass
class AppState:
    """Holds all shared runtime state. Passed to every handler."""

    settings: Settings

    # Registry
    websites: WebsiteIndex

    # Check engine
    checker: WebsiteChecker
    cache: CacheProtocol
    fetcher: FetcherProtocol | None = None
    http_client: httpx.AsyncClient | None = None
