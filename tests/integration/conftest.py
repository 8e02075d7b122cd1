"""Integration test fixtures.

Provides a fully wired AppState (real checker, real Fetcher over an httpx
client that respx can intercept). Registry fixtures come from
tests/conftest.py (sample_websites, website_index).
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from llmstxt_explorer.cache import ResultCache
from llmstxt_explorer.checker import WebsiteChecker
from llmstxt_explorer.config import Settings
from llmstxt_explorer.fetcher import Fetcher, build_http_client
from llmstxt_explorer.state import AppState

if TYPE_CHECKING:
    from llmstxt_explorer.models.website import WebsiteIndex


@pytest.fixture()
def subprocess_env() -> dict[str, str]:
    """Baseline env dict for subprocess-based MCP integration tests.

    Forces stdio transport and points the registry at an unreachable address
    so the server starts from the built-in fallback list.
    """
    env = os.environ.copy()
    env["LLMSTXT_EXPLORER__SERVER__TRANSPORT"] = "stdio"
    env["LLMSTXT_EXPLORER__REGISTRY__URL"] = "http://127.0.0.1:1/websites.json"
    env["LLMSTXT_EXPLORER__REGISTRY__FETCH_TIMEOUT_SECONDS"] = "2"
    env["LLMSTXT_EXPLORER__LOGGING__LEVEL"] = "ERROR"
    return env


@pytest.fixture()
async def app_state(website_index: WebsiteIndex) -> AppState:
    """Full AppState wired the same way the server lifespan does it."""
    settings = Settings()
    async with build_http_client(settings.checker) as client:
        cache = ResultCache()
        fetcher = Fetcher(client, timeout=settings.checker.fetch_timeout_seconds)
        checker = WebsiteChecker(fetcher, cache, settings.checker)

        state = AppState(
            settings=settings,
            websites=website_index,
            checker=checker,
            cache=cache,
            fetcher=fetcher,
            http_client=client,
        )
        yield state
