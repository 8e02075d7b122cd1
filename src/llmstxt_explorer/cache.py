"""In-memory website check result cache.

Keyed by the exact string the caller passed to the check engine, before any
normalisation: ``"example.com"`` and ``"https://example.com"`` are distinct
entries. Entries live for the process lifetime; there is no TTL or eviction.
Only error-free results are stored (enforced by the engine, not here).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from llmstxt_explorer.models.check import WebsiteCheckResult

log = structlog.get_logger()


class ResultCache:
    """Process-scoped result cache owned by AppState."""

    def __init__(self) -> None:
        self._entries: dict[str, WebsiteCheckResult] = {}

    def get(self, key: str) -> WebsiteCheckResult | None:
        return self._entries.get(key)

    def set(self, key: str, result: WebsiteCheckResult) -> None:
        if result.error is not None:
            raise ValueError("Refusing to cache a failed website check")
        self._entries[key] = result
        log.debug("cache_set", key=key, entries=len(self._entries))

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
