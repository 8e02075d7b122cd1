"""Website check engine.

Determines whether a site exposes ``llms.txt`` / ``llms-full.txt``, resolves
the first few ``@``-referenced documents in ``llms.txt``, and returns a single
WebsiteCheckResult. Expected failures are reported in the result's ``error``
field (or per linked entry), never raised.

Time budgets nest as ``asyncio.timeout`` scopes::

    global (15s)
    ├── llms.txt fetch (5s)
    ├── linked batch (10s)
    │   └── one fetch per reference (5s each, concurrent)
    └── llms-full.txt fetch (5s)

When a scope expires the task running inside it is cancelled, which aborts
every in-flight request beneath it. An inner scope only reports a timeout for
its own deadline; if an enclosing deadline fired, the cancellation passes
through to that scope instead.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from llmstxt_explorer.errors import FetchError, InvalidUrlError
from llmstxt_explorer.fetcher import normalize_origin
from llmstxt_explorer.models.check import LinkedContent, WebsiteCheckResult
from llmstxt_explorer.parser import extract_linked_urls

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from llmstxt_explorer.config import CheckerSettings
    from llmstxt_explorer.protocols import CacheProtocol, FetcherProtocol

GLOBAL_TIMEOUT_MESSAGE = "Global timeout exceeded"
LINKED_TIMEOUT_MESSAGE = "Timeout fetching linked contents"

LLMS_TXT_PATH = "/llms.txt"
LLMS_FULL_TXT_PATH = "/llms-full.txt"


class WebsiteChecker:
    """Runs website checks and owns the policy for caching their results."""

    def __init__(
        self,
        fetcher: FetcherProtocol,
        cache: CacheProtocol,
        settings: CheckerSettings,
    ) -> None:
        self._fetcher = fetcher
        self._cache = cache
        self._settings = settings

    async def check(self, domain: str) -> WebsiteCheckResult:
        """Check a domain or URL for llms.txt discovery files.

        Results without an error are cached under the exact ``domain`` string.
        A second call with the same string returns the cached object without
        any network activity.
        """
        log = structlog.get_logger().bind(domain=domain)
        log.info("check_started")

        cached = self._cache.get(domain)
        if cached is not None:
            log.info("cache_hit")
            return cached

        try:
            async with asyncio.timeout(self._settings.global_timeout_seconds):
                origin = normalize_origin(domain)
                log.debug("origin_resolved", origin=origin)
                result = await self._run_pipeline(origin, log)
        except InvalidUrlError as exc:
            log.warning("check_invalid_url")
            return WebsiteCheckResult(error=str(exc))
        except TimeoutError:
            log.warning("check_global_timeout", timeout=self._settings.global_timeout_seconds)
            return WebsiteCheckResult(error=GLOBAL_TIMEOUT_MESSAGE)
        except Exception as exc:
            log.error("check_unexpected_error", exc_info=True)
            return WebsiteCheckResult(error=str(exc) or "Unknown error")

        if result.error is None:
            self._cache.set(domain, result)

        log.info(
            "check_complete",
            has_llms_txt=result.has_llms_txt,
            has_llms_full_txt=result.has_llms_full_txt,
            linked_count=len(result.linked_contents or []),
            error=result.error,
        )
        return result

    async def _run_pipeline(self, origin: str, log: FilteringBoundLogger) -> WebsiteCheckResult:
        llms_txt_url = origin + LLMS_TXT_PATH

        try:
            response = await self._fetcher.fetch(llms_txt_url)
        except FetchError as exc:
            log.warning("llms_txt_fetch_failed", url=llms_txt_url, error=str(exc))
            return WebsiteCheckResult(error=str(exc))

        if not response.is_success:
            log.info("llms_txt_missing", url=llms_txt_url, status_code=response.status_code)
            return WebsiteCheckResult()

        content = response.text
        linked_contents = await self._fetch_linked_contents(content, log)

        # Strictly after llms.txt and its linked documents have resolved.
        llms_full_txt_url = origin + LLMS_FULL_TXT_PATH
        full_content = await self._fetch_llms_full_txt(llms_full_txt_url, log)

        return WebsiteCheckResult(
            has_llms_txt=True,
            llms_txt_url=llms_txt_url,
            llms_txt_content=content,
            linked_contents=linked_contents,
            has_llms_full_txt=full_content is not None,
            llms_full_txt_url=llms_full_txt_url if full_content is not None else None,
            llms_full_txt_content=full_content,
        )

    async def _fetch_linked_contents(
        self, content: str, log: FilteringBoundLogger
    ) -> list[LinkedContent] | None:
        """Fetch up to ``max_linked_urls`` references concurrently, in extraction order.

        Returns None when the body has no references. If the batch deadline
        expires, every entry is reported as timed out, including any that had
        already completed.
        """
        urls = extract_linked_urls(content, limit=self._settings.max_linked_urls)
        if not urls:
            return None

        log.info("linked_urls_found", count=len(urls), limit=self._settings.max_linked_urls)

        try:
            async with asyncio.timeout(self._settings.linked_timeout_seconds):
                return list(await asyncio.gather(*(self._fetch_linked(url, log) for url in urls)))
        except TimeoutError:
            log.warning(
                "linked_batch_timeout",
                count=len(urls),
                timeout=self._settings.linked_timeout_seconds,
            )
            return [LinkedContent(url=url, error=LINKED_TIMEOUT_MESSAGE) for url in urls]

    async def _fetch_linked(self, url: str, log: FilteringBoundLogger) -> LinkedContent:
        try:
            response = await self._fetcher.fetch(url)
        except FetchError as exc:
            log.warning("linked_fetch_failed", url=url, error=str(exc))
            return LinkedContent(url=url, error=str(exc))
        except Exception as exc:
            # Unexpected failures stay on this entry
            log.error("linked_fetch_unexpected_error", url=url, exc_info=True)
            return LinkedContent(url=url, error=str(exc) or "Unknown error")

        if not response.is_success:
            log.warning("linked_fetch_failed", url=url, status_code=response.status_code)
            return LinkedContent(url=url, error=f"Failed to fetch content: {response.status_code}")

        return LinkedContent(url=url, content=response.text)

    async def _fetch_llms_full_txt(self, url: str, log: FilteringBoundLogger) -> str | None:
        """Return the llms-full.txt body, or None. Fetch errors never fail the check."""
        try:
            response = await self._fetcher.fetch(url)
        except FetchError as exc:
            log.warning("llms_full_txt_fetch_failed", url=url, error=str(exc))
            return None

        if not response.is_success:
            log.info("llms_full_txt_missing", url=url, status_code=response.status_code)
            return None

        return response.text
