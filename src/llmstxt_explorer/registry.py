"""Known-websites registry: loading, index building, and filtering."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog
from pydantic import ValidationError

from llmstxt_explorer.fetcher import hostname_of
from llmstxt_explorer.models.website import Website, WebsiteIndex

if TYPE_CHECKING:
    from collections.abc import Iterable

log = structlog.get_logger()

FALLBACK_WEBSITES: tuple[Website, ...] = (
    Website(
        name="Supabase",
        domain="https://supabase.com",
        description="Build production-grade applications with Postgres",
        llms_txt_url="https://supabase.com/llms.txt",
        category="developer-tools",
    ),
)


class RegistryLoadError(Exception):
    """The remote websites index could not be fetched or is not a JSON array."""


async def load_websites(
    http_client: httpx.AsyncClient,
    url: str,
    *,
    timeout: float | httpx.Timeout = 10.0,
) -> list[Website]:
    """Fetch the known-websites index, falling back to a built-in entry on failure.

    Entries are validated one by one; invalid entries are dropped without
    failing the load. Network errors, non-2xx responses, malformed JSON and a
    non-array payload all yield ``FALLBACK_WEBSITES``.
    """
    log.info("registry_fetch_started", url=url)
    try:
        raw_entries = await _fetch_index(http_client, url, timeout=timeout)
    except (RegistryLoadError, httpx.HTTPError) as exc:
        log.warning(
            "registry_fetch_failed",
            url=url,
            error=str(exc),
            fallback_entries=len(FALLBACK_WEBSITES),
        )
        return list(FALLBACK_WEBSITES)

    websites = parse_websites(raw_entries)
    log.info(
        "registry_loaded",
        source="remote",
        entries=len(websites),
        skipped=len(raw_entries) - len(websites),
    )
    return websites


async def _fetch_index(
    http_client: httpx.AsyncClient,
    url: str,
    *,
    timeout: float | httpx.Timeout,
) -> list:
    response = await http_client.get(url, timeout=timeout)
    if not response.is_success:
        raise RegistryLoadError(f"Failed to fetch websites list: {response.status_code}")

    try:
        data = response.json()
    except ValueError as exc:
        raise RegistryLoadError(f"Invalid JSON in websites list: {exc}") from exc

    if not isinstance(data, list):
        raise RegistryLoadError("Invalid data format: expected an array")
    return data


def parse_websites(raw_entries: Iterable[object]) -> list[Website]:
    """Validate raw index entries, keeping only well-formed websites in order."""
    websites: list[Website] = []
    for raw in raw_entries:
        try:
            websites.append(Website.model_validate(raw))
        except ValidationError:
            log.debug("registry_entry_invalid", entry=raw if isinstance(raw, dict) else repr(raw))
    return websites


def build_index(websites: list[Website]) -> WebsiteIndex:
    """Build in-memory lookups from a list of websites.

    Single pass. On duplicate hostnames the first entry wins,
    matching a linear search over the list.
    """
    by_hostname: dict[str, Website] = {}

    for website in websites:
        hostname = hostname_of(website.domain)
        if hostname:
            by_hostname.setdefault(hostname, website)

    return WebsiteIndex(
        websites=list(websites),
        by_hostname=by_hostname,
    )


def filter_websites(
    websites: Iterable[Website],
    *,
    llms_txt: bool = False,
    llms_full_txt: bool = False,
) -> list[Website]:
    """Keep websites that advertise the requested discovery file URLs."""
    result = list(websites)
    if llms_txt:
        result = [site for site in result if site.llms_txt_url]
    if llms_full_txt:
        result = [site for site in result if site.llms_full_txt_url]
    return result
