"""Resource handlers for ``website://<host>`` URIs.

Each known website is exposed as one JSON resource. Reading it merges the
registry record with a fresh check of the record's ``domain``.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING
from urllib.parse import urlparse

import structlog

from llmstxt_explorer.errors import ErrorCode, ExplorerError
from llmstxt_explorer.fetcher import hostname_of

if TYPE_CHECKING:
    from llmstxt_explorer.models.website import Website
    from llmstxt_explorer.state import AppState

RESOURCE_SCHEME = "website"
RESOURCE_MIME_TYPE = "application/json"


def resource_uri(website: Website) -> str | None:
    """Return ``website://<host>`` for a registry record, or None if its domain is unparseable."""
    hostname = hostname_of(website.domain)
    if hostname is None:
        return None
    return f"{RESOURCE_SCHEME}://{hostname}"


def list_resources(state: AppState) -> list[dict]:
    """Describe every known website as an MCP resource listing entry."""
    resources: list[dict] = []
    for website in state.websites.websites:
        uri = resource_uri(website)
        if uri is None:
            continue
        resources.append(
            {
                "uri": uri,
                "name": website.name,
                "description": website.description,
                "mime_type": RESOURCE_MIME_TYPE,
            }
        )
    return resources


async def handle(uri: str, state: AppState) -> str:
    """Handle a resource read for a ``website://<host>`` URI."""
    log = structlog.get_logger().bind(resource=uri)
    log.info("handler_called")

    parsed = urlparse(uri)
    if parsed.scheme != RESOURCE_SCHEME or not parsed.hostname:
        raise ExplorerError(
            code=ErrorCode.INVALID_INPUT,
            message=f"Invalid website resource URI: {uri}",
            suggestion="Use a URI of the form website://<host> from the resource list.",
            recoverable=False,
        )

    hostname = parsed.hostname
    website = state.websites.by_hostname.get(hostname)
    if website is None:
        raise ExplorerError(
            code=ErrorCode.WEBSITE_NOT_FOUND,
            message=f"Website {hostname} not found in known websites",
            suggestion="List resources or call list_websites to see known websites.",
            recoverable=False,
        )

    result = await state.checker.check(website.domain)
    log.info("handler_complete", has_llms_txt=result.has_llms_txt, error=result.error)
    merged = {**website.to_json_dict(), **result.to_json_dict()}
    return json.dumps(merged, indent=2, ensure_ascii=False)
