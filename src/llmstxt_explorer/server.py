"""MCP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState via the FastMCP lifespan context manager
- Register tools and the website:// resources
- Start the correct transport (stdio or HTTP)
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from mcp.server.fastmcp import Context, FastMCP
from mcp.server.fastmcp.exceptions import ResourceError
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.types import Resource

import llmstxt_explorer.tools.check_website as t_check
import llmstxt_explorer.tools.list_websites as t_list
import llmstxt_explorer.tools.website_resource as t_resource
from llmstxt_explorer import __version__
from llmstxt_explorer.cache import ResultCache
from llmstxt_explorer.checker import WebsiteChecker
from llmstxt_explorer.config import Settings
from llmstxt_explorer.errors import ExplorerError
from llmstxt_explorer.fetcher import Fetcher, build_http_client
from llmstxt_explorer.registry import build_index, load_websites
from llmstxt_explorer.state import AppState
from llmstxt_explorer.transport import run_http_server

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Iterable

    from pydantic import AnyUrl

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr — stdout is reserved for the MCP JSON-RPC stream
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


async def build_state(settings: Settings) -> AppState:
    """Create the HTTP client, load the registry, and wire the check engine."""
    http_client = build_http_client(settings.checker)

    websites = await load_websites(
        http_client,
        settings.registry.url,
        timeout=settings.registry.fetch_timeout_seconds,
    )

    cache = ResultCache()
    fetcher = Fetcher(http_client, timeout=settings.checker.fetch_timeout_seconds)
    checker = WebsiteChecker(fetcher, cache, settings.checker)

    return AppState(
        settings=settings,
        websites=build_index(websites),
        checker=checker,
        cache=cache,
        fetcher=fetcher,
        http_client=http_client,
    )


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncGenerator[AppState, None]:
    """Create and tear down all shared resources for the server's lifetime."""
    settings = Settings()
    _setup_logging(settings)

    log.info(
        "server_starting",
        version=__version__,
        transport=settings.server.transport,
    )

    state = await build_state(settings)

    log.info(
        "server_started",
        version=__version__,
        transport=settings.server.transport,
        known_websites=len(state.websites.websites),
    )

    try:
        yield state
    finally:
        if state.http_client is not None:
            await state.http_client.aclose()
        log.info("server_stopping")


# ---------------------------------------------------------------------------
# FastMCP instance, resources and tool registration
# ---------------------------------------------------------------------------


class ExplorerMCP(FastMCP):
    """FastMCP with resources listed from the website index instead of static registration.

    The known websites are only available once the lifespan has loaded them,
    so listing and reading ``website://`` resources reads AppState per request.
    """

    async def list_resources(self) -> list[Resource]:
        state: AppState = self.get_context().request_context.lifespan_context
        return [
            Resource(
                uri=entry["uri"],
                name=entry["name"],
                description=entry["description"],
                mimeType=entry["mime_type"],
            )
            for entry in t_resource.list_resources(state)
        ]

    async def read_resource(self, uri: AnyUrl | str) -> Iterable[ReadResourceContents]:
        state: AppState = self.get_context().request_context.lifespan_context
        try:
            text = await t_resource.handle(str(uri), state)
        except ExplorerError as exc:
            log.warning(
                "resource_error",
                uri=str(uri),
                code=exc.code,
                message=exc.message,
                suggestion=exc.suggestion,
                recoverable=exc.recoverable,
            )
            raise ResourceError(exc.message) from exc
        return [ReadResourceContents(content=text, mime_type=t_resource.RESOURCE_MIME_TYPE)]


mcp = ExplorerMCP("LLMS.txt Explorer", lifespan=lifespan)
# FastMCP doesn't expose a version kwarg — set it on the underlying Server
# so the MCP initialize handshake reports our version, not the SDK's.
mcp._mcp_server.version = __version__  # pyright: ignore[reportPrivateUsage]


@mcp.tool()
async def check_website(url: str, ctx: Context) -> str:
    """Check if a website has llms.txt files.

    Probes <origin>/llms.txt, fetches up to three documents it references with
    '@' lines, then probes <origin>/llms-full.txt. Failures are reported in the
    result's "error" field.
    """
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_check.handle(url, state)
    except Exception:
        log.error("tool_unexpected_error", tool="check_website", exc_info=True)
        raise


@mcp.tool()
async def list_websites(
    ctx: Context,
    filter_llms_txt: bool = False,
    filter_llms_full_txt: bool = False,
) -> str:
    """List known websites with llms.txt files.

    Set filter_llms_txt or filter_llms_full_txt to only show websites that
    advertise the corresponding file.
    """
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_list.handle(state, filter_llms_txt, filter_llms_full_txt)
    except Exception:
        log.error("tool_unexpected_error", tool="list_websites", exc_info=True)
        raise


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    settings = Settings()
    _setup_logging(settings)

    if settings.server.transport == "http":
        run_http_server(mcp, settings.server)
        return

    mcp.run()


if __name__ == "__main__":
    main()
