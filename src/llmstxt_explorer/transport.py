"""Streamable HTTP transport for the explorer MCP server.

stdio is the default transport. With ``server.transport: http`` the FastMCP
streamable app is served by uvicorn behind ``MCPSecurityMiddleware``.
"""

from __future__ import annotations

import re
import secrets
from typing import TYPE_CHECKING

import structlog
import uvicorn
from starlette.datastructures import Headers
from starlette.responses import Response

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP
    from starlette.types import ASGIApp, Receive, Scope, Send

    from llmstxt_explorer.config import ServerSettings

log = structlog.get_logger()

SUPPORTED_PROTOCOL_VERSIONS: frozenset[str] = frozenset({"2025-11-25", "2025-06-18", "2025-03-26"})
_LOCALHOST_ORIGIN = re.compile(r"^https?://(localhost|127\.0\.0\.1|\[::1\])(:\d+)?$")
_BEARER_PREFIX = "Bearer "


class MCPSecurityMiddleware:
    """Pure ASGI guard in front of the MCP HTTP app.

    Rejects, in order: requests without the configured bearer key (when auth
    is on), browser requests from a non-local ``Origin``, and requests naming
    an unsupported ``MCP-Protocol-Version``. Non-HTTP scopes (lifespan) pass
    straight through. Pure ASGI so SSE responses are streamed, not buffered.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        auth_enabled: bool,
        auth_key: str | None = None,
    ) -> None:
        self.app = app
        self.auth_enabled = auth_enabled
        self.auth_key = auth_key

    def _rejection(self, headers: Headers) -> Response | None:
        if self.auth_enabled:
            auth_header = headers.get("authorization", "")
            supplied = auth_header.removeprefix(_BEARER_PREFIX)
            if (
                not auth_header.startswith(_BEARER_PREFIX)
                or not self.auth_key
                or not secrets.compare_digest(supplied, self.auth_key)
            ):
                return Response("Unauthorized", status_code=401)

        origin = headers.get("origin", "")
        if origin and not _LOCALHOST_ORIGIN.match(origin):
            return Response("Forbidden", status_code=403)

        proto_version = headers.get("mcp-protocol-version", "")
        if proto_version and proto_version not in SUPPORTED_PROTOCOL_VERSIONS:
            return Response(f"Unsupported protocol version: {proto_version}", status_code=400)

        return None

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            rejection = self._rejection(Headers(scope=scope))
            if rejection is not None:
                log.warning(
                    "http_request_rejected",
                    path=scope.get("path", ""),
                    status_code=rejection.status_code,
                )
                await rejection(scope, receive, send)
                return

        await self.app(scope, receive, send)


def resolve_auth_key(settings: ServerSettings) -> str | None:
    """Return the bearer key to enforce, generating one when auth is on but unset."""
    if not settings.auth_enabled:
        log.warning("http_auth_disabled")
        return None

    if settings.auth_key:
        return settings.auth_key

    auth_key = secrets.token_urlsafe(32)
    log.warning("http_auth_key_auto_generated", auth_key=auth_key)
    return auth_key


def run_http_server(mcp: FastMCP, settings: ServerSettings) -> None:
    """Serve the MCP server over Streamable HTTP until interrupted."""
    secured_app = MCPSecurityMiddleware(
        mcp.streamable_http_app(),
        auth_enabled=settings.auth_enabled,
        auth_key=resolve_auth_key(settings),
    )

    log.info("http_server_starting", host=settings.host, port=settings.port)
    uvicorn.run(
        secured_app,
        host=settings.host,
        port=settings.port,
        log_config=None,  # structlog owns logging
    )
