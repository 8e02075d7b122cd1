"""Tool handler for check_website.

Receives AppState, delegates to the check engine, and returns the result as
pretty-printed JSON. Engine failures are carried in the result's ``error``
field, so this handler never raises for them. No MCP or FastMCP imports —
server.py handles the MCP wiring.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from llmstxt_explorer.models.tools import CheckWebsiteInput

if TYPE_CHECKING:
    from llmstxt_explorer.state import AppState

URL_REQUIRED_MESSAGE = "URL is required"


async def handle(url: str, state: AppState) -> str:
    """Handle a check_website tool call."""
    log = structlog.get_logger().bind(tool="check_website", url=url)
    log.info("handler_called")

    try:
        validated = CheckWebsiteInput(url=url)
    except ValidationError:
        log.warning("handler_invalid_input", reason="empty_url")
        return json.dumps({"error": URL_REQUIRED_MESSAGE}, indent=2, ensure_ascii=False)

    result = await state.checker.check(validated.url)
    log.info("handler_complete", has_llms_txt=result.has_llms_txt, error=result.error)
    return json.dumps(result.to_json_dict(), indent=2, ensure_ascii=False)
