"""Tool handler for list_websites.

Pure read over the website index loaded at startup. No network I/O.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import structlog

from llmstxt_explorer.models.tools import ListWebsitesInput
from llmstxt_explorer.registry import filter_websites

if TYPE_CHECKING:
    from llmstxt_explorer.state import AppState


async def handle(
    state: AppState,
    filter_llms_txt: bool = False,
    filter_llms_full_txt: bool = False,
) -> str:
    """Handle a list_websites tool call."""
    log = structlog.get_logger().bind(tool="list_websites")

    validated = ListWebsitesInput(
        filter_llms_txt=filter_llms_txt,
        filter_llms_full_txt=filter_llms_full_txt,
    )
    websites = filter_websites(
        state.websites.websites,
        llms_txt=validated.filter_llms_txt,
        llms_full_txt=validated.filter_llms_full_txt,
    )
    log.info(
        "handler_complete",
        filter_llms_txt=validated.filter_llms_txt,
        filter_llms_full_txt=validated.filter_llms_full_txt,
        count=len(websites),
    )
    return json.dumps([site.to_json_dict() for site in websites], indent=2, ensure_ascii=False)
