from __future__ import annotations

from llmstxt_explorer.models.check import LinkedContent, WebsiteCheckResult
from llmstxt_explorer.models.tools import CheckWebsiteInput, ListWebsitesInput
from llmstxt_explorer.models.website import Website, WebsiteIndex

__all__ = [
    # registry
    "Website",
    "WebsiteIndex",
    # check engine
    "LinkedContent",
    "WebsiteCheckResult",
    # tools
    "CheckWebsiteInput",
    "ListWebsitesInput",
]
