"""Shared test fixtures for the llmstxt_explorer test suite."""

from __future__ import annotations

import pytest

from llmstxt_explorer.config import CheckerSettings
from llmstxt_explorer.models.website import Website, WebsiteIndex
from llmstxt_explorer.registry import build_index


@pytest.fixture()
def sample_websites() -> list[Website]:
    """Minimal registry entries covering both optional discovery URLs."""
    return [
        Website(
            name="Supabase",
            domain="https://supabase.com",
            description="Build production-grade applications with Postgres",
            llms_txt_url="https://supabase.com/llms.txt",
            category="developer-tools",
        ),
        Website(
            name="Anthropic",
            domain="https://docs.anthropic.com",
            description="Claude documentation",
            llms_txt_url="https://docs.anthropic.com/llms.txt",
            llms_full_txt_url="https://docs.anthropic.com/llms-full.txt",
            category="ai-ml",
        ),
        Website(
            name="NoFiles",
            domain="https://nofiles.example",
            description="Listed without any discovery URLs",
        ),
    ]


@pytest.fixture()
def website_index(sample_websites: list[Website]) -> WebsiteIndex:
    """Pre-built index from sample_websites."""
    return build_index(sample_websites)


@pytest.fixture()
def checker_settings() -> CheckerSettings:
    """Production budgets. Timeout tests build their own, much shorter, settings."""
    return CheckerSettings(user_agent="llms-txt-explorer/test")
