"""Unit tests for the pydantic models' wire format."""

from __future__ import annotations

import pydantic
import pytest

from llmstxt_explorer.models.check import LinkedContent, WebsiteCheckResult
from llmstxt_explorer.models.website import Website


class TestWebsiteCheckResult:
    def test_defaults_serialise_to_flags_only(self) -> None:
        assert WebsiteCheckResult().to_json_dict() == {
            "hasLlmsTxt": False,
            "hasLlmsFullTxt": False,
        }

    def test_camel_case_keys(self) -> None:
        result = WebsiteCheckResult(
            has_llms_txt=True,
            has_llms_full_txt=True,
            llms_txt_url="https://example.com/llms.txt",
            llms_txt_content="# Example",
            llms_full_txt_url="https://example.com/llms-full.txt",
            llms_full_txt_content="# Example, in full",
            linked_contents=[
                LinkedContent(url="https://a.com/x", content="A"),
                LinkedContent(url="https://b.com/y", error="Failed to fetch content: 404"),
            ],
        )
        assert result.to_json_dict() == {
            "hasLlmsTxt": True,
            "hasLlmsFullTxt": True,
            "llmsTxtUrl": "https://example.com/llms.txt",
            "llmsTxtContent": "# Example",
            "llmsFullTxtUrl": "https://example.com/llms-full.txt",
            "llmsFullTxtContent": "# Example, in full",
            "linkedContents": [
                {"url": "https://a.com/x", "content": "A"},
                {"url": "https://b.com/y", "error": "Failed to fetch content: 404"},
            ],
        }

    def test_error_only(self) -> None:
        result = WebsiteCheckResult(error="Invalid URL format: http://")
        assert result.to_json_dict() == {
            "hasLlmsTxt": False,
            "hasLlmsFullTxt": False,
            "error": "Invalid URL format: http://",
        }

    def test_frozen(self) -> None:
        result = WebsiteCheckResult()
        with pytest.raises(pydantic.ValidationError):
            result.has_llms_txt = True  # type: ignore[misc]


class TestWebsite:
    def test_validates_camel_case_payload(self) -> None:
        website = Website.model_validate(
            {
                "name": "Supabase",
                "domain": "https://supabase.com",
                "description": "Postgres",
                "llmsTxtUrl": "https://supabase.com/llms.txt",
                "llmsFullTxtUrl": "https://supabase.com/llms-full.txt",
                "category": "developer-tools",
                "favicon": "https://supabase.com/favicon.ico",
                "publishedAt": "2025-01-01",
            }
        )
        assert website.llms_txt_url == "https://supabase.com/llms.txt"
        assert website.llms_full_txt_url == "https://supabase.com/llms-full.txt"
        assert "publishedAt" not in website.to_json_dict()

    def test_missing_required_field_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            Website.model_validate({"name": "X", "domain": "https://x.com"})

    def test_non_string_field_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            Website.model_validate(
                {"name": "X", "domain": "https://x.com", "description": "d", "category": 3}
            )

    def test_optional_fields_omitted_when_unset(self) -> None:
        website = Website(name="X", domain="https://x.com", description="d")
        assert website.to_json_dict() == {
            "name": "X",
            "domain": "https://x.com",
            "description": "d",
        }
