"""Unit tests for llmstxt_explorer.parser."""

from __future__ import annotations

from llmstxt_explorer.parser import extract_linked_urls


class TestExtractLinkedUrls:
    def test_no_references_returns_empty(self) -> None:
        content = "# Supabase\n\n> Postgres development platform\n\n- [Docs](https://supabase.com/docs)"
        assert extract_linked_urls(content) == []

    def test_extracts_in_order(self) -> None:
        content = "# Site\n@https://a.com/x\ntext\n@https://b.com/y\n"
        assert extract_linked_urls(content) == ["https://a.com/x", "https://b.com/y"]

    def test_strips_surrounding_whitespace(self) -> None:
        content = "   @  https://a.com/x   \n\t@https://b.com/y\r\n"
        assert extract_linked_urls(content) == ["https://a.com/x", "https://b.com/y"]

    def test_bare_marker_skipped(self) -> None:
        content = "@\n@   \n@https://a.com/x"
        assert extract_linked_urls(content) == ["https://a.com/x"]

    def test_marker_must_lead_the_line(self) -> None:
        content = "contact: team@example.com\n- @https://a.com/x"
        assert extract_linked_urls(content) == []

    def test_limit_keeps_first_references(self) -> None:
        content = "\n".join(
            [
                "@https://a.com/x",
                "@https://b.com/y",
                "@https://c.com/z",
                "@https://d.com/w",
            ]
        )
        assert extract_linked_urls(content, limit=3) == [
            "https://a.com/x",
            "https://b.com/y",
            "https://c.com/z",
        ]

    def test_limit_larger_than_references(self) -> None:
        assert extract_linked_urls("@https://a.com/x", limit=3) == ["https://a.com/x"]

    def test_remainder_taken_verbatim(self) -> None:
        # No URL validation here; the fetcher reports unusable references.
        assert extract_linked_urls("@not a url") == ["not a url"]

    def test_empty_content(self) -> None:
        assert extract_linked_urls("") == []
