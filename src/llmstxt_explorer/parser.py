"""Linked-reference parser for llms.txt bodies.

A line whose stripped form starts with ``@`` references another document:
the rest of the line, stripped, is the URL. References are returned in the
order they appear.
"""

from __future__ import annotations

_REFERENCE_MARKER = "@"


def extract_linked_urls(content: str, limit: int | None = None) -> list[str]:
    """Return the ``@``-referenced URLs in an llms.txt body.

    Empty references (a bare ``@``) are skipped. When ``limit`` is given, only
    the first ``limit`` references are returned.
    """
    urls: list[str] = []

    for line in content.splitlines():
        stripped = line.strip()
        if not stripped.startswith(_REFERENCE_MARKER):
            continue

        url = stripped[len(_REFERENCE_MARKER) :].strip()
        if not url:
            continue

        urls.append(url)
        if limit is not None and len(urls) >= limit:
            break

    return urls
