from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    INVALID_INPUT = "INVALID_INPUT"
    WEBSITE_NOT_FOUND = "WEBSITE_NOT_FOUND"


class ExplorerError(Exception):
    """Raised by tool and resource handlers for expected failure conditions.

    Caught by server.py and re-raised as an MCP resource error. The check
    engine never raises this: its failures are reported inside the result.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable


class InvalidUrlError(ValueError):
    """The input could not be turned into an http(s) origin."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid URL format: {value}")
        self.value = value


class FetchError(Exception):
    """A network-level failure while fetching a URL."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class FetchTimeoutError(FetchError):
    """The per-fetch time bound elapsed before a response was received."""

    def __init__(self, url: str, timeout: float) -> None:
        super().__init__(url, f"Timeout after {int(timeout * 1000)}ms fetching {url}")
        self.timeout = timeout
