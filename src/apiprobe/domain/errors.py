"""Domain-specific exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class HarnessError(Exception):
    """Base class for errors raised by the harness itself."""


class ClientNotInitializedError(HarnessError):
    """Raised when a verb is issued before ``init`` (or after ``close``)."""


class ClientAlreadyInitializedError(HarnessError):
    """Raised when ``init`` is called on a client that already has a context."""


class InvalidBaseURLError(HarnessError, ValueError):
    """Raised when the base URL is not an absolute http(s) URL."""


class UnexpectedStatusError(HarnessError, AssertionError):
    """Raised when a response status does not match the expected one.

    Subclasses ``AssertionError`` so pytest reports it as a failed test
    rather than an error in the harness.
    """

    def __init__(self, response: "httpx.Response", expected: int) -> None:
        self.response = response
        self.expected = expected
        self.actual = response.status_code
        try:
            target = f"{response.request.method} {response.request.url}: "
        except RuntimeError:
            # Response built without a request (e.g. in unit tests).
            target = ""
        super().__init__(
            f"{target}expected HTTP {expected}, got {self.actual}: "
            f"{response.text[:200]}"
        )


class RateLimitHeaderError(HarnessError, ValueError):
    """Raised when a rate-limit header is present but not an integer."""

    def __init__(self, header: str, value: str) -> None:
        self.header = header
        self.value = value
        super().__init__(f"Header {header!r} is not an integer: {value!r}")
