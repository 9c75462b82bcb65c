from __future__ import annotations


class SalesGuardHTTPError(RuntimeError):
    """Base error for shared HTTP client operations."""


class SalesGuardHTTPStatusError(SalesGuardHTTPError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SalesGuardHTTPNetworkError(SalesGuardHTTPError):
    """Raised on transport errors, timeouts included, once retries are exhausted."""


class ProviderTransportError(RuntimeError):
    """The provider could not be reached or answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ResponseParseError(ValueError):
    def __init__(self, message: str, raw: str) -> None:
        super().__init__(message)
        self.raw = raw


class MalformedInputError(ValueError):
    pass


class ReviewFailedError(RuntimeError):
    pass
